"""Main entry point for the barcode scan log."""
import signal
import sys
import logging

from barcode_scanner.config.settings import HardwareConfig, PathConfig
from barcode_scanner.core.camera_manager import CameraManager
from barcode_scanner.core.frame_decoder import FrameDecoder
from barcode_scanner.core.scan_session import build_session
from barcode_scanner.core.scan_source import CameraScanSource
from barcode_scanner.hardware.hardware_controller import HardwareController
from barcode_scanner.storage.history_store import HistoryStore
from barcode_scanner.ui.console_sink import ConsoleSink
from barcode_scanner.utils.logging_config import setup_logging

HELP_TEXT = "Commands: [s] start/stop scanning, [c] clear history, [h] show history, [q] quit"


class BarcodeScannerApp:
    def __init__(self, stdin=None):
        """Initialize the barcode scanner application."""
        self.logger = setup_logging()
        self.stdin = stdin or sys.stdin
        self.sink = ConsoleSink()
        self.feedback = self._init_feedback()

        source = CameraScanSource(CameraManager(), FrameDecoder())
        self.store = HistoryStore(PathConfig.HISTORY_PATH)
        self.session = build_session(source, self.store, sink=self.sink, feedback=self.feedback)
        self.running = False

    def _init_feedback(self):
        """Create GPIO feedback when enabled; scanning works without it."""
        if not HardwareConfig.ENABLED:
            return None
        try:
            return HardwareController()
        except Exception as e:
            self.logger.error(f"GPIO feedback unavailable: {e}")
            return None

    def _handle_shutdown(self, signum, frame):
        """Handle shutdown signals."""
        self.logger.info("Shutdown signal received")
        self.stop()
        sys.exit(0)

    def confirm(self, prompt):
        self.sink.render_status(prompt + " [y/N]", "info")
        answer = self.stdin.readline()
        return answer.strip().lower() in ("y", "yes")

    def handle_command(self, command):
        """Run one interactive command. Returns False when the app should exit."""
        command = command.strip().lower()
        if command == "s":
            self.session.toggle()
        elif command == "c":
            if self.confirm("Are you sure you want to clear all scan history?"):
                self.session.clear_history()
        elif command == "h":
            self.session.refresh()
        elif command == "q":
            return False
        elif command:
            self.sink.render_status(HELP_TEXT, "info")
        return True

    def start(self):
        """Start the application and show the stored history."""
        self.running = True
        signal.signal(signal.SIGINT, self._handle_shutdown)
        signal.signal(signal.SIGTERM, self._handle_shutdown)
        if self.feedback:
            self.feedback.set_status("info")
        self.session.refresh()
        self.sink.render_status(HELP_TEXT, "info")
        self.logger.info(f"Scan history stored in {PathConfig.HISTORY_PATH}")

    def run(self):
        self.start()
        try:
            for line in self.stdin:
                if not self.handle_command(line):
                    break
        finally:
            self.stop()

    def stop(self):
        """Stop scanning and release resources."""
        if not self.running:
            return
        self.running = False
        self.logger.info("Stopping...")
        self.session.stop()
        if self.feedback:
            self.feedback.cleanup()
        self.logger.info("Stopped")


def main():
    """Main entry point for the application."""
    try:
        app = BarcodeScannerApp()
        app.run()
    except Exception as e:
        logging.error(f"Critical error: {e}")
        sys.exit(1)

if __name__ == "__main__":
    main()
