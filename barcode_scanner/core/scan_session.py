# barcode_scanner/core/scan_session.py
"""Scan session: wires a decode source to the deduplicator and recorder."""
import logging
import threading

from barcode_scanner.config.settings import ScanConfig
from barcode_scanner.core.catalog import ProductCatalog
from barcode_scanner.core.deduplicator import DedupPolicy, ScanDeduplicator
from barcode_scanner.core.errors import ScannerError
from barcode_scanner.core.history import ScanHistory
from barcode_scanner.core.recorder import Recorder


class ScanSession:
    """
    Owns the state of one scanning session.

    Decode events from the source thread and user actions from the caller's
    thread are serialised through a single lock, so history mutations happen
    strictly in delivery order. Events delivered while the session is
    stopped are ignored.
    """

    def __init__(self, source, deduplicator, recorder, sink=None, feedback=None):
        self.logger = logging.getLogger(__name__)
        self.source = source
        self.deduplicator = deduplicator
        self.recorder = recorder
        self.sink = sink
        self.feedback = feedback
        self.is_scanning = False
        self.lock = threading.RLock()

    @property
    def history(self):
        return self.recorder.history

    def start(self) -> bool:
        """Start scanning. Returns False when the source cannot be started."""
        with self.lock:
            if self.is_scanning:
                return True

            self._report("Requesting camera access...", "info")
            self.deduplicator.start_new_session()
            self.is_scanning = True
            try:
                self.source.start(self.handle_event, self.handle_processed)
            except Exception as e:
                self.is_scanning = False
                if isinstance(e, ScannerError):
                    self.logger.error(f"Failed to start scanning: {e}")
                else:
                    self.logger.exception(f"Unexpected error starting scanning: {e}")
                self._report("Camera access failed. Check the camera connection and permissions.", "error")
                return False

            if not self.is_scanning:
                # stop() ran on this thread while the source was starting
                self.source.stop()
                return False

            self._report("Scanning active - position barcode in the scan area", "success")
            return True

    def stop(self) -> None:
        """Stop scanning and release the source. Safe to call when stopped."""
        with self.lock:
            was_scanning = self.is_scanning
            self.is_scanning = False

        # The source may be blocked on the lock inside handle_event, so it is
        # stopped without holding it.
        try:
            self.source.stop()
        except Exception as e:
            self.logger.error(f"Error stopping scan source: {e}")

        if was_scanning:
            self._report("Scanner stopped", "info")

    def toggle(self) -> bool:
        """Start when stopped, stop when scanning. Returns the new scanning state."""
        if self.is_scanning:
            self.stop()
            return False
        return self.start()

    def handle_event(self, event):
        """Consume one decode event; returns the new record, if any. Never raises."""
        with self.lock:
            if not self.is_scanning:
                return None
            try:
                if self.deduplicator.process(event):
                    return self.recorder.record(event)
            except Exception as e:
                self.logger.error(f"Error recording scan {event!r}: {e}")
            return None

    def handle_processed(self, count):
        self.logger.debug(f"Processed frame with {count} barcode(s)")

    def clear_history(self) -> None:
        """Empty the history and its persisted copy. Callers confirm with the user first."""
        with self.lock:
            self.recorder.clear()

    def refresh(self) -> None:
        with self.lock:
            self.recorder.refresh()

    def _report(self, message, severity):
        if self.sink is not None:
            try:
                self.sink.render_status(message, severity)
            except Exception as e:
                self.logger.error(f"Error rendering status: {e}")
        if self.feedback is not None:
            try:
                self.feedback.set_status(severity)
            except Exception as e:
                self.logger.error(f"Error updating status light: {e}")


def build_session(source, store, sink=None, feedback=None, catalog=None,
                  policy=None, history_limit=ScanConfig.HISTORY_LIMIT):
    """Load the persisted history and assemble a scan session around it."""
    history = ScanHistory(limit=history_limit, records=store.load())
    recorder = Recorder(history, catalog or ProductCatalog(), store, sink=sink, feedback=feedback)
    deduplicator = ScanDeduplicator(policy or DedupPolicy.from_config())
    return ScanSession(source, deduplicator, recorder, sink=sink, feedback=feedback)
