# barcode_scanner/core/scan_source.py
"""Decode event source: reads camera frames and reports decoded barcodes."""
import logging
import threading
import time

from barcode_scanner.config.settings import ScanConfig
from barcode_scanner.core.errors import CameraError, ScannerStartError


class CameraScanSource:
    """
    Runs a background loop that decodes camera frames.

    ``on_detected`` is called with a ScanEvent for every barcode found and
    ``on_processed`` with the number of barcodes in each decoded frame.
    """

    def __init__(self, camera, decoder, frame_interval=ScanConfig.FRAME_INTERVAL):
        self.logger = logging.getLogger(__name__)
        self.camera = camera
        self.decoder = decoder
        self.frame_interval = frame_interval
        self.running = False
        self.scan_thread = None
        self._on_detected = None
        self._on_processed = None

    def start(self, on_detected, on_processed=None):
        """Open the camera and start the decoding loop."""
        if self.running:
            return
        try:
            self.camera.start()
        except CameraError as e:
            raise ScannerStartError(f"Camera unavailable: {e}") from e

        self._on_detected = on_detected
        self._on_processed = on_processed
        self.running = True
        self.scan_thread = threading.Thread(target=self.scanning_loop, daemon=True)
        self.scan_thread.start()
        self.logger.info("Decode loop started")

    def scan_frame(self):
        """Decode one frame and report its barcodes."""
        frame = self.camera.read_frame()
        events = self.decoder(frame)
        for event in events:
            if not self.running:
                break
            self._on_detected(event)
        if self._on_processed:
            self._on_processed(len(events))

    def scanning_loop(self):
        """Main loop for barcode scanning."""
        while self.running:
            try:
                self.scan_frame()
            except CameraError as e:
                self.logger.error(f"Camera error in scanning loop: {e}")
                time.sleep(0.5)
            except Exception as e:
                self.logger.error(f"Error in barcode scanning loop: {e}")
            time.sleep(self.frame_interval)

    def stop(self):
        """Stop the decoding loop and release the camera."""
        self.running = False
        if (self.scan_thread and self.scan_thread.is_alive()
                and self.scan_thread is not threading.current_thread()):
            self.scan_thread.join(timeout=5)
        self.scan_thread = None
        try:
            self.camera.stop()
        except Exception as e:
            self.logger.error(f"Error stopping camera: {e}")
        self.logger.info("Decode loop stopped")
