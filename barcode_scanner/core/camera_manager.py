# core/camera_manager.py
import cv2
import logging
from barcode_scanner.config.settings import CameraConfig
from barcode_scanner.core.errors import CameraError

class CameraManager:
    def __init__(self, device_index=CameraConfig.DEVICE_INDEX,
                 resolution=CameraConfig.IDEAL_RESOLUTION,
                 min_resolution=CameraConfig.MIN_RESOLUTION,
                 frame_rate=CameraConfig.FRAME_RATE):
        """Initialize the camera wrapper. The device is opened by start()."""
        self.logger = logging.getLogger(__name__)
        self.device_index = device_index
        self.resolution = resolution
        self.min_resolution = min_resolution
        self.frame_rate = frame_rate
        self.capture = None

    def _configure_camera(self):
        """Request the preferred resolution and frame rate; the driver may pick others."""
        width, height = self.resolution
        self.capture.set(cv2.CAP_PROP_FRAME_WIDTH, width)
        self.capture.set(cv2.CAP_PROP_FRAME_HEIGHT, height)
        self.capture.set(cv2.CAP_PROP_FPS, self.frame_rate)

        actual = (int(self.capture.get(cv2.CAP_PROP_FRAME_WIDTH)),
                  int(self.capture.get(cv2.CAP_PROP_FRAME_HEIGHT)))
        if actual[0] < self.min_resolution[0] or actual[1] < self.min_resolution[1]:
            self.logger.warning(f"Camera resolution {actual[0]}x{actual[1]} is below the preferred minimum")
        else:
            self.logger.info(f"Camera configured at {actual[0]}x{actual[1]}")

    @property
    def is_open(self):
        return self.capture is not None and self.capture.isOpened()

    def start(self):
        """Open the camera device."""
        if self.is_open:
            return
        capture = cv2.VideoCapture(self.device_index)
        if not capture.isOpened():
            capture.release()
            raise CameraError(f"Cannot open camera device {self.device_index}")
        self.capture = capture
        self._configure_camera()

    def read_frame(self):
        """Capture a single BGR frame."""
        if not self.is_open:
            raise CameraError("Camera is not started")
        ok, frame = self.capture.read()
        if not ok or frame is None:
            raise CameraError("Failed to read frame from camera")
        return frame

    def stop(self):
        """Release the camera device."""
        if self.capture is not None:
            self.capture.release()
            self.capture = None
            self.logger.info("Camera released")
