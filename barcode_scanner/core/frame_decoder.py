# barcode_scanner/core/frame_decoder.py
"""pyzbar based barcode decoding for camera frames."""
import logging
from typing import Iterable, List, Optional

import cv2
import numpy as np
from pyzbar.pyzbar import decode

from barcode_scanner.config.settings import CameraConfig, ScanConfig
from barcode_scanner.core.models import ScanEvent


def crop_scan_area(frame: np.ndarray, margin: float = CameraConfig.SCAN_AREA_MARGIN) -> np.ndarray:
    """Keep the central region of the frame, dropping ``margin`` from each edge."""
    if not 0 <= margin < 0.5:
        raise ValueError("margin must be in [0, 0.5)")
    height, width = frame.shape[:2]
    top, left = int(height * margin), int(width * margin)
    return frame[top:height - top, left:width - left]


class FrameDecoder:
    def __init__(self, symbologies: Optional[Iterable[str]] = ScanConfig.SYMBOLOGIES,
                 margin: float = CameraConfig.SCAN_AREA_MARGIN):
        """
        Initialize the decoder.

        Args:
            symbologies: pyzbar type names to report, or None for all
            margin: Fraction of the frame cropped from each edge before decoding
        """
        self.logger = logging.getLogger(__name__)
        self.symbologies = {s.upper() for s in symbologies} if symbologies else None
        self.margin = margin

    def __call__(self, frame: np.ndarray) -> List[ScanEvent]:
        return self.decode_frame(frame)

    def decode_frame(self, frame: np.ndarray) -> List[ScanEvent]:
        """Decode all barcodes in the scan area of a frame."""
        if frame is None or frame.size == 0:
            return []

        roi = crop_scan_area(frame, self.margin)
        if roi.ndim == 3:
            roi = cv2.cvtColor(roi, cv2.COLOR_BGR2GRAY)

        events = []
        for barcode in decode(roi):
            symbology = barcode.type.upper()
            if self.symbologies is not None and symbology not in self.symbologies:
                self.logger.debug(f"Ignoring {symbology} barcode")
                continue
            try:
                code = barcode.data.decode("utf-8")
            except UnicodeDecodeError:
                self.logger.debug("Ignoring barcode with undecodable payload")
                continue
            events.append(ScanEvent(code=code, format=symbology))
        return events
