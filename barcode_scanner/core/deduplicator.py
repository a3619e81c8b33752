# barcode_scanner/core/deduplicator.py
"""Duplicate suppression for continuously decoded barcodes."""
import time
from collections import deque
from dataclasses import dataclass
from typing import Optional
import logging

from barcode_scanner.config.settings import ScanConfig
from barcode_scanner.core.models import ScanEvent


@dataclass
class DedupPolicy:
    """Knobs controlling which decode events become scans.

    Attributes:
        cooldown: Seconds before the last accepted code may be accepted again.
        confirmations: Identical consecutive detections required before a code
            is considered. 1 disables the confirmation buffer.
        max_error: Highest decoder error score let into the buffer, or None
            to accept events regardless of confidence.
        min_code_length: Shortest code treated as a plausible barcode.
    """
    cooldown: float = 3.0
    confirmations: int = 2
    max_error: Optional[float] = 0.15
    min_code_length: int = 8

    def __post_init__(self):
        if self.confirmations < 1:
            raise ValueError("confirmations must be at least 1")
        if self.cooldown < 0:
            raise ValueError("cooldown must not be negative")

    @classmethod
    def from_config(cls) -> "DedupPolicy":
        return cls(
            cooldown=ScanConfig.COOLDOWN,
            confirmations=ScanConfig.CONFIRMATIONS,
            max_error=ScanConfig.MAX_ERROR,
            min_code_length=ScanConfig.MIN_CODE_LENGTH,
        )


class ScanDeduplicator:
    def __init__(self, policy: Optional[DedupPolicy] = None):
        """Initialize the deduplicator."""
        self.logger = logging.getLogger(__name__)
        self.policy = policy or DedupPolicy()
        self.detection_buffer = deque(maxlen=self.policy.confirmations)
        self.last_code = None
        self.last_time = 0.0

    def start_new_session(self):
        """Drop pending confirmations; the last accepted code is kept."""
        self.logger.debug("Starting new scan session")
        self.detection_buffer.clear()

    def process(self, event: ScanEvent, current_time: Optional[float] = None) -> bool:
        """
        Decide whether a decode event becomes a new scan.

        Args:
            event: Detection reported by the decode source
            current_time: Current timestamp in seconds (defaults to time.time())

        Returns:
            bool: True if the event was accepted
        """
        if current_time is None:
            current_time = time.time()

        try:
            code = event.code
            if not code or len(code) < self.policy.min_code_length:
                self.logger.debug(f"Discarding implausible code: {code!r}")
                return False

            if (self.policy.max_error is not None and event.confidence is not None
                    and event.confidence > self.policy.max_error):
                self.logger.debug(f"Discarding low confidence read of {code} ({event.confidence})")
                return False

            if self.policy.confirmations > 1:
                self.detection_buffer.append(code)
                if len(self.detection_buffer) < self.policy.confirmations:
                    return False
                if any(buffered != code for buffered in self.detection_buffer):
                    return False
                if code == self.last_code:
                    return False
                self.detection_buffer.clear()

            if code == self.last_code and current_time - self.last_time < self.policy.cooldown:
                return False

            self.last_code = code
            self.last_time = current_time
            self.logger.debug(f"Accepted barcode: {code}")
            return True

        except Exception as e:
            self.logger.error(f"Error processing barcode {event!r}: {e}")

        return False
