# barcode_scanner/storage/history_store.py
"""JSON file persistence for the scan history."""
import json
import logging
import os
from datetime import datetime
from typing import Iterable, List

import backoff

from barcode_scanner.core.models import ScanRecord

HISTORY_FORMAT_VERSION = 1


class HistoryStore:
    def __init__(self, path: str):
        """Initialize the store for the given history file."""
        self.path = path
        self.logger = logging.getLogger(__name__)

    @backoff.on_exception(
        backoff.expo,
        OSError,
        max_tries=3,
        max_time=2,
        giveup=lambda e: not isinstance(e, (InterruptedError, BlockingIOError))
    )
    def _write(self, payload):
        """Write the payload atomically, retrying interrupted or would-block OS errors."""
        directory = os.path.dirname(self.path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        tmp_path = f"{self.path}.tmp"
        with open(tmp_path, 'w', encoding='utf-8') as f:
            json.dump(payload, f, indent=4, ensure_ascii=False)
        os.replace(tmp_path, self.path)

    def save(self, records: Iterable[ScanRecord]) -> bool:
        """
        Persist the full history, newest first.

        Returns:
            bool: True if the history was written. Failures are logged, never raised.
        """
        try:
            payload = {
                'version': HISTORY_FORMAT_VERSION,
                'saved_at': datetime.now().isoformat(),
                'scans': [record.to_dict() for record in records]
            }
            self._write(payload)
            return True
        except Exception as e:
            self.logger.error(f"Error saving scan history to {self.path}: {e}")
            return False

    def load(self) -> List[ScanRecord]:
        """Read the persisted history; absent or corrupt data yields an empty list."""
        if not os.path.exists(self.path):
            return []

        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            self.logger.error(f"Ignoring unreadable scan history {self.path}: {e}")
            return []

        entries = data.get('scans') if isinstance(data, dict) else data
        if not isinstance(entries, list):
            self.logger.error(f"Ignoring malformed scan history {self.path}")
            return []

        records = []
        for entry in entries:
            try:
                records.append(ScanRecord.from_dict(entry))
            except (KeyError, TypeError, ValueError, AttributeError) as e:
                self.logger.warning(f"Skipping malformed scan entry: {e}")
        return records

    def clear(self) -> None:
        """Remove the persisted history."""
        try:
            os.remove(self.path)
            self.logger.info(f"Removed scan history {self.path}")
        except FileNotFoundError:
            pass
        except OSError as e:
            self.logger.error(f"Error removing scan history {self.path}: {e}")
