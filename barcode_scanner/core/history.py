# barcode_scanner/core/history.py
"""Bounded, newest-first scan history."""
from typing import Iterable, Iterator, List, Optional

from barcode_scanner.core.models import ScanRecord


class ScanHistory:
    def __init__(self, limit: int = 25, records: Optional[Iterable[ScanRecord]] = None):
        if limit < 1:
            raise ValueError("history limit must be at least 1")
        self.limit = limit
        self._records: List[ScanRecord] = list(records or [])[:limit]

    def add(self, record: ScanRecord) -> None:
        """Insert a record at the front, evicting the oldest past the limit."""
        self._records.insert(0, record)
        del self._records[self.limit:]

    def clear(self) -> None:
        self._records = []

    def records(self) -> List[ScanRecord]:
        return list(self._records)

    @property
    def latest(self) -> Optional[ScanRecord]:
        return self._records[0] if self._records else None

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[ScanRecord]:
        return iter(list(self._records))
