# barcode_scanner/core/stats.py
"""Summary statistics derived from the scan history."""
from datetime import date, datetime
from typing import Iterable, Optional

from barcode_scanner.core.models import ScanRecord, ScanStats


def _local_date(timestamp: str) -> Optional[date]:
    try:
        parsed = datetime.fromisoformat(timestamp.replace("Z", "+00:00"))
    except ValueError:
        return None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone()
    return parsed.date()


def compute_stats(records: Iterable[ScanRecord], today: Optional[date] = None) -> ScanStats:
    """Count total scans, scans made today (local time) and scans with a known product."""
    if today is None:
        today = date.today()
    total = scanned_today = found = 0
    for record in records:
        total += 1
        if _local_date(record.timestamp) == today:
            scanned_today += 1
        if record.product is not None:
            found += 1
    return ScanStats(total=total, today=scanned_today, found=found)
