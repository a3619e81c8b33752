# barcode_scanner/core/recorder.py
"""Turns accepted scan events into persisted history records."""
import logging
from datetime import datetime, timezone

from barcode_scanner.core.catalog import ProductCatalog
from barcode_scanner.core.history import ScanHistory
from barcode_scanner.core.models import ScanEvent, ScanRecord, UNKNOWN_FORMAT
from barcode_scanner.core.stats import compute_stats


def _utc_now():
    return datetime.now(timezone.utc)


class Recorder:
    """Owns the scan history and fans accepted scans out to the sink and feedback."""

    def __init__(self, history: ScanHistory, catalog: ProductCatalog, store,
                 sink=None, feedback=None, clock=_utc_now):
        self.logger = logging.getLogger(__name__)
        self.history = history
        self.catalog = catalog
        self.store = store
        self.sink = sink
        self.feedback = feedback
        self.clock = clock
        self._last_id = max((record.id for record in history), default=0)

    def _next_id(self, created: datetime) -> int:
        record_id = int(created.timestamp() * 1000)
        if record_id <= self._last_id:
            record_id = self._last_id + 1
        self._last_id = record_id
        return record_id

    def record(self, event: ScanEvent) -> ScanRecord:
        """Create, store and announce a record for an accepted event."""
        created = self.clock()
        record = ScanRecord(
            id=self._next_id(created),
            code=event.code,
            format=(event.format or UNKNOWN_FORMAT).upper(),
            timestamp=created.isoformat(),
            product=self.catalog.lookup(event.code)
        )

        self.history.add(record)
        self._persist()

        self._notify_feedback()
        self.refresh()
        product_name = record.product.name if record.product else "Unknown Product"
        self._render_status(f"Successfully scanned: {product_name}", "success")

        self.logger.info(f"Detected barcode: {record.code} ({record.format})")
        return record

    def clear(self) -> None:
        """Empty the history and remove its persisted copy."""
        self.history.clear()
        self.store.clear()
        self.refresh()
        self._render_status("Scan history cleared", "info")

    def refresh(self) -> None:
        """Re-render the history and freshly computed statistics."""
        if self.sink is None:
            return
        records = self.history.records()
        try:
            self.sink.render_history(records)
        except Exception as e:
            self.logger.error(f"Error rendering scan history: {e}")
        try:
            self.sink.render_stats(compute_stats(records))
        except Exception as e:
            self.logger.error(f"Error rendering scan statistics: {e}")

    def _persist(self):
        try:
            saved = self.store.save(self.history.records())
        except Exception as e:
            self.logger.error(f"Error saving scan history: {e}")
            saved = False
        if not saved:
            self.logger.warning("Scan kept in memory only; history could not be saved")

    def _render_status(self, message, severity):
        if self.sink is None:
            return
        try:
            self.sink.render_status(message, severity)
        except Exception as e:
            self.logger.error(f"Error rendering status: {e}")

    def _notify_feedback(self):
        if self.feedback is None:
            return
        try:
            self.feedback.notify()
        except Exception as e:
            self.logger.error(f"Error playing scan feedback: {e}")
