# barcode_scanner/ui/console_sink.py
"""Terminal rendering of the scan history, statistics and status line."""
import logging
import sys
from datetime import datetime

STATUS_PREFIXES = {
    "success": "[OK]",
    "info": "[..]",
    "error": "[!!]",
}

STATUS_LOG_LEVELS = {
    "success": logging.INFO,
    "info": logging.INFO,
    "error": logging.ERROR,
}

EMPTY_STATE = "No scans yet - Start scanning to see results"


def format_local_time(timestamp):
    """Render an ISO timestamp in local time, falling back to the raw string."""
    try:
        parsed = datetime.fromisoformat(timestamp.replace("Z", "+00:00"))
    except ValueError:
        return timestamp
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone()
    return parsed.strftime("%Y-%m-%d %H:%M:%S")


def format_record(record, latest=False):
    """Format one scan record as a block of text lines."""
    marker = " (latest)" if latest else ""
    lines = [
        f"{record.format}  {format_local_time(record.timestamp)}{marker}",
        f"  {record.code}",
    ]
    if record.product:
        lines.extend([
            f"  {record.product.name} - {record.product.price}",
            f"  Brand: {record.product.brand}",
            f"  {record.product.description}",
        ])
    else:
        lines.append("  Product information not available")
    return "\n".join(lines)


def format_history(records):
    if not records:
        return EMPTY_STATE
    return "\n\n".join(format_record(record, latest=index == 0)
                       for index, record in enumerate(records))


class ConsoleSink:
    def __init__(self, stream=None):
        self.logger = logging.getLogger(__name__)
        self.stream = stream or sys.stdout

    def _write(self, text):
        self.stream.write(text + "\n")
        self.stream.flush()

    def render_history(self, records):
        self._write(format_history(records))

    def render_stats(self, stats):
        self._write(f"Total scans: {stats.total} | Today: {stats.today} | Products found: {stats.found}")

    def render_status(self, message, severity="info"):
        prefix = STATUS_PREFIXES.get(severity, STATUS_PREFIXES["info"])
        self._write(f"{prefix} {message}")
        self.logger.log(STATUS_LOG_LEVELS.get(severity, logging.INFO), message)
