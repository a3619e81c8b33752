"""
Pytest fixtures: fake collaborators for the scan pipeline.
"""

from datetime import datetime, timedelta, timezone

import pytest

from barcode_scanner.core.catalog import ProductCatalog
from barcode_scanner.core.deduplicator import DedupPolicy, ScanDeduplicator
from barcode_scanner.core.errors import ScannerStartError
from barcode_scanner.core.history import ScanHistory
from barcode_scanner.core.recorder import Recorder
from barcode_scanner.storage.history_store import HistoryStore


class FakeSource:
    """Decode source driven by the test instead of a camera."""

    def __init__(self):
        self.fail_start = False
        self.start_error = None
        self.during_start = None
        self.started = 0
        self.stopped = 0
        self.on_detected = None
        self.on_processed = None

    def start(self, on_detected, on_processed=None):
        if self.fail_start:
            raise ScannerStartError("no camera")
        if self.start_error is not None:
            raise self.start_error
        if self.during_start is not None:
            self.during_start()
        self.started += 1
        self.on_detected = on_detected
        self.on_processed = on_processed

    def stop(self):
        self.stopped += 1

    def emit(self, event):
        return self.on_detected(event)


class RecordingSink:
    def __init__(self):
        self.histories = []
        self.stats = []
        self.statuses = []

    def render_history(self, records):
        self.histories.append(list(records))

    def render_stats(self, stats):
        self.stats.append(stats)

    def render_status(self, message, severity="info"):
        self.statuses.append((message, severity))


class BrokenSink:
    def render_history(self, records):
        raise RuntimeError("display gone")

    def render_stats(self, stats):
        raise RuntimeError("display gone")

    def render_status(self, message, severity="info"):
        raise RuntimeError("display gone")


class FakeFeedback:
    def __init__(self, fail=False):
        self.fail = fail
        self.notified = 0
        self.statuses = []

    def notify(self):
        if self.fail:
            raise RuntimeError("buzzer missing")
        self.notified += 1

    def set_status(self, severity):
        self.statuses.append(severity)


class StepClock:
    """Returns a UTC time advancing by one second per call."""

    def __init__(self, start=None):
        self.now = start or datetime(2026, 10, 19, 12, 0, 0, tzinfo=timezone.utc)

    def __call__(self):
        current = self.now
        self.now = self.now + timedelta(seconds=1)
        return current


@pytest.fixture
def source():
    return FakeSource()


@pytest.fixture
def sink():
    return RecordingSink()


@pytest.fixture
def feedback():
    return FakeFeedback()


@pytest.fixture
def history_path(tmp_path):
    return str(tmp_path / "scan_history.json")


@pytest.fixture
def store(history_path):
    return HistoryStore(history_path)


@pytest.fixture
def catalog():
    return ProductCatalog()


@pytest.fixture
def recorder(store, catalog, sink, feedback):
    return Recorder(ScanHistory(limit=5), catalog, store, sink=sink, feedback=feedback, clock=StepClock())


@pytest.fixture
def cooldown_policy():
    """Pure time-window policy with a two second cooldown."""
    return DedupPolicy(cooldown=2.0, confirmations=1, max_error=None, min_code_length=1)


@pytest.fixture
def deduplicator(cooldown_policy):
    return ScanDeduplicator(cooldown_policy)


@pytest.fixture
def broken_sink():
    return BrokenSink()


@pytest.fixture
def failing_feedback():
    return FakeFeedback(fail=True)
