import pytest

from barcode_scanner.core.deduplicator import DedupPolicy, ScanDeduplicator
from barcode_scanner.core.models import ScanEvent

EAN_A = "0123456789012"
EAN_B = "0987654321098"


def feed(deduplicator, events):
    return [deduplicator.process(ScanEvent(code), current_time=t) for code, t in events]


class TestCooldownPolicy:
    def test_repeats_inside_cooldown_are_suppressed(self, deduplicator):
        accepted = feed(deduplicator, [("A", 0.0), ("A", 0.5), ("A", 1.2), ("B", 1.3)])
        assert accepted == [True, False, False, True]

    def test_same_code_accepted_after_cooldown(self, deduplicator):
        accepted = feed(deduplicator, [("A", 0.0), ("A", 2.5)])
        assert accepted == [True, True]

    def test_cooldown_measured_from_last_acceptance(self, deduplicator):
        accepted = feed(deduplicator, [("A", 0.0), ("A", 1.9), ("A", 2.0), ("A", 3.0)])
        assert accepted == [True, False, True, False]
        assert deduplicator.last_time == 2.0

    def test_switching_codes_is_immediate(self, deduplicator):
        accepted = feed(deduplicator, [("A", 0.0), ("B", 0.1), ("A", 0.2)])
        assert accepted == [True, True, True]


class TestPlausibility:
    def test_short_and_empty_codes_rejected(self):
        deduplicator = ScanDeduplicator(DedupPolicy(confirmations=1, min_code_length=8))
        assert not deduplicator.process(ScanEvent(""), current_time=0)
        assert not deduplicator.process(ScanEvent("1234567"), current_time=0)
        assert deduplicator.process(ScanEvent("12345678"), current_time=0)

    def test_rejected_codes_do_not_change_last_accepted(self):
        deduplicator = ScanDeduplicator(DedupPolicy(confirmations=1))
        deduplicator.process(ScanEvent(EAN_A), current_time=0)
        deduplicator.process(ScanEvent("123"), current_time=1)
        assert deduplicator.last_code == EAN_A
        assert deduplicator.last_time == 0

    def test_high_error_reads_discarded(self):
        deduplicator = ScanDeduplicator(DedupPolicy(confirmations=1, max_error=0.15))
        assert not deduplicator.process(ScanEvent(EAN_A, "ean_13", 0.3), current_time=0)
        assert deduplicator.process(ScanEvent(EAN_A, "ean_13", 0.1), current_time=0)

    def test_missing_confidence_passes_gate(self):
        deduplicator = ScanDeduplicator(DedupPolicy(confirmations=1, max_error=0.15))
        assert deduplicator.process(ScanEvent(EAN_A), current_time=0)

    def test_gate_disabled(self):
        deduplicator = ScanDeduplicator(DedupPolicy(confirmations=1, max_error=None))
        assert deduplicator.process(ScanEvent(EAN_A, confidence=0.9), current_time=0)


class TestConfirmationBuffer:
    def test_needs_consecutive_identical_reads(self):
        deduplicator = ScanDeduplicator(DedupPolicy(confirmations=2))
        accepted = [deduplicator.process(ScanEvent(code), current_time=0)
                    for code in (EAN_A, EAN_B, EAN_B)]
        assert accepted == [False, False, True]
        assert deduplicator.last_code == EAN_B

    def test_buffer_cleared_after_acceptance(self):
        deduplicator = ScanDeduplicator(DedupPolicy(confirmations=2))
        deduplicator.process(ScanEvent(EAN_A), current_time=0)
        assert deduplicator.process(ScanEvent(EAN_A), current_time=0)
        assert len(deduplicator.detection_buffer) == 0

    def test_held_code_not_recorded_again(self):
        deduplicator = ScanDeduplicator(DedupPolicy(confirmations=2, cooldown=1.0))
        results = [deduplicator.process(ScanEvent(EAN_A), current_time=t)
                   for t in (0, 0.1, 5.0, 5.1, 10.0)]
        assert results == [False, True, False, False, False]

    def test_code_accepted_again_after_another_code(self):
        deduplicator = ScanDeduplicator(DedupPolicy(confirmations=2))
        sequence = [EAN_A, EAN_A, EAN_B, EAN_B, EAN_A, EAN_A]
        results = [deduplicator.process(ScanEvent(code), current_time=0) for code in sequence]
        assert results == [False, True, False, True, False, True]

    def test_low_confidence_reads_never_buffered(self):
        deduplicator = ScanDeduplicator(DedupPolicy(confirmations=2, max_error=0.15))
        results = [deduplicator.process(ScanEvent(EAN_A, confidence=c), current_time=0)
                   for c in (0.1, 0.4, 0.05)]
        assert results == [False, False, True]

    def test_new_session_drops_pending_reads(self):
        deduplicator = ScanDeduplicator(DedupPolicy(confirmations=2))
        deduplicator.process(ScanEvent(EAN_A), current_time=0)
        deduplicator.start_new_session()
        assert not deduplicator.process(ScanEvent(EAN_A), current_time=0)


def test_invalid_policy_rejected():
    with pytest.raises(ValueError):
        DedupPolicy(confirmations=0)
    with pytest.raises(ValueError):
        DedupPolicy(cooldown=-1)
