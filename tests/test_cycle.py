"""
Tests for resolving calendar days to recorded cycles.
"""
import pytest
from datetime import date

from cycle_engine.models.cycle import CycleRecord
from cycle_engine.models.phase import PhaseType, SubPhaseType
from cycle_engine.services.cycle import get_phase_for_day, resolve

def test_resolve_open_cycle_end_to_end(single_open_record):
    """Test a single ongoing cycle queried on its tenth day."""
    resolved = resolve(date(2024, 1, 10), [single_open_record])

    assert resolved is not None
    assert resolved.cycle == single_open_record
    assert resolved.day_in_cycle == 10
    assert resolved.cycle_length == 28
    assert resolved.period_length == 5
    assert resolved.effective_end_date == date(2024, 1, 28)

    info = get_phase_for_day(date(2024, 1, 10), [single_open_record])
    assert info.descriptor.phase == PhaseType.FOLLICULAR
    assert info.descriptor.sub_phase == SubPhaseType.LATE_FOLLICULAR
    assert info.day_in_cycle == 10

def test_resolve_open_cycle_window(single_open_record):
    """Test the edges of an open cycle's estimated window."""
    assert resolve(date(2024, 1, 1), [single_open_record]).day_in_cycle == 1
    assert resolve(date(2024, 1, 28), [single_open_record]).day_in_cycle == 28
    assert resolve(date(2024, 1, 29), [single_open_record]) is None
    assert resolve(date(2023, 12, 31), [single_open_record]) is None

def test_resolve_empty_records():
    """Test that no records means no match."""
    assert resolve(date(2024, 1, 10), []) is None
    assert get_phase_for_day(date(2024, 1, 10), []) is None

def test_resolve_closed_cycle_uses_own_length(record_factory):
    """Test that a closed 30-day cycle is classified with its own length."""
    record = record_factory("may", date(2025, 5, 1), cycle_end=date(2025, 5, 30))

    resolved = resolve(date(2025, 5, 17), [record])
    assert resolved.cycle_length == 30
    assert resolved.day_in_cycle == 17

    info = get_phase_for_day(date(2025, 5, 17), [record])
    assert info.descriptor.sub_phase == SubPhaseType.OVULATION

def test_resolve_open_cycle_uses_estimated_length(record_factory):
    """Test that an open cycle runs for the person's average length."""
    records = [
        record_factory("a", date(2024, 1, 1), cycle_end=date(2024, 1, 30)),
        record_factory("b", date(2024, 1, 31)),
    ]
    resolved = resolve(date(2024, 2, 29), records)
    assert resolved.cycle.id == "b"
    assert resolved.day_in_cycle == 30
    assert resolve(date(2024, 3, 1), records) is None

def test_resolve_overlapping_records_is_deterministic(record_factory):
    """Test that the chronologically first record wins on overlap."""
    first = record_factory("first", date(2024, 1, 1), cycle_end=date(2024, 1, 31))
    second = record_factory("second", date(2024, 1, 20), cycle_end=date(2024, 2, 15))

    for records in ([first, second], [second, first]):
        for _ in range(3):
            resolved = resolve(date(2024, 1, 25), records)
            assert resolved.cycle.id == "first"
            assert resolved.day_in_cycle == 25

    assert resolve(date(2024, 2, 5), [first, second]).cycle.id == "second"

def test_resolve_same_start_ties_break_on_id(record_factory):
    """Test that records with equal starts resolve by id."""
    b = record_factory("b", date(2024, 1, 1))
    a = record_factory("a", date(2024, 1, 1))
    assert resolve(date(2024, 1, 3), [b, a]).cycle.id == "a"

def test_resolve_tolerates_inverted_dates():
    """Test that end dates before the start are ignored, not raised."""
    record = CycleRecord(
        id="bad",
        period_start_date=date(2024, 3, 1),
        period_end_date=date(2024, 2, 27),
        cycle_end_date=date(2024, 2, 20)
    )
    resolved = resolve(date(2024, 3, 10), [record])
    assert resolved.day_in_cycle == 10
    assert resolved.cycle_length == 28
    assert resolved.period_length == 5

def test_resolve_clamps_period_to_cycle(record_factory):
    """Test that a period longer than its cycle is clamped."""
    record = record_factory("short", date(2024, 1, 1), period_days=9, cycle_end=date(2024, 1, 7))
    resolved = resolve(date(2024, 1, 7), [record])
    assert resolved.cycle_length == 7
    assert resolved.period_length == 7

def test_get_phase_for_day_with_learned_ovulation(single_open_record):
    """Test that historical ovulation days are applied."""
    info = get_phase_for_day(date(2024, 1, 12), [single_open_record], historical_ovulation_days=[12, 12, 12])
    assert info.descriptor.is_ovulation

def test_resolve_does_not_mutate_input(regular_records):
    """Test that the caller's list is left as given."""
    records = list(reversed(regular_records))
    snapshot = list(records)
    resolve(date(2024, 2, 10), records)
    assert records == snapshot
