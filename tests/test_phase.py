"""
Tests for phase classification.
"""
import pytest

from cycle_engine.models.phase import PhaseType, SubPhaseType
from cycle_engine.services.exceptions import (
    ContractViolationError,
    InvalidCycleLengthError,
    InvalidDayInCycleError
)
from cycle_engine.services.phase import classify, get_phase_bands, get_phase_details

@pytest.mark.parametrize("day,phase,sub_phase", [
    (1, PhaseType.MENSTRUAL, SubPhaseType.HEAVY_FLOW),
    (2, PhaseType.MENSTRUAL, SubPhaseType.HEAVY_FLOW),
    (3, PhaseType.MENSTRUAL, SubPhaseType.LIGHT_FLOW),
    (5, PhaseType.MENSTRUAL, SubPhaseType.LIGHT_FLOW),
    (6, PhaseType.FOLLICULAR, SubPhaseType.EARLY_FOLLICULAR),
    (8, PhaseType.FOLLICULAR, SubPhaseType.EARLY_FOLLICULAR),
    (9, PhaseType.FOLLICULAR, SubPhaseType.LATE_FOLLICULAR),
    (12, PhaseType.FOLLICULAR, SubPhaseType.LATE_FOLLICULAR),
    (13, PhaseType.FERTILE, SubPhaseType.PRE_OVULATION),
    (14, PhaseType.FERTILE, SubPhaseType.PRE_OVULATION),
    (15, PhaseType.FERTILE, SubPhaseType.OVULATION),
    (16, PhaseType.FERTILE, SubPhaseType.POST_OVULATION),
    (17, PhaseType.FERTILE, SubPhaseType.POST_OVULATION),
    (18, PhaseType.LUTEAL, SubPhaseType.EARLY_LUTEAL),
    (20, PhaseType.LUTEAL, SubPhaseType.EARLY_LUTEAL),
    (21, PhaseType.LUTEAL, SubPhaseType.EARLY_LUTEAL),
    (22, PhaseType.LUTEAL, SubPhaseType.MID_LUTEAL),
    (25, PhaseType.LUTEAL, SubPhaseType.MID_LUTEAL),
    (26, PhaseType.LUTEAL, SubPhaseType.PRE_MENSTRUAL),
    (28, PhaseType.LUTEAL, SubPhaseType.PRE_MENSTRUAL),
])
def test_classify_28_day_cycle(day, phase, sub_phase):
    """Test band boundaries for a 28-day cycle with a 5-day period."""
    descriptor = classify(day, 28, 5)
    assert descriptor.phase == phase
    assert descriptor.sub_phase == sub_phase

def test_phase_bands_28_day_cycle():
    """Test the full band layout for a typical cycle."""
    bands = get_phase_bands(28, 5)
    assert [(b.sub_phase, b.start_day, b.end_day) for b in bands] == [
        (SubPhaseType.HEAVY_FLOW, 1, 2),
        (SubPhaseType.LIGHT_FLOW, 3, 5),
        (SubPhaseType.EARLY_FOLLICULAR, 6, 8),
        (SubPhaseType.LATE_FOLLICULAR, 9, 12),
        (SubPhaseType.PRE_OVULATION, 13, 14),
        (SubPhaseType.OVULATION, 15, 15),
        (SubPhaseType.POST_OVULATION, 16, 17),
        (SubPhaseType.EARLY_LUTEAL, 18, 21),
        (SubPhaseType.MID_LUTEAL, 22, 25),
        (SubPhaseType.PRE_MENSTRUAL, 26, 28),
    ]

@pytest.mark.parametrize("cycle_length", range(15, 61))
@pytest.mark.parametrize("period_length", [1, 2, 3, 5, 7, 10])
def test_bands_partition_cycle(cycle_length, period_length):
    """Test that bands cover every day exactly once, in order."""
    bands = get_phase_bands(cycle_length, period_length)

    assert bands[0].start_day == 1
    assert bands[-1].end_day == cycle_length
    for previous, current in zip(bands, bands[1:]):
        assert current.start_day == previous.end_day + 1
        assert current.start_day <= current.end_day

    for day in range(1, cycle_length + 1):
        matching = [b for b in bands if b.contains(day)]
        assert len(matching) == 1
        assert classify(day, cycle_length, period_length).sub_phase == matching[0].sub_phase

@pytest.mark.parametrize("cycle_length,period_length", [
    (1, 5),
    (5, 5),
    (10, 9),
    (14, 10),
    (20, 30),
])
def test_classify_degenerate_inputs(cycle_length, period_length):
    """Test that very short cycles or long periods still classify every day."""
    bands = get_phase_bands(cycle_length, period_length)
    assert bands[0].start_day == 1
    assert bands[-1].end_day == cycle_length
    for day in range(1, cycle_length + 1):
        assert classify(day, cycle_length, period_length) is not None

def test_classify_one_day_period():
    """Test that day 2 is no longer menstrual after a one-day period."""
    assert classify(1, 28, 1).sub_phase == SubPhaseType.HEAVY_FLOW
    assert classify(2, 28, 1).sub_phase == SubPhaseType.EARLY_FOLLICULAR

def test_classify_past_cycle_end():
    """Test that an overdue day stays pre-menstrual."""
    assert classify(31, 28, 5).sub_phase == SubPhaseType.PRE_MENSTRUAL

def test_classify_with_learned_ovulation():
    """Test that historical ovulation days move the fertile window."""
    descriptor = classify(18, 28, 5, historical_ovulation_days=[18, 18, 18])
    assert descriptor.sub_phase == SubPhaseType.OVULATION
    assert descriptor.is_ovulation
    assert classify(15, 28, 5, historical_ovulation_days=[18, 18, 18]).sub_phase == SubPhaseType.LATE_FOLLICULAR

def test_classify_descriptor_metadata():
    """Test presentation metadata carried by descriptors."""
    ovulation = classify(15, 28, 5)
    assert ovulation.day_range == "Day 15"
    assert ovulation.hormonal_profile == "LH surge, peak fertility"
    assert ovulation.recommendations[0] == "Peak intimacy window"
    assert ovulation.start_day == ovulation.end_day == 15

    light = classify(4, 28, 5)
    assert light.day_range == "Days 3-5"
    assert light.description == "Light menstrual flow"
    assert not light.is_ovulation

def test_get_phase_details_returns_copy():
    """Test that callers cannot mutate the shared recommendation lists."""
    details = get_phase_details(SubPhaseType.HEAVY_FLOW)
    details["recommendations"].append("Something else")
    assert "Something else" not in get_phase_details(SubPhaseType.HEAVY_FLOW)["recommendations"]

@pytest.mark.parametrize("cycle_length", [0, -5])
def test_classify_rejects_non_positive_cycle_length(cycle_length):
    """Test that an invalid cycle length is a contract violation."""
    with pytest.raises(InvalidCycleLengthError) as exc:
        classify(1, cycle_length, 5)
    assert isinstance(exc.value, ContractViolationError)
    assert isinstance(exc.value, ValueError)
    assert "positive" in str(exc.value)

def test_classify_rejects_day_zero():
    """Test that day-within-cycle is 1-based."""
    with pytest.raises(InvalidDayInCycleError):
        classify(0, 28, 5)

def test_learned_ovulation_past_cycle_end_collapses_bands():
    """Test that ovulation learned beyond the cycle end leaves only follicular bands."""
    bands = get_phase_bands(28, 5, historical_ovulation_days=[40, 40, 40])
    assert [(b.sub_phase, b.start_day, b.end_day) for b in bands] == [
        (SubPhaseType.HEAVY_FLOW, 1, 2),
        (SubPhaseType.LIGHT_FLOW, 3, 5),
        (SubPhaseType.EARLY_FOLLICULAR, 6, 8),
        (SubPhaseType.LATE_FOLLICULAR, 9, 28),
    ]
    assert classify(28, 28, 5, historical_ovulation_days=[40, 40, 40]).sub_phase == SubPhaseType.LATE_FOLLICULAR
    assert classify(31, 28, 5, historical_ovulation_days=[40, 40, 40]).sub_phase == SubPhaseType.LATE_FOLLICULAR
