"""
Service module for classifying days of a cycle into phases.

The cycle is split into ten consecutive bands (heavy flow through
pre-menstrual) whose boundaries depend on the cycle length, the period
length and the estimated ovulation day. Every day of the cycle falls in
exactly one band.

Typical usage:
    >>> descriptor = classify(13, 28, 5)
    >>> descriptor.phase, descriptor.sub_phase
    (<PhaseType.FERTILE: 'fertile'>, <SubPhaseType.PRE_OVULATION: 'pre_ovulation'>)
    >>> [band.day_range for band in get_phase_bands(28, 5)][:2]
    ['Days 1-2', 'Days 3-5']
"""
from typing import List, Optional, Sequence

from cycle_engine.models.phase import PhaseBand, PhaseDescriptor, SubPhaseType
from cycle_engine.services.constants import (
    SUB_PHASE_SEQUENCE,
    SUB_PHASE_DETAILS,
    HEAVY_FLOW_DAYS,
    EARLY_FOLLICULAR_DAYS,
    PRE_OVULATION_DAYS,
    POST_OVULATION_DAYS,
    PRE_MENSTRUAL_DAYS
)
from cycle_engine.services.exceptions import InvalidCycleLengthError, InvalidDayInCycleError
from cycle_engine.services.statistics import estimate_ovulation_day
from cycle_engine.utils.settings import EngineSettings, resolve_settings

def calculate_band_upper_bounds(
    cycle_length: int,
    period_length: int,
    ovulation_day: int
) -> List[int]:
    """
    Nominal last day of each band, in SUB_PHASE_SEQUENCE order.

    Bounds are not guaranteed to increase; for short cycles or long periods
    some bands collapse and get_phase_bands drops them.
    """
    mid_luteal = ovulation_day + (cycle_length - ovulation_day) // 2
    return [
        min(HEAVY_FLOW_DAYS, period_length),           # heavy_flow
        period_length,                                 # light_flow
        period_length + EARLY_FOLLICULAR_DAYS,         # early_follicular
        ovulation_day - PRE_OVULATION_DAYS - 1,        # late_follicular
        ovulation_day - 1,                             # pre_ovulation
        ovulation_day,                                 # ovulation
        ovulation_day + POST_OVULATION_DAYS,           # post_ovulation
        mid_luteal,                                    # early_luteal
        cycle_length - PRE_MENSTRUAL_DAYS,             # mid_luteal
        cycle_length,                                  # pre_menstrual
    ]

def get_phase_bands(
    cycle_length: int,
    period_length: int,
    historical_ovulation_days: Optional[Sequence[int]] = None,
    settings: Optional[EngineSettings] = None
) -> List[PhaseBand]:
    """
    Partition days 1..cycle_length into ordered, non-empty phase bands.

    Each band starts the day after the previous one ends, so when nominal
    ranges overlap the earlier band keeps the contested days and later bands
    shrink or disappear. The final band always ends on the last cycle day.

    Args:
        cycle_length: Length of the cycle in days
        period_length: Number of flow days; clamped into [1, cycle_length]
        historical_ovulation_days: Previously observed ovulation days
        settings: Optional engine settings

    Returns:
        Bands in cycle order covering every day exactly once

    Raises:
        InvalidCycleLengthError: If cycle_length is zero or negative
    """
    if cycle_length <= 0:
        raise InvalidCycleLengthError(f"Cycle length must be positive, got {cycle_length}")

    settings = resolve_settings(settings)
    period_length = max(1, min(period_length, cycle_length))
    ovulation_day = estimate_ovulation_day(cycle_length, historical_ovulation_days, settings)
    upper_bounds = calculate_band_upper_bounds(cycle_length, period_length, ovulation_day)

    bands = []
    next_start = 1
    last_index = len(SUB_PHASE_SEQUENCE) - 1
    for index, ((sub_phase, phase), upper) in enumerate(zip(SUB_PHASE_SEQUENCE, upper_bounds)):
        end = min(upper, cycle_length) if index < last_index else cycle_length
        if end < next_start:
            continue
        bands.append(PhaseBand(phase=phase, sub_phase=sub_phase, start_day=next_start, end_day=end))
        next_start = end + 1
    return bands

def get_phase_details(sub_phase: SubPhaseType) -> dict:
    """
    Get display details for a sub-phase.

    Returns:
        Dictionary with "description", "emoji", "hormonal_profile" and
        "recommendations" keys; the recommendations list is a fresh copy
    """
    details = SUB_PHASE_DETAILS[sub_phase]
    return {**details, "recommendations": list(details["recommendations"])}

def describe_band(band: PhaseBand) -> PhaseDescriptor:
    """Build the full phase descriptor for a band."""
    return PhaseDescriptor(
        phase=band.phase,
        sub_phase=band.sub_phase,
        start_day=band.start_day,
        end_day=band.end_day,
        day_range=band.day_range,
        **get_phase_details(band.sub_phase)
    )

def classify(
    day_in_cycle: int,
    cycle_length: int,
    period_length: int,
    historical_ovulation_days: Optional[Sequence[int]] = None,
    settings: Optional[EngineSettings] = None
) -> PhaseDescriptor:
    """
    Classify a day within a cycle into its phase and sub-phase.

    Days past the end of the cycle (an overdue period) stay in the final
    pre-menstrual band.

    Args:
        day_in_cycle: 1-based day within the cycle
        cycle_length: Length of the cycle in days
        period_length: Number of flow days
        historical_ovulation_days: Previously observed ovulation days
        settings: Optional engine settings

    Returns:
        PhaseDescriptor for the band containing the day

    Raises:
        InvalidCycleLengthError: If cycle_length is zero or negative
        InvalidDayInCycleError: If day_in_cycle is below 1

    Example:
        >>> classify(15, 28, 5).is_ovulation
        True
    """
    if day_in_cycle < 1:
        raise InvalidDayInCycleError(f"Day in cycle must be at least 1, got {day_in_cycle}")

    bands = get_phase_bands(cycle_length, period_length, historical_ovulation_days, settings)
    for band in bands:
        if band.contains(day_in_cycle):
            return describe_band(band)
    return describe_band(bands[-1])
