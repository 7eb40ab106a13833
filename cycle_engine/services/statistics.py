"""
Statistics service for person-specific cycle estimates.

This module learns a person's average cycle length, period length and
ovulation day from their recorded cycles, and summarizes how regular the
history is.

Typical usage:
    records = source.list_cycle_records(person_id)
    params = estimate_parameters(records)
    print(params.average_cycle_length, params.estimated_ovulation_day)
"""
from typing import Iterable, List, Optional, Sequence
from statistics import mean, pstdev
from aws_lambda_powertools import Logger

from cycle_engine.models.cycle import CycleRecord
from cycle_engine.models.statistics import (
    CycleLearningSummary,
    EstimatedParameters,
    RegularityLevel
)
from cycle_engine.services.constants import (
    REGULARITY_THRESHOLDS,
    SHORT_CYCLE_THRESHOLD,
    LONG_CYCLE_THRESHOLD,
    MAX_PERIOD_LENGTH,
    STEADY_VARIABILITY_CUTOFF,
    HIGH_VARIABILITY_CUTOFF
)
from cycle_engine.services.utils import days_between, round_half_up, sort_records
from cycle_engine.utils.settings import EngineSettings, resolve_settings

logger = Logger()

def get_valid_cycle_lengths(
    records: Iterable[CycleRecord],
    settings: Optional[EngineSettings] = None
) -> List[int]:
    """
    Collect plausible cycle lengths from consecutive period starts.

    Gaps of zero days (duplicate starts) or longer than the maximum cycle gap
    are treated as data-entry errors or tracking breaks and dropped.

    Args:
        records: Cycle records for one person, any order
        settings: Optional engine settings

    Returns:
        Valid inter-start differences in chronological order
    """
    settings = resolve_settings(settings)
    ordered = sort_records(records)

    lengths = []
    for previous, current in zip(ordered, ordered[1:]):
        gap = days_between(previous.period_start_date, current.period_start_date)
        if 0 < gap <= settings.max_cycle_gap:
            lengths.append(gap)
        else:
            logger.debug("Discarding implausible cycle gap", extra={
                "previous_record": previous.id,
                "current_record": current.id,
                "gap": gap
            })
    return lengths

def average_cycle_length(lengths: Sequence[int], settings: EngineSettings) -> int:
    """Rounded mean of valid cycle lengths, or the default when there are none."""
    if not lengths:
        return settings.default_cycle_length
    return round_half_up(mean(lengths))

def estimate_cycle_length(
    records: Iterable[CycleRecord],
    settings: Optional[EngineSettings] = None
) -> int:
    """
    Estimate a person's average cycle length in days.

    Args:
        records: Cycle records for one person, any order
        settings: Optional engine settings

    Returns:
        Rounded mean of the valid gaps between consecutive period starts, or
        the default cycle length when there are none

    Example:
        >>> estimate_cycle_length([])
        28
    """
    settings = resolve_settings(settings)
    return average_cycle_length(get_valid_cycle_lengths(records, settings), settings)

def estimate_period_length(
    records: Iterable[CycleRecord],
    settings: Optional[EngineSettings] = None
) -> int:
    """
    Estimate a person's average period length in days.

    Only records with a usable period end and a plausible flow duration
    contribute; otherwise the default period length is returned.
    """
    settings = resolve_settings(settings)
    lengths = [
        length for length in (r.observed_period_length() for r in records)
        if length is not None and length <= MAX_PERIOD_LENGTH
    ]
    if not lengths:
        return settings.default_period_length
    return round_half_up(mean(lengths))

def estimate_ovulation_day(
    cycle_length: int,
    historical_ovulation_days: Optional[Sequence[int]] = None,
    settings: Optional[EngineSettings] = None
) -> int:
    """
    Estimate the day within the cycle on which ovulation occurs.

    With enough historical observations the estimate is their rounded
    average, so it follows the person's own pattern. Otherwise ovulation is
    placed a fixed number of days before the next period, never earlier than
    the minimum ovulation day.

    Args:
        cycle_length: Length of the cycle in days
        historical_ovulation_days: Previously observed ovulation days
        settings: Optional engine settings

    Returns:
        Estimated ovulation day (1-based)

    Example:
        >>> estimate_ovulation_day(28)
        15
        >>> estimate_ovulation_day(28, [14, 15, 16])
        15
    """
    settings = resolve_settings(settings)
    observations = [day for day in (historical_ovulation_days or []) if day > 0]

    if len(observations) >= settings.ovulation_learning_threshold:
        return round_half_up(mean(observations))

    return max(settings.min_ovulation_day, cycle_length - settings.ovulation_offset)

def estimate_parameters(
    records: Sequence[CycleRecord],
    historical_ovulation_days: Optional[Sequence[int]] = None,
    settings: Optional[EngineSettings] = None
) -> EstimatedParameters:
    """
    Estimate all cycle parameters for one person in a single pass.

    Args:
        records: Cycle records for one person
        historical_ovulation_days: Previously observed ovulation days
        settings: Optional engine settings

    Returns:
        EstimatedParameters with cycle length, ovulation day and period length
    """
    settings = resolve_settings(settings)
    lengths = get_valid_cycle_lengths(records, settings)
    cycle_length = average_cycle_length(lengths, settings)

    observations = [day for day in (historical_ovulation_days or []) if day > 0]
    return EstimatedParameters(
        average_cycle_length=cycle_length,
        estimated_ovulation_day=estimate_ovulation_day(cycle_length, observations, settings),
        average_period_length=estimate_period_length(records, settings),
        sample_count=len(lengths),
        learned_ovulation=len(observations) >= settings.ovulation_learning_threshold
    )

def classify_regularity(variability: float) -> RegularityLevel:
    """Map a coefficient of variation onto a regularity level."""
    for ceiling, level in REGULARITY_THRESHOLDS:
        if variability < ceiling:
            return RegularityLevel(level)
    return RegularityLevel.HIGHLY_VARIABLE

def analyze_cycle_learning(
    records: Sequence[CycleRecord],
    historical_ovulation_days: Optional[Sequence[int]] = None,
    settings: Optional[EngineSettings] = None
) -> CycleLearningSummary:
    """
    Summarize how much the engine has learned about a person's cycles.

    Args:
        records: Cycle records for one person
        historical_ovulation_days: Previously observed ovulation days
        settings: Optional engine settings

    Returns:
        CycleLearningSummary with variability, confidence and data quality
        scores plus short human-readable insights
    """
    settings = resolve_settings(settings)
    params = estimate_parameters(records, historical_ovulation_days, settings)
    lengths = get_valid_cycle_lengths(records, settings)

    total = len(records)
    complete = sum(1 for r in records if r.observed_cycle_length() is not None)

    variability = pstdev(lengths) / mean(lengths) if len(lengths) >= 2 else 0.0
    regularity = classify_regularity(variability)

    insights = []
    if len(lengths) >= 2:
        if variability < STEADY_VARIABILITY_CUTOFF:
            insights.append("Cycles are very regular, making predictions highly reliable")
        elif variability > HIGH_VARIABILITY_CUTOFF:
            insights.append("Cycles show more variation - tracking symptoms can help predict timing")

    if lengths:
        if params.average_cycle_length < SHORT_CYCLE_THRESHOLD:
            insights.append("Shorter cycles than average - phases arrive sooner than a 28-day calendar suggests")
        elif params.average_cycle_length > LONG_CYCLE_THRESHOLD:
            insights.append("Longer cycles than average - the follicular phase runs longer")

    return CycleLearningSummary(
        has_enough_data=total >= 2,
        total_cycles=total,
        complete_cycles=complete,
        average_cycle_length=params.average_cycle_length,
        cycle_variability=variability,
        regularity_level=regularity,
        ovulation_day=params.estimated_ovulation_day,
        ovulation_confidence=min(1.0, max(0.3, 1 - variability * 2)),
        historical_accuracy=0.85 if complete >= 5 else 0.65 + complete * 0.04,
        data_quality=min(1.0, (complete / 6) * 0.7 + (total / 10) * 0.3),
        insights=insights
    )
