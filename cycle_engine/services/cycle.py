"""
Service module for locating calendar days within recorded cycles.

This module finds which recorded cycle encloses a given date, computes the
day within that cycle, and combines the result with phase classification.

Typical usage:
    records = source.list_cycle_records(person_id)
    resolved = resolve(date(2024, 1, 10), records)
    if resolved:
        print(f"Day {resolved.day_in_cycle} of cycle {resolved.cycle.id}")
    info = get_phase_for_day(date(2024, 1, 10), records)
"""
from typing import Optional, Sequence
from datetime import date

from cycle_engine.models.cycle import CycleRecord, ResolvedCycle
from cycle_engine.models.phase import CyclePhaseInfo
from cycle_engine.services.phase import classify
from cycle_engine.services.statistics import estimate_cycle_length
from cycle_engine.services.utils import (
    days_between,
    effective_cycle_end,
    effective_period_length,
    sort_records
)
from cycle_engine.utils.settings import EngineSettings, resolve_settings

def resolve(
    day: date,
    records: Sequence[CycleRecord],
    settings: Optional[EngineSettings] = None,
    estimated_length: Optional[int] = None
) -> Optional[ResolvedCycle]:
    """
    Find the recorded cycle enclosing a calendar day.

    Records are scanned in chronological order and the first one whose
    [period start, effective end] window contains the day wins, so overlapping
    records always resolve to the earliest one.

    Args:
        day: Calendar day to look up
        records: Cycle records for one person, any order
        settings: Optional engine settings
        estimated_length: Precomputed average cycle length for these records;
            estimated from the records when omitted

    Returns:
        ResolvedCycle for the enclosing cycle, or None if no cycle contains the day

    Example:
        >>> resolved = resolve(date(2024, 1, 10), records)
        >>> resolved.day_in_cycle
        10
    """
    if not records:
        return None

    settings = resolve_settings(settings)
    if estimated_length is None:
        estimated_length = estimate_cycle_length(records, settings)

    for record in sort_records(records):
        cycle_end = effective_cycle_end(record, estimated_length)
        if record.period_start_date <= day <= cycle_end:
            cycle_length = days_between(record.period_start_date, cycle_end) + 1
            return ResolvedCycle(
                cycle=record,
                day_in_cycle=days_between(record.period_start_date, day) + 1,
                cycle_length=cycle_length,
                period_length=effective_period_length(
                    record, cycle_length, settings.default_period_length
                ),
                effective_end_date=cycle_end
            )
    return None

def get_phase_for_day(
    day: date,
    records: Sequence[CycleRecord],
    historical_ovulation_days: Optional[Sequence[int]] = None,
    settings: Optional[EngineSettings] = None,
    estimated_length: Optional[int] = None
) -> Optional[CyclePhaseInfo]:
    """
    Resolve a calendar day and classify it within its cycle.

    The enclosing cycle's own length (recorded, or estimated when open) and
    its observed period length drive the classification.

    Args:
        day: Calendar day to look up
        records: Cycle records for one person
        historical_ovulation_days: Previously observed ovulation days
        settings: Optional engine settings
        estimated_length: Precomputed average cycle length for these records

    Returns:
        CyclePhaseInfo, or None if no recorded cycle contains the day
    """
    settings = resolve_settings(settings)
    resolved = resolve(day, records, settings, estimated_length)
    if resolved is None:
        return None

    descriptor = classify(
        resolved.day_in_cycle,
        resolved.cycle_length,
        resolved.period_length,
        historical_ovulation_days,
        settings
    )
    return CyclePhaseInfo(resolved=resolved, descriptor=descriptor)
