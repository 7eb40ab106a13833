"""
Shared utility functions for cycle-related services.

These utilities are used across multiple service modules to handle common
operations like record ordering, date arithmetic and tolerant reading of
optional record fields.
"""
import math
from typing import Iterable, List, Optional
from datetime import date, timedelta

from cycle_engine.models.cycle import CycleRecord

def days_between(start: date, end: date) -> int:
    """
    Signed number of days from start to end.

    Example:
        >>> days_between(date(2024, 1, 1), date(2024, 1, 29))
        28
    """
    return (end - start).days

def add_days(day: date, days: int) -> date:
    """Shift a date by a number of days."""
    return day + timedelta(days=days)

def round_half_up(value: float) -> int:
    """
    Round to the nearest integer, halves away from zero.

    The built-in round() rounds halves to even, which would turn an
    average of 28.5 days into 28.
    """
    if value < 0:
        return -math.floor(-value + 0.5)
    return math.floor(value + 0.5)

def sort_records(records: Iterable[CycleRecord], reverse: bool = False) -> List[CycleRecord]:
    """
    Sort records chronologically by period start date.

    Records sharing a start date are ordered by id so the result does not
    depend on input order.

    Args:
        records: Cycle records in any order
        reverse: Whether to sort newest first

    Returns:
        New sorted list; the input is left untouched
    """
    return sorted(records, key=lambda r: (r.period_start_date, r.id), reverse=reverse)

def get_last_cycle(records: Iterable[CycleRecord]) -> Optional[CycleRecord]:
    """Return the record with the latest period start, or None."""
    ordered = sort_records(records, reverse=True)
    return ordered[0] if ordered else None

def effective_cycle_end(record: CycleRecord, estimated_length: int) -> date:
    """
    Last day of a record's cycle.

    Closed cycles use their recorded end. Open cycles, and cycles whose end
    precedes their start, are assumed to run for the estimated length.
    """
    if record.observed_cycle_length() is not None:
        return record.cycle_end_date
    return add_days(record.period_start_date, estimated_length - 1)

def effective_period_length(
    record: CycleRecord,
    cycle_length: int,
    default_period_length: int
) -> int:
    """
    Number of flow days to assume for a record, clamped into [1, cycle_length].

    Args:
        record: Cycle record to read the observed period from
        cycle_length: Length of the enclosing cycle
        default_period_length: Used when no usable period end was recorded

    Returns:
        Period length in days
    """
    observed = record.observed_period_length()
    length = observed if observed is not None else default_period_length
    return max(1, min(length, cycle_length))
