"""
Service module for projecting future cycles.

Predictions are chained: each projected cycle starts the day after the
previous one ends, so spacing stays exact over any number of cycles.
Predictions are transient values and are never written back to storage.

Typical usage:
    records = source.list_cycle_records(person_id)
    last = get_last_cycle(records)
    for prediction in predict_future_cycles(last, estimate_cycle_length(records), 6):
        print(prediction.start_date, prediction.period_end_date)
"""
from typing import List, Optional
from datetime import date

from cycle_engine.models.calendar import Prediction
from cycle_engine.models.cycle import CycleRecord
from cycle_engine.services.exceptions import (
    InvalidCycleLengthError,
    InvalidPredictionCountError
)
from cycle_engine.services.utils import add_days, days_between, effective_cycle_end
from cycle_engine.utils.settings import EngineSettings, resolve_settings

def get_prediction_anchor(last_cycle: CycleRecord, estimated_length: int) -> date:
    """Last day of the most recent cycle, from which predictions are chained."""
    return effective_cycle_end(last_cycle, estimated_length)

def predict_future_cycles(
    last_cycle: CycleRecord,
    estimated_length: int,
    count: int,
    settings: Optional[EngineSettings] = None
) -> List[Prediction]:
    """
    Project the next cycles after the most recent recorded one.

    The projected period length is the last cycle's observed flow duration,
    falling back to the default period length when it was not recorded. It
    never exceeds the projected cycle length.

    Args:
        last_cycle: Most recent recorded cycle
        estimated_length: Average cycle length in days
        count: Number of cycles to project
        settings: Optional engine settings

    Returns:
        Predictions in chronological order

    Raises:
        InvalidPredictionCountError: If count is zero or negative
        InvalidCycleLengthError: If estimated_length is zero or negative

    Example:
        >>> predictions = predict_future_cycles(last, 28, 3)
        >>> [p.start_date for p in predictions]
        [datetime.date(2024, 1, 29), datetime.date(2024, 2, 26), datetime.date(2024, 3, 25)]
    """
    if count <= 0:
        raise InvalidPredictionCountError(f"Prediction count must be positive, got {count}")
    if estimated_length <= 0:
        raise InvalidCycleLengthError(f"Cycle length must be positive, got {estimated_length}")

    settings = resolve_settings(settings)
    period_length = last_cycle.observed_period_length() or settings.default_period_length
    period_length = min(period_length, estimated_length)

    predictions = []
    anchor = get_prediction_anchor(last_cycle, estimated_length)
    for sequence in range(1, count + 1):
        start = add_days(anchor, 1)
        prediction = Prediction(
            start_date=start,
            period_end_date=add_days(start, period_length - 1),
            cycle_end_date=add_days(start, estimated_length - 1),
            source_person_id=last_cycle.person_id,
            sequence=sequence
        )
        predictions.append(prediction)
        anchor = prediction.cycle_end_date
    return predictions

def count_predictions_to_reach(
    last_cycle: CycleRecord,
    estimated_length: int,
    day: date,
    minimum: int = 1
) -> int:
    """
    Number of chained predictions needed so the last one covers a day.

    Args:
        last_cycle: Most recent recorded cycle
        estimated_length: Average cycle length in days
        day: Calendar day that must be covered
        minimum: Lower bound on the returned count

    Returns:
        Prediction count, at least minimum
    """
    if estimated_length <= 0:
        raise InvalidCycleLengthError(f"Cycle length must be positive, got {estimated_length}")

    days_ahead = days_between(get_prediction_anchor(last_cycle, estimated_length), day)
    needed = -(-days_ahead // estimated_length) if days_ahead > 0 else 0
    return max(minimum, needed)
