"""
Service for annotating calendar days with the phases of tracked people.

For each tracked person a day is annotated with the phase of the recorded
cycle that encloses it. Days on or after today that no recorded cycle covers
are checked against projected cycles and annotated when they fall on a
projected period day.

Typical usage:
    annotations = annotate_day(day, ["self", "partner"], records_by_person)
    month = annotate_range(date(2024, 2, 1), date(2024, 2, 29), persons, records_by_person)
    month = build_calendar(source, date(2024, 2, 1), date(2024, 2, 29))
"""
from typing import Dict, Iterable, List, Mapping, Optional, Sequence
from datetime import date

from cycle_engine.models.calendar import DayAnnotation, Prediction
from cycle_engine.models.cycle import CycleRecord
from cycle_engine.services.cycle import get_phase_for_day
from cycle_engine.services.phase import classify
from cycle_engine.services.prediction import count_predictions_to_reach, predict_future_cycles
from cycle_engine.services.records import CycleRecordSource
from cycle_engine.services.statistics import estimate_cycle_length
from cycle_engine.services.utils import add_days, days_between, get_last_cycle, sort_records
from cycle_engine.utils.logging import logger
from cycle_engine.utils.settings import EngineSettings, resolve_settings

class PersonCalendar:
    """
    Phase lookups for one person, sharing estimates across many days.

    Instances are call-scoped: build one per person per query and discard it.
    """

    def __init__(
        self,
        person_id: str,
        records: Sequence[CycleRecord],
        historical_ovulation_days: Optional[Sequence[int]] = None,
        settings: Optional[EngineSettings] = None
    ):
        self.person_id = person_id
        self.settings = resolve_settings(settings)
        self.records = sort_records(records)
        self.historical_ovulation_days = list(historical_ovulation_days or [])
        self.estimated_length = estimate_cycle_length(self.records, self.settings)
        self.last_cycle = get_last_cycle(self.records)
        self._predictions: List[Prediction] = []

    def predictions_through(self, day: date) -> List[Prediction]:
        """Projected cycles, extended as needed so the last one covers day."""
        if self.last_cycle is None:
            return []
        if self._predictions and self._predictions[-1].cycle_end_date >= day:
            return self._predictions

        count = count_predictions_to_reach(
            self.last_cycle,
            self.estimated_length,
            day,
            minimum=self.settings.prediction_count
        )
        self._predictions = predict_future_cycles(
            self.last_cycle, self.estimated_length, count, self.settings
        )
        return self._predictions

    def annotate(self, day: date, today: date) -> Optional[DayAnnotation]:
        """
        Annotate a single day for this person.

        Args:
            day: Calendar day to annotate
            today: Reference date; only days on or after it are projected

        Returns:
            DayAnnotation, or None when neither a recorded cycle nor a projected
            period covers the day
        """
        if not self.records:
            return None

        info = get_phase_for_day(
            day,
            self.records,
            self.historical_ovulation_days,
            self.settings,
            self.estimated_length
        )
        if info is not None:
            return DayAnnotation(
                person_id=self.person_id,
                phase=info.descriptor.phase,
                sub_phase=info.descriptor.sub_phase,
                day_in_cycle=info.day_in_cycle,
                record_id=info.cycle.id
            )

        if day < today:
            return None

        for prediction in self.predictions_through(day):
            if prediction.in_period(day):
                return self._annotate_prediction(prediction, day)
        return None

    def _annotate_prediction(self, prediction: Prediction, day: date) -> DayAnnotation:
        day_in_cycle = days_between(prediction.start_date, day) + 1
        period_length = days_between(prediction.start_date, prediction.period_end_date) + 1
        descriptor = classify(
            day_in_cycle,
            self.estimated_length,
            period_length,
            self.historical_ovulation_days,
            self.settings
        )
        return DayAnnotation(
            person_id=self.person_id,
            phase=descriptor.phase,
            sub_phase=descriptor.sub_phase,
            day_in_cycle=day_in_cycle,
            is_prediction=True
        )

def unique_persons(tracked_persons: Iterable[str]) -> List[str]:
    """Drop repeated person IDs, keeping the first occurrence's position."""
    seen = set()
    result = []
    for person_id in tracked_persons:
        if person_id not in seen:
            seen.add(person_id)
            result.append(person_id)
    return result

def build_person_calendars(
    tracked_persons: Iterable[str],
    all_records: Mapping[str, Sequence[CycleRecord]],
    historical_ovulation_days: Optional[Mapping[str, Sequence[int]]] = None,
    settings: Optional[EngineSettings] = None
) -> List[PersonCalendar]:
    """Create one PersonCalendar per tracked person, in tracked order."""
    settings = resolve_settings(settings)
    ovulation_days = historical_ovulation_days or {}
    return [
        PersonCalendar(
            person_id,
            all_records.get(person_id) or [],
            ovulation_days.get(person_id),
            settings
        )
        for person_id in unique_persons(tracked_persons)
    ]

def annotate_day(
    day: date,
    tracked_persons: Iterable[str],
    all_records: Mapping[str, Sequence[CycleRecord]],
    today: Optional[date] = None,
    historical_ovulation_days: Optional[Mapping[str, Sequence[int]]] = None,
    settings: Optional[EngineSettings] = None
) -> List[DayAnnotation]:
    """
    Collect phase annotations for every tracked person on one day.

    Args:
        day: Calendar day to annotate
        tracked_persons: Person IDs in display order
        all_records: Cycle records keyed by person ID; treated as read-only
        today: Reference date for projections, defaults to the current date
        historical_ovulation_days: Observed ovulation days keyed by person ID
        settings: Optional engine settings

    Returns:
        Annotations ordered as tracked_persons; people without a match are
        left out

    Example:
        >>> annotate_day(date(2024, 1, 10), ["self"], {"self": records})
        [DayAnnotation(person_id='self', phase=<PhaseType.FOLLICULAR: 'follicular'>, ...)]
    """
    if today is None:
        today = date.today()

    annotations = []
    for calendar in build_person_calendars(
        tracked_persons, all_records, historical_ovulation_days, settings
    ):
        annotation = calendar.annotate(day, today)
        if annotation is not None:
            annotations.append(annotation)
    return annotations

def annotate_range(
    start: date,
    end: date,
    tracked_persons: Iterable[str],
    all_records: Mapping[str, Sequence[CycleRecord]],
    today: Optional[date] = None,
    historical_ovulation_days: Optional[Mapping[str, Sequence[int]]] = None,
    settings: Optional[EngineSettings] = None
) -> Dict[date, List[DayAnnotation]]:
    """
    Annotate every day of an inclusive date range, e.g. a visible month.

    Estimates and projections are computed once per person for the whole
    range. Every day in the range gets a key, with an empty list when
    nothing applies. An inverted range yields an empty mapping.
    """
    if today is None:
        today = date.today()

    calendars = build_person_calendars(
        tracked_persons, all_records, historical_ovulation_days, settings
    )

    result = {}
    for offset in range(days_between(start, end) + 1):
        day = add_days(start, offset)
        result[day] = [
            annotation for annotation in (c.annotate(day, today) for c in calendars)
            if annotation is not None
        ]
    return result

def build_calendar(
    source: CycleRecordSource,
    start: date,
    end: date,
    today: Optional[date] = None,
    historical_ovulation_days: Optional[Mapping[str, Sequence[int]]] = None,
    settings: Optional[EngineSettings] = None
) -> Dict[date, List[DayAnnotation]]:
    """
    Load all tracked people's records from a source and annotate a date range.

    Args:
        source: Record source collaborator
        start: First day of the range
        end: Last day of the range
        today: Reference date for projections
        historical_ovulation_days: Observed ovulation days keyed by person ID
        settings: Optional engine settings

    Returns:
        Annotations keyed by day, as returned by annotate_range

    Raises:
        Exception: Whatever the source raises, after logging it
    """
    try:
        tracked_persons = unique_persons(source.list_tracked_persons())
        all_records = {
            person_id: source.list_cycle_records(person_id)
            for person_id in tracked_persons
        }
    except Exception as e:
        logger.exception(
            "Error loading cycle records",
            extra={"error_type": e.__class__.__name__}
        )
        raise

    logger.info("Building cycle calendar", extra={
        "start": start.isoformat(),
        "end": end.isoformat(),
        "persons": len(tracked_persons),
        "records": sum(len(records) for records in all_records.values())
    })
    return annotate_range(
        start, end, tracked_persons, all_records, today, historical_ovulation_days, settings
    )
