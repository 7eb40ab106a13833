"""
Cycle record model definition for historical cycle observations.
"""
from datetime import date
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field

PRIMARY_PERSON_ID = "self"


class CycleRecord(BaseModel):
    """
    Represents one recorded cycle for one tracked person.

    Only ``period_start_date`` is required. A missing ``cycle_end_date`` means
    the cycle is still ongoing.
    """
    model_config = ConfigDict(frozen=True)

    id: str
    person_id: str = PRIMARY_PERSON_ID
    period_start_date: date
    period_end_date: Optional[date] = None
    cycle_end_date: Optional[date] = None
    flow_intensity: Optional[str] = None
    mood: Optional[str] = None
    symptoms: List[str] = Field(default_factory=list)
    notes: Optional[str] = None

    @property
    def is_ongoing(self) -> bool:
        """Check if the cycle has no recorded end yet."""
        return self.cycle_end_date is None

    def observed_period_length(self) -> Optional[int]:
        """
        Inclusive number of flow days, or None if no usable period end exists.

        A period end before the start is a data-entry error and is ignored.
        """
        if self.period_end_date is None or self.period_end_date < self.period_start_date:
            return None
        return (self.period_end_date - self.period_start_date).days + 1

    def observed_cycle_length(self) -> Optional[int]:
        """Inclusive number of days in a closed cycle, or None."""
        if self.cycle_end_date is None or self.cycle_end_date < self.period_start_date:
            return None
        return (self.cycle_end_date - self.period_start_date).days + 1


class ResolvedCycle(BaseModel):
    """
    A historical cycle enclosing a queried calendar day.
    """
    model_config = ConfigDict(frozen=True)

    cycle: CycleRecord
    day_in_cycle: int
    cycle_length: int
    period_length: int
    effective_end_date: date
