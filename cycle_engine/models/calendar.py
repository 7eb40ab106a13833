"""
Calendar model definitions for projected cycles and per-day annotations.
"""
from datetime import date
from typing import Optional
from pydantic import BaseModel, ConfigDict

from cycle_engine.models.phase import PhaseType, SubPhaseType


class Prediction(BaseModel):
    """
    A projected future cycle window. Never persisted.
    """
    model_config = ConfigDict(frozen=True)

    start_date: date
    period_end_date: date
    cycle_end_date: date
    source_person_id: str
    sequence: int
    is_prediction: bool = True

    def in_period(self, day: date) -> bool:
        """Check if a day falls on a projected flow day."""
        return self.start_date <= day <= self.period_end_date


class DayAnnotation(BaseModel):
    """
    Phase information for one tracked person on one calendar day.
    """
    model_config = ConfigDict(frozen=True)

    person_id: str
    phase: PhaseType
    sub_phase: SubPhaseType
    day_in_cycle: int
    is_prediction: bool = False
    record_id: Optional[str] = None

    @property
    def is_ovulation(self) -> bool:
        return self.sub_phase == SubPhaseType.OVULATION
