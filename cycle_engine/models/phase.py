"""
Phase model definitions for cycle phase classification.
"""
from enum import Enum
from typing import List
from pydantic import BaseModel, ConfigDict

from cycle_engine.models.cycle import CycleRecord, ResolvedCycle


class PhaseType(str, Enum):
    """
    Coarse cycle phases.
    """
    MENSTRUAL = "menstrual"
    FOLLICULAR = "follicular"
    FERTILE = "fertile"
    LUTEAL = "luteal"


class SubPhaseType(str, Enum):
    """
    Fine-grained cycle phases, in cycle order.
    """
    HEAVY_FLOW = "heavy_flow"
    LIGHT_FLOW = "light_flow"
    EARLY_FOLLICULAR = "early_follicular"
    LATE_FOLLICULAR = "late_follicular"
    PRE_OVULATION = "pre_ovulation"
    OVULATION = "ovulation"
    POST_OVULATION = "post_ovulation"
    EARLY_LUTEAL = "early_luteal"
    MID_LUTEAL = "mid_luteal"
    PRE_MENSTRUAL = "pre_menstrual"


class PhaseBand(BaseModel):
    """
    A contiguous, inclusive range of cycle days sharing one sub-phase.
    """
    model_config = ConfigDict(frozen=True)

    phase: PhaseType
    sub_phase: SubPhaseType
    start_day: int
    end_day: int

    def contains(self, day_in_cycle: int) -> bool:
        return self.start_day <= day_in_cycle <= self.end_day

    @property
    def day_range(self) -> str:
        if self.start_day == self.end_day:
            return f"Day {self.start_day}"
        return f"Days {self.start_day}-{self.end_day}"


class PhaseDescriptor(BaseModel):
    """
    Classification of a single day within a cycle, with display metadata.
    """
    model_config = ConfigDict(frozen=True)

    phase: PhaseType
    sub_phase: SubPhaseType
    start_day: int
    end_day: int
    day_range: str
    description: str
    emoji: str
    hormonal_profile: str
    recommendations: List[str]

    @property
    def is_ovulation(self) -> bool:
        """Check if this descriptor marks the estimated ovulation day."""
        return self.sub_phase == SubPhaseType.OVULATION


class CyclePhaseInfo(BaseModel):
    """
    Phase classification of a calendar day within its enclosing cycle.
    """
    model_config = ConfigDict(frozen=True)

    resolved: ResolvedCycle
    descriptor: PhaseDescriptor

    @property
    def day_in_cycle(self) -> int:
        return self.resolved.day_in_cycle

    @property
    def cycle(self) -> CycleRecord:
        return self.resolved.cycle
