"""
Statistics model definitions for person-specific cycle estimates.
"""
from enum import Enum
from typing import List
from pydantic import BaseModel, ConfigDict, Field


class EstimatedParameters(BaseModel):
    """
    Cycle parameters learned from one person's records.
    """
    model_config = ConfigDict(frozen=True)

    average_cycle_length: int
    estimated_ovulation_day: int
    average_period_length: int
    sample_count: int = 0  # Valid inter-cycle gaps behind the average
    learned_ovulation: bool = False


class RegularityLevel(str, Enum):
    """
    Cycle regularity buckets by coefficient of variation.
    """
    VERY_REGULAR = "very_regular"
    REGULAR = "regular"
    SOMEWHAT_VARIABLE = "somewhat_variable"
    HIGHLY_VARIABLE = "highly_variable"


class CycleLearningSummary(BaseModel):
    """
    Learning analysis over a person's cycle history.
    """
    has_enough_data: bool
    total_cycles: int
    complete_cycles: int
    average_cycle_length: int
    cycle_variability: float = Field(..., ge=0)
    regularity_level: RegularityLevel
    ovulation_day: int
    ovulation_confidence: float = Field(..., ge=0, le=1)
    historical_accuracy: float = Field(..., ge=0, le=1)
    data_quality: float = Field(..., ge=0, le=1)
    insights: List[str] = Field(default_factory=list)
