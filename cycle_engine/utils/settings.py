"""
Engine settings loaded from the environment.

Every tunable constant used by the estimators, the classifier and the
predictor lives here so it can be overridden per deployment or per call.
"""
import os
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field

# Singleton instance
_settings_instance = None

ENV_VARS = {
    "default_cycle_length": "CYCLE_DEFAULT_LENGTH",
    "default_period_length": "CYCLE_DEFAULT_PERIOD_LENGTH",
    "min_ovulation_day": "CYCLE_MIN_OVULATION_DAY",
    "ovulation_offset": "CYCLE_OVULATION_OFFSET",
    "ovulation_learning_threshold": "CYCLE_OVULATION_LEARNING_THRESHOLD",
    "max_cycle_gap": "CYCLE_MAX_GAP",
    "prediction_count": "CYCLE_PREDICTION_COUNT",
}


class EngineSettings(BaseModel):
    """
    Named constants for cycle estimation and prediction.
    """
    model_config = ConfigDict(frozen=True)

    default_cycle_length: int = Field(28, gt=0)
    default_period_length: int = Field(5, gt=0)
    min_ovulation_day: int = Field(12, gt=0)
    ovulation_offset: int = Field(13, ge=0)  # Days between ovulation and the next period
    ovulation_learning_threshold: int = Field(3, gt=0)
    max_cycle_gap: int = Field(45, gt=0)
    prediction_count: int = Field(6, gt=0)

    @classmethod
    def from_env(cls) -> "EngineSettings":
        """
        Build settings from CYCLE_* environment variables.

        Unset variables keep their defaults.

        Raises:
            pydantic.ValidationError: If a variable holds an invalid value
        """
        values = {
            field: os.environ[env_var]
            for field, env_var in ENV_VARS.items()
            if os.environ.get(env_var)
        }
        return cls(**values)


def get_settings() -> EngineSettings:
    """
    Get or create the process-wide settings instance.

    Example:
        settings = get_settings()
        length = settings.default_cycle_length
    """
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = EngineSettings.from_env()
    return _settings_instance


def resolve_settings(settings: Optional[EngineSettings] = None) -> EngineSettings:
    """Return the given settings or fall back to the process-wide instance."""
    return settings if settings is not None else get_settings()


def reset_settings() -> None:
    """Drop the cached settings so the environment is read again."""
    global _settings_instance
    _settings_instance = None
