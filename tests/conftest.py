"""
Pytest configuration and shared fixtures.
"""
import pytest
from datetime import date, timedelta
from typing import List

from cycle_engine.models.cycle import CycleRecord, PRIMARY_PERSON_ID
from cycle_engine.utils.settings import ENV_VARS, reset_settings

@pytest.fixture(autouse=True)
def clean_settings(monkeypatch):
    """Isolate every test from CYCLE_* environment overrides."""
    for env_var in ENV_VARS.values():
        monkeypatch.delenv(env_var, raising=False)
    reset_settings()
    yield
    reset_settings()

def make_record(
    record_id: str,
    start: date,
    period_days: int = 5,
    cycle_end: date = None,
    person_id: str = PRIMARY_PERSON_ID,
    **kwargs
) -> CycleRecord:
    """Build a cycle record with a period of the given length."""
    return CycleRecord(
        id=record_id,
        person_id=person_id,
        period_start_date=start,
        period_end_date=start + timedelta(days=period_days - 1) if period_days else None,
        cycle_end_date=cycle_end,
        **kwargs
    )

@pytest.fixture
def single_open_record() -> CycleRecord:
    """One ongoing cycle starting 2024-01-01 with a five-day period."""
    return CycleRecord(
        id="c1",
        person_id=PRIMARY_PERSON_ID,
        period_start_date=date(2024, 1, 1),
        period_end_date=date(2024, 1, 5),
        cycle_end_date=None
    )

@pytest.fixture
def regular_records() -> List[CycleRecord]:
    """Five cycles 28 days apart; all but the last are closed."""
    starts = [date(2024, 1, 1) + timedelta(days=i * 28) for i in range(5)]
    return [
        make_record(
            f"r{i}",
            start,
            cycle_end=starts[i + 1] - timedelta(days=1) if i + 1 < len(starts) else None
        )
        for i, start in enumerate(starts)
    ]

@pytest.fixture
def irregular_records() -> List[CycleRecord]:
    """Cycles of 24, 31 and 26 days."""
    return [
        make_record("i1", date(2024, 1, 1)),
        make_record("i2", date(2024, 1, 25)),  # 24 days
        make_record("i3", date(2024, 2, 25)),  # 31 days
        make_record("i4", date(2024, 3, 22)),  # 26 days
    ]

@pytest.fixture
def record_factory():
    """Expose make_record to tests."""
    return make_record
