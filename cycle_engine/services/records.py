"""
Record source collaborators.

The engine never stores anything. It reads cycle records through a
CycleRecordSource, and every raw item is validated into a CycleRecord once,
here, at the storage boundary.
"""
from typing import Any, Dict, Iterable, List, Mapping, Optional, Protocol

from pydantic import ValidationError

from cycle_engine.models.cycle import CycleRecord, PRIMARY_PERSON_ID
from cycle_engine.services.exceptions import InvalidCycleRecordError
from cycle_engine.services.utils import sort_records

class CycleRecordSource(Protocol):
    """Read-only access to tracked people and their cycle records."""

    def list_tracked_persons(self) -> List[str]:
        ...

    def list_cycle_records(self, person_id: str) -> List[CycleRecord]:
        ...

def parse_cycle_record(item: Mapping[str, Any], person_id: Optional[str] = None) -> CycleRecord:
    """
    Validate a raw stored item into a CycleRecord.

    Args:
        item: Raw item with snake_case keys; dates may be ISO strings
        person_id: Person the item belongs to, when the item does not say

    Returns:
        Validated CycleRecord

    Raises:
        InvalidCycleRecordError: If the item lacks an id or a valid period
            start date, or has otherwise malformed fields
    """
    if not item.get("period_start_date"):
        raise InvalidCycleRecordError(
            f"Cycle record {item.get('id')!r} has no period_start_date"
        )

    data: Dict[str, Any] = dict(item)
    data.setdefault("person_id", person_id or PRIMARY_PERSON_ID)
    if data.get("symptoms") is None:
        data["symptoms"] = []
    if data.get("id") is not None:
        data["id"] = str(data["id"])

    try:
        return CycleRecord.model_validate(data)
    except ValidationError as e:
        raise InvalidCycleRecordError(
            f"Invalid cycle record {item.get('id')!r}: {e.error_count()} validation error(s)"
        ) from e

class InMemoryRecordSource:
    """
    Record source over records already loaded in memory.

    Example:
        >>> source = InMemoryRecordSource(records)
        >>> source.list_tracked_persons()
        ['self', 'partner']
    """

    def __init__(self, records: Iterable[CycleRecord], tracked_persons: Optional[Iterable[str]] = None):
        self._records: Dict[str, List[CycleRecord]] = {}
        for record in records:
            self._records.setdefault(record.person_id, []).append(record)

        if tracked_persons is None:
            self._tracked_persons = sorted(self._records)
        else:
            self._tracked_persons = list(tracked_persons)

    def list_tracked_persons(self) -> List[str]:
        return list(self._tracked_persons)

    def list_cycle_records(self, person_id: str) -> List[CycleRecord]:
        return sort_records(self._records.get(person_id, []))
