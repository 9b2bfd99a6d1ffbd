"""
Lock-guarded in-memory record store.

RecordStore owns an ordered list of student records behind a single
threading.Lock. Every read hands out copies, so callers (including the
background save worker) never hold a reference into the live list.

Usage:
    from student_records.store import RecordStore

    store = RecordStore()
    store.add(Record(id=1, name="Alice", marks=92.5))
    records = store.snapshot()
"""

from __future__ import annotations

import threading
from typing import Iterable, List, Optional

from student_records.domain.errors import DuplicateIdError, NotFoundError
from student_records.domain.models import Record
from student_records.domain.validation import parse_marks, validate_name
from student_records.utils.logging import get_logger

log = get_logger(__name__)


class RecordStore:
    """
    Ordered collection of records with a single mutual-exclusion lock.

    Insertion order is preserved for listing and ids are unique. Each method
    holds the lock for its whole duration, so no caller sees a half-applied
    mutation; there is no isolation across separate calls.
    """

    def __init__(self, records: Optional[Iterable[Record]] = None) -> None:
        self._lock = threading.Lock()
        self._records: List[Record] = []
        if records is not None:
            self.replace_all(records)

    def _index_of(self, record_id: int) -> int:
        # Caller must hold self._lock.
        for index, record in enumerate(self._records):
            if record.id == record_id:
                return index
        return -1

    def add(self, record: Record) -> None:
        """
        Append a record, rejecting duplicate ids.

        The duplicate scan and the append happen in one critical section.
        """
        with self._lock:
            if self._index_of(record.id) >= 0:
                raise DuplicateIdError(record.id)
            self._records.append(record.model_copy(deep=True))
            size = len(self._records)
        log.debug("Record added", extra={"record_id": record.id, "size": size})

    def find(self, record_id: int) -> Optional[Record]:
        """Return a copy of the record with this id, or None."""
        with self._lock:
            index = self._index_of(record_id)
            if index < 0:
                return None
            return self._records[index].model_copy(deep=True)

    def get(self, record_id: int) -> Record:
        record = self.find(record_id)
        if record is None:
            raise NotFoundError(f"Student with ID {record_id} not found.")
        return record

    def remove(self, record_id: int) -> Record:
        """Delete the record with this id and return it; remaining order is kept."""
        with self._lock:
            index = self._index_of(record_id)
            if index < 0:
                raise NotFoundError(f"Student with ID {record_id} not found to remove.")
            removed = self._records.pop(index)
            size = len(self._records)
        log.debug("Record removed", extra={"record_id": record_id, "size": size})
        return removed

    def update(
        self,
        record_id: int,
        name: Optional[str] = None,
        marks: Optional[float | str] = None,
    ) -> Record:
        """
        Change name and/or marks of an existing record in place.

        New values are validated before the lock is taken; on any failure the
        stored record is left untouched.
        """
        clean_name = validate_name(name) if name is not None else None
        clean_marks = parse_marks(marks) if marks is not None else None
        with self._lock:
            index = self._index_of(record_id)
            if index < 0:
                raise NotFoundError(f"Student with ID {record_id} not found.")
            current = self._records[index]
            updated = Record(
                id=current.id,
                name=clean_name if clean_name is not None else current.name,
                marks=clean_marks if clean_marks is not None else current.marks,
            )
            self._records[index] = updated
            return updated.model_copy(deep=True)

    def snapshot(self) -> List[Record]:
        """Deep copy of all records, in insertion order."""
        with self._lock:
            return [record.model_copy(deep=True) for record in self._records]

    def replace_all(self, records: Iterable[Record]) -> None:
        """
        Atomically swap the whole contents for copies of `records`.

        Raises DuplicateIdError and leaves the store unchanged if the new
        sequence repeats an id.
        """
        incoming = [record.model_copy(deep=True) for record in records]
        seen: set[int] = set()
        for record in incoming:
            if record.id in seen:
                raise DuplicateIdError(record.id)
            seen.add(record.id)
        with self._lock:
            self._records = incoming
        log.debug("Store contents replaced", extra={"size": len(incoming)})

    def ids(self) -> List[int]:
        with self._lock:
            return [record.id for record in self._records]

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    def __contains__(self, record_id: object) -> bool:
        if not isinstance(record_id, int):
            return False
        with self._lock:
            return self._index_of(record_id) >= 0


__all__ = ["RecordStore"]
