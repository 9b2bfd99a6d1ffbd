"""
Field validation for new student records.

These helpers are pure: they look at the candidate values and a read-only
sequence of existing records, and either return the cleaned value or raise
InvalidInputError with a message naming the violated constraint.
"""

from __future__ import annotations

import math
import re
from typing import Iterable, Union

from student_records.domain.errors import DuplicateIdError, InvalidInputError
from student_records.domain.models import Record

MIN_MARKS = 0.0
MAX_MARKS = 100.0

_ID_PATTERN = re.compile(r"[+-]?[0-9]+")


def validate_name(name: str | None) -> str:
    """Return the trimmed name, rejecting empty or whitespace-only input."""
    if name is None or not name.strip():
        raise InvalidInputError("Name cannot be empty")
    return name.strip()


def parse_id(value: Union[int, str, None], require_positive: bool = True) -> int:
    """
    Parse a student id from user input.

    Text must be an optional sign and ASCII digits. With `require_positive`
    off, zero and negative ids parse fine and are left for the lookup to miss.
    """
    if isinstance(value, bool) or value is None:
        raise InvalidInputError("ID must be an integer")
    if isinstance(value, int):
        record_id = value
    else:
        text = str(value).strip()
        if not _ID_PATTERN.fullmatch(text):
            raise InvalidInputError("ID must be an integer")
        record_id = int(text)
    if require_positive and record_id < 1:
        raise InvalidInputError("ID must be positive")
    return record_id


def validate_unique_id(record_id: int, existing: Iterable[Record]) -> None:
    for record in existing:
        if record.id == record_id:
            raise DuplicateIdError(record_id)


def parse_marks(value: Union[float, int, str, None]) -> float:
    """Parse marks from user input; finite and within [0, 100] inclusive."""
    if isinstance(value, bool) or value is None:
        raise InvalidInputError("Marks must be a number")
    if isinstance(value, str) and "_" in value:
        raise InvalidInputError("Marks must be a number")
    try:
        marks = float(value.strip()) if isinstance(value, str) else float(value)
    except (TypeError, ValueError):
        raise InvalidInputError("Marks must be a number") from None
    if not math.isfinite(marks):
        raise InvalidInputError("Marks must be a number")
    if marks < MIN_MARKS or marks > MAX_MARKS:
        raise InvalidInputError("Marks must be between 0 and 100")
    return marks


def validate_new_record(
    record_id: Union[int, str, None],
    name: str | None,
    marks: Union[float, int, str, None],
    existing: Iterable[Record],
) -> Record:
    """
    Validate all fields of a new record and build it.

    Checks run name, id, id uniqueness, then marks; the first failure wins.
    """
    clean_name = validate_name(name)
    clean_id = parse_id(record_id)
    validate_unique_id(clean_id, existing)
    clean_marks = parse_marks(marks)
    return Record(id=clean_id, name=clean_name, marks=clean_marks)


__all__ = [
    "MIN_MARKS",
    "MAX_MARKS",
    "validate_name",
    "parse_id",
    "validate_unique_id",
    "parse_marks",
    "validate_new_record",
]
