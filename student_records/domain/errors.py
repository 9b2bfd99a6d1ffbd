"""
Exception hierarchy for the student records manager.

Every error the store, validator, or persistence layer raises derives from
StudentRecordsError. None of them is fatal: the interactive loop reports the
message and carries on.
"""

from __future__ import annotations


class StudentRecordsError(Exception):
    """Base class for all student records errors."""


class InvalidInputError(StudentRecordsError):
    """A user-supplied field failed validation."""


class DuplicateIdError(InvalidInputError):
    """A record with the same id already exists."""

    def __init__(self, record_id: int) -> None:
        super().__init__(f"Duplicate ID: {record_id}")
        self.record_id = record_id


class NotFoundError(StudentRecordsError):
    """No record with the requested id, or no data file at the requested path."""


class CorruptDataError(StudentRecordsError):
    """A data file exists but cannot be parsed into records."""


class IoFailureError(StudentRecordsError):
    """Any other I/O error while reading or writing the data file."""


__all__ = [
    "StudentRecordsError",
    "InvalidInputError",
    "DuplicateIdError",
    "NotFoundError",
    "CorruptDataError",
    "IoFailureError",
]
