"""
Domain package for the student records manager.

Exports the record models, the error taxonomy, and the field validators.
Keep this package focused on data definitions and validation concerns.
"""

from student_records.domain.errors import (
    CorruptDataError,
    DuplicateIdError,
    InvalidInputError,
    IoFailureError,
    NotFoundError,
    StudentRecordsError,
)
from student_records.domain.models import Record, RecordFile
from student_records.domain.validation import (
    parse_id,
    parse_marks,
    validate_name,
    validate_new_record,
    validate_unique_id,
)

__all__ = [
    # Models
    "Record",
    "RecordFile",
    # Errors
    "StudentRecordsError",
    "InvalidInputError",
    "DuplicateIdError",
    "NotFoundError",
    "CorruptDataError",
    "IoFailureError",
    # Validation
    "parse_id",
    "parse_marks",
    "validate_name",
    "validate_new_record",
    "validate_unique_id",
]
