"""
Student Records - a small, thread-safe student records manager.

This package keeps an ordered, lock-guarded collection of student records
(id, name, marks) in memory and persists it to a single data file:

- Validation of every new record (non-empty name, positive unique id, marks in [0, 100])
- A store whose reads always hand out independent copies
- Background saves that snapshot the store and write atomically (temp file + rename)
- Blocking loads that detect corrupt files instead of misparsing them
- An interactive numbered menu and a small typer CLI
"""

from __future__ import annotations

__version__ = "0.1.0"
__license__ = "MIT"

# Public API exports
from student_records.config import Settings, get_settings
from student_records.domain import (
    CorruptDataError,
    DuplicateIdError,
    InvalidInputError,
    IoFailureError,
    NotFoundError,
    Record,
    StudentRecordsError,
)
from student_records.manager import StudentManager
from student_records.persistence import PersistenceAdapter, SaveResult
from student_records.store import RecordStore
from student_records.utils.logging import configure_logging, get_logger

__all__ = [
    # Version info
    "__version__",
    "__license__",
    # Configuration
    "Settings",
    "get_settings",
    # Domain
    "Record",
    "StudentRecordsError",
    "InvalidInputError",
    "DuplicateIdError",
    "NotFoundError",
    "CorruptDataError",
    "IoFailureError",
    # Core components
    "RecordStore",
    "PersistenceAdapter",
    "SaveResult",
    "StudentManager",
    # Logging
    "configure_logging",
    "get_logger",
]
