"""
Persistence package for the student records manager.

Keeps file I/O (codec, atomic writes, background save worker) separate from
the in-memory store and the interactive controller.
"""

from student_records.persistence.adapter import PersistenceAdapter, ProgressCallback, SaveResult
from student_records.persistence.codec import decode_records, encode_records

__all__ = [
    "PersistenceAdapter",
    "ProgressCallback",
    "SaveResult",
    "decode_records",
    "encode_records",
]
