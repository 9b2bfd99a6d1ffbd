"""
JSON codec for the student records data file.

The file is a single JSON object (see `RecordFile`) holding a format marker,
a version, a timestamp, a record count, and the ordered records. Decoding
validates the whole envelope with pydantic and maps any failure to
CorruptDataError.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import List, Sequence

from pydantic import ValidationError

from student_records.domain.errors import CorruptDataError
from student_records.domain.models import Record, RecordFile


def encode_records(records: Sequence[Record]) -> bytes:
    """Serialize an ordered record sequence to UTF-8 JSON bytes."""
    envelope = RecordFile(
        saved_at=datetime.now(timezone.utc),
        count=len(records),
        records=list(records),
    )
    return envelope.model_dump_json(indent=2).encode("utf-8")


def _describe(exc: ValidationError) -> str:
    first = exc.errors()[0]
    location = ".".join(str(part) for part in first.get("loc", ())) or "<root>"
    return f"{location}: {first.get('msg', 'invalid value')}"


def decode_records(data: bytes | str) -> List[Record]:
    """
    Parse data file contents back into records, preserving order.

    Raises
    ------
    CorruptDataError
        If the content is not valid JSON, is not a student-records file of a
        supported version, or carries invalid or inconsistent records.
    """
    if not data or not data.strip():
        raise CorruptDataError("Data file is empty")
    try:
        envelope = RecordFile.model_validate_json(data)
    except ValidationError as exc:
        raise CorruptDataError(f"Data file is corrupt ({_describe(exc)})") from exc
    return list(envelope.records)


__all__ = ["encode_records", "decode_records"]
