"""
Domain models for the student records manager.

`Record` is the single student entry held by the store. `RecordFile` is the
envelope written to disk; it carries a format marker, a version, and a record
count so a truncated or foreign file is rejected instead of misparsed.
"""
from __future__ import annotations

from datetime import datetime
from typing import Annotated, List, Literal

from pydantic import BaseModel, Field, StringConstraints, model_validator

FILE_FORMAT = "student-records"
FILE_VERSION = 1

Name = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


class Record(BaseModel):
    """
    One student's id, name and marks.

    The id is fixed once the record exists; name and marks can be reassigned
    and are re-validated on assignment.
    """

    id: int = Field(..., gt=0, strict=True, frozen=True, description="Unique student id.")
    name: Name = Field(..., description="Student name, stored trimmed.")
    marks: float = Field(
        ...,
        ge=0.0,
        le=100.0,
        strict=True,
        allow_inf_nan=False,
        description="Marks in [0, 100].",
    )

    model_config = {
        "validate_assignment": True,
        "extra": "forbid",
    }

    def __str__(self) -> str:
        return f"Student(id={self.id}, name='{self.name}', marks={self.marks:.2f})"


class RecordFile(BaseModel):
    """
    On-disk envelope for a full record set.
    """

    format: Literal["student-records"] = FILE_FORMAT
    version: Literal[1] = FILE_VERSION
    saved_at: datetime
    count: int = Field(..., ge=0)
    records: List[Record] = Field(default_factory=list)

    model_config = {
        "extra": "forbid",
    }

    @model_validator(mode="after")
    def _check_consistency(self) -> "RecordFile":
        if self.count != len(self.records):
            raise ValueError(
                f"record count mismatch: header says {self.count}, found {len(self.records)}"
            )
        seen: set[int] = set()
        for record in self.records:
            if record.id in seen:
                raise ValueError(f"duplicate record id {record.id}")
            seen.add(record.id)
        return self


__all__ = ["FILE_FORMAT", "FILE_VERSION", "Record", "RecordFile"]
