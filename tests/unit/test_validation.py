from __future__ import annotations

import pytest

from student_records.domain.errors import DuplicateIdError, InvalidInputError
from student_records.domain.models import Record
from student_records.domain.validation import (
    parse_id,
    parse_marks,
    validate_name,
    validate_new_record,
)

EXISTING = [Record(id=1, name="Alice", marks=92.5)]


def test_validate_new_record_builds_record_from_text_input() -> None:
    record = validate_new_record(" 2 ", "  Bob ", " 77 ", EXISTING)
    assert record == Record(id=2, name="Bob", marks=77.0)


@pytest.mark.parametrize(
    ("record_id", "name", "marks", "message"),
    [
        ("2", "   ", "50", "Name cannot be empty"),
        ("2", None, "50", "Name cannot be empty"),
        ("abc", "Bob", "50", "ID must be an integer"),
        ("2.5", "Bob", "50", "ID must be an integer"),
        ("1_0", "Bob", "50", "ID must be an integer"),
        ("0x1F", "Bob", "50", "ID must be an integer"),
        ("0", "Bob", "50", "ID must be positive"),
        ("-3", "Bob", "50", "ID must be positive"),
        ("1", "Bob", "50", "Duplicate ID: 1"),
        ("2", "Bob", "ninety", "Marks must be a number"),
        ("2", "Bob", "5_0", "Marks must be a number"),
        ("2", "Bob", "nan", "Marks must be a number"),
        ("2", "Bob", "inf", "Marks must be a number"),
        ("2", "Bob", "150", "Marks must be between 0 and 100"),
        ("2", "Bob", "-1", "Marks must be between 0 and 100"),
    ],
)
def test_validate_new_record_reports_first_violation(record_id, name, marks, message) -> None:
    with pytest.raises(InvalidInputError, match=message):
        validate_new_record(record_id, name, marks, EXISTING)


def test_name_checked_before_id() -> None:
    with pytest.raises(InvalidInputError, match="Name cannot be empty"):
        validate_new_record("not-a-number", "", "500", EXISTING)


def test_duplicate_id_is_an_invalid_input() -> None:
    with pytest.raises(DuplicateIdError) as excinfo:
        validate_new_record(1, "Other", 10, EXISTING)
    assert isinstance(excinfo.value, InvalidInputError)
    assert excinfo.value.record_id == 1


def test_marks_boundaries_are_inclusive() -> None:
    assert parse_marks("0") == 0.0
    assert parse_marks(100) == 100.0
    assert parse_marks(" 99.99 ") == 99.99


def test_parse_id_accepts_int_and_rejects_bool() -> None:
    assert parse_id(42) == 42
    with pytest.raises(InvalidInputError):
        parse_id(True)
    with pytest.raises(InvalidInputError):
        parse_id(None)


def test_validate_name_returns_trimmed() -> None:
    assert validate_name("\tDana\n") == "Dana"


def test_digit_separators_are_rejected() -> None:
    with pytest.raises(InvalidInputError, match="ID must be an integer"):
        parse_id("1_0")
    with pytest.raises(InvalidInputError, match="Marks must be a number"):
        parse_marks("5_0")
    assert parse_id(" +7 ") == 7


def test_parse_id_can_leave_non_positive_ids_to_the_lookup() -> None:
    assert parse_id("0", require_positive=False) == 0
    assert parse_id("-3", require_positive=False) == -3
    with pytest.raises(InvalidInputError, match="ID must be an integer"):
        parse_id("-", require_positive=False)
