from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest

from student_records.domain.models import Record
from student_records.persistence.adapter import PersistenceAdapter
from student_records.store import RecordStore
from student_records.utils.logging import _json_formatter, configure_logging, get_logger

EXPECTED_RECORDS = 10
EXPECTED_BYTES = 2048


def test_json_formatter_promotes_standard_extra_fields() -> None:
    record = logging.LogRecord(
        name="test.logger",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg="hello",
        args=(),
        exc_info=None,
    )
    record.records = EXPECTED_RECORDS
    record.path = "students.json"

    payload = json.loads(_json_formatter(record))

    assert payload["level"] == "INFO"
    assert payload["logger"] == "test.logger"
    assert payload["message"] == "hello"
    assert payload["records"] == EXPECTED_RECORDS
    assert payload["path"] == "students.json"
    assert "lineno" not in payload


def test_json_formatter_supports_legacy_nested_extra_field() -> None:
    record = logging.LogRecord(
        name="test.logger",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg="hello",
        args=(),
        exc_info=None,
    )
    record.extra = {"bytes": EXPECTED_BYTES}

    payload = json.loads(_json_formatter(record))

    assert payload["bytes"] == EXPECTED_BYTES


def test_configure_logging_sets_root_level() -> None:
    configure_logging(level="warning", json_logs=True)
    root = get_logger()
    assert root.level == logging.WARNING
    assert len(root.handlers) == 1


def test_save_worker_logs_json_lines_to_stderr_only(
    capsys: pytest.CaptureFixture[str], store: RecordStore, alice: Record, data_file: Path
) -> None:
    configure_logging(level="INFO", json_logs=True)
    adapter = PersistenceAdapter(store, default_path=data_file, retry_attempts=1, fsync=False)
    try:
        store.add(alice)
        result = adapter.save().result(timeout=5)
    finally:
        adapter.close(timeout=5)

    captured = capsys.readouterr()
    assert captured.out == ""
    lines = [json.loads(line) for line in captured.err.splitlines() if line.strip()]
    completed = next(line for line in lines if line["message"] == "[Save] Completed")
    assert completed["path"] == str(data_file)
    assert completed["records"] == 1
    assert completed["bytes"] == result["bytes_written"]
