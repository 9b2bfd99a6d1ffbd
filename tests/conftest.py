"""
Pytest configuration for the student records manager.

Provides fixtures for:
- Settings isolated from the developer's environment and .env file
- A temporary data file path per test
- Store, adapter, and manager instances wired to that path
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Generator

import pytest

from student_records.config import Settings, get_settings
from student_records.domain.models import Record
from student_records.manager import StudentManager
from student_records.persistence.adapter import PersistenceAdapter
from student_records.store import RecordStore


@pytest.fixture(autouse=True)
def isolated_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """
    Point every settings lookup at a per-test data file and restore logging afterwards.
    """
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("STUDENTS_DATA_FILE", str(tmp_path / "students.json"))
    monkeypatch.setenv("SAVE_FSYNC", "false")
    monkeypatch.setenv("SAVE_RETRY_WAIT_SECONDS", "0")
    get_settings.cache_clear()

    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    get_settings.cache_clear()


@pytest.fixture
def data_file(tmp_path: Path) -> Path:
    return tmp_path / "students.json"


@pytest.fixture
def test_settings(data_file: Path) -> Settings:
    """
    Settings fixture with fast, deterministic save behaviour.
    """
    return Settings(
        data_file=data_file,
        log_level="DEBUG",
        save_timeout_seconds=5.0,
        save_retry_attempts=1,
        save_retry_wait_seconds=0.0,
        save_fsync=False,
    )


@pytest.fixture
def store() -> RecordStore:
    return RecordStore()


@pytest.fixture
def adapter(store: RecordStore, data_file: Path) -> Generator[PersistenceAdapter, None, None]:
    adapter = PersistenceAdapter(
        store, default_path=data_file, retry_attempts=1, retry_wait_seconds=0.0, fsync=False
    )
    try:
        yield adapter
    finally:
        adapter.close(timeout=5)


@pytest.fixture
def manager(test_settings: Settings) -> Generator[StudentManager, None, None]:
    manager = StudentManager(settings=test_settings)
    try:
        yield manager
    finally:
        manager.persistence.close(timeout=5)


@pytest.fixture
def alice() -> Record:
    return Record(id=1, name="Alice", marks=92.5)


@pytest.fixture
def bob() -> Record:
    return Record(id=2, name="Bob", marks=77.0)
