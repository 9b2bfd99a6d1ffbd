"""
Student manager: the service layer between the controller and the store.

Wires validation, the lock-guarded store, and the persistence adapter
together, and owns the startup restore and the shutdown flush.

Usage:
    from student_records.manager import StudentManager

    manager = StudentManager()
    manager.bootstrap()
    manager.add_student("1", "Alice", "92.5")
    manager.save_in_background()
    manager.shutdown()
"""

from __future__ import annotations

from concurrent.futures import Future
from concurrent.futures import TimeoutError as FuturesTimeoutError
from pathlib import Path
from typing import List, Optional, Union

from student_records.config import Settings, get_settings
from student_records.domain.errors import CorruptDataError, IoFailureError, NotFoundError
from student_records.domain.models import Record
from student_records.domain.validation import parse_id, validate_new_record
from student_records.persistence.adapter import PersistenceAdapter, ProgressCallback, SaveResult
from student_records.store import RecordStore
from student_records.utils.logging import get_logger

log = get_logger(__name__)

IdInput = Union[int, str]


class StudentManager:
    """
    Facade over RecordStore and PersistenceAdapter.

    Mutations are validated first; the store then re-checks id uniqueness
    atomically, so a record added concurrently still cannot be duplicated.
    """

    def __init__(
        self,
        store: Optional[RecordStore] = None,
        persistence: Optional[PersistenceAdapter] = None,
        data_file: Path | str | None = None,
        settings: Optional[Settings] = None,
        progress: Optional[ProgressCallback] = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.store = store or RecordStore()
        self.persistence = persistence or PersistenceAdapter(
            self.store,
            default_path=data_file or self.settings.data_file,
            retry_attempts=self.settings.save_retry_attempts,
            retry_wait_seconds=self.settings.save_retry_wait_seconds,
            fsync=self.settings.save_fsync,
            progress=progress,
        )

    @property
    def data_file(self) -> Path:
        return self.persistence.default_path

    def add_student(self, record_id: IdInput, name: str, marks: Union[float, str]) -> Record:
        record = validate_new_record(record_id, name, marks, self.store.snapshot())
        self.store.add(record)
        log.info("Student added", extra={"record_id": record.id})
        return record

    def find_student(self, record_id: IdInput) -> Record:
        return self.store.get(parse_id(record_id, require_positive=False))

    def remove_student(self, record_id: IdInput) -> Record:
        removed = self.store.remove(parse_id(record_id, require_positive=False))
        log.info("Student removed", extra={"record_id": removed.id})
        return removed

    def update_student(
        self,
        record_id: IdInput,
        name: Optional[str] = None,
        marks: Union[float, str, None] = None,
    ) -> Record:
        lookup_id = parse_id(record_id, require_positive=False)
        updated = self.store.update(lookup_id, name=name, marks=marks)
        log.info("Student updated", extra={"record_id": updated.id})
        return updated

    def list_students(self) -> List[Record]:
        return self.store.snapshot()

    def save_in_background(self, path: Path | str | None = None) -> Future[SaveResult]:
        return self.persistence.save(path)

    def load_from_file(self, path: Path | str | None = None) -> int:
        """
        Replace the store contents with the data file, blocking the caller.

        On any error the store is left unchanged and the error propagates
        (NotFoundError, CorruptDataError, IoFailureError). Saves still queued
        are awaited first so the file reflects them.
        """
        if not self.persistence.wait_for_pending(self.settings.save_timeout_seconds):
            log.warning("[Load] Pending saves still running; file may be stale.")
        records = self.persistence.load(path)
        self.store.replace_all(records)
        return len(records)

    def bootstrap(self, path: Path | str | None = None) -> int:
        """
        Restore the store at startup, falling back to an empty dataset.
        """
        try:
            return self.load_from_file(path)
        except NotFoundError:
            log.info("[Load] File not found, starting with empty dataset.")
        except (CorruptDataError, IoFailureError) as exc:
            log.error(
                "[Load] Error during load, starting with empty dataset.",
                extra={"error": str(exc)},
            )
        self.store.replace_all([])
        return 0

    def shutdown(
        self,
        timeout: Optional[float] = None,
        path: Path | str | None = None,
    ) -> Optional[SaveResult]:
        """
        Flush the store with a final save and wait for it, bounded by `timeout`.

        Saves already queued run first. Returns the final SaveResult, or None
        if the adapter was already closed or the wait timed out.
        """
        if self.persistence.closed:
            return None
        effective_timeout = timeout if timeout is not None else self.settings.save_timeout_seconds
        future = self.save_in_background(path)
        try:
            result: Optional[SaveResult] = future.result(timeout=effective_timeout)
        except FuturesTimeoutError:
            log.warning(
                "[Save] Final save did not finish in time",
                extra={"timeout": effective_timeout},
            )
            result = None
        self.persistence.close(timeout=0 if result is None else None)
        return result


__all__ = ["StudentManager"]
