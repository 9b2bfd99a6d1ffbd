"""
Persistence adapter: background saves and blocking loads of the record store.

Saves snapshot the store in the caller's thread (the store lock is held only
for the copy) and hand the snapshot to a single background worker, which
encodes it and writes it atomically: temp file in the target directory,
flush, optional fsync, then os.replace over the target. A failed write never
touches the previous file.

Overlapping saves are queued: one daemon worker thread drains a FIFO queue,
so requests run in order and the file always ends up holding the most
recently requested snapshot. The worker is a daemon, so a hung disk cannot
keep the process alive past the shutdown timeout; the target file stays
intact because it is only ever replaced by rename.

Usage:
    adapter = PersistenceAdapter(store, default_path=Path("students.json"))
    future = adapter.save()          # returns immediately
    result = future.result()         # SaveResult, never raises for I/O errors
    records = adapter.load()         # blocking
"""

from __future__ import annotations

import contextlib
import logging
import os
import queue
import tempfile
import threading
import time
from concurrent.futures import Future
from concurrent.futures import wait as wait_futures
from pathlib import Path
from typing import Callable, List, Optional, Sequence, Tuple, TypedDict

from tenacity import (
    Retrying,
    before_sleep_log,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from student_records.config import get_settings
from student_records.domain.errors import IoFailureError, NotFoundError
from student_records.domain.models import Record
from student_records.persistence.codec import decode_records, encode_records
from student_records.store import RecordStore
from student_records.utils.logging import get_logger

log = get_logger(__name__)

ProgressCallback = Callable[[str, int, int], None]

# (future, target path, snapshot); None tells the worker to exit.
_SaveJob = Optional[Tuple[Future, Path, List[Record]]]


class SaveResult(TypedDict, total=False):
    """
    Outcome of one background save.

    `error` is None on success and a short description on failure.
    """

    path: str
    records: int
    bytes_written: int
    duration_seconds: float
    error: Optional[str]


def _atomic_write(path: Path, data: bytes, fsync: bool = True) -> None:
    """
    Write `data` to `path` via a sibling temp file and an atomic rename.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    try:
        with os.fdopen(fd, "wb") as fh:
            fh.write(data)
            fh.flush()
            if fsync:
                os.fsync(fh.fileno())
        os.replace(tmp_name, path)
    except BaseException:
        with contextlib.suppress(FileNotFoundError):
            os.unlink(tmp_name)
        raise


class PersistenceAdapter:
    """
    Saves and restores a RecordStore to a single data file.

    Parameters
    ----------
    store : RecordStore
        The store to snapshot on save.
    default_path : Path | str | None
        File used when save/load are called without a path. Defaults to
        settings.data_file.
    retry_attempts : int | None
        Attempts for the atomic write before the save is reported failed.
    retry_wait_seconds : float | None
        Base for the exponential wait between attempts.
    fsync : bool | None
        Whether to fsync the temp file before renaming it.
    progress : callable | None
        Optional `progress(stage, done, total)` hook; stages are
        "snapshot", "encode", "write" and "done".
    """

    def __init__(
        self,
        store: RecordStore,
        default_path: Path | str | None = None,
        retry_attempts: Optional[int] = None,
        retry_wait_seconds: Optional[float] = None,
        fsync: Optional[bool] = None,
        progress: Optional[ProgressCallback] = None,
    ) -> None:
        settings = get_settings()
        self._store = store
        self.default_path = Path(default_path) if default_path else settings.data_file
        self.retry_attempts = retry_attempts or settings.save_retry_attempts
        self.retry_wait_seconds = (
            settings.save_retry_wait_seconds if retry_wait_seconds is None else retry_wait_seconds
        )
        self.fsync = settings.save_fsync if fsync is None else fsync
        self._progress = progress
        self._jobs: queue.Queue[_SaveJob] = queue.Queue()
        self._worker = threading.Thread(target=self._drain, name="records-save", daemon=True)
        self._pending: set[Future] = set()
        self._pending_lock = threading.Lock()
        self._closed = False
        self._worker.start()

    def _resolve(self, path: Path | str | None) -> Path:
        return Path(path) if path else self.default_path

    def _report(self, stage: str, done: int, total: int) -> None:
        if self._progress is not None:
            self._progress(stage, done, total)

    def _forget(self, future: Future) -> None:
        with self._pending_lock:
            self._pending.discard(future)

    def _write_with_retry(self, target: Path, data: bytes) -> None:
        retryer = Retrying(
            stop=stop_after_attempt(self.retry_attempts),
            wait=wait_exponential(multiplier=self.retry_wait_seconds, max=2.0),
            retry=retry_if_exception_type(OSError),
            before_sleep=before_sleep_log(log, logging.WARNING),
            reraise=True,
        )
        retryer(_atomic_write, target, data, self.fsync)

    def _write_snapshot(self, target: Path, records: Sequence[Record]) -> SaveResult:
        total = len(records)
        log.info("[Save] Starting background save", extra={"path": str(target), "records": total})
        start = time.perf_counter()
        try:
            data = encode_records(records)
            self._report("encode", total, total)
            self._write_with_retry(target, data)
            self._report("write", total, total)
        except Exception as exc:  # noqa: BLE001 - the worker reports failures, never raises them
            duration = time.perf_counter() - start
            log.exception(
                "[Save] Failed", extra={"path": str(target), "records": total, "error": str(exc)}
            )
            return SaveResult(
                path=str(target),
                records=total,
                bytes_written=0,
                duration_seconds=duration,
                error=f"{type(exc).__name__}: {exc}",
            )

        duration = time.perf_counter() - start
        self._report("done", total, total)
        log.info(
            "[Save] Completed",
            extra={"path": str(target), "records": total, "bytes": len(data)},
        )
        return SaveResult(
            path=str(target),
            records=total,
            bytes_written=len(data),
            duration_seconds=duration,
            error=None,
        )

    def _drain(self) -> None:
        """Worker loop: run queued saves in FIFO order until the exit marker."""
        while True:
            job = self._jobs.get()
            if job is None:
                return
            future, target, records = job
            if not future.set_running_or_notify_cancel():
                continue
            try:
                future.set_result(self._write_snapshot(target, records))
            except Exception as exc:  # noqa: BLE001 - a failing progress hook must not kill the worker
                future.set_exception(exc)

    def _cancel_queued(self) -> None:
        while True:
            try:
                job = self._jobs.get_nowait()
            except queue.Empty:
                return
            if job is not None:
                job[0].cancel()

    def save(self, path: Path | str | None = None) -> Future[SaveResult]:
        """
        Start saving a point-in-time snapshot of the store.

        The snapshot is taken before this method returns; encoding and file
        I/O happen on the background worker. The returned future resolves to
        a SaveResult and does not raise for I/O failures.

        Raises
        ------
        RuntimeError
            If the adapter has been closed.
        """
        target = self._resolve(path)
        records = self._store.snapshot()
        self._report("snapshot", len(records), len(records))
        with self._pending_lock:
            if self._closed:
                raise RuntimeError("Persistence adapter is closed")
            future: Future[SaveResult] = Future()
            self._jobs.put((future, target, records))
            self._pending.add(future)
            queued = len(self._pending)
        future.add_done_callback(self._forget)
        log.debug("[Save] Queued", extra={"path": str(target), "queued": queued})
        return future

    def load(self, path: Path | str | None = None) -> List[Record]:
        """
        Read and decode the data file synchronously.

        Raises
        ------
        NotFoundError
            If the file does not exist.
        CorruptDataError
            If the file exists but cannot be parsed.
        IoFailureError
            For any other I/O error.
        """
        target = self._resolve(path)
        log.info("[Load] Loading data from file", extra={"path": str(target)})
        try:
            data = target.read_bytes()
        except FileNotFoundError:
            raise NotFoundError(f"Data file not found: {target}") from None
        except OSError as exc:
            raise IoFailureError(f"Could not read {target}: {exc}") from exc
        records = decode_records(data)
        log.info("[Load] Completed", extra={"path": str(target), "records": len(records)})
        return records

    def pending(self) -> int:
        """Number of saves queued or running."""
        with self._pending_lock:
            return sum(1 for future in self._pending if not future.done())

    def wait_for_pending(self, timeout: Optional[float] = None) -> bool:
        """Block until queued saves finish; False if the timeout expired first."""
        with self._pending_lock:
            futures = [future for future in self._pending if not future.done()]
        if not futures:
            return True
        _, not_done = wait_futures(futures, timeout=timeout)
        return not not_done

    def close(self, timeout: Optional[float] = None) -> bool:
        """
        Stop accepting saves and wait (bounded) for the queued ones.

        Saves that have not started when the timeout expires are cancelled;
        one already writing keeps going on the daemon worker but no longer holds
        up process exit.
        """
        with self._pending_lock:
            already_closed = self._closed
            self._closed = True
        completed = self.wait_for_pending(timeout)
        if not completed:
            log.warning("[Save] Timed out waiting for pending saves", extra={"timeout": timeout})
            self._cancel_queued()
        if not already_closed:
            self._jobs.put(None)
        return completed

    @property
    def closed(self) -> bool:
        return self._closed


__all__ = ["PersistenceAdapter", "SaveResult", "ProgressCallback"]
