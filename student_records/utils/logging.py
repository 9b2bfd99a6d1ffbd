"""
Logging setup for the student records manager.

Menu prompts and results go to stdout through typer; every log line goes to
stderr, so piping a session's output never mixes the two. Most of what gets
logged comes from the persistence layer: the save worker reports
`[Save] Starting background save`, `[Save] Completed` and `[Save] Failed`
with `path`, `records` and `bytes` (or `error`) attached through `extra=`,
and blocking loads report `[Load] ...` lines the same way. In console mode
those fields stay attached to the record; with `LOG_JSON=true` they become
top-level keys of one JSON object per line.

Usage:
    from student_records.utils.logging import configure_logging, get_logger

    configure_logging(level=settings.log_level, json_logs=settings.log_json)
    log = get_logger(__name__)
    log.info("[Save] Completed", extra={"path": "students.json", "records": 12})
"""

from __future__ import annotations

import json
import logging
import logging.config
from typing import Any, Dict, Optional

# Attributes every LogRecord carries; anything else arrived through `extra=`.
_RESERVED_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", (), None)).keys()
) | {"message", "asctime", "extra"}


def _json_formatter(record: logging.LogRecord) -> str:
    """One JSON object per record, with `extra=` fields as top-level keys."""
    payload: Dict[str, Any] = {
        "level": record.levelname,
        "logger": record.name,
        "message": record.getMessage(),
    }
    if record.exc_info:
        payload["exc_info"] = logging.Formatter().formatException(record.exc_info)
    if record.stack_info:
        payload["stack_info"] = record.stack_info
    for key, value in vars(record).items():
        if key not in _RESERVED_ATTRS and not key.startswith("_"):
            payload[key] = value
    if hasattr(record, "extra") and isinstance(record.extra, dict):
        payload.update(record.extra)
    return json.dumps(payload, default=str)


class JsonFormatter(logging.Formatter):
    """Formatter selected by `LOG_JSON=true`."""

    def format(self, record: logging.LogRecord) -> str:  # type: ignore[override]
        return _json_formatter(record)


def configure_logging(
    level: str = "INFO",
    json_logs: bool = False,
    force: bool = True,
) -> None:
    """
    Route all logging to one stderr handler on the root logger.

    Parameters
    ----------
    level : str
        Level name from settings (`LOG_LEVEL`), case-insensitive.
    json_logs : bool
        Emit JSON lines instead of the `time | level | logger | message` format.
    force : bool
        When False, keep handlers that are already installed (as pytest's
        log capture does) and do nothing.
    """
    if not force and logging.getLogger().handlers:
        return

    formatter_name = "json" if json_logs else "console"

    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "console": {
                    "format": "%(asctime)s | %(levelname)s | %(name)s | %(message)s",
                    "datefmt": "%Y-%m-%d %H:%M:%S",
                },
                "json": {
                    "()": JsonFormatter,
                },
            },
            "handlers": {
                "default": {
                    "class": "logging.StreamHandler",
                    "formatter": formatter_name,
                    "level": level.upper(),
                    "stream": "ext://sys.stderr",
                }
            },
            "root": {
                "handlers": ["default"],
                "level": level.upper(),
            },
        }
    )


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Module loggers hang off the root handler installed by configure_logging."""
    return logging.getLogger(name)


__all__ = ["configure_logging", "get_logger", "JsonFormatter"]
