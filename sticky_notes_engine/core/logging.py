"""Structured JSON logging tagged with correlation and skill event metadata.

Every record carries the HTTP correlation id plus the pseudonymized user and
device of the skill event being served, and the platform request id.
"""

from __future__ import annotations

import logging
import sys
import tempfile
from contextvars import ContextVar, Token
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Optional

from pythonjsonlogger import jsonlogger

from sticky_notes_engine.core.config import settings

_correlation_id: ContextVar[Optional[str]] = ContextVar("correlation_id", default=None)
_log_user_id: ContextVar[Optional[str]] = ContextVar("log_user_id", default=None)
_log_device_id: ContextVar[Optional[str]] = ContextVar("log_device_id", default=None)
_skill_request_id: ContextVar[Optional[str]] = ContextVar("skill_request_id", default=None)

LEVEL_NAME = str(getattr(settings, "STICKY_NOTES_LOG_LEVEL", "info")).upper()
LOG_LEVEL = getattr(logging, LEVEL_NAME, logging.INFO)

BASE_DIR = Path(__file__).resolve().parent.parent
ROOT_DIR = BASE_DIR.parent


def _resolve_logs_dir() -> Optional[Path]:
    """Select a writable logs directory, or None when nothing is writable.

    Serverless runtimes only allow writes under the temp dir, so it is the
    last candidate before giving up on file logging.
    """

    configured_dir = getattr(settings, "STICKY_NOTES_LOG_DIR", None)
    candidates = []
    if configured_dir:
        candidates.append(Path(configured_dir))

    data_dir = Path(getattr(settings, "DATA_DIR", Path("/data")))
    # Precedence: explicit override → repo root logs → DATA_DIR/logs → package logs → temp dir
    candidates.append(ROOT_DIR / "logs")
    candidates.append(data_dir / "logs")
    candidates.append(BASE_DIR / "logs")
    candidates.append(Path(tempfile.gettempdir()) / "sticky-notes-logs")

    for candidate in candidates:
        try:
            candidate.mkdir(parents=True, exist_ok=True)
        except OSError:
            continue
        return candidate

    return None


LOGS_DIR = _resolve_logs_dir()
LOG_SCHEMA_VERSION = "1.1.0"
LOG_FILE_PATH: Optional[Path] = LOGS_DIR / "sticky_notes.log" if LOGS_DIR else None
LOG_MAX_BYTES = 5 * 1024 * 1024
LOG_BACKUP_COUNT = 5


class VersionedJsonFormatter(jsonlogger.JsonFormatter):
    """Inject a schema version into each structured log entry."""

    def __init__(self, *args, schema_version: str, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._schema_version = schema_version

    def add_fields(
        self,
        log_record: dict[str, Any],
        record: logging.LogRecord,
        message_dict: dict[str, Any],
    ) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record.setdefault("schema_version", self._schema_version)


class SkillContextFilter(logging.Filter):  # pylint: disable=too-few-public-methods
    """Attach correlation id and skill event identity to log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.correlation_id = get_correlation_id() or "-"
        record.log_user_id = _log_user_id.get() or "-"
        record.log_device_id = _log_device_id.get() or "-"
        record.skill_request_id = _skill_request_id.get() or "-"
        return True


def bind_correlation_id(value: Optional[str]) -> Token[Optional[str]]:
    """Bind ``value`` to the correlation id context variable."""

    return _correlation_id.set(value)


def reset_correlation_id(token: Token[Optional[str]]) -> None:
    _correlation_id.reset(token)


def get_correlation_id() -> Optional[str]:
    """Return the current correlation id if bound."""

    return _correlation_id.get()


def bind_skill_event(
    *,
    log_user_id: Optional[str],
    log_device_id: Optional[str],
    request_id: Optional[str],
) -> None:
    """Tag subsequent records with the event being served.

    Callers serve each event inside its own ``contextvars`` copy, so the
    binding ends with the event and needs no reset.
    """

    _log_user_id.set(log_user_id)
    _log_device_id.set(log_device_id)
    _skill_request_id.set(request_id)


def get_skill_event() -> dict[str, Optional[str]]:
    """Return the pseudonymized user, device and request id currently bound."""

    return {
        "user": _log_user_id.get(),
        "device": _log_device_id.get(),
        "request_id": _skill_request_id.get(),
    }


def _ensure_handlers(logger: logging.Logger) -> None:
    if logger.handlers:
        return

    formatter = VersionedJsonFormatter(
        " ".join(
            [
                "%(asctime)s",
                "%(levelname)s",
                "%(name)s",
                "%(message)s",
                "%(correlation_id)s",
                "%(log_user_id)s",
                "%(log_device_id)s",
                "%(skill_request_id)s",
            ]
        ),
        rename_fields={
            "asctime": "timestamp",
            "levelname": "level",
            "name": "logger",
            "correlation_id": "cid",
            "log_user_id": "user",
            "log_device_id": "device",
            "skill_request_id": "rid",
        },
        datefmt="%Y-%m-%d %H:%M:%S",
        json_ensure_ascii=False,
        schema_version=LOG_SCHEMA_VERSION,
    )
    context_filter = SkillContextFilter()

    stream_handler = logging.StreamHandler(sys.stdout)
    stream_handler.addFilter(context_filter)
    stream_handler.setFormatter(formatter)
    logger.addHandler(stream_handler)

    if LOG_FILE_PATH is None:
        return
    file_handler = RotatingFileHandler(
        LOG_FILE_PATH, maxBytes=LOG_MAX_BYTES, backupCount=LOG_BACKUP_COUNT, encoding="utf-8"
    )
    file_handler.addFilter(context_filter)
    file_handler.setFormatter(formatter)
    logger.addHandler(file_handler)


def get_logger(name: str) -> logging.Logger:
    """Return a configured logger with skill context filtering."""

    logger = logging.getLogger(name)
    logger.setLevel(LOG_LEVEL)
    _ensure_handlers(logger)
    return logger


__all__ = [
    "SkillContextFilter",
    "bind_correlation_id",
    "bind_skill_event",
    "get_correlation_id",
    "get_logger",
    "get_skill_event",
    "reset_correlation_id",
    "LOG_FILE_PATH",
    "LOG_SCHEMA_VERSION",
]
