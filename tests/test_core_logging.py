"""Tests for the logging helpers with correlation ids and skill event tags."""

import json
import logging
import sys
from contextvars import copy_context
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, cast

from pythonjsonlogger import jsonlogger

from sticky_notes_engine.core.logging import (
    LOG_FILE_PATH,
    LOG_SCHEMA_VERSION,
    SkillContextFilter,
    bind_correlation_id,
    bind_skill_event,
    get_correlation_id,
    get_logger,
    get_skill_event,
    reset_correlation_id,
)


def _record() -> logging.LogRecord:
    return logging.LogRecord(
        name="test",
        level=logging.INFO,
        pathname=__file__,
        lineno=10,
        msg="hello",
        args=None,
        exc_info=None,
    )


def _filtered_record() -> logging.LogRecord:
    record = _record()
    SkillContextFilter().filter(record)
    return record


def test_skill_filter_attaches_context():
    """Filter should attach the bound context onto log records."""

    def _serve() -> logging.LogRecord:
        bind_correlation_id("abc123")
        bind_skill_event(
            log_user_id="safe-user",
            log_device_id="safe-device",
            request_id="amzn1.echo-api.request.1",
        )
        return _filtered_record()

    record = cast(Any, copy_context().run(_serve))

    assert record.correlation_id == "abc123"
    assert record.log_user_id == "safe-user"
    assert record.log_device_id == "safe-device"
    assert record.skill_request_id == "amzn1.echo-api.request.1"


def test_skill_filter_uses_placeholder_when_unbound():
    record = cast(Any, copy_context().run(_filtered_record))

    assert record.correlation_id == "-"
    assert record.log_device_id == "-"


def test_skill_event_binding_ends_with_its_context():
    """Events served in a context copy leave the caller's tags untouched."""

    def _serve() -> dict:
        bind_skill_event(log_user_id="u", log_device_id="d", request_id="r")
        return get_skill_event()

    assert copy_context().run(_serve) == {"user": "u", "device": "d", "request_id": "r"}
    assert get_skill_event() == {"user": None, "device": None, "request_id": None}


def test_correlation_id_reset_restores_previous_value():
    outer = bind_correlation_id("outer")
    inner = bind_correlation_id("inner")
    assert get_correlation_id() == "inner"

    reset_correlation_id(inner)
    assert get_correlation_id() == "outer"
    reset_correlation_id(outer)
    assert get_correlation_id() is None


def test_get_logger_installs_json_handlers_once():
    """Loggers get one stream and one rotating file handler, both filtered."""
    logger = get_logger("sticky_notes_engine.tests.logging")
    again = get_logger("sticky_notes_engine.tests.logging")

    assert again is logger
    assert len(logger.handlers) == 2
    stream_handlers = [
        h
        for h in logger.handlers
        if isinstance(h, logging.StreamHandler) and getattr(h, "stream", None) is sys.stdout
    ]
    file_handlers = [h for h in logger.handlers if isinstance(h, RotatingFileHandler)]
    assert len(stream_handlers) == 1
    assert len(file_handlers) == 1
    assert Path(file_handlers[0].baseFilename) == LOG_FILE_PATH
    assert all(
        any(isinstance(flt, SkillContextFilter) for flt in handler.filters)
        for handler in logger.handlers
    )
    assert all(isinstance(handler.formatter, jsonlogger.JsonFormatter) for handler in logger.handlers)


def test_formatter_emits_renamed_fields_and_schema_version():
    logger = get_logger("sticky_notes_engine.tests.logging.format")
    handler = logger.handlers[0]
    record = _record()

    def _tag() -> None:
        bind_correlation_id("cid-9")
        bind_skill_event(log_user_id="safe-user", log_device_id="safe-device", request_id="r-1")
        handler.filter(record)

    copy_context().run(_tag)
    assert handler.formatter is not None

    entry = json.loads(handler.formatter.format(record))

    assert entry["message"] == "hello"
    assert entry["level"] == "INFO"
    assert entry["cid"] == "cid-9"
    assert entry["user"] == "safe-user"
    assert entry["device"] == "safe-device"
    assert entry["rid"] == "r-1"
    assert entry["schema_version"] == LOG_SCHEMA_VERSION
