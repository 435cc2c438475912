"""
Structured logging: timestamp, level, sample_id, event_type.

structlog, configured on first import from LOG_LEVEL / LOG_FORMAT and
reconfigurable through configure_logging() (the CLI does this from settings).
Engine modules log a snake_case event name plus keyword fields:

    logger = get_logger(__name__)
    logger.info("invasion_evaluated", sample_id="S01", time=24, raw_if=0.61)

Module-level loggers are bound at import, so reconfiguration edits the shared
processor chain in place and the output stream is resolved on every write.
Output goes to stderr by default so stdout stays free for result records.
Uses only Python stdlib logging and structlog; no invasion_factor imports to avoid circular imports.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Any, TextIO

import structlog

DEFAULT_LEVEL = "INFO"
DEFAULT_FORMAT = "json"

_METHOD_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "warn": logging.WARNING,
    "error": logging.ERROR,
    "exception": logging.ERROR,
    "critical": logging.CRITICAL,
    "fatal": logging.CRITICAL,
}

_PROCESSORS: list[Any] = []
_state: dict[str, Any] = {"level": logging.INFO, "stream": None}


class _CurrentStream:
    """File-like target that writes to the configured stream, else the current sys.stderr."""

    def _target(self) -> TextIO:
        return _state["stream"] or sys.stderr

    def write(self, text: str) -> int:
        return self._target().write(text)

    def flush(self) -> None:
        self._target().flush()

    def isatty(self) -> bool:
        return bool(getattr(self._target(), "isatty", lambda: False)())


_STREAM = _CurrentStream()


def _filter_level(
    logger: Any,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Drop events below the configured level."""
    if _METHOD_LEVELS.get(method_name, logging.INFO) < _state["level"]:
        raise structlog.DropEvent
    return event_dict


def _rename_event(
    logger: Any,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """structlog's 'event' key becomes event_type."""
    if "event" in event_dict and "event_type" not in event_dict:
        event_dict["event_type"] = event_dict.pop("event")
    return event_dict


def _level_value(level: str) -> int:
    value = logging.getLevelName(level.strip().upper())
    return value if isinstance(value, int) else logging.INFO


def configure_logging(
    level: str | None = None,
    fmt: str | None = None,
    stream: TextIO | None = None,
) -> None:
    """
    Configure structlog processors and filtering level.

    Args:
        level: Level name; defaults to LOG_LEVEL env or INFO.
        fmt: "json" for JSON lines, anything else for the console renderer;
            defaults to LOG_FORMAT env or json.
        stream: Output stream; None writes to whatever sys.stderr is at log time.
    """
    level = level or os.getenv("LOG_LEVEL", DEFAULT_LEVEL)
    fmt = (fmt or os.getenv("LOG_FORMAT", DEFAULT_FORMAT)).strip().lower()
    _state["level"] = _level_value(level)
    _state["stream"] = stream

    processors: list[Any] = [
        _filter_level,
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]
    if fmt == "json":
        processors += [_rename_event, structlog.processors.JSONRenderer()]
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=_STREAM.isatty()))
    _PROCESSORS[:] = processors

    structlog.configure(
        processors=_PROCESSORS,
        wrapper_class=structlog.make_filtering_bound_logger(logging.DEBUG),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=_STREAM),
        cache_logger_on_first_use=False,
    )


if not structlog.is_configured():
    configure_logging()


def get_logger(name: str) -> structlog.BoundLogger:
    """
    Return a structured logger for the given module name.

    Log with event_type (first arg) and optional sample_id, time, etc.
    """
    return structlog.get_logger(name).bind(logger=name)


def bind_sample(sample_id: str) -> structlog.BoundLogger:
    """Return a logger with sample_id bound to all subsequent log calls."""
    return structlog.get_logger("invasion_factor").bind(logger="invasion_factor", sample_id=sample_id)
