"""
structlog setup for Imbibe Action.

Every line carries timestamp, level, event_type and the emitting module.
configure_structlog() is explicit: callers pass level and format, usually from
Settings (or from env via imbibe_action.logging on first import).

No imbibe_action imports here to avoid circular imports.
"""

from __future__ import annotations

import logging
import sys
from datetime import datetime, timezone
from typing import Any, TextIO

import structlog

LOG_FORMATS = ("json", "console")


def _add_timestamp(
    logger: Any,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    event_dict.setdefault("timestamp", datetime.now(timezone.utc).isoformat())
    return event_dict


def _event_to_event_type(
    logger: Any,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """structlog 'event' -> event_type; message mirrors it unless given."""
    if "event" in event_dict and "event_type" not in event_dict:
        event_dict["event_type"] = event_dict.pop("event")
    event_dict.setdefault("message", str(event_dict.get("event_type", "")))
    return event_dict


def _level_value(level: str) -> int:
    value = logging.getLevelName(level.strip().upper())
    return value if isinstance(value, int) else logging.INFO


def _renderer(fmt: str) -> Any:
    if fmt == "console":
        return structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())
    return structlog.processors.JSONRenderer(default=str)


def configure_structlog(level: str = "INFO", fmt: str = "json", stream: TextIO | None = None) -> None:
    """
    (Re)configure structlog.

    level: stdlib level name (DEBUG, INFO, ...); unknown names fall back to INFO.
    fmt: "json" for log drains, "console" for local runs.
    stream: output file; None means sys.stdout at the time a logger is first used.
    """
    fmt = fmt.strip().lower()
    if fmt not in LOG_FORMATS:
        fmt = "json"
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            _add_timestamp,
            _event_to_event_type,
            _renderer(fmt),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(_level_value(level)),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=stream),
        # Loggers pick up reconfiguration (main.py applies Settings after import).
        cache_logger_on_first_use=False,
    )


def get_logger(name: str) -> Any:
    """
    Return a lazy structured logger tagged with the module name.

        logger = get_logger(__name__)
        logger.info("sns_domain_resolved", domain="imbibed.sol", owner="...")
    """
    return structlog.get_logger(logger=name)


def bind_request(request_id: str) -> None:
    """Bind request_id to every log line emitted while handling this request."""
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(request_id=request_id)
