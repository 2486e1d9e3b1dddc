"""
Structured logging for signer-scout.

structlog with a timestamp, log level, logger name and event name as the first
positional argument. Nothing is configured as a side effect of importing a
core module: entry points call configure_logging() once, and the discovery
pipeline accepts an already bound logger so tests and callers can supply their own.

Uses only Python stdlib logging and structlog; no signer_scout imports to avoid circular imports.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Any

import structlog

DEFAULT_LOG_LEVEL = "INFO"
# JSON output for aggregation; human-readable console output for local runs
DEFAULT_LOG_FORMAT = "console"
# month-day hour:minute:second
DEFAULT_DATE_FORMAT = "%m-%d %H:%M:%S"


def _normalize_event(
    logger: Any,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Rename structlog 'event' to event_type for JSON consumers."""
    if "event" in event_dict and "event_type" not in event_dict:
        event_dict["event_type"] = event_dict.pop("event")
    return event_dict


def configure_logging(
    level: str | None = None,
    fmt: str | None = None,
    date_format: str | None = None,
) -> None:
    """
    Configure structlog for the process.

    Args:
        level: Log level name (DEBUG, INFO, ...). Defaults to LOG_LEVEL env or INFO.
        fmt: "json" or "console". Defaults to LOG_FORMAT env or console.
        date_format: strftime format for the timestamp, or "iso".
            Defaults to LOG_DATE_FORMAT env or "%m-%d %H:%M:%S".
    """
    level_name = (level or os.getenv("LOG_LEVEL") or DEFAULT_LOG_LEVEL).strip().upper()
    level_value = getattr(logging, level_name, logging.INFO)
    fmt_name = (fmt or os.getenv("LOG_FORMAT") or DEFAULT_LOG_FORMAT).strip().lower()
    ts_fmt = (date_format or os.getenv("LOG_DATE_FORMAT") or DEFAULT_DATE_FORMAT).strip()

    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.TimeStamper(fmt=ts_fmt, utc=False, key="timestamp"),
    ]
    if fmt_name == "json":
        processors.append(_normalize_event)
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(
            structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())
        )
    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level_value),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stdout),
        # Loggers resolve the current configuration on every call so that
        # configure_logging() also applies to module-level loggers created earlier.
        cache_logger_on_first_use=False,
    )


def get_logger(name: str) -> Any:
    """
    Return a structured logger for the given module name.

        logger = get_logger(__name__)
        logger.info("discovery_signer_found", address=addr, total=12)

    The returned proxy is lazy: it picks up whatever configure_logging() set last.
    """
    return structlog.get_logger(logger_name=name)
