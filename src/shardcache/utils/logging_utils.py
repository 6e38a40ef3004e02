"""Logging utilities for the shard cache cleanup coordinator.

This module configures structured logging using structlog. Console logs are
rendered in aligned columns, while logs written to file or emitted when JSON
mode is active are rendered as JSON.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from typing import Any

import structlog
from structlog.dev import Column
from structlog.processors import CallsiteParameter, CallsiteParameterAdder

# Prevent logging output before setup_logging configures handlers
logging.getLogger().addHandler(logging.NullHandler())

LogCallback = Callable[[str, str, str], None]

LEVEL_STYLES: dict[str, str] = {
    "CRITICAL": "\033[1;31m",  # bold red
    "ERROR": "\033[31m",  # red
    "WARNING": "\033[33m",  # yellow
    "INFO": "\033[36m",  # cyan
    "DEBUG": "\033[32m",  # green
}


def uppercase_level(
    _logger: logging.Logger, _name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Ensure the ``level`` field is uppercase."""
    level = event_dict.get("level")
    if level is not None:
        event_dict["level"] = str(level).upper()
    return event_dict


def insert_logger_name(
    _logger: logging.Logger, _name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Prefer the component subsystem over the module logger name."""
    subsystem = event_dict.pop("subsystem", None)
    logger_name = event_dict.pop("logger", None)
    if subsystem or logger_name:
        event_dict["logger_name"] = subsystem or logger_name
    return event_dict


def format_location(
    _logger: logging.Logger, _name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Format filename and line number as (file.py:123)."""
    filename = event_dict.pop("filename", None)
    lineno = event_dict.pop("lineno", None)

    if filename and lineno:
        event_dict["location"] = f"({filename}:{lineno})"

    return event_dict


def add_thread_id(
    _logger: logging.Logger, _name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Add the name of the emitting thread.

    Shard and index deletions may be dispatched on several threads at once.
    """
    event_dict["thread_id"] = threading.current_thread().name
    return event_dict


def _console_columns() -> list[Column]:
    def plain(key: str, value: Any) -> str:
        return str(value) if value is not None else ""

    def dim(key: str, value: Any) -> str:
        return f"\033[90m{value}\033[0m" if value else ""

    def bracketed(key: str, value: Any) -> str:
        return f"[{value}]" if value else ""

    def level(key: str, value: Any) -> str:
        if not value:
            return ""
        color_code = LEVEL_STYLES.get(str(value), "")
        reset_code = "\033[0m" if color_code else ""
        return f"[{color_code}{value}{reset_code}]"

    def logger_name(key: str, value: Any) -> str:
        return f"[\033[94m{value}\033[0m]" if value else ""

    return [
        Column("timestamp", dim),
        Column("thread_id", bracketed),
        Column("level", level),
        Column("logger_name", logger_name),
        Column("event", plain),
        Column("location", dim),
        Column(
            "",
            structlog.dev.KeyValueColumnFormatter(
                key_style=None, value_style="", reset_style="", value_repr=str
            ),
        ),
    ]


def setup_logging(
    log_file: str | None = None,
    log_level: int = logging.INFO,
    json_logs: bool = False,
) -> None:
    """Configure structlog and standard logging.

    Args:
        log_file: Optional path to the log file. If ``None`` logs are written
            to ``stderr`` only.
        log_level: Logging level.
        json_logs: Emit JSON logs to the console if True.
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.handlers = []

    timestamper = structlog.processors.TimeStamper(fmt="%Y-%m-%d %H:%M:%S")
    callsite = CallsiteParameterAdder(
        [CallsiteParameter.FILENAME, CallsiteParameter.LINENO],
        additional_ignores=["shardcache.utils.logging_utils"],
    )

    pre_chain = [
        structlog.stdlib.add_log_level,
        uppercase_level,
        structlog.stdlib.add_logger_name,
        timestamper,
        add_thread_id,
        callsite,
        insert_logger_name,
        format_location,
    ]

    def renderer(as_json: bool) -> Any:
        if as_json:
            return structlog.processors.JSONRenderer()
        return structlog.dev.ConsoleRenderer(
            colors=True, sort_keys=False, columns=_console_columns()
        )

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(
            structlog.stdlib.ProcessorFormatter(
                processor=renderer(json_logs),
                foreign_pre_chain=pre_chain,
            ),
        )
        root_logger.addHandler(file_handler)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processor=renderer(json_logs),
            foreign_pre_chain=pre_chain,
        ),
    )
    root_logger.addHandler(console_handler)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            uppercase_level,
            timestamper,
            add_thread_id,
            callsite,
            insert_logger_name,
            format_location,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str = "shardcache") -> Any:
    """Get a structlog logger bound to ``name``."""
    return structlog.get_logger(name)


def log_message(
    level: str,
    message: str,
    subsystem: str = "ShardCache",
    callback: LogCallback | None = None,
    **context: Any,
) -> None:
    """Log a message with structured context and optionally forward it.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        message: The log message
        subsystem: Component emitting the message
        callback: Optional observer receiving ``(level, message, subsystem)``
        **context: Structured fields attached to the log event
    """
    log_level = getattr(logging, level.upper(), logging.INFO)
    get_logger().log(log_level, message, subsystem=subsystem, **context)

    if callback:
        try:
            callback(level, message, subsystem)
        except (TypeError, ValueError, KeyError) as exc:
            get_logger().warning("Failed to send log to callback", error=str(exc))
