"""
Structured Logging
Process-wide structlog setup for the interpreter. Components take an
optional logger and fall back to the module logger.
"""

import logging
import sys
from typing import Any

import structlog
from pythonjsonlogger import jsonlogger

from .config import Settings

_CONSOLE_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"
_JSON_FIELDS = "%(asctime)s %(levelname)s %(name)s %(message)s"


def _root_handler(json_logs: bool) -> logging.Handler:
    handler = logging.StreamHandler(sys.stdout)
    if json_logs:
        handler.setFormatter(jsonlogger.JsonFormatter(_JSON_FIELDS))
    else:
        handler.setFormatter(logging.Formatter(_CONSOLE_FORMAT))
    return handler


def _processors(json_logs: bool) -> list[Any]:
    renderer = structlog.processors.JSONRenderer() if json_logs else structlog.dev.ConsoleRenderer(colors=False)
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.format_exc_info,
        renderer,
    ]


def configure_logging(level: str = "INFO", json_logs: bool = False) -> None:
    """
    Install (or replace) the logging configuration.

    Safe to call repeatedly: the root handler is swapped and loggers are
    not cached, so already-imported modules pick up the new setup.

    Args:
        level: Log level name; unknown names fall back to INFO
        json_logs: Emit one JSON object per line instead of console text
    """
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        handlers=[_root_handler(json_logs)],
        force=True,
    )
    structlog.configure(
        processors=_processors(json_logs),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )


def configure_from_settings(settings: Settings) -> None:
    """Configure logging from interpreter settings."""
    configure_logging(level=settings.log_level, json_logs=settings.json_logs)


def get_logger(name: str) -> structlog.BoundLogger:
    return structlog.get_logger(name)


def resolve_logger(logger: Any | None, name: str) -> Any:
    """Return the injected logger, or the module logger for ``name``."""
    return logger if logger is not None else get_logger(name)


class LogContext:
    """Bind key/values to every log line emitted inside the block."""

    def __init__(self, **kwargs: Any):
        self.context = kwargs

    def __enter__(self) -> "LogContext":
        structlog.contextvars.bind_contextvars(**self.context)
        return self

    def __exit__(self, *args: Any) -> None:
        structlog.contextvars.unbind_contextvars(*self.context)
