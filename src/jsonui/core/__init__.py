"""Core utilities and infrastructure."""

from .config import Settings, get_settings
from .logging_config import (
    LogContext,
    configure_from_settings,
    configure_logging,
    get_logger,
    resolve_logger,
)
from .errors import (
    ActionCancelledError,
    ActionError,
    CatalogError,
    JsonUIError,
    PathConflictError,
    RenderError,
    StreamError,
    ValidationError,
    get_error_message,
    log_error,
)
from .json import (
    JSONParseError,
    decode_json,
    safe_json_dumps,
    validate_json_depth,
    validate_json_size,
)
from .stream import LineBuffer, StreamCounter, iter_lines, iter_lines_sync

__all__ = [
    # Config
    "Settings",
    "get_settings",
    # Logging
    "LogContext",
    "configure_from_settings",
    "configure_logging",
    "get_logger",
    "resolve_logger",
    # Errors
    "ActionCancelledError",
    "ActionError",
    "CatalogError",
    "JsonUIError",
    "PathConflictError",
    "RenderError",
    "StreamError",
    "ValidationError",
    "get_error_message",
    "log_error",
    # JSON
    "JSONParseError",
    "decode_json",
    "safe_json_dumps",
    "validate_json_depth",
    "validate_json_size",
    # Streaming
    "LineBuffer",
    "StreamCounter",
    "iter_lines",
    "iter_lines_sync",
]
