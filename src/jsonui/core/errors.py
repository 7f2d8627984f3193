"""Error taxonomy shared by every interpreter component."""

from typing import Any

from .logging_config import get_logger

logger = get_logger(__name__)


class JsonUIError(Exception):
    """Base error with a stable code and structured details."""

    code = "JSON_UI_ERROR"

    def __init__(
        self, message: str, code: str | None = None, details: dict[str, Any] | None = None
    ) -> None:
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code
        self.details = details or {}


class ValidationError(JsonUIError):
    """Schema or field-check failure."""

    code = "VALIDATION_ERROR"

    def __init__(
        self, message: str, field: str | None = None, errors: list[str] | None = None
    ) -> None:
        super().__init__(message, details={"field": field, "errors": errors or []})
        self.field = field
        self.errors = errors or []


class CatalogError(JsonUIError):
    """Reference to an unknown component, action or function."""

    code = "CATALOG_ERROR"

    def __init__(self, message: str, component_type: str | None = None) -> None:
        super().__init__(message, details={"component_type": component_type})
        self.component_type = component_type


class ActionError(JsonUIError):
    """Action execution failed."""

    code = "ACTION_ERROR"

    def __init__(
        self,
        message: str,
        action_name: str | None = None,
        original: BaseException | None = None,
    ) -> None:
        super().__init__(message, details={"action_name": action_name})
        self.action_name = action_name
        self.original = original
        self.__cause__ = original


class ActionCancelledError(ActionError):
    """User declined the confirmation dialog."""

    def __init__(self, action_name: str | None = None) -> None:
        super().__init__("Action cancelled", action_name=action_name)


class StreamError(JsonUIError):
    """Patch stream transport failed."""

    code = "STREAM_ERROR"

    def __init__(
        self,
        message: str,
        chunk: str | None = None,
        original: BaseException | None = None,
    ) -> None:
        super().__init__(message, details={"chunk": chunk})
        self.chunk = chunk
        self.original = original
        self.__cause__ = original


class RenderError(JsonUIError):
    """Host-side rendering failure."""

    code = "RENDER_ERROR"

    def __init__(
        self,
        message: str,
        element_key: str | None = None,
        component_type: str | None = None,
    ) -> None:
        super().__init__(
            message, details={"element_key": element_key, "component_type": component_type}
        )
        self.element_key = element_key
        self.component_type = component_type


class PathConflictError(JsonUIError):
    """Path write met a scalar mid-path in strict mode, or a bad list index."""

    code = "PATH_CONFLICT"

    def __init__(self, path: str, segment: str, found: Any) -> None:
        super().__init__(
            f"Cannot write through '{segment}' in '{path}': found {type(found).__name__}",
            details={"path": path, "segment": segment},
        )
        self.path = path
        self.segment = segment


def get_error_message(error: BaseException | Any) -> str:
    """Convert any error to a user-facing message."""
    if isinstance(error, JsonUIError):
        return error.message
    return str(error)


def log_error(error: BaseException | Any, context: str | None = None) -> None:
    """Log an error at the level its category deserves."""
    fields: dict[str, Any] = {"context": context} if context else {}

    if isinstance(error, ValidationError):
        logger.warning("validation_error", error=error.message, **error.details, **fields)
    elif isinstance(error, JsonUIError):
        logger.error(
            error.code.lower(),
            error=error.message,
            **error.details,
            **fields,
        )
    elif isinstance(error, BaseException):
        logger.error("error", error=str(error), exc_info=error, **fields)
    else:
        logger.error("unknown_error", error=repr(error), **fields)
