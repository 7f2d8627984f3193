"""Dynamic values: literals or deferred lookups into the data model."""

import math
import re
from collections.abc import Mapping
from typing import Any, TypeAlias

from pydantic import BaseModel, ConfigDict, StrictBool, StrictFloat, StrictInt, StrictStr

from .paths import get_by_path


class PathRef(BaseModel):
    """Deferred lookup ``{"path": "/a/b"}``."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    path: str


DynamicValue: TypeAlias = PathRef | StrictStr | StrictInt | StrictFloat | StrictBool | None
DynamicNumber: TypeAlias = PathRef | StrictInt | StrictFloat

_PLACEHOLDER = re.compile(r"\$\{([^}]+)\}")


def is_path_ref(value: Any) -> bool:
    """True for a PathRef or any mapping carrying a ``path`` key."""
    return isinstance(value, PathRef) or (isinstance(value, Mapping) and "path" in value)


def resolve_dynamic_value(value: Any, data_model: Any) -> Any:
    """
    Resolve a dynamic value against the data model.

    Args:
        value: Literal, PathRef or ``{"path": ...}`` mapping
        data_model: Data model to read from

    Returns:
        The literal unchanged, or the value the pointer addresses
    """
    if value is None:
        return None
    if isinstance(value, PathRef):
        return get_by_path(data_model, value.path)
    if isinstance(value, Mapping) and "path" in value:
        return get_by_path(data_model, value["path"])
    return value


def to_display_string(value: Any) -> str:
    """Render a resolved value the way it appears on the wire."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def interpolate_string(template: str, data_model: Any) -> str:
    """Replace every ``${path}`` placeholder with its resolved value."""
    return _PLACEHOLDER.sub(
        lambda match: to_display_string(get_by_path(data_model, match.group(1))), template
    )


def is_number(value: Any) -> bool:
    """Real numbers only; booleans are not numbers here."""
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def is_truthy(value: Any) -> bool:
    """
    Truthiness as the wire format defines it.

    ``None``, ``False``, ``0``, ``NaN`` and ``""`` are falsy; everything else,
    including empty lists and objects, is truthy.
    """
    if value is None or value is False:
        return False
    if is_number(value):
        return value != 0 and not math.isnan(value)
    if isinstance(value, str):
        return value != ""
    return True


def strict_equals(left: Any, right: Any) -> bool:
    """Equality without cross-type coercion."""
    if isinstance(left, bool) or isinstance(right, bool):
        return isinstance(left, bool) and isinstance(right, bool) and left == right
    if isinstance(left, (Mapping, list)) or isinstance(right, (Mapping, list)):
        return left is right
    if is_number(left) != is_number(right):
        return False
    return left == right


def resolve_props(props: Mapping[str, Any], data_model: Any) -> dict[str, Any]:
    """Resolve top-level dynamic values in a props mapping."""
    return {key: resolve_dynamic_value(value, data_model) for key, value in props.items()}
