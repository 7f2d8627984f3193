"""Data model addressing and dynamic values."""

from .paths import get_by_path, set_by_path, split_path
from .dynamic import (
    DynamicNumber,
    DynamicValue,
    PathRef,
    interpolate_string,
    is_number,
    is_path_ref,
    is_truthy,
    resolve_dynamic_value,
    resolve_props,
    strict_equals,
    to_display_string,
)
from .store import DataStore

__all__ = [
    "get_by_path",
    "set_by_path",
    "split_path",
    "DynamicValue",
    "DynamicNumber",
    "PathRef",
    "interpolate_string",
    "is_number",
    "is_path_ref",
    "is_truthy",
    "to_display_string",
    "resolve_dynamic_value",
    "resolve_props",
    "strict_equals",
    "DataStore",
]
