"""Built-in validation predicates.

Each predicate takes the field value and its resolved arguments and
returns True when the value passes.
"""

import math
import re
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from pydantic import AnyUrl, TypeAdapter, ValidationError as PydanticValidationError

from ..data.dynamic import is_number, strict_equals
from .models import ValidationFunction

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

_URL_ADAPTER = TypeAdapter(AnyUrl)


def required(value: Any, args: Mapping[str, Any]) -> bool:
    if value is None:
        return False
    if isinstance(value, str):
        return len(value.strip()) > 0
    if isinstance(value, (list, tuple)):
        return len(value) > 0
    return True


def email(value: Any, args: Mapping[str, Any]) -> bool:
    return isinstance(value, str) and EMAIL_PATTERN.match(value) is not None


def min_length(value: Any, args: Mapping[str, Any]) -> bool:
    bound = args.get("min")
    return isinstance(value, str) and is_number(bound) and len(value) >= bound


def max_length(value: Any, args: Mapping[str, Any]) -> bool:
    bound = args.get("max")
    return isinstance(value, str) and is_number(bound) and len(value) <= bound


def pattern(value: Any, args: Mapping[str, Any]) -> bool:
    source = args.get("pattern")
    if not isinstance(value, str) or not isinstance(source, str):
        return False
    try:
        compiled = re.compile(source)
    except re.error:
        return False
    return compiled.search(value) is not None


def minimum(value: Any, args: Mapping[str, Any]) -> bool:
    bound = args.get("min")
    return is_number(value) and is_number(bound) and value >= bound


def maximum(value: Any, args: Mapping[str, Any]) -> bool:
    bound = args.get("max")
    return is_number(value) and is_number(bound) and value <= bound


def numeric(value: Any, args: Mapping[str, Any]) -> bool:
    if is_number(value):
        return math.isfinite(value)
    if isinstance(value, str):
        try:
            return math.isfinite(float(value.strip()))
        except ValueError:
            return False
    return False


def url(value: Any, args: Mapping[str, Any]) -> bool:
    if not isinstance(value, str):
        return False
    try:
        _URL_ADAPTER.validate_python(value)
    except PydanticValidationError:
        return False
    return True


def matches(value: Any, args: Mapping[str, Any]) -> bool:
    return strict_equals(value, args.get("other"))


BUILTIN_FUNCTIONS: Mapping[str, ValidationFunction] = MappingProxyType(
    {
        "required": required,
        "email": email,
        "minLength": min_length,
        "maxLength": max_length,
        "pattern": pattern,
        "min": minimum,
        "max": maximum,
        "numeric": numeric,
        "url": url,
        "matches": matches,
    }
)
