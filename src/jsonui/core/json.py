"""JSON codec for patch lines and request bodies (msgspec decode, orjson encode)."""

from typing import Any
import json

import msgspec
import orjson


class JSONParseError(Exception):
    """A document could not be decoded or broke a size/depth limit."""

    def __init__(self, message: str, original: Exception | None = None) -> None:
        super().__init__(message)
        self.original = original


_decoder = msgspec.json.Decoder()


def decode_json(data: str | bytes) -> Any:
    """
    Decode one JSON document.

    Raises:
        JSONParseError: If the document is not valid JSON
    """
    raw = data.encode("utf-8") if isinstance(data, str) else data
    try:
        return _decoder.decode(raw)
    except msgspec.DecodeError as e:
        raise JSONParseError(f"Invalid JSON: {e}", e) from e


def safe_json_dumps(obj: Any, indent: int | None = None) -> str:
    """
    Encode ``obj`` compactly with orjson, or indented with two spaces.

    Values orjson refuses (non-string keys, ints past 64 bits) go through
    the stdlib encoder, stringifying anything it cannot represent.
    """
    if indent == 2:
        option = orjson.OPT_INDENT_2
    elif not indent:
        option = 0
    else:
        return json.dumps(obj, indent=indent, default=str)

    try:
        return orjson.dumps(obj, option=option).decode("utf-8")
    except TypeError:
        return json.dumps(obj, indent=indent or None, default=str)


def validate_json_size(data: str | bytes, max_size: int, name: str = "JSON") -> None:
    """Reject documents larger than ``max_size`` UTF-8 bytes."""
    size = len(data) if isinstance(data, bytes) else len(data.encode("utf-8"))
    if size > max_size:
        raise JSONParseError(f"{name} size {size} bytes exceeds maximum {max_size} bytes")


def validate_json_depth(obj: Any, max_depth: int = 32) -> None:
    """
    Reject decoded values nested deeper than ``max_depth`` containers.

    Walks iteratively so hostile input cannot exhaust the interpreter stack.
    """
    stack: list[tuple[Any, int]] = [(obj, 0)]
    while stack:
        value, depth = stack.pop()
        if depth > max_depth:
            raise JSONParseError(f"JSON nesting depth {depth} exceeds maximum {max_depth}")
        if isinstance(value, dict):
            stack.extend((child, depth + 1) for child in value.values())
        elif isinstance(value, list):
            stack.extend((child, depth + 1) for child in value)
