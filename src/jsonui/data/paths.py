"""Slash-delimited pointers into a nested data model."""

from collections.abc import Mapping, MutableMapping
from typing import Any

from ..core.errors import PathConflictError


def split_path(path: str) -> list[str]:
    """Split a pointer into segments; the leading slash is optional."""
    if not path or path == "/":
        return []
    return (path[1:] if path.startswith("/") else path).split("/")


def _index(items: list[Any], segment: str) -> int | None:
    """A list position for ``segment``, or None when it is not an in-range index."""
    if segment.isascii() and segment.isdigit():
        index = int(segment)
        if index < len(items):
            return index
    return None


def get_by_path(root: Any, path: str) -> Any:
    """
    Read the value a pointer addresses.

    Args:
        root: Data model (nested mappings and lists)
        path: Pointer such as ``/user/name`` or ``/items/0/name``; ``""`` and
            ``"/"`` address root

    Returns:
        The addressed value, or None when any step is missing or not a container
    """
    current = root
    for segment in split_path(path):
        if isinstance(current, Mapping):
            current = current.get(segment)
        elif isinstance(current, list):
            index = _index(current, segment)
            current = None if index is None else current[index]
        else:
            return None
    return current


def _child(container: Any, segment: str) -> Any:
    if isinstance(container, list):
        index = _index(container, segment)
        return None if index is None else container[index]
    return container.get(segment)


def _assign(container: Any, segment: str, value: Any, path: str) -> None:
    if isinstance(container, list):
        index = _index(container, segment)
        if index is None:
            raise PathConflictError(path, segment, container)
        container[index] = value
    else:
        container[segment] = value


def set_by_path(
    root: MutableMapping[str, Any], path: str, value: Any, strict: bool = False
) -> None:
    """
    Write a value at a pointer, mutating ``root`` in place.

    Missing intermediate containers are created. Lists are stepped into by
    index. A scalar found mid-path is replaced by an empty dict unless
    ``strict`` is set; a list is never replaced.

    Args:
        root: Mutable data model
        path: Pointer to write
        value: Value to store (whole value, never merged)
        strict: Raise instead of overwriting a scalar mid-path

    Raises:
        PathConflictError: strict mode met a scalar, or a segment is not an
            in-range index of the list it addresses
    """
    segments = [segment for segment in split_path(path) if segment]
    if not segments:
        return

    current: Any = root
    for segment in segments[:-1]:
        existing = _child(current, segment)
        if not isinstance(existing, (MutableMapping, list)):
            if strict and existing is not None:
                raise PathConflictError(path, segment, existing)
            existing = {}
            _assign(current, segment, existing, path)
        current = existing

    _assign(current, segments[-1], value, path)
