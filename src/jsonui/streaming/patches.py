"""Patch records and their application to tree snapshots."""

from collections.abc import Mapping
from typing import Any

import msgspec
from pydantic import ValidationError as PydanticValidationError

from ..core.json import JSONParseError, decode_json, validate_json_depth, validate_json_size
from ..core.logging_config import resolve_logger
from .tree import Element, UITree

ROOT_PATH = "/root"
ELEMENTS_PREFIX = "/elements/"

PATCH_OPS = frozenset({"set", "add", "remove", "replace"})

DEFAULT_MAX_LINE_SIZE = 256 * 1024
DEFAULT_MAX_DEPTH = 32


class JsonPatch(msgspec.Struct, frozen=True):
    """One patch instruction: ``{"op", "path", "value"?}``."""

    op: str
    path: str
    value: Any = None


def parse_patch_line(
    line: str,
    max_size: int = DEFAULT_MAX_LINE_SIZE,
    max_depth: int = DEFAULT_MAX_DEPTH,
    logger: Any | None = None,
) -> JsonPatch | None:
    """
    Parse one stream line into a patch.

    Blank lines are skipped silently; anything else that is not a patch
    object is logged and skipped.

    Args:
        line: One line of the stream, without its newline
        max_size: Reject lines larger than this many bytes
        max_depth: Reject values nested deeper than this
        logger: Optional injected logger

    Returns:
        The patch, or None
    """
    log = resolve_logger(logger, __name__)
    text = line.strip()
    if not text:
        return None

    try:
        validate_json_size(text, max_size, "Patch line")
        data = decode_json(text)
        validate_json_depth(data, max_depth)
    except JSONParseError as e:
        log.warning("patch_parse_failed", error=str(e), line=text[:200])
        return None

    if not isinstance(data, dict):
        log.warning("patch_not_object", type=type(data).__name__)
        return None

    try:
        patch = msgspec.convert(data, type=JsonPatch)
    except msgspec.ValidationError as e:
        log.warning("patch_invalid", error=str(e), line=text[:200])
        return None

    if not patch.op or not patch.path:
        log.warning("patch_incomplete", op=patch.op, path=patch.path)
        return None
    return patch


def _element_from(key: str, value: Any, log: Any) -> Element | None:
    if not isinstance(value, Mapping):
        log.warning("element_not_object", key=key, type=type(value).__name__)
        return None
    data = dict(value)
    data.setdefault("key", key)
    try:
        return Element.model_validate(data)
    except PydanticValidationError as e:
        log.warning("element_invalid", key=key, errors=e.error_count())
        return None


def _element_key(path: str) -> str | None:
    if not path.startswith(ELEMENTS_PREFIX):
        return None
    key = path[len(ELEMENTS_PREFIX) :]
    return key or None


def apply_patch(tree: UITree, patch: JsonPatch, logger: Any | None = None) -> UITree:
    """
    Apply one patch, returning a new snapshot.

    ``set``/``replace`` on ``/root`` move the root pointer; ``add``/``replace``
    on ``/elements/<key>`` insert or overwrite an element; ``remove`` deletes
    one. Anything else leaves the tree unchanged and is logged.
    """
    log = resolve_logger(logger, __name__)
    op, path, value = patch.op, patch.path, patch.value

    if op not in PATCH_OPS:
        log.warning("unknown_patch_op", op=op, path=path)
        return tree

    if path == ROOT_PATH:
        if op in ("set", "replace") and isinstance(value, str):
            return tree.with_root(value)
        log.warning("unsupported_root_patch", op=op, value_type=type(value).__name__)
        return tree

    key = _element_key(path)
    if key is None:
        log.warning("unknown_patch_path", op=op, path=path)
        return tree

    match op:
        case "add" | "replace":
            element = _element_from(key, value, log)
            if element is None:
                return tree
            return tree.with_element(key, element)
        case "remove":
            return tree.without_element(key)
        case _:
            log.warning("unsupported_element_patch", op=op, path=path)
            return tree
