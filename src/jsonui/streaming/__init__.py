"""
Streaming tree construction
Applies line-delimited JSON patches to immutable tree snapshots.
"""

from .tree import Element, UITree
from .patches import JsonPatch, PATCH_OPS, apply_patch, parse_patch_line
from .builder import TreeBuilder
from .session import HttpPatchSource, PatchSource, UIStream

__all__ = [
    "Element",
    "UITree",
    "JsonPatch",
    "PATCH_OPS",
    "apply_patch",
    "parse_patch_line",
    "TreeBuilder",
    "HttpPatchSource",
    "PatchSource",
    "UIStream",
]
