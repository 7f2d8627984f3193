"""Helpers for hosts that render a UITree."""

from collections.abc import Iterator
from typing import Any

from .data.dynamic import resolve_props
from .logic.evaluate import VisibilityContext, evaluate_visibility
from .streaming.tree import Element, UITree


def is_element_visible(element: Element, ctx: VisibilityContext) -> bool:
    return evaluate_visibility(element.visible, ctx)


def visible_children(tree: UITree, key: str, ctx: VisibilityContext) -> Iterator[Element]:
    """Children of ``key`` that have arrived and are visible, in declared order."""
    for child in tree.children_of(key):
        if is_element_visible(child, ctx):
            yield child


def resolve_element_props(element: Element, data_model: Any) -> dict[str, Any]:
    """Props with top-level path references replaced by data model values."""
    return resolve_props(element.props, data_model)
