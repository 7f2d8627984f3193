"""Elements and immutable tree snapshots."""

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class Element(BaseModel):
    """One keyed, typed node of the UI tree."""

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    key: str
    type: str
    props: dict[str, Any] = Field(default_factory=dict)
    children: tuple[str, ...] | None = None
    parent_key: str | None = Field(default=None, alias="parentKey")
    visible: Any | None = None

    def to_dict(self) -> dict[str, Any]:
        """Wire-shaped dict without unset optional fields."""
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


def _frozen(elements: dict[str, Element]) -> Mapping[str, Element]:
    return MappingProxyType(elements)


@dataclass(frozen=True)
class UITree:
    """
    Immutable snapshot of a flat UI tree.

    Derived snapshots copy only the key index; untouched Element records are
    shared with the predecessor, so holders of an older snapshot never see
    later patches.
    """

    root: str = ""
    elements: Mapping[str, Element] = field(default_factory=lambda: _frozen({}))

    def with_root(self, key: str) -> "UITree":
        return UITree(root=key, elements=self.elements)

    def with_element(self, key: str, element: Element) -> "UITree":
        elements = dict(self.elements)
        elements[key] = element
        return UITree(root=self.root, elements=_frozen(elements))

    def without_element(self, key: str) -> "UITree":
        if key not in self.elements:
            return self
        elements = dict(self.elements)
        del elements[key]
        return UITree(root=self.root, elements=_frozen(elements))

    def get(self, key: str) -> Element | None:
        return self.elements.get(key)

    @property
    def root_element(self) -> Element | None:
        return self.elements.get(self.root) if self.root else None

    def children_of(self, key: str) -> Iterator[Element]:
        """Children that have arrived, in declared order."""
        parent = self.elements.get(key)
        for child_key in (parent.children or ()) if parent else ():
            child = self.elements.get(child_key)
            if child is not None:
                yield child

    def missing_keys(self) -> list[str]:
        """Root or child keys referenced but not (yet) present."""
        missing: list[str] = []
        if not self.root or self.root not in self.elements:
            missing.append(self.root)
        for element in self.elements.values():
            for child_key in element.children or ():
                if child_key not in self.elements and child_key not in missing:
                    missing.append(child_key)
        return missing

    @property
    def is_complete(self) -> bool:
        """Root resolves and no child reference dangles."""
        return not self.missing_keys()

    def to_dict(self) -> dict[str, Any]:
        return {
            "root": self.root,
            "elements": {key: element.to_dict() for key, element in self.elements.items()},
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "UITree":
        """Build a snapshot from wire JSON (raises on malformed elements)."""
        elements = {
            key: value if isinstance(value, Element) else Element.model_validate(value)
            for key, value in (data.get("elements") or {}).items()
        }
        return cls(root=data.get("root") or "", elements=_frozen(elements))
