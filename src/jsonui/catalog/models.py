"""Catalog declarations and schema validation results."""

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

from ..core.errors import ValidationError


@dataclass(frozen=True)
class ComponentDefinition:
    """
    A component type the generator may use.

    ``props`` is anything pydantic can validate: a BaseModel subclass, or a
    typing construct such as ``dict[str, Any]`` for permissive props.
    """

    props: Any = dict[str, Any]
    has_children: bool = False
    description: str | None = None


@dataclass(frozen=True)
class ActionDefinition:
    """A named action; ``params`` optionally schemas its resolved parameters."""

    params: Any | None = None
    description: str | None = None


@dataclass(frozen=True)
class SchemaIssue:
    """One schema violation at a slash path."""

    path: str
    message: str

    def __str__(self) -> str:
        return f"{self.path or '/'}: {self.message}"


@dataclass(frozen=True)
class SchemaError:
    """Every violation found while validating one value."""

    issues: tuple[SchemaIssue, ...] = field(default_factory=tuple)

    @classmethod
    def single(cls, path: str, message: str) -> "SchemaError":
        return cls(issues=(SchemaIssue(path, message),))

    @property
    def message(self) -> str:
        return "; ".join(str(issue) for issue in self.issues)

    @property
    def paths(self) -> list[str]:
        return [issue.path for issue in self.issues]

    def __add__(self, other: "SchemaError") -> "SchemaError":
        return SchemaError(issues=self.issues + other.issues)

    def to_exception(self, field: str | None = None) -> ValidationError:
        """Raise-able form for hosts that prefer exceptions."""
        return ValidationError(self.message, field=field, errors=[str(i) for i in self.issues])


def loc_to_path(loc: Sequence[Any]) -> str:
    return "/" + "/".join(str(part) for part in loc) if loc else ""
