"""Validation check declarations and results."""

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any, Literal, TypeAlias

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..data.dynamic import DynamicValue
from ..logic.models import AuthState

ValidationFunction: TypeAlias = Callable[[Any, Mapping[str, Any]], bool]
ValidateOn: TypeAlias = Literal["change", "blur", "submit"]


class ValidationCheck(BaseModel):
    """One named predicate with arguments and a failure message."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    fn: str
    args: dict[str, DynamicValue] | None = None
    message: str


class ValidationConfig(BaseModel):
    """Checks for one field, when to run them, and whether they apply."""

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    checks: tuple[ValidationCheck, ...] | None = None
    validate_on: ValidateOn | None = Field(default=None, alias="validateOn")
    # Raw LogicExpression; unparseable shapes evaluate to False (disabled)
    enabled: Any | None = None

    @field_validator("validate_on", mode="before")
    @classmethod
    def _known_trigger(cls, v: Any) -> Any:
        # Unknown triggers fall back to the default (submit only)
        return v if v in ("change", "blur", "submit") else None


@dataclass(frozen=True)
class ValidationCheckResult:
    """Outcome of a single check."""

    fn: str
    valid: bool
    message: str


@dataclass(frozen=True)
class FieldValidationResult:
    """Aggregate outcome for a field."""

    valid: bool
    errors: list[str] = field(default_factory=list)
    checks: list[ValidationCheckResult] = field(default_factory=list)


@dataclass(frozen=True)
class ValidationContext:
    """Value under test plus everything its checks may consult."""

    value: Any
    data_model: Any
    auth_state: AuthState | None = None
    custom_functions: Mapping[str, ValidationFunction] | None = None
