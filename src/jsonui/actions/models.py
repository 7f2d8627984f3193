"""Action declarations, continuations and resolved actions."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import Any, Literal, TypeAlias, Union

from pydantic import BaseModel, ConfigDict, Field

from ..data.dynamic import DynamicValue

ERROR_MESSAGE_SENTINEL = "$error.message"

ActionHandler: TypeAlias = Callable[[dict[str, Any]], Awaitable[Any] | Any]


class _Variant(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)


class ActionConfirm(_Variant):
    """Confirmation dialog shown before the handler runs."""

    title: str
    message: str
    confirm_label: str | None = Field(default=None, alias="confirmLabel")
    cancel_label: str | None = Field(default=None, alias="cancelLabel")
    variant: Literal["default", "danger"] | None = None


class Navigate(_Variant):
    navigate: str


class SetData(_Variant):
    values: dict[str, Any] = Field(alias="set")


class FollowUp(_Variant):
    action: str


OnSuccess: TypeAlias = Union[Navigate, SetData, FollowUp]
OnError: TypeAlias = Union[SetData, FollowUp]


class Action(_Variant):
    """
    Declared action.

    ``name`` must exist in the catalog; ``params`` values may be dynamic.
    """

    name: str
    params: dict[str, DynamicValue] | None = None
    confirm: ActionConfirm | None = None
    on_success: OnSuccess | None = Field(default=None, alias="onSuccess")
    on_error: OnError | None = Field(default=None, alias="onError")


@dataclass(frozen=True)
class ResolvedAction:
    """Action with every dynamic value evaluated against one data snapshot."""

    name: str
    params: dict[str, Any] = field(default_factory=dict)
    confirm: ActionConfirm | None = None
    on_success: OnSuccess | None = None
    on_error: OnError | None = None


@dataclass(frozen=True)
class ActionExecutionContext:
    """Everything one execution needs from its host."""

    action: ResolvedAction
    handler: ActionHandler
    set_data: Callable[[str, Any], None]
    navigate: Callable[[str], None] | None = None
    execute_action: Callable[[str], Awaitable[None]] | None = None
