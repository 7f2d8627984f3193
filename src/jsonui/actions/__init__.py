"""Action resolution, execution and the host-side runner."""

from .models import (
    ERROR_MESSAGE_SENTINEL,
    Action,
    ActionConfirm,
    ActionExecutionContext,
    ActionHandler,
    FollowUp,
    Navigate,
    OnError,
    OnSuccess,
    ResolvedAction,
    SetData,
)
from .executor import execute_action, resolve_action
from .runner import ActionRunner, PendingConfirmation
from ..data.dynamic import interpolate_string

__all__ = [
    "ERROR_MESSAGE_SENTINEL",
    "Action",
    "ActionConfirm",
    "ActionExecutionContext",
    "ActionHandler",
    "FollowUp",
    "Navigate",
    "OnError",
    "OnSuccess",
    "ResolvedAction",
    "SetData",
    "execute_action",
    "resolve_action",
    "interpolate_string",
    "ActionRunner",
    "PendingConfirmation",
]
