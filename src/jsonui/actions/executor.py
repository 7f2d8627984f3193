"""Action resolution and execution."""

import inspect
from typing import Any

from ..core.logging_config import get_logger
from ..data.dynamic import interpolate_string, resolve_dynamic_value
from .models import (
    ERROR_MESSAGE_SENTINEL,
    Action,
    ActionExecutionContext,
    FollowUp,
    Navigate,
    ResolvedAction,
    SetData,
)

logger = get_logger(__name__)


def resolve_action(action: Action | dict[str, Any], data_model: Any) -> ResolvedAction:
    """
    Resolve parameters and confirmation text against the data model.

    Args:
        action: Declared action (model or wire JSON)
        data_model: Data model snapshot

    Returns:
        ResolvedAction with concrete params and interpolated confirm text
    """
    if not isinstance(action, Action):
        action = Action.model_validate(action)

    params = {
        key: resolve_dynamic_value(value, data_model) for key, value in (action.params or {}).items()
    }

    confirm = action.confirm
    if confirm is not None:
        confirm = confirm.model_copy(
            update={
                "title": interpolate_string(confirm.title, data_model),
                "message": interpolate_string(confirm.message, data_model),
            }
        )

    return ResolvedAction(
        name=action.name,
        params=params,
        confirm=confirm,
        on_success=action.on_success,
        on_error=action.on_error,
    )


async def _call(handler: Any, params: dict[str, Any]) -> Any:
    result = handler(params)
    if inspect.isawaitable(result):
        result = await result
    return result


async def execute_action(ctx: ActionExecutionContext) -> None:
    """
    Run the handler, then exactly one continuation.

    On success: navigate, write values, or run a follow-up action. On
    failure: write values (``"$error.message"`` becomes the error text) or
    run a follow-up action; without ``onError`` the error propagates.

    Raises:
        Exception: whatever the handler raised, when no onError is declared
    """
    action = ctx.action

    try:
        await _call(ctx.handler, action.params)
    except Exception as error:
        if action.on_error is None:
            raise

        logger.info("action_failed", action=action.name, error=str(error))
        match action.on_error:
            case SetData(values=values):
                for path, value in values.items():
                    ctx.set_data(path, str(error) if value == ERROR_MESSAGE_SENTINEL else value)
            case FollowUp(action=name) if ctx.execute_action:
                await ctx.execute_action(name)
        return

    match action.on_success:
        case Navigate(navigate=target) if ctx.navigate:
            ctx.navigate(target)
        case SetData(values=values):
            for path, value in values.items():
                ctx.set_data(path, value)
        case FollowUp(action=name) if ctx.execute_action:
            await ctx.execute_action(name)
        case None:
            pass
        case _:
            logger.debug("continuation_skipped", action=action.name)
