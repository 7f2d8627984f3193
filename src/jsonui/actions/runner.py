"""Host-side action runner: handlers, confirmation and loading state."""

import asyncio
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from returns.result import Failure

from ..core.errors import ActionCancelledError
from ..core.logging_config import resolve_logger
from ..data.store import DataStore
from .executor import execute_action, resolve_action
from .models import Action, ActionExecutionContext, ActionHandler, ResolvedAction

if TYPE_CHECKING:
    from ..catalog.catalog import Catalog


@dataclass
class PendingConfirmation:
    """An action waiting for the user to confirm or cancel."""

    action: ResolvedAction
    future: asyncio.Future[bool]


class ActionRunner:
    """
    Executes declared actions against a data store.

    Actions with a ``confirm`` block wait on ``confirm()`` or ``cancel()``;
    cancelling raises ``ActionCancelledError`` and never reaches the handler.
    """

    def __init__(
        self,
        store: DataStore,
        handlers: Mapping[str, ActionHandler] | None = None,
        navigate: Callable[[str], None] | None = None,
        catalog: "Catalog | None" = None,
        on_confirm_request: Callable[[PendingConfirmation], None] | None = None,
        logger: Any | None = None,
    ) -> None:
        self.store = store
        self.handlers: dict[str, ActionHandler] = dict(handlers or {})
        self.navigate = navigate
        self.catalog = catalog
        self.on_confirm_request = on_confirm_request
        self.logger = resolve_logger(logger, __name__)
        self.pending_confirmation: PendingConfirmation | None = None
        self._loading: dict[str, int] = {}

    def register(self, name: str, handler: ActionHandler) -> None:
        self.handlers[name] = handler

    @property
    def loading_actions(self) -> frozenset[str]:
        """Names of actions currently running."""
        return frozenset(self._loading)

    def is_loading(self, name: str) -> bool:
        return name in self._loading

    async def _await_confirmation(self, resolved: ResolvedAction) -> None:
        if self.pending_confirmation is not None:
            # A newer request supersedes the dialog on screen
            self.cancel()
        future: asyncio.Future[bool] = asyncio.get_running_loop().create_future()
        pending = PendingConfirmation(action=resolved, future=future)
        self.pending_confirmation = pending
        if self.on_confirm_request:
            self.on_confirm_request(pending)
        try:
            confirmed = await future
        finally:
            if self.pending_confirmation is pending:
                self.pending_confirmation = None
        if not confirmed:
            self.logger.info("action_cancelled", action=resolved.name)
            raise ActionCancelledError(resolved.name)

    def confirm(self) -> None:
        """Accept the pending confirmation."""
        pending = self.pending_confirmation
        if pending is not None and not pending.future.done():
            pending.future.set_result(True)

    def cancel(self) -> None:
        """Reject the pending confirmation."""
        pending = self.pending_confirmation
        if pending is not None and not pending.future.done():
            pending.future.set_result(False)

    def _check_params(self, resolved: ResolvedAction) -> None:
        if self.catalog is None:
            return
        result = self.catalog.validate_params(resolved.name, resolved.params)
        if isinstance(result, Failure):
            raise result.failure().to_exception(field=resolved.name)

    async def execute(self, action: Action | dict[str, Any]) -> None:
        """
        Resolve and run an action.

        Raises:
            ActionCancelledError: the confirmation was cancelled
            ValidationError: resolved params fail the catalog's schema
            Exception: handler failure with no onError continuation
        """
        resolved = resolve_action(action, self.store.data)
        handler = self.handlers.get(resolved.name)
        if handler is None:
            self.logger.warning("no_handler", action=resolved.name)
            return

        self._check_params(resolved)

        if resolved.confirm is not None:
            await self._await_confirmation(resolved)

        self._loading[resolved.name] = self._loading.get(resolved.name, 0) + 1
        try:
            await execute_action(
                ActionExecutionContext(
                    action=resolved,
                    handler=handler,
                    set_data=self.store.set,
                    navigate=self.navigate,
                    execute_action=self._follow_up,
                )
            )
        finally:
            remaining = self._loading[resolved.name] - 1
            if remaining:
                self._loading[resolved.name] = remaining
            else:
                del self._loading[resolved.name]

    async def _follow_up(self, name: str) -> None:
        await self.execute(Action(name=name))
