"""Host-owned mutable data model."""

import copy
from collections.abc import Callable, Mapping
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from ..core.config import get_settings
from ..core.logging_config import get_logger
from .paths import get_by_path, set_by_path

if TYPE_CHECKING:
    from ..logic.models import AuthState

logger = get_logger(__name__)

ChangeCallback = Callable[[str, Any], None]


class DataStore:
    """
    Single shared store that every data-model write funnels through.

    Writes replace the whole value at a path; nothing is merged.
    """

    def __init__(
        self,
        initial: Mapping[str, Any] | None = None,
        auth_state: "AuthState | None" = None,
        on_change: ChangeCallback | None = None,
        strict: bool | None = None,
    ) -> None:
        self._data: dict[str, Any] = dict(initial) if initial else {}
        self.auth_state = auth_state
        self.on_change = on_change
        self.strict = get_settings().strict_paths if strict is None else strict

    @property
    def data(self) -> Mapping[str, Any]:
        """Read-only view of the top level."""
        return MappingProxyType(self._data)

    def get(self, path: str) -> Any:
        return get_by_path(self._data, path)

    def set(self, path: str, value: Any) -> None:
        set_by_path(self._data, path, value, strict=self.strict)
        logger.debug("data_set", path=path)
        if self.on_change:
            self.on_change(path, value)

    def update(self, updates: Mapping[str, Any]) -> None:
        """Apply several writes in order."""
        for path, value in updates.items():
            self.set(path, value)

    def snapshot(self) -> dict[str, Any]:
        """Deep copy for consumers that must not observe later writes."""
        return copy.deepcopy(self._data)
