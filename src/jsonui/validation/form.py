"""Field registry that validates a form against the data store."""

from collections.abc import Mapping
from typing import Any

from ..core.logging_config import resolve_logger
from ..data.store import DataStore
from .engine import run_validation, should_validate
from .models import (
    FieldValidationResult,
    ValidateOn,
    ValidationConfig,
    ValidationContext,
    ValidationFunction,
)


class FormValidator:
    """
    Tracks validation configs per field path and the latest result of each.

    Field values are read from the data store at validation time.
    """

    def __init__(
        self,
        store: DataStore,
        custom_functions: Mapping[str, ValidationFunction] | None = None,
        logger: Any | None = None,
    ) -> None:
        self.store = store
        self.custom_functions = custom_functions
        self.logger = resolve_logger(logger, __name__)
        self._configs: dict[str, ValidationConfig] = {}
        self._results: dict[str, FieldValidationResult] = {}

    def register(self, path: str, config: ValidationConfig | dict[str, Any]) -> None:
        if not isinstance(config, ValidationConfig):
            config = ValidationConfig.model_validate(config)
        self._configs[path] = config

    def unregister(self, path: str) -> None:
        self._configs.pop(path, None)
        self._results.pop(path, None)

    def _run(self, path: str, config: ValidationConfig) -> FieldValidationResult:
        result = run_validation(
            config,
            ValidationContext(
                value=self.store.get(path),
                data_model=self.store.data,
                auth_state=self.store.auth_state,
                custom_functions=self.custom_functions,
            ),
        )
        self._results[path] = result
        return result

    def validate_field(self, path: str, trigger: ValidateOn = "submit") -> FieldValidationResult | None:
        """
        Validate one field if the trigger applies to it.

        Returns:
            The new result, or None when the field is unknown or the
            trigger does not run its checks
        """
        config = self._configs.get(path)
        if config is None or not should_validate(config, trigger):
            return None
        return self._run(path, config)

    def validate_all(self) -> bool:
        """Validate every field as on submit; True when all pass."""
        results = [self._run(path, config) for path, config in self._configs.items()]
        valid = all(result.valid for result in results)
        if not valid:
            self.logger.info(
                "form_invalid", failed=[path for path, r in self._results.items() if not r.valid]
            )
        return valid

    @property
    def errors(self) -> dict[str, list[str]]:
        """Failure messages of the latest results, by field path."""
        return {path: result.errors for path, result in self._results.items() if result.errors}

    def result(self, path: str) -> FieldValidationResult | None:
        return self._results.get(path)

    def clear(self, path: str | None = None) -> None:
        """Forget results for one field or for all."""
        if path is None:
            self._results.clear()
        else:
            self._results.pop(path, None)
