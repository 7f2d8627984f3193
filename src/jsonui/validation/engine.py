"""Run validation checks against field values."""

from typing import Any

from pydantic import ValidationError as PydanticValidationError

from ..core.logging_config import get_logger
from ..data.dynamic import resolve_dynamic_value
from ..logic.evaluate import VisibilityContext, evaluate_logic_expression
from .functions import BUILTIN_FUNCTIONS
from .models import (
    FieldValidationResult,
    ValidateOn,
    ValidationCheck,
    ValidationCheckResult,
    ValidationConfig,
    ValidationContext,
    ValidationFunction,
)

logger = get_logger(__name__)

DEFAULT_TRIGGER: ValidateOn = "submit"
INVALID_CONFIG_MESSAGE = "Invalid validation config"


def _lookup(name: str, ctx: ValidationContext) -> ValidationFunction | None:
    fn = BUILTIN_FUNCTIONS.get(name)
    if fn is None and ctx.custom_functions:
        fn = ctx.custom_functions.get(name)
    return fn


def run_validation_check(
    check: ValidationCheck | dict[str, Any], ctx: ValidationContext
) -> ValidationCheckResult:
    """
    Run one check.

    Arguments are resolved against the data model first. An unknown
    function name is logged and passes, so catalog drift never blocks a
    submission.

    Args:
        check: Check declaration (model or wire JSON)
        ctx: Value and data model

    Returns:
        Result carrying the check's message
    """
    if not isinstance(check, ValidationCheck):
        try:
            check = ValidationCheck.model_validate(check)
        except PydanticValidationError as e:
            logger.warning("invalid_validation_check", errors=e.error_count())
            fn = check.get("fn") if isinstance(check, dict) else None
            return ValidationCheckResult(
                fn=fn if isinstance(fn, str) else "", valid=False, message=INVALID_CONFIG_MESSAGE
            )

    resolved_args = {
        key: resolve_dynamic_value(value, ctx.data_model) for key, value in (check.args or {}).items()
    }

    fn = _lookup(check.fn, ctx)
    if fn is None:
        logger.warning("unknown_validation_function", fn=check.fn)
        return ValidationCheckResult(fn=check.fn, valid=True, message=check.message)

    try:
        valid = bool(fn(ctx.value, resolved_args))
    except Exception as e:
        # Custom predicates are host code; a crash counts as a failed check
        logger.error("validation_function_failed", fn=check.fn, error=str(e))
        valid = False

    return ValidationCheckResult(fn=check.fn, valid=valid, message=check.message)


def _coerce_config(config: ValidationConfig | dict[str, Any]) -> ValidationConfig | None:
    if isinstance(config, ValidationConfig):
        return config
    try:
        return ValidationConfig.model_validate(config)
    except PydanticValidationError as e:
        logger.warning("invalid_validation_config", errors=e.error_count())
        return None


def is_enabled(config: ValidationConfig, ctx: ValidationContext) -> bool:
    """Absent ``enabled`` means enabled."""
    if config.enabled is None:
        return True
    return evaluate_logic_expression(
        config.enabled, VisibilityContext(data_model=ctx.data_model, auth_state=ctx.auth_state)
    )


def run_validation(
    config: ValidationConfig | dict[str, Any], ctx: ValidationContext
) -> FieldValidationResult:
    """
    Run every check of a config in declared order.

    All failures are collected; evaluation does not stop at the first one.
    A disabled config is valid with no errors. Unknown keys are ignored;
    a config that still does not parse fails with a single error.
    """
    parsed = _coerce_config(config)
    if parsed is None:
        return FieldValidationResult(valid=False, errors=[INVALID_CONFIG_MESSAGE])
    if not is_enabled(parsed, ctx):
        return FieldValidationResult(valid=True)

    checks = [run_validation_check(check, ctx) for check in parsed.checks or ()]
    errors = [result.message for result in checks if not result.valid]

    return FieldValidationResult(valid=not errors, errors=errors, checks=checks)


def should_validate(config: ValidationConfig | dict[str, Any], trigger: ValidateOn) -> bool:
    """
    Whether an interaction runs a field's checks.

    Submit runs everything. Change and blur run only fields that opted in;
    a field validating on change also validates on blur.
    """
    if trigger == "submit":
        return True
    parsed = _coerce_config(config)
    mode = (parsed.validate_on if parsed is not None else None) or DEFAULT_TRIGGER
    if trigger == "change":
        return mode == "change"
    return mode in ("change", "blur")
