"""Field validation engine."""

from .models import (
    FieldValidationResult,
    ValidateOn,
    ValidationCheck,
    ValidationCheckResult,
    ValidationConfig,
    ValidationContext,
    ValidationFunction,
)
from .functions import BUILTIN_FUNCTIONS
from .engine import is_enabled, run_validation, run_validation_check, should_validate
from .builders import Checks, check
from .form import FormValidator

__all__ = [
    # Models
    "FieldValidationResult",
    "ValidateOn",
    "ValidationCheck",
    "ValidationCheckResult",
    "ValidationConfig",
    "ValidationContext",
    "ValidationFunction",
    # Engine
    "BUILTIN_FUNCTIONS",
    "is_enabled",
    "run_validation",
    "run_validation_check",
    "should_validate",
    # Builders
    "Checks",
    "check",
    "FormValidator",
]
