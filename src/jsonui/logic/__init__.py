"""Logic expressions and visibility conditions."""

from .models import (
    And,
    AuthCondition,
    AuthState,
    Eq,
    Gt,
    Gte,
    LogicExpression,
    Lt,
    Lte,
    Neq,
    Not,
    Or,
    PathTruthy,
    VisibilityCondition,
    dump_expression,
)
from .evaluate import (
    VisibilityContext,
    evaluate_logic_expression,
    evaluate_visibility,
    parse_logic_expression,
    parse_visibility_condition,
)
from .builders import Visibility, visibility

__all__ = [
    # Variants
    "And",
    "Or",
    "Not",
    "PathTruthy",
    "Eq",
    "Neq",
    "Gt",
    "Gte",
    "Lt",
    "Lte",
    "AuthCondition",
    "LogicExpression",
    "VisibilityCondition",
    "AuthState",
    "dump_expression",
    # Evaluation
    "VisibilityContext",
    "evaluate_logic_expression",
    "evaluate_visibility",
    "parse_logic_expression",
    "parse_visibility_condition",
    # Builders
    "Visibility",
    "visibility",
]
