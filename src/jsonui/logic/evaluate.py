"""Logic and visibility evaluation.

Evaluation is pure and total: any shape that does not parse as a known
variant evaluates to False.
"""

from dataclasses import dataclass
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from ..core.logging_config import get_logger
from ..data.dynamic import is_number, is_truthy, resolve_dynamic_value, strict_equals
from .models import (
    LOGIC_ADAPTER,
    VISIBILITY_ADAPTER,
    And,
    AuthCondition,
    AuthState,
    Eq,
    Expr,
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
)

logger = get_logger(__name__)


@dataclass(frozen=True)
class VisibilityContext:
    """Data model and auth state an expression is evaluated against."""

    data_model: Any
    auth_state: AuthState | None = None

    @property
    def is_signed_in(self) -> bool:
        return self.auth_state.is_signed_in if self.auth_state else False


def parse_logic_expression(raw: Any) -> LogicExpression | None:
    """Parse wire JSON into a logic variant, or None if it matches none."""
    if isinstance(raw, Expr):
        return raw
    try:
        return LOGIC_ADAPTER.validate_python(raw)
    except PydanticValidationError:
        logger.debug("unmatched_expression", expression=repr(raw)[:200])
        return None


def parse_visibility_condition(raw: Any) -> VisibilityCondition | None:
    """Parse wire JSON into a visibility condition, or None if it matches none."""
    if isinstance(raw, (bool, Expr)):
        return raw
    try:
        return VISIBILITY_ADAPTER.validate_python(raw)
    except PydanticValidationError:
        logger.debug("unmatched_condition", condition=repr(raw)[:200])
        return None


def _numbers(operands: tuple[Any, Any], data_model: Any) -> tuple[Any, Any] | None:
    left = resolve_dynamic_value(operands[0], data_model)
    right = resolve_dynamic_value(operands[1], data_model)
    if is_number(left) and is_number(right):
        return left, right
    return None


def _evaluate(expr: LogicExpression, ctx: VisibilityContext) -> bool:
    data_model = ctx.data_model

    match expr:
        case And(operands=operands):
            return all(_evaluate(sub, ctx) for sub in operands)
        case Or(operands=operands):
            return any(_evaluate(sub, ctx) for sub in operands)
        case Not(operand=operand):
            return not _evaluate(operand, ctx)
        case PathTruthy(path=path):
            return is_truthy(resolve_dynamic_value({"path": path}, data_model))
        case Eq(operands=(left, right)):
            return strict_equals(
                resolve_dynamic_value(left, data_model), resolve_dynamic_value(right, data_model)
            )
        case Neq(operands=(left, right)):
            return not strict_equals(
                resolve_dynamic_value(left, data_model), resolve_dynamic_value(right, data_model)
            )
        case Gt(operands=operands):
            pair = _numbers(operands, data_model)
            return pair is not None and pair[0] > pair[1]
        case Gte(operands=operands):
            pair = _numbers(operands, data_model)
            return pair is not None and pair[0] >= pair[1]
        case Lt(operands=operands):
            pair = _numbers(operands, data_model)
            return pair is not None and pair[0] < pair[1]
        case Lte(operands=operands):
            pair = _numbers(operands, data_model)
            return pair is not None and pair[0] <= pair[1]
        case _:
            return False


def evaluate_logic_expression(expr: Any, ctx: VisibilityContext) -> bool:
    """
    Evaluate a logic expression.

    Args:
        expr: Wire JSON or a parsed variant
        ctx: Evaluation context

    Returns:
        Boolean result; False for shapes that match no variant
    """
    parsed = parse_logic_expression(expr)
    if parsed is None:
        return False
    return _evaluate(parsed, ctx)


def evaluate_visibility(condition: Any, ctx: VisibilityContext) -> bool:
    """
    Evaluate a visibility condition.

    A missing condition means always visible.
    """
    if condition is None:
        return True

    parsed = parse_visibility_condition(condition)
    match parsed:
        case None:
            return False
        case bool():
            return parsed
        case AuthCondition(auth="signedIn"):
            return ctx.is_signed_in
        case AuthCondition(auth="signedOut"):
            return not ctx.is_signed_in
        case _:
            return _evaluate(parsed, ctx)
