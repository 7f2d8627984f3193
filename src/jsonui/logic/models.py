"""Logic expression and visibility condition variants."""

from typing import Any, Literal, TypeAlias, Union

from pydantic import BaseModel, ConfigDict, Field, StrictBool, TypeAdapter

from ..data.dynamic import DynamicNumber, DynamicValue


class Expr(BaseModel):
    """Base for tagged variants: one tag key per node, nothing else."""

    model_config = ConfigDict(frozen=True, extra="forbid")


class And(Expr):
    operands: tuple["LogicExpression", ...] = Field(alias="and")


class Or(Expr):
    operands: tuple["LogicExpression", ...] = Field(alias="or")


class Not(Expr):
    operand: "LogicExpression" = Field(alias="not")


class PathTruthy(Expr):
    path: str


class Eq(Expr):
    operands: tuple[DynamicValue, DynamicValue] = Field(alias="eq")


class Neq(Expr):
    operands: tuple[DynamicValue, DynamicValue] = Field(alias="neq")


class Gt(Expr):
    operands: tuple[DynamicNumber, DynamicNumber] = Field(alias="gt")


class Gte(Expr):
    operands: tuple[DynamicNumber, DynamicNumber] = Field(alias="gte")


class Lt(Expr):
    operands: tuple[DynamicNumber, DynamicNumber] = Field(alias="lt")


class Lte(Expr):
    operands: tuple[DynamicNumber, DynamicNumber] = Field(alias="lte")


LogicExpression: TypeAlias = Union[And, Or, Not, PathTruthy, Eq, Neq, Gt, Gte, Lt, Lte]


class AuthCondition(Expr):
    auth: Literal["signedIn", "signedOut"]


VisibilityCondition: TypeAlias = Union[StrictBool, AuthCondition, LogicExpression]

for _model in (And, Or, Not):
    _model.model_rebuild()

LOGIC_ADAPTER: TypeAdapter[LogicExpression] = TypeAdapter(LogicExpression)
VISIBILITY_ADAPTER: TypeAdapter[VisibilityCondition] = TypeAdapter(VisibilityCondition)


class AuthState(BaseModel):
    """Authentication state consulted by ``{"auth": ...}`` conditions."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    is_signed_in: bool = Field(default=False, alias="isSignedIn")
    user: dict[str, Any] | None = None


def dump_expression(expr: Expr) -> dict[str, Any]:
    """Wire-shaped dict for a parsed variant."""
    return expr.model_dump(by_alias=True, mode="json")
