"""Tests for logic expressions and visibility."""

import pytest
from hypothesis import given, strategies as st

from jsonui.logic import (
    And,
    AuthCondition,
    Eq,
    PathTruthy,
    VisibilityContext,
    dump_expression,
    evaluate_logic_expression,
    evaluate_visibility,
    parse_logic_expression,
    parse_visibility_condition,
    visibility,
)


@pytest.mark.unit
def test_empty_and_or(ctx):
    """Vacuous truth for and, falsity for or."""
    assert evaluate_logic_expression({"and": []}, ctx) is True
    assert evaluate_logic_expression({"or": []}, ctx) is False


@pytest.mark.unit
def test_path_truthiness(ctx):
    """Test path conditions."""
    assert evaluate_logic_expression({"path": "/flags/beta"}, ctx) is True
    assert evaluate_logic_expression({"path": "/user/admin"}, ctx) is False
    assert evaluate_logic_expression({"path": "/cart/items"}, ctx) is True
    assert evaluate_logic_expression({"path": "/cart/total"}, ctx) is False
    assert evaluate_logic_expression({"path": "/missing"}, ctx) is False


@pytest.mark.unit
def test_combinators(ctx):
    """Test and, or and not nesting."""
    expr = {"and": [{"path": "/flags/beta"}, {"not": {"path": "/user/admin"}}]}
    assert evaluate_logic_expression(expr, ctx) is True

    expr = {"or": [{"path": "/user/admin"}, {"eq": [{"path": "/user/name"}, "Ada"]}]}
    assert evaluate_logic_expression(expr, ctx) is True


@pytest.mark.unit
def test_equality(ctx):
    """Test eq and neq with strict semantics."""
    assert evaluate_logic_expression({"eq": [{"path": "/user/age"}, 36]}, ctx) is True
    assert evaluate_logic_expression({"eq": [{"path": "/user/age"}, "36"]}, ctx) is False
    assert evaluate_logic_expression({"neq": [{"path": "/user/name"}, "Bob"]}, ctx) is True


@pytest.mark.unit
def test_numeric_comparisons(ctx):
    """Test gt, gte, lt and lte."""
    assert evaluate_logic_expression({"gt": [{"path": "/user/age"}, 18]}, ctx) is True
    assert evaluate_logic_expression({"gte": [{"path": "/user/age"}, 36]}, ctx) is True
    assert evaluate_logic_expression({"lt": [{"path": "/user/age"}, 36]}, ctx) is False
    assert evaluate_logic_expression({"lte": [{"path": "/cart/total"}, 0]}, ctx) is True


@pytest.mark.unit
def test_comparison_with_non_number(ctx):
    """Non-numeric operands compare false in both directions."""
    assert evaluate_logic_expression({"gt": [{"path": "/user/name"}, 1]}, ctx) is False
    assert evaluate_logic_expression({"lte": [{"path": "/user/name"}, 1]}, ctx) is False
    assert evaluate_logic_expression({"lt": [{"path": "/missing"}, 1]}, ctx) is False


@pytest.mark.unit
def test_malformed_expressions_are_false(ctx):
    """Unknown or ambiguous shapes evaluate to False."""
    assert evaluate_logic_expression({"xor": []}, ctx) is False
    assert evaluate_logic_expression({"and": [], "or": []}, ctx) is False
    assert evaluate_logic_expression({"eq": [1]}, ctx) is False
    assert evaluate_logic_expression("path", ctx) is False
    assert evaluate_logic_expression(None, ctx) is False


@pytest.mark.unit
def test_parse_logic_expression():
    """Test wire JSON parses into variants."""
    parsed = parse_logic_expression({"and": [{"path": "/a"}, {"eq": [1, 1]}]})

    assert isinstance(parsed, And)
    assert isinstance(parsed.operands[0], PathTruthy)
    assert isinstance(parsed.operands[1], Eq)
    assert dump_expression(parsed) == {"and": [{"path": "/a"}, {"eq": [1, 1]}]}


@pytest.mark.unit
def test_eq_keeps_bools_distinct():
    """Booleans are not coerced to numbers while parsing."""
    parsed = parse_logic_expression({"eq": [True, 1]})
    assert parsed.operands == (True, 1)
    assert isinstance(parsed.operands[0], bool)
    assert not isinstance(parsed.operands[1], bool)


@pytest.mark.unit
def test_visibility_absent_and_literals(ctx):
    """Missing means visible; booleans are literal."""
    assert evaluate_visibility(None, ctx) is True
    assert evaluate_visibility(True, ctx) is True
    assert evaluate_visibility(False, ctx) is False


@pytest.mark.unit
def test_visibility_auth(ctx, signed_in_ctx):
    """Test auth conditions."""
    assert evaluate_visibility({"auth": "signedIn"}, signed_in_ctx) is True
    assert evaluate_visibility({"auth": "signedIn"}, ctx) is False
    assert evaluate_visibility({"auth": "signedOut"}, ctx) is True
    assert evaluate_visibility({"auth": "signedOut"}, signed_in_ctx) is False


@pytest.mark.unit
def test_visibility_unknown_shape_hidden(ctx):
    """An unrecognized condition hides the element."""
    assert evaluate_visibility({"auth": "admin"}, ctx) is False
    assert evaluate_visibility("yes", ctx) is False


@pytest.mark.unit
def test_parse_visibility_condition():
    """Test condition parsing."""
    assert parse_visibility_condition(True) is True
    assert isinstance(parse_visibility_condition({"auth": "signedIn"}), AuthCondition)
    assert isinstance(parse_visibility_condition({"path": "/a"}), PathTruthy)
    assert parse_visibility_condition({"auth": "signedIn", "path": "/a"}) is None


@pytest.mark.unit
def test_builders(ctx, signed_in_ctx):
    """Builders produce conditions the evaluator understands."""
    condition = visibility.and_(visibility.signed_in, visibility.when("/flags/beta"))
    assert condition == {"and": [{"auth": "signedIn"}, {"path": "/flags/beta"}]}

    assert evaluate_visibility(visibility.when("/flags/beta"), ctx) is True
    assert evaluate_visibility(visibility.not_(visibility.when("/flags/beta")), ctx) is False
    assert evaluate_visibility(visibility.gt({"path": "/user/age"}, 30), ctx) is True
    assert evaluate_visibility(visibility.never, ctx) is False
    assert evaluate_visibility(visibility.signed_out, signed_in_ctx) is False


@pytest.mark.unit
@given(st.lists(st.booleans(), max_size=6))
def test_and_or_match_python(flags):
    """and/or over literal paths agree with all()/any()."""
    data = {f"f{i}": flag for i, flag in enumerate(flags)}
    ctx = VisibilityContext(data_model=data)
    operands = [{"path": f"/f{i}"} for i in range(len(flags))]

    assert evaluate_logic_expression({"and": operands}, ctx) is all(flags)
    assert evaluate_logic_expression({"or": operands}, ctx) is any(flags)
