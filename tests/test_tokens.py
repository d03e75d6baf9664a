"""Test the token model and the operator table."""
from pydantic import ValidationError
import pytest

from rpn_calculator.common.errors import UnknownOperatorError
from rpn_calculator.common.tokens import (
    OPERATORS,
    Associativity,
    OperatorKind,
    Token,
    TokenType,
    get_spec,
)


@pytest.mark.parametrize("kind,priority", [
    (OperatorKind.LEFT_PAREN, 0),
    (OperatorKind.ADD, 2),
    (OperatorKind.SUB, 2),
    (OperatorKind.MUL, 4),
    (OperatorKind.DIV, 4),
    (OperatorKind.UNARY_PLUS, 5),
    (OperatorKind.UNARY_MINUS, 5),
])
def test_priorities(kind, priority):
    """Operator priorities follow the precedence table."""
    assert get_spec(kind).priority == priority


def test_right_paren_has_no_priority():
    """')' is handled structurally and has no priority."""
    assert get_spec(OperatorKind.RIGHT_PAREN).priority is None


def test_associativity_and_arity():
    """Binary operators are left-associative, unary signs right-associative."""
    for kind in (OperatorKind.ADD, OperatorKind.SUB, OperatorKind.MUL, OperatorKind.DIV):
        assert get_spec(kind).associativity is Associativity.LEFT
        assert get_spec(kind).arity == 2
    for kind in (OperatorKind.UNARY_PLUS, OperatorKind.UNARY_MINUS):
        assert get_spec(kind).associativity is Associativity.RIGHT
        assert get_spec(kind).arity == 1


def test_operator_table_is_read_only():
    """The operator table cannot be mutated."""
    with pytest.raises(TypeError):
        OPERATORS[OperatorKind.ADD] = OPERATORS[OperatorKind.SUB]


def test_spec_is_frozen():
    """Operator descriptions are immutable."""
    with pytest.raises(ValidationError):
        get_spec(OperatorKind.ADD).priority = 9


@pytest.mark.parametrize("token,serialized", [
    (Token.number("42"), "#42"),
    (Token.operator(OperatorKind.UNARY_MINUS), "$un-"),
    (Token.operator(OperatorKind.DIV), "$/"),
    (Token.function("sqrt"), "@sqrt"),
])
def test_serialize(token, serialized):
    """Tokens serialize as marker followed by payload."""
    assert token.serialize() == serialized


def test_parse():
    """Token.parse rebuilds a token from a postfix segment."""
    token = Token.parse("$un+")
    assert token.token_type is TokenType.OPERATOR
    assert token.kind is OperatorKind.UNARY_PLUS
    assert Token.parse("#007") == Token.number("007")


@pytest.mark.parametrize("segment", ["", "#", "42", "+"])
def test_parse_invalid_segment(segment):
    """Segments without marker or payload are rejected."""
    with pytest.raises(UnknownOperatorError):
        Token.parse(segment)


def test_kind_of_unknown_code():
    """An operator token with an unknown code has no kind."""
    with pytest.raises(UnknownOperatorError):
        Token.parse("$^").kind


def test_kind_of_number():
    """A number token has no operator kind."""
    with pytest.raises(UnknownOperatorError):
        Token.number("1").kind


def test_empty_payload_rejected():
    """Tokens need a non-empty payload."""
    with pytest.raises(ValidationError):
        Token.number("")
