"""Test class ShuntingYardConverter."""
import pytest

from rpn_calculator.common.errors import (
    FunctionFormatError,
    MismatchedParenthesesError,
    UnbalancedParenthesesError,
)
from rpn_calculator.common.tokens import OperatorKind, Token
from rpn_calculator.core.converter import ShuntingYardConverter
from rpn_calculator.core.lexer import InfixLexer


def to_postfix(expr, right_associative=False):
    return ShuntingYardConverter(right_associative=right_associative).convert(InfixLexer(expr))


@pytest.mark.parametrize("expr,expected", [
    ("3+4", "#3#4$+"),
    ("3+4*2", "#3#4#2$*$+"),
    ("(3+4)*2", "#3#4$+#2$*"),
    ("10/2-3", "#10#2$/#3$-"),
    ("-5+3", "#5$un-#3$+"),
    ("(-2+3)*4", "#2$un-#3$+#4$*"),
    ("((7))", "#7"),
])
def test_convert(expr, expected):
    """convert produces the postfix marker string."""
    assert to_postfix(expr) == expected


def test_left_associative_by_default():
    """Same-priority binary operators group left-to-right."""
    assert to_postfix("8-3-2") == "#8#3$-#2$-"
    assert to_postfix("8/4/2") == "#8#4$/#2$/"


def test_uniform_right_associativity():
    """With right_associative, same-priority operators group right-to-left."""
    assert to_postfix("8-3-2", right_associative=True) == "#8#3#2$-$-"
    # Higher priority on the stack is still popped first
    assert to_postfix("10/2-3", right_associative=True) == "#10#2$/#3$-"


@pytest.mark.parametrize("expr", [")(", "1)+(2", "())("])
def test_right_paren_without_left(expr):
    """A ')' with no '(' on the stack is rejected."""
    with pytest.raises(MismatchedParenthesesError):
        to_postfix(expr)


def test_unclosed_left_paren():
    """A '(' left on the stack is rejected when converting tokens directly."""
    with pytest.raises(UnbalancedParenthesesError):
        to_postfix("(1+2")


def test_function_flushed_after_parenthesis():
    """A function token follows its argument once its ')' is seen."""
    tokens = [
        Token.function("f"),
        Token.operator(OperatorKind.LEFT_PAREN),
        Token.number("1"),
        Token.operator(OperatorKind.ADD),
        Token.number("2"),
        Token.operator(OperatorKind.RIGHT_PAREN),
        Token.operator(OperatorKind.MUL),
        Token.number("3"),
    ]
    assert ShuntingYardConverter().convert(tokens) == "#1#2$+@f#3$*"


def test_function_without_parenthesis():
    """A function left on the stack is a format error."""
    tokens = [Token.function("f"), Token.number("1"), Token.operator(OperatorKind.ADD), Token.number("2")]
    with pytest.raises(FunctionFormatError) as exc_info:
        ShuntingYardConverter().convert(tokens)
    assert exc_info.value.name == "f"
