"""Test class RpnEvaluator."""
import pytest

from rpn_calculator.common.errors import (
    CalculatorError,
    DivideByZeroError,
    ExcessOperandError,
    MissingOperandError,
    UnknownOperatorError,
)
from rpn_calculator.core.evaluator import RpnEvaluator


@pytest.mark.parametrize("postfix,expected", [
    ("#3#4#2$*$+", 11.0),
    ("#10#2$/#3$-", 2.0),
    ("#5$un-#3$+", -2.0),
    ("#5$un+", 5.0),
    ("#5$un-$un-", 5.0),
    ("#7#2$/", 3.5),
    ("#42", 42.0),
])
def test_evaluate(postfix, expected):
    """evaluate runs the postfix string on the operand stack."""
    assert RpnEvaluator.evaluate(postfix) == expected


def test_second_pushed_operand_is_right_hand_side():
    """For binary operators the last pushed operand is the right operand."""
    assert RpnEvaluator.evaluate("#8#2$-") == 6.0
    assert RpnEvaluator.evaluate("#8#2$/") == 4.0


def test_divide_by_zero():
    """Division by exactly zero raises DivideByZeroError, which is also a ZeroDivisionError."""
    with pytest.raises(DivideByZeroError):
        RpnEvaluator.evaluate("#1#0$/")
    with pytest.raises(ZeroDivisionError):
        RpnEvaluator.evaluate("#1#2#2$-$/")


def test_excess_operand():
    """More than one value left is an error."""
    with pytest.raises(ExcessOperandError) as exc_info:
        RpnEvaluator.evaluate("#1#2")
    assert exc_info.value.count == 2


@pytest.mark.parametrize("postfix", ["", "#1$+", "$un-", "$*"])
def test_missing_operand(postfix):
    """Too few operands, or nothing at all, is an error."""
    with pytest.raises(MissingOperandError):
        RpnEvaluator.evaluate(postfix)


@pytest.mark.parametrize("postfix", ["#1$(", "#1$)", "#1#2$%", "#1@f"])
def test_unknown_operator(postfix):
    """Tokens without arity cannot be evaluated."""
    with pytest.raises(UnknownOperatorError):
        RpnEvaluator.evaluate(postfix)


def test_errors_are_value_errors():
    """Every calculator error is a ValueError."""
    assert issubclass(CalculatorError, ValueError)
    with pytest.raises(ValueError):
        RpnEvaluator.evaluate("#1#0$/")
