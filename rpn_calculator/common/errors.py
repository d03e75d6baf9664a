"""Errors raised while evaluating an arithmetic expression."""
from typing import Optional


class CalculatorError(ValueError):
    """Base class for every evaluation failure."""


class EmptyInputError(CalculatorError):
    """The expression is None or empty."""

    def __init__(self, message: str = "Expression is null or empty") -> None:
        super().__init__(message)


class UnbalancedParenthesesError(CalculatorError):
    """The counts of left and right parentheses differ."""

    def __init__(self, message: str = "Number of left and right parentheses is not equal") -> None:
        super().__init__(message)


class UnknownTokenError(CalculatorError):
    """A character that is neither a digit, an operator nor whitespace."""

    def __init__(self, char: str, position: int) -> None:
        self.char = char
        self.position = position
        super().__init__(f"Unknown token {char!r} at position {position}")


class MismatchedParenthesesError(CalculatorError):
    """A right parenthesis with no matching left parenthesis before it."""

    def __init__(self, message: str = "Right parenthesis without matching left parenthesis") -> None:
        super().__init__(message)


class FunctionFormatError(CalculatorError):
    """A function marker left on the operator stack."""

    def __init__(self, name: Optional[str] = None) -> None:
        self.name = name
        super().__init__(f"Function {name!r} without matching parenthesis")


class UnknownOperatorError(CalculatorError):
    """An operator with no known arity or behavior."""

    def __init__(self, operator: str) -> None:
        self.operator = operator
        super().__init__(f"Unknown operator: {operator!r}")


class DivideByZeroError(CalculatorError, ZeroDivisionError):
    """Division whose second operand is exactly zero."""

    def __init__(self, message: str = "Second argument is zero") -> None:
        super().__init__(message)


class ExcessOperandError(CalculatorError):
    """More than one value left on the operand stack."""

    def __init__(self, count: int) -> None:
        self.count = count
        super().__init__(f"Excess operand: {count} values left after evaluation")


class MissingOperandError(CalculatorError):
    """An operator found too few operands, or nothing was left to return."""

    def __init__(self, message: str = "Not enough operands") -> None:
        super().__init__(message)
