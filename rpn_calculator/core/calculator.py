"""Evaluate arithmetic expressions: normalize, convert to postfix, run the stack machine."""
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from rpn_calculator.core.converter import ShuntingYardConverter
from rpn_calculator.core.evaluator import RpnEvaluator
from rpn_calculator.core.lexer import InfixLexer
from rpn_calculator.core.normalizer import normalize


class Calculator(BaseModel):
    """
    Evaluate arithmetic expressions safely.

    Supports integer literals, ``+ - * /``, unary ``+``/``-`` and parentheses.

    Design constraints:
        - No eval(), no dynamic code execution
        - No state kept between calls

    Algorithm:
        1. Strip whitespace and check the parenthesis counts
        2. Convert to Reverse Polish Notation (RPN) using Shunting-yard
        3. Evaluate RPN using a stack
    """

    # Immutable, so one instance can be shared between threads
    model_config = ConfigDict(frozen=True)

    right_associative: bool = Field(
        default=False,
        description="Group every operator right-to-left (8-3-2 == 7) as the legacy engine did",
    )

    def to_postfix(self, expression: Optional[str]) -> str:
        """
        Convert an infix expression to its postfix marker string.

        :param str expression: Arithmetic expression, e.g. ``3 + 4 * 2``

        :return: Postfix string, e.g. ``#3#4#2$*$+``
        :rtype: str
        :raises CalculatorError: If the expression is malformed
        """
        converter = ShuntingYardConverter(right_associative=self.right_associative)
        return converter.convert(InfixLexer(normalize(expression)))

    def evaluate(self, expression: Optional[str]) -> float:
        """
        Evaluate an arithmetic expression.

        :param str expression: Arithmetic expression string

        :return: Computed result as float
        :rtype: float
        :raises CalculatorError: If the expression is malformed or divides by zero
        """
        return RpnEvaluator.evaluate(self.to_postfix(expression))


DEFAULT_CALCULATOR = Calculator()


def evaluate(expression: Optional[str]) -> float:
    """
    Evaluate an arithmetic expression with the default calculator.

    :param str expression: Arithmetic expression string

    :return: Computed result as float
    :rtype: float
    :raises CalculatorError: If the expression is malformed or divides by zero
    """
    return DEFAULT_CALCULATOR.evaluate(expression)
