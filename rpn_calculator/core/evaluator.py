"""Evaluate a postfix marker string on an operand stack."""
from typing import List

from rpn_calculator.common.errors import (
    DivideByZeroError,
    ExcessOperandError,
    MissingOperandError,
    UnknownOperatorError,
)
from rpn_calculator.common.tokens import OperatorKind, Token, get_spec
from rpn_calculator.core.lexer import PostfixLexer


class RpnEvaluator:
    """
    Stack machine over floats.

    Numbers are pushed; an operator pops its operands (the last pushed operand is its right-hand
    side) and pushes the result. A well-formed postfix string leaves exactly one value.
    """

    @staticmethod
    def _pop(stack: List[float], token: Token) -> float:
        if not stack:
            raise MissingOperandError(f"Not enough operands for operator {token.text!r}")
        return stack.pop()

    @staticmethod
    def apply(stack: List[float], token: Token) -> None:
        """
        Apply one postfix token to the operand stack.

        :param List[float] stack: Operand stack, modified in place
        :param Token token: Number or operator token

        :return: None
        :raises UnknownOperatorError: If the token has no arity (parentheses, functions, unknown codes)
        :raises MissingOperandError: If the stack holds fewer operands than the operator needs
        :raises DivideByZeroError: If the divisor is exactly zero
        """
        if token.is_number:
            # float() only ever sees ASCII digits here, independent of locale
            stack.append(float(token.text))
            return

        if token.is_function:
            raise UnknownOperatorError(token.text)

        spec = get_spec(token.kind)
        if spec.arity == 1:
            arg = RpnEvaluator._pop(stack, token)
            stack.append(spec.apply(arg))
        elif spec.arity == 2:
            arg2 = RpnEvaluator._pop(stack, token)
            arg1 = RpnEvaluator._pop(stack, token)
            if spec.kind is OperatorKind.DIV and arg2 == 0:
                raise DivideByZeroError()
            stack.append(spec.apply(arg1, arg2))
        else:
            raise UnknownOperatorError(token.text)

    @staticmethod
    def evaluate(postfix: str) -> float:
        """
        Evaluate a postfix marker string.

        :param str postfix: Postfix string such as ``#3#4#2$*$+``

        :return: Computed result
        :rtype: float
        :raises ExcessOperandError: If more than one value remains
        :raises MissingOperandError: If no value remains
        """
        stack: List[float] = []
        for token in PostfixLexer(postfix):
            RpnEvaluator.apply(stack, token)

        if len(stack) > 1:
            raise ExcessOperandError(len(stack))
        if not stack:
            raise MissingOperandError("Nothing left to return")
        return stack[0]
