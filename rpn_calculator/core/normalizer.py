"""Strip whitespace from an expression and check its parenthesis balance."""
from typing import List, Optional

from rpn_calculator.common.errors import EmptyInputError, UnbalancedParenthesesError


def normalize(expression: Optional[str]) -> str:
    """
    Remove whitespace from an expression, keeping every other character in order.

    Only the counts of ``(`` and ``)`` are compared: ``)(`` passes here and is rejected by the converter.

    :param str expression: Raw expression text

    :return: Whitespace-free expression
    :rtype: str
    :raises EmptyInputError: If the expression is None, empty or only whitespace
    :raises UnbalancedParenthesesError: If the parenthesis counts differ
    """
    if not expression:
        raise EmptyInputError()

    chars: List[str] = []
    balance = 0
    for ch in expression:
        if ch == "(":
            balance += 1
        elif ch == ")":
            balance -= 1

        if not ch.isspace():
            chars.append(ch)

    if balance != 0:
        raise UnbalancedParenthesesError()

    if not chars:
        # Whitespace only
        raise EmptyInputError()

    return "".join(chars)
