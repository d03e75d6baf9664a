"""Pull-based lexers over infix expressions and postfix marker strings."""
from typing import Iterator

from rpn_calculator.common.errors import UnknownTokenError
from rpn_calculator.common.tokens import MARKERS, SYMBOLS, UNARY_FORMS, Token

# Locale-independent digits; str.isdigit() would also accept e.g. superscripts
DIGITS: frozenset = frozenset("0123456789")


class InfixLexer:
    """
    Split a normalized infix expression into tokens, one per ``next()`` call.

    ``+`` and ``-`` are unary at position 0 or right after ``(``, binary everywhere else.
    Numbers are maximal runs of decimal digits (integers only).

    The lexer owns its cursor and cannot be rewound: to scan again, create a new lexer.

    Examples:
        - ``-5+3`` -> ``$un-``, ``#5``, ``$+``, ``#3``
    """

    def __init__(self, expression: str) -> None:
        self._expression = expression
        self._pos = 0

    def __iter__(self) -> Iterator[Token]:
        return self

    def __next__(self) -> Token:
        text = self._expression
        pos = self._pos
        if pos >= len(text):
            raise StopIteration

        ch = text[pos]
        if ch in SYMBOLS:
            kind = SYMBOLS[ch]
            if kind in UNARY_FORMS and (pos == 0 or text[pos - 1] == "("):
                kind = UNARY_FORMS[kind]
            self._pos = pos + 1
            return Token.operator(kind)

        if ch in DIGITS:
            end = pos + 1
            while end < len(text) and text[end] in DIGITS:
                end += 1
            self._pos = end
            return Token.number(text[pos:end])

        raise UnknownTokenError(ch, pos)


class PostfixLexer:
    """
    Split a postfix marker string back into tokens.

    A token runs from its marker up to the next marker or the end of the string,
    so ``#12#3$un-`` yields ``#12``, ``#3`` and ``$un-``.
    """

    def __init__(self, postfix: str) -> None:
        self._postfix = postfix
        self._pos = 0

    def __iter__(self) -> Iterator[Token]:
        return self

    def __next__(self) -> Token:
        text = self._postfix
        start = self._pos
        if start >= len(text):
            raise StopIteration

        end = start + 1
        while end < len(text) and text[end] not in MARKERS:
            end += 1
        self._pos = end
        return Token.parse(text[start:end])
