"""Token model and operator table shared by the lexers, the converter and the evaluator."""
from enum import Enum
import operator
from types import MappingProxyType
from typing import Callable, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field

from rpn_calculator.common.errors import UnknownOperatorError


class TokenType(str, Enum):
    """Token class. The value is the marker prefixed to the token in a postfix string."""

    NUMBER = "#"
    OPERATOR = "$"
    FUNCTION = "@"


# Every character that starts a new token in a postfix string
MARKERS: frozenset = frozenset(t.value for t in TokenType)


class OperatorKind(str, Enum):
    """Operator kind. The value is the operator code written after the marker."""

    ADD = "+"
    SUB = "-"
    UNARY_PLUS = "un+"
    UNARY_MINUS = "un-"
    MUL = "*"
    DIV = "/"
    LEFT_PAREN = "("
    RIGHT_PAREN = ")"


class Associativity(str, Enum):
    """Grouping direction of operators with equal priority."""

    LEFT = "left"
    RIGHT = "right"


class OperatorSpec(BaseModel):
    """Static description of one operator kind."""

    model_config = ConfigDict(frozen=True)

    kind: OperatorKind = Field(..., description="Operator kind")
    priority: Optional[int] = Field(default=None, description="Binding strength, None for ')'")
    arity: int = Field(default=0, ge=0, le=2, description="Number of operands, 0 for parentheses")
    associativity: Associativity = Field(default=Associativity.LEFT, description="Grouping of equal priorities")
    apply: Optional[Callable[..., float]] = Field(default=None, description="Computation on the operands")


OPERATORS: Mapping[OperatorKind, OperatorSpec] = MappingProxyType({
    OperatorKind.LEFT_PAREN: OperatorSpec(kind=OperatorKind.LEFT_PAREN, priority=0),
    OperatorKind.RIGHT_PAREN: OperatorSpec(kind=OperatorKind.RIGHT_PAREN),
    OperatorKind.ADD: OperatorSpec(kind=OperatorKind.ADD, priority=2, arity=2, apply=operator.add),
    OperatorKind.SUB: OperatorSpec(kind=OperatorKind.SUB, priority=2, arity=2, apply=operator.sub),
    OperatorKind.MUL: OperatorSpec(kind=OperatorKind.MUL, priority=4, arity=2, apply=operator.mul),
    OperatorKind.DIV: OperatorSpec(kind=OperatorKind.DIV, priority=4, arity=2, apply=operator.truediv),
    OperatorKind.UNARY_PLUS: OperatorSpec(
        kind=OperatorKind.UNARY_PLUS, priority=5, arity=1,
        associativity=Associativity.RIGHT, apply=operator.pos,
    ),
    OperatorKind.UNARY_MINUS: OperatorSpec(
        kind=OperatorKind.UNARY_MINUS, priority=5, arity=1,
        associativity=Associativity.RIGHT, apply=operator.neg,
    ),
})

# Infix characters and the operator they stand for when used as binary operators
SYMBOLS: Mapping[str, OperatorKind] = MappingProxyType({
    "+": OperatorKind.ADD,
    "-": OperatorKind.SUB,
    "*": OperatorKind.MUL,
    "/": OperatorKind.DIV,
    "(": OperatorKind.LEFT_PAREN,
    ")": OperatorKind.RIGHT_PAREN,
})

# Sign operators replacing the binary ones at the start of an expression or after '('
UNARY_FORMS: Mapping[OperatorKind, OperatorKind] = MappingProxyType({
    OperatorKind.ADD: OperatorKind.UNARY_PLUS,
    OperatorKind.SUB: OperatorKind.UNARY_MINUS,
})


def get_spec(kind: OperatorKind) -> OperatorSpec:
    """
    Look up an operator in the operator table.

    :param OperatorKind kind: Operator kind

    :return: Operator description
    :rtype: OperatorSpec
    :raises UnknownOperatorError: If the operator is not in the table
    """
    try:
        return OPERATORS[kind]
    except KeyError:
        raise UnknownOperatorError(str(kind)) from None


class Token(BaseModel):
    """
    A single lexical unit: a number, an operator or a function marker.

    Serialized as its type marker followed by its payload, e.g. ``#12``, ``$un-``, ``@sqrt``.
    """

    model_config = ConfigDict(frozen=True)

    token_type: TokenType = Field(..., description="Token class")
    text: str = Field(..., min_length=1, description="Digits, operator code or function name")

    @classmethod
    def number(cls, digits: str) -> "Token":
        return cls(token_type=TokenType.NUMBER, text=digits)

    @classmethod
    def operator(cls, kind: OperatorKind) -> "Token":
        return cls(token_type=TokenType.OPERATOR, text=kind.value)

    @classmethod
    def function(cls, name: str) -> "Token":
        return cls(token_type=TokenType.FUNCTION, text=name)

    @classmethod
    def parse(cls, segment: str) -> "Token":
        """
        Rebuild a token from one postfix segment (marker followed by payload).

        :param str segment: Postfix segment such as ``#42``

        :return: Token
        :rtype: Token
        :raises UnknownOperatorError: If the segment does not start with a marker or has no payload
        """
        if len(segment) < 2 or segment[0] not in MARKERS:
            raise UnknownOperatorError(segment)
        return cls(token_type=TokenType(segment[0]), text=segment[1:])

    @property
    def is_number(self) -> bool:
        return self.token_type is TokenType.NUMBER

    @property
    def is_operator(self) -> bool:
        return self.token_type is TokenType.OPERATOR

    @property
    def is_function(self) -> bool:
        return self.token_type is TokenType.FUNCTION

    @property
    def kind(self) -> OperatorKind:
        """
        Operator kind of an operator token.

        :raises UnknownOperatorError: If the token is not an operator or its code is unknown
        """
        if not self.is_operator:
            raise UnknownOperatorError(self.serialize())
        try:
            return OperatorKind(self.text)
        except ValueError:
            raise UnknownOperatorError(self.text) from None

    def serialize(self) -> str:
        return self.token_type.value + self.text
