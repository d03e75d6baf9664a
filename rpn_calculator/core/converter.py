"""Convert an infix token stream to a postfix marker string (Shunting-yard)."""
from typing import Iterable, List

from pydantic import BaseModel, ConfigDict, Field

from rpn_calculator.common.errors import (
    FunctionFormatError,
    MismatchedParenthesesError,
    UnbalancedParenthesesError,
)
from rpn_calculator.common.tokens import Associativity, OperatorKind, Token, get_spec


class ShuntingYardConverter(BaseModel):
    """
    Convert infix tokens into Reverse Polish Notation.

    Operators wait on a stack until an operator of lower priority (or a closing parenthesis)
    forces them out, so the output lists every operator after its operands.

    Examples:
        - Infix: ``3+4*2``
        - Postfix: ``#3#4#2$*$+``

    Function tokens are never produced by the infix lexer; they are still handled here so that
    a lexer producing them only has to add an evaluation rule.
    """

    model_config = ConfigDict(frozen=True)

    right_associative: bool = Field(
        default=False,
        description="Treat every operator as right-associative instead of using the operator table",
    )

    def _should_pop(self, incoming: Token, top: Token) -> bool:
        """
        Decide whether the stack top leaves the stack before ``incoming`` is pushed.

        :param Token incoming: Operator about to be pushed
        :param Token top: Current stack top

        :return: True if the stack top must be moved to the output
        :rtype: bool
        """
        # A function waits for its closing parenthesis
        if not top.is_operator:
            return False

        incoming_spec = get_spec(incoming.kind)
        top_priority = get_spec(top.kind).priority
        if self.right_associative or incoming_spec.associativity is Associativity.RIGHT:
            return top_priority > incoming_spec.priority
        return top_priority >= incoming_spec.priority

    def convert(self, tokens: Iterable[Token]) -> str:
        """
        Consume infix tokens and return the postfix marker string.

        :param Iterable[Token] tokens: Infix tokens, e.g. an ``InfixLexer``

        :return: Postfix string such as ``#3#4$+``
        :rtype: str
        :raises MismatchedParenthesesError: If a ``)`` has no ``(`` before it
        :raises FunctionFormatError: If a function is left without its parenthesis
        :raises UnbalancedParenthesesError: If a ``(`` is never closed
        """
        output: List[str] = []
        stack: List[Token] = []

        for token in tokens:
            if token.is_number:
                output.append(token.serialize())
            elif token.is_function:
                stack.append(token)
            elif token.kind is OperatorKind.LEFT_PAREN:
                stack.append(token)
            elif token.kind is OperatorKind.RIGHT_PAREN:
                while True:
                    if not stack:
                        raise MismatchedParenthesesError()
                    top = stack.pop()
                    if top.is_operator and top.kind is OperatorKind.LEFT_PAREN:
                        break
                    output.append(top.serialize())

                # Function call: the function follows its arguments
                if stack and stack[-1].is_function:
                    output.append(stack.pop().serialize())
            else:
                while stack and self._should_pop(token, stack[-1]):
                    output.append(stack.pop().serialize())
                stack.append(token)

        while stack:
            top = stack.pop()
            if top.is_function:
                raise FunctionFormatError(top.text)
            if top.kind is OperatorKind.LEFT_PAREN:
                raise UnbalancedParenthesesError()
            output.append(top.serialize())

        return "".join(output)
