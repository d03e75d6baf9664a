"""Pydantic models for expression evaluation requests and results."""
from typing import Optional

from pydantic import BaseModel, Field, model_validator


class EvaluationRequest(BaseModel):
    """Represents a single expression to evaluate, with its line in the input file."""

    expression: str = Field(..., description="Arithmetic expression as a string")
    line_number: int = Field(default=1, ge=1, description="Line number in the input file")


class EvaluationResult(BaseModel):
    """Represents the outcome of an evaluated expression: a result or an error message."""

    line_number: int = Field(default=1, ge=1, description="Line number in the input file")
    expression: str = Field(..., description="Original arithmetic expression")
    result: Optional[float] = Field(default=None, description="Evaluated numeric result of the expression")
    error: Optional[str] = Field(default=None, description="Error message if evaluation failed")

    @model_validator(mode="after")
    def exactly_one_outcome(self) -> "EvaluationResult":
        """Ensure that either a result or an error is set, not both."""
        if (self.result is None) == (self.error is None):
            raise ValueError("Exactly one of result or error must be set")
        return self

    @property
    def ok(self) -> bool:
        return self.error is None

    def render(self) -> str:
        """
        Format the outcome as one output line (without newline).

        :return: ``<expr> = <result>`` or ``<expr> -> ERROR: <message>``
        :rtype: str
        """
        if self.ok:
            return f"{self.expression} = {self.result}"
        return f"{self.expression} -> ERROR: {self.error}"
