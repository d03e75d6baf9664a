"""Worker process for evaluating arithmetic expressions."""
from multiprocessing.connection import Connection

from pydantic import BaseModel, ConfigDict, Field, field_validator

from rpn_calculator.common.errors import CalculatorError
from rpn_calculator.common.logger import logger
from rpn_calculator.common.models import EvaluationResult
from rpn_calculator.core.calculator import Calculator


class WorkerProcess(BaseModel):
    """
    Worker process responsible for evaluating a single arithmetic expression.

    Lifecycle:
        - Spawned by the batch runner
        - Receives one expression only
        - Sends an EvaluationResult dump (result or error) through a Pipe
        - Terminates immediately after computation
    """

    # Make the Pydantic instance immutable (read-only) for safety
    # Allow arbitrary types like multiprocessing.Connection
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    conn: Connection = Field(..., description="Connection object for sending results back to the runner")
    expression: str = Field(..., description="Single arithmetic expression to evaluate")
    line_number: int = Field(..., ge=1, description="Line number in the input file")
    right_associative: bool = Field(default=False, description="Legacy right-to-left grouping")

    @field_validator("expression")
    def expression_must_not_be_empty(cls, v: str) -> str:
        """Ensure that the expression is not empty."""
        if not v.strip():
            raise ValueError("Expression cannot be empty")
        return v

    def evaluate(self) -> EvaluationResult:
        """
        Evaluate the expression, turning calculator errors into an error result.

        :return: Evaluation outcome
        :rtype: EvaluationResult
        """
        calculator = Calculator(right_associative=self.right_associative)
        try:
            result = calculator.evaluate(self.expression)
        except CalculatorError as exc:
            logger.error(
                f"👷❌ Worker failed on line {self.line_number}: {exc}\n"
                f"Invalid arithmetic expression, could not evaluate: {self.expression!r}"
            )
            return EvaluationResult(line_number=self.line_number, expression=self.expression, error=str(exc))

        logger.info(f"👷✅ Worker finished on line {self.line_number}: {result}")
        return EvaluationResult(line_number=self.line_number, expression=self.expression, result=result)

    def run(self) -> None:
        """
        Evaluate the arithmetic expression and send the outcome through the pipe.

        :return: None
        """
        logger.info(f"👷🏁 Worker started on line {self.line_number}: {self.expression}")
        try:
            self.conn.send(self.evaluate().model_dump())
        finally:
            # Always close the connection
            self.conn.close()
