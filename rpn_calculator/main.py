"""
Command-line entrypoint ``rpn-calc``.

This script either:
- Evaluates each expression given as an argument and prints its result
- Evaluates an expressions file (or archive) with worker processes and writes a results file

Exit status is 1 if any expression fails.
"""
import argparse
import logging
from pathlib import Path
import sys
from typing import List, Optional

from pydantic import BaseModel, Field, FilePath, ValidationError, model_validator

from rpn_calculator.batch.runner import BatchRunner
from rpn_calculator.common.errors import CalculatorError
from rpn_calculator.common.logger import logger
from rpn_calculator.core.calculator import Calculator


class CliArgs(BaseModel):
    """
    Pydantic model used to validate CLI arguments.

    Attributes
    ----------
    expressions : List[str]
        Expressions to evaluate directly.
    file_path : FilePath, optional
        Path to a file containing one expression per line.
    output_path : Path, optional
        Where to write batch results.
    right_associative : bool
        Group every operator right-to-left.
    workers : int, optional
        Maximum number of worker processes.
    verbose : bool
        Log at DEBUG level.
    """

    expressions: List[str] = Field(default_factory=list)
    file_path: Optional[FilePath] = None
    output_path: Optional[Path] = None
    right_associative: bool = False
    workers: Optional[int] = Field(default=None, ge=1)
    verbose: bool = False

    @model_validator(mode="after")
    def one_input_source(self) -> "CliArgs":
        """Ensure exactly one of expressions or file_path is given."""
        if bool(self.expressions) == (self.file_path is not None):
            raise ValueError("Give either expressions or --file, not both or neither")
        return self


def parse_args(argv: Optional[List[str]] = None) -> CliArgs:
    """
    Parse and validate command-line arguments.

    :param list argv: Arguments, defaults to ``sys.argv[1:]``

    :return: Validated CLI arguments
    :rtype: CliArgs
    """
    parser = argparse.ArgumentParser(
        prog="rpn-calc",
        description="Evaluate arithmetic expressions (+ - * / and parentheses)",
    )
    parser.add_argument("expressions", nargs="*", help="Expressions to evaluate, e.g. '(3 + 4) * 2'")
    parser.add_argument("-f", "--file", dest="file_path", help="File with one expression per line (.txt, .zip, .tar.xz, .7z)")
    parser.add_argument("-o", "--output", dest="output_path", help="Results file for --file")
    parser.add_argument("--right-associative", action="store_true", help="Group every operator right-to-left")
    parser.add_argument("-w", "--workers", type=int, help="Maximum number of worker processes for --file")
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose logging")

    args = parser.parse_args(argv)

    try:
        return CliArgs(**{k: v for k, v in vars(args).items() if v is not None})
    except ValidationError as exc:
        parser.error(str(exc))


def build_output_path(input_path: Path) -> Path:
    """
    Construct a safe output file path based on the input file.

    - Preserves the original folder
    - Replaces dots in extensions with underscores
    - Appends '_results.txt' at the end

    Examples
    --------
    input: resources/operations.txt
    output: resources/operations_txt_results.txt

    input: resources/operations_short.tar.xz
    output: resources/operations_short_tar_xz_results.txt

    :param input_path: Path to the input file
    :return: Path to the output file
    """
    stem = input_path.name[: -len("".join(input_path.suffixes))] if input_path.suffixes else input_path.name
    suffix_safe = "".join(input_path.suffixes).replace(".", "_")
    return input_path.with_name(f"{stem}{suffix_safe}_results.txt")


def run_expressions(expressions: List[str], calculator: Calculator) -> int:
    """
    Evaluate and print each expression; failures go to stderr.

    :param list expressions: Expressions to evaluate
    :param Calculator calculator: Calculator to evaluate them with

    :return: Exit status
    :rtype: int
    """
    status = 0
    for expr in expressions:
        try:
            print(calculator.evaluate(expr))
        except CalculatorError as exc:
            logger.debug(f"❌ {expr!r}: {exc!r}")
            print(f"{expr} -> ERROR: {exc}", file=sys.stderr)
            status = 1
    return status


def run_file(cli_args: CliArgs) -> int:
    """
    Evaluate an expressions file with worker processes.

    :param CliArgs cli_args: Validated CLI arguments

    :return: Exit status
    :rtype: int
    """
    input_path: Path = Path(cli_args.file_path)
    output_path: Path = cli_args.output_path or build_output_path(input_path)

    runner_options = {"right_associative": cli_args.right_associative}
    if cli_args.workers is not None:
        runner_options["max_workers"] = cli_args.workers
    runner = BatchRunner(**runner_options)

    try:
        results = runner.evaluate_file(input_path, output_path)
    except ValueError as exc:
        logger.error(f"📄❌ Could not read {input_path}: {exc}")
        return 1
    return 0 if all(r.ok for r in results) else 1


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main function executed by the ``rpn-calc`` console script.
    """
    cli_args = parse_args(argv)
    if cli_args.verbose:
        logger.setLevel(logging.DEBUG)

    if cli_args.file_path is not None:
        return run_file(cli_args)
    return run_expressions(cli_args.expressions, Calculator(right_associative=cli_args.right_associative))


if __name__ == "__main__":
    sys.exit(main())
