"""Evaluate a file of arithmetic expressions using worker processes."""
from multiprocessing import Pipe, Process, cpu_count
from multiprocessing.connection import Connection
from pathlib import Path
import tarfile
import tempfile
from typing import List, Sequence, Tuple
import zipfile

import py7zr
from pydantic import BaseModel, Field, FilePath

from rpn_calculator.batch.worker import WorkerProcess
from rpn_calculator.common.logger import logger
from rpn_calculator.common.models import EvaluationRequest, EvaluationResult


class BatchRunner(BaseModel):
    """
    Evaluate many expressions, one worker process per expression.

    Features:
        - Reads expressions from a plain text file or the first .txt file of an archive.
        - Keeps at most ``max_workers`` worker processes alive at a time.
        - Ensures each worker is joined as soon as its result is collected.
        - Returns results in input order, whatever order workers finish in.
    """

    max_workers: int = Field(default_factory=cpu_count, ge=1, description="Maximum number of live workers")
    right_associative: bool = Field(default=False, description="Legacy right-to-left grouping")

    def load_expressions(self, input_file: FilePath) -> List[str]:
        """
        Read the non-empty expression lines of a text file or archive.

        :param FilePath input_file: Path to a .txt file or a .zip, .tar.xz or .7z archive

        :return: List of stripped, non-empty expression lines
        :rtype: List[str]
        :raises ValueError: If the archive format is unsupported, corrupt or contains no .txt file
        """
        if input_file.suffix.lower() == ".txt":
            content = input_file.read_text(encoding="utf-8")
        else:
            content = self._extract_archive(input_file)
        return [line.strip() for line in content.splitlines() if line.strip()]

    def _extract_archive(self, archive_path: FilePath) -> str:
        """
        Extract the first .txt file found in a supported archive and return its content as a string.

        Supported formats (extensions compared case-insensitively):
        - .zip
        - .tar.xz
        - .7z

        :param FilePath archive_path: Path to the archive file

        :return: Content of the extracted .txt file
        :rtype: str
        :raises ValueError: If no .txt file is found, the format is unsupported or the archive is corrupt
        """
        suffixes = [s.lower() for s in archive_path.suffixes]
        try:
            # Create a temporary directory for safe extraction
            with tempfile.TemporaryDirectory() as tmpdir:
                tmpdir_path = Path(tmpdir)
                if suffixes[-1:] == [".zip"]:
                    with zipfile.ZipFile(archive_path, "r") as zf:
                        txt_files = [f for f in zf.namelist() if f.lower().endswith(".txt")]
                        if not txt_files:
                            raise ValueError("📄❌ No .txt file found in zip archive")
                        zf.extract(txt_files[0], path=tmpdir_path)
                        return (tmpdir_path / txt_files[0]).read_text(encoding="utf-8")

                elif suffixes[-2:] == [".tar", ".xz"]:
                    with tarfile.open(archive_path, "r:xz") as tf:
                        txt_files = [m for m in tf.getmembers() if m.isfile() and m.name.lower().endswith(".txt")]
                        if not txt_files:
                            raise ValueError("📄❌ No .txt file found in tar.xz archive")
                        tf.extract(txt_files[0], path=tmpdir_path, filter="data")
                        return (tmpdir_path / txt_files[0].name).read_text(encoding="utf-8")

                elif suffixes[-1:] == [".7z"]:
                    with py7zr.SevenZipFile(archive_path, mode="r") as archive:
                        txt_files = [f for f in archive.getnames() if f.lower().endswith(".txt")]
                        if not txt_files:
                            raise ValueError("📄❌ No .txt file found in 7z archive")
                        archive.extract(targets=[txt_files[0]], path=tmpdir_path)
                        return (tmpdir_path / txt_files[0]).read_text(encoding="utf-8")

                else:
                    raise ValueError(f"📄❌ Unsupported archive format: {archive_path.suffix}")
        except (zipfile.BadZipFile, tarfile.ReadError, py7zr.Bad7zFile) as exc:
            raise ValueError(f"📄❌ Corrupt archive: {archive_path.name}") from exc

    def _spawn_worker(self, expr: str, line_number: int) -> Tuple[Process, Connection, EvaluationRequest]:
        """
        Spawn a WorkerProcess for the given expression and return process and pipe.

        :param str expr: Arithmetic expression
        :param int line_number: Line number of expression in input

        :return: Tuple of (Process, parent_pipe, request)
        :rtype: Tuple[Process, Connection, EvaluationRequest]
        """
        parent_conn, child_conn = Pipe()
        worker = WorkerProcess(
            conn=child_conn,
            expression=expr,
            line_number=line_number,
            right_associative=self.right_associative,
        )
        process = Process(target=worker.run)
        process.start()
        # The child owns its end now
        child_conn.close()
        return process, parent_conn, EvaluationRequest(expression=expr, line_number=line_number)

    def _collect_finished_workers(
        self,
        active_workers: List[Tuple[Process, Connection, EvaluationRequest]],
        results: List[EvaluationResult],
    ) -> None:
        """
        Collect results from all workers that have sent their outcome.

        Finished workers are joined and removed from the active_workers list.

        :param list active_workers: List of tuples (Process, Connection, EvaluationRequest)
        :param list results: Collected results, appended in place
        """
        # Iterate in reverse to safely remove finished workers while iterating
        for i in reversed(range(len(active_workers))):
            proc, pipe_conn, request = active_workers[i]
            if not pipe_conn.poll(0.01):
                continue

            try:
                results.append(EvaluationResult(**pipe_conn.recv()))
            except EOFError:
                # Worker exited without sending anything
                logger.error(f"👷❌ Worker for line {request.line_number} died (exit code {proc.exitcode})")
                results.append(EvaluationResult(
                    line_number=request.line_number,
                    expression=request.expression,
                    error="Worker process exited without a result",
                ))
            finally:
                pipe_conn.close()
                proc.join()
                active_workers.pop(i)

    def run(self, expressions: Sequence[str]) -> List[EvaluationResult]:
        """
        Evaluate expressions in worker processes, respecting ``max_workers``.

        :param Sequence[str] expressions: Non-empty expressions, line numbers start at 1

        :return: Results ordered by line number
        :rtype: List[EvaluationResult]
        """
        results: List[EvaluationResult] = []
        active_workers: List[Tuple[Process, Connection, EvaluationRequest]] = []
        max_workers: int = max(1, min(self.max_workers, len(expressions)))

        for line_number, expr in enumerate(expressions, start=1):
            # Wait until a worker slot is available
            while len(active_workers) >= max_workers:
                self._collect_finished_workers(active_workers, results)

            active_workers.append(self._spawn_worker(expr, line_number))

        # Collect remaining active workers
        while active_workers:
            self._collect_finished_workers(active_workers, results)

        return sorted(results, key=lambda r: r.line_number)

    def evaluate_file(self, input_file: FilePath, output_file: Path) -> List[EvaluationResult]:
        """
        Evaluate every expression of an input file and write one line per result.

        :param FilePath input_file: Path to the input file or archive
        :param Path output_file: Path where results will be written

        :return: Results ordered by line number
        :rtype: List[EvaluationResult]
        """
        expressions = self.load_expressions(input_file)
        logger.info(f"📄 Loaded {len(expressions)} expressions from {input_file}")

        results = self.run(expressions)
        with output_file.open("w", encoding="utf-8") as f_out:
            for result in results:
                f_out.write(result.render() + "\n")

        failed = sum(1 for r in results if not r.ok)
        logger.info(f"✅ Results written to {output_file} ({failed} failed)")
        return results
