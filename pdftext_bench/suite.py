"""
Suite orchestrator for PDFText-Bench.
Runs every registered engine against one file, one engine at a time.
"""

import logging
from enum import Enum
from pathlib import Path
from typing import Union

from .engines.base import DocumentSource
from .registry import EngineRegistry
from .runner import BenchmarkRunner, describe_exception
from .schema import BenchmarkResult, ErrorKind, ExtractionFailure, FileResults
from .utils.io import load_document

logger = logging.getLogger(__name__)


class InputMode(str, Enum):
    """How the document is handed to engines."""
    # Bytes are read once and every engine parses from memory
    BYTES = "bytes"
    # Engines open the file themselves
    PATH = "path"


class SuiteOrchestrator:
    """Benchmark all registry engines on a single file."""

    def __init__(
        self,
        registry: EngineRegistry,
        runner: BenchmarkRunner,
        input_mode: InputMode = InputMode.BYTES
    ):
        self.registry = registry
        self.runner = runner
        self.input_mode = InputMode(input_mode)

    def run(self, file_path: Union[str, Path]) -> FileResults:
        """
        Run the suite on one file.

        When the file cannot be read, every engine gets an InputUnreadable
        failure with zero duration so each file still has one result per engine.

        Args:
            file_path: PDF file to benchmark

        Returns:
            FileResults in registry order
        """
        file_path = Path(file_path)
        logger.info(f"Benchmarking {file_path} with {len(self.registry)} engine(s)")

        try:
            source = self._load(file_path)
        except OSError as e:
            logger.error(f"Cannot read {file_path}: {e}")
            return self._unreadable(file_path, describe_exception(e))

        results = [self.runner.run(engine, source) for engine in self.registry]
        return FileResults(file=file_path, results=results)

    def _load(self, file_path: Path) -> DocumentSource:
        if self.input_mode is InputMode.BYTES:
            return DocumentSource(path=file_path, data=load_document(file_path))

        with open(file_path, 'rb'):
            pass
        return DocumentSource(path=file_path)

    def _unreadable(self, file_path: Path, message: str) -> FileResults:
        failure = ExtractionFailure(error_kind=ErrorKind.INPUT_UNREADABLE, message=message)
        results = [
            BenchmarkResult(engine=engine_id, file=file_path, duration=0.0, outcome=failure)
            for engine_id in self.registry.ids
        ]
        return FileResults(file=file_path, results=results)
