"""
Batch controller for PDFText-Bench.
Resolves the input path into PDF files and runs the suite on each of them.
"""

import logging
from pathlib import Path
from typing import List, Union

from .schema import BatchReport
from .suite import SuiteOrchestrator
from .utils.io import find_pdf_files
from .utils.timers import format_ms, time_operation

logger = logging.getLogger(__name__)


class BatchController:
    """Drive the suite orchestrator once per discovered file."""

    def __init__(self, orchestrator: SuiteOrchestrator):
        self.orchestrator = orchestrator

    def discover(self, input_path: Union[str, Path], recursive: bool = False) -> List[Path]:
        """
        Resolve the input path into an ordered list of files.

        Raises:
            NoInputFoundError: Nothing to benchmark
        """
        pdf_files = find_pdf_files(input_path, recursive=recursive)
        logger.info(f"Found {len(pdf_files)} PDF file(s) under {input_path}")
        return pdf_files

    def run(self, input_path: Union[str, Path], recursive: bool = False) -> BatchReport:
        """
        Benchmark every file under the input path, sequentially.

        Files are discovered before any engine runs, so a missing input never
        reaches the orchestrator.

        Args:
            input_path: PDF file or directory
            recursive: Walk subdirectories

        Returns:
            BatchReport in discovery order

        Raises:
            NoInputFoundError: Nothing to benchmark
        """
        pdf_files = self.discover(input_path, recursive=recursive)
        registry = self.orchestrator.registry

        report = BatchReport(
            input_path=Path(input_path),
            engines=registry.ids,
            disabled_engines=registry.disabled
        )

        with time_operation("batch", log_result=False) as timer:
            for index, pdf_path in enumerate(pdf_files, 1):
                logger.info(f"[{index}/{len(pdf_files)}] {pdf_path}")
                report.files.append(self.orchestrator.run(pdf_path))

        logger.info(f"Benchmarked {report.files_processed} file(s) in {format_ms(timer.elapsed)}")

        return report
