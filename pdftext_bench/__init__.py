"""
PDFText-Bench: benchmark PDF text extraction engines side by side.

This package runs several independently implemented PDF text extractors
against the same files, isolates their failures, and reports comparable
timing, output size, page count and success data for each of them.
"""

__version__ = "1.0.0"
__author__ = "PDFText-Bench Team"
__description__ = "Side-by-side PDF text extraction benchmark"

from .schema import (
    BatchReport,
    BenchmarkResult,
    EngineId,
    ErrorKind,
    ExtractionFailure,
    ExtractionOutcome,
    ExtractionSuccess,
    FileResults
)

__all__ = [
    "BatchReport",
    "BenchmarkResult",
    "EngineId",
    "ErrorKind",
    "ExtractionFailure",
    "ExtractionOutcome",
    "ExtractionSuccess",
    "FileResults"
]
