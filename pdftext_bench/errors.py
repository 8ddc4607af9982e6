"""
Exception hierarchy for PDFText-Bench.

Engine errors are raised inside an engine's ``_extract`` hook and turned into
``ExtractionFailure`` values by the engine base class. Bench errors are the
only errors that reach the command line.
"""

from typing import Any

from .schema import ErrorKind


class EngineError(Exception):
    """
    Error signalled by an extraction engine.

    Attributes:
        message: Human-readable error message
        kind: Failure category reported for this error
    """

    kind = ErrorKind.UNKNOWN

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class MalformedDocumentError(EngineError):
    """The document could not be parsed."""
    kind = ErrorKind.MALFORMED_DOCUMENT


class UnsupportedFeatureError(EngineError):
    """The document uses a feature the engine does not handle (e.g. encryption)."""
    kind = ErrorKind.UNSUPPORTED_FEATURE


class NativeLibraryUnavailableError(EngineError):
    """The engine's library or executable is not installed."""
    kind = ErrorKind.NATIVE_LIBRARY_UNAVAILABLE


class EngineTimeoutError(EngineError):
    """The engine gave up on its own time limit."""
    kind = ErrorKind.TIMEOUT


class BenchError(Exception):
    """Base class for run-level errors."""

    def __init__(self, message: str, **details: Any):
        self.message = message
        self.details = details
        super().__init__(message)

    def __str__(self) -> str:
        if self.details:
            detail_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} ({detail_str})"
        return self.message


class NoInputFoundError(BenchError):
    """No PDF file could be resolved from the input path."""
    pass


class ConfigurationError(BenchError):
    """Invalid run configuration."""
    pass
