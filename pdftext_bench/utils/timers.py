"""
Timing utilities for PDFText-Bench.
"""

import time
from contextlib import contextmanager
import logging

logger = logging.getLogger(__name__)


class Timer:
    """Simple timer class for measuring execution time."""

    def __init__(self):
        self.start_time = None
        self.end_time = None

    def start(self) -> None:
        """Start the timer."""
        self.start_time = time.perf_counter()
        self.end_time = None

    def stop(self) -> float:
        """Stop the timer and return elapsed time."""
        if self.start_time is None:
            raise RuntimeError("Timer not started")

        self.end_time = time.perf_counter()
        return self.elapsed

    @property
    def elapsed(self) -> float:
        """Get elapsed time in seconds."""
        if self.start_time is None:
            return 0.0

        end_time = self.end_time or time.perf_counter()
        return end_time - self.start_time

    def __enter__(self):
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.stop()


@contextmanager
def time_operation(operation_name: str, log_result: bool = True):
    """
    Context manager for timing operations.

    The timer is stopped on both normal and exceptional exit, so callers can
    read ``timer.elapsed`` after catching an exception raised in the block.

    Args:
        operation_name: Name of the operation being timed
        log_result: Whether to log the timing result

    Yields:
        Timer instance
    """
    timer = Timer()
    timer.start()

    try:
        yield timer
    finally:
        elapsed = timer.stop()
        if log_result:
            logger.debug(f"{operation_name} completed in {elapsed * 1000:.3f} ms")


def format_ms(seconds: float) -> str:
    """Format a duration in seconds as milliseconds with two decimals."""
    return f"{seconds * 1000.0:.2f} ms"
