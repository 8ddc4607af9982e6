"""
Logging utilities for PDFText-Bench.
"""

import logging
import json
import sys
from datetime import datetime, timezone
from typing import Optional
from pathlib import Path

_RESERVED_ATTRS = frozenset([
    'name', 'msg', 'args', 'levelname', 'levelno', 'pathname',
    'filename', 'module', 'lineno', 'funcName', 'created',
    'msecs', 'relativeCreated', 'thread', 'threadName',
    'processName', 'process', 'getMessage', 'exc_info',
    'exc_text', 'stack_info', 'taskName', 'message'
])


class JSONFormatter(logging.Formatter):
    """JSON formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            'timestamp': datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z'),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
            'module': record.module,
            'function': record.funcName,
            'line': record.lineno
        }

        if record.exc_info:
            log_entry['exception'] = self.formatException(record.exc_info)

        # Add extra fields
        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS:
                log_entry[key] = value

        return json.dumps(log_entry, default=str)


def setup_logging(
    level: str = "WARNING",
    log_file: Optional[Path] = None,
    json_format: bool = False,
    console_output: bool = True
) -> logging.Logger:
    """
    Set up logging configuration.

    Console output goes to stderr; stdout is reserved for the report.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional log file path
        json_format: Whether to use JSON formatting
        console_output: Whether to output to console

    Returns:
        Configured logger
    """
    # Clear any existing handlers
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    numeric_level = getattr(logging, level.upper(), logging.WARNING)
    root_logger.setLevel(numeric_level)

    if json_format:
        formatter = JSONFormatter()
    else:
        formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        )

    if console_output:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(formatter)
        root_logger.addHandler(console_handler)

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding='utf-8')
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    return root_logger


def log_extraction_start(
    logger: logging.Logger,
    engine: str,
    file_path: str,
    **kwargs
) -> None:
    """Log extraction start."""
    logger.debug(
        "Starting extraction",
        extra={
            'event': 'extraction_start',
            'engine': engine,
            'file_path': file_path,
            **kwargs
        }
    )


def log_extraction_end(
    logger: logging.Logger,
    engine: str,
    file_path: str,
    success: bool,
    duration: float,
    **kwargs
) -> None:
    """Log extraction completion."""
    logger.info(
        f"Extraction completed: {engine} on {file_path} in {duration * 1000:.2f} ms",
        extra={
            'event': 'extraction_end',
            'engine': engine,
            'file_path': file_path,
            'success': success,
            'duration': duration,
            **kwargs
        }
    )


def log_extraction_error(
    logger: logging.Logger,
    engine: str,
    file_path: str,
    error_kind: str,
    message: str,
    **kwargs
) -> None:
    """Log extraction failure."""
    logger.warning(
        f"Extraction failed: {engine} on {file_path}: {error_kind}: {message}",
        extra={
            'event': 'extraction_error',
            'engine': engine,
            'file_path': file_path,
            'error_kind': error_kind,
            'error_message': message,
            **kwargs
        }
    )
