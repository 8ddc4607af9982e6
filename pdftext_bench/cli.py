"""
Command-line interface for PDFText-Bench.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional, TextIO

from .batch import BatchController
from .config import BenchSettings, load_env_file, parse_engine_list
from .errors import ConfigurationError, NoInputFoundError
from .registry import build_registry
from .reporter import create_reporter
from .runner import BenchmarkRunner, Isolation
from .suite import InputMode, SuiteOrchestrator
from .utils.logging import setup_logging

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_NO_INPUT = 1
EXIT_CONFIG_ERROR = 2


def create_parser() -> argparse.ArgumentParser:
    """Create command-line argument parser."""
    parser = argparse.ArgumentParser(
        prog='pdftext-bench',
        description='PDFText-Bench: compare PDF text extraction engines on the same files',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  pdftext-bench document.pdf
  pdftext-bench docs/ --recursive --timeout 30
  pdftext-bench file.pdf --engines pymupdf,pypdfium2 --isolation inline
  pdftext-bench docs/ --format json > results.json
        """
    )

    parser.add_argument(
        'input',
        nargs='?',
        help='Input PDF file or directory'
    )

    parser.add_argument(
        '--recursive', '-r',
        action='store_true',
        default=None,
        help='Walk subdirectories when the input is a directory'
    )

    parser.add_argument(
        '--timeout', '-t',
        type=float,
        default=None,
        help='Per-engine timeout in seconds (default: none)'
    )

    parser.add_argument(
        '--engines', '-e',
        type=str,
        default=None,
        help='Comma-separated engines to run (default: all available)'
    )

    parser.add_argument(
        '--isolation',
        choices=[mode.value for mode in Isolation],
        default=None,
        help='Run engines in this process or in a child process per call (default: subprocess)'
    )

    parser.add_argument(
        '--input-mode',
        choices=[mode.value for mode in InputMode],
        default=None,
        help='Hand engines preloaded bytes or the file path (default: bytes)'
    )

    parser.add_argument(
        '--include-unavailable',
        action='store_true',
        default=None,
        help='Keep engines whose library is missing and report them as failures'
    )

    parser.add_argument(
        '--require-engines',
        action='store_true',
        default=None,
        help='Exit with an error when no engine is available'
    )

    parser.add_argument(
        '--format', '-f',
        choices=['text', 'md', 'json'],
        default=None,
        help='Report format (default: text)'
    )

    parser.add_argument(
        '--list-engines',
        action='store_true',
        help='List known engines and their availability, then exit'
    )

    parser.add_argument(
        '--env-file',
        type=str,
        default=None,
        help='Load settings from this .env file (default: ./.env if present)'
    )

    # Logging
    parser.add_argument(
        '--log-level',
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
        default=None,
        help='Logging level (default: WARNING)'
    )

    parser.add_argument(
        '--log-file',
        type=str,
        default=None,
        help='Log file path (default: console only)'
    )

    parser.add_argument(
        '--json-logs',
        action='store_true',
        default=None,
        help='Emit structured JSON log records'
    )

    return parser


def settings_from_args(args: argparse.Namespace) -> BenchSettings:
    """Environment settings with command-line overrides applied."""
    return BenchSettings.from_env().merged(
        timeout=args.timeout,
        isolation=args.isolation,
        input_mode=args.input_mode,
        engines=parse_engine_list(args.engines),
        include_unavailable=args.include_unavailable,
        require_engines=args.require_engines,
        recursive=args.recursive,
        report_format=args.format,
        log_level=args.log_level,
        log_file=Path(args.log_file) if args.log_file else None,
        json_logs=args.json_logs
    )


def list_engines(settings: BenchSettings, stream: TextIO) -> None:
    """Print every catalogue engine with its availability."""
    registry = build_registry(
        selected=settings.engines,
        include_unavailable=True,
        engine_options=settings.engine_options()
    )
    for engine in registry:
        status = "available" if engine.is_available() else "not available"
        stream.write(f"{engine.engine_id:<12} {status:<14} {engine.description}\n")


def run_benchmark(input_path: str, settings: BenchSettings, stream: TextIO) -> int:
    """
    Benchmark the input path and render the report.

    Returns:
        Process exit code
    """
    registry = build_registry(
        selected=settings.engines,
        include_unavailable=settings.include_unavailable,
        engine_options=settings.engine_options()
    )

    if len(registry) == 0:
        if settings.require_engines:
            raise ConfigurationError(
                "No extraction engines available",
                disabled=",".join(registry.disabled) or "none"
            )
        logger.warning("No extraction engines available; results will be empty")

    runner = BenchmarkRunner(isolation=settings.isolation, timeout=settings.timeout)
    controller = BatchController(SuiteOrchestrator(registry, runner, settings.input_mode))

    report = controller.run(input_path, recursive=settings.recursive)
    create_reporter(settings.report_format, stream).render(report)
    return EXIT_OK


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    load_env_file(Path(args.env_file) if args.env_file else None)

    try:
        settings = settings_from_args(args)
    except ConfigurationError as e:
        setup_logging()
        logger.error(str(e))
        return EXIT_CONFIG_ERROR

    setup_logging(
        level=settings.log_level,
        log_file=settings.log_file,
        json_format=settings.json_logs,
        console_output=True
    )

    try:
        if args.list_engines:
            list_engines(settings, sys.stdout)
            return EXIT_OK

        if args.input is None:
            parser.error("the following arguments are required: input")

        return run_benchmark(args.input, settings, sys.stdout)

    except NoInputFoundError as e:
        logger.error(f"No input found: {e}")
        return EXIT_NO_INPUT
    except ConfigurationError as e:
        logger.error(f"Configuration error: {e}")
        return EXIT_CONFIG_ERROR


if __name__ == '__main__':
    sys.exit(main())
