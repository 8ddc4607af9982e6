"""
Report rendering for PDFText-Bench.

Reporters are projections of a BatchReport onto a text stream. They keep the
registry order within a file and the discovery order across files.
"""

import json
import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, TextIO

from .schema import BatchReport, BenchmarkResult, EngineId, ExtractionFailure, ExtractionSuccess
from .utils.timers import format_ms

logger = logging.getLogger(__name__)

MISSING = "—"
FILE_SEPARATOR = "=" * 60
RESULT_SEPARATOR = "---"


@dataclass
class EngineSummary:
    """Aggregate timings for one engine over a batch."""
    engine: EngineId
    files: int
    successes: int
    total_ms: float
    mean_ms: Optional[float]
    min_ms: Optional[float]
    max_ms: Optional[float]


def summarize(report: BatchReport) -> List[EngineSummary]:
    """
    Per-engine statistics across all files, in registry order.

    Timings are aggregated over successful runs only.
    """
    durations: Dict[EngineId, List[float]] = {engine: [] for engine in report.engines}
    attempts: Dict[EngineId, int] = {engine: 0 for engine in report.engines}

    for file_results in report.files:
        for result in file_results.results:
            attempts.setdefault(result.engine, 0)
            durations.setdefault(result.engine, [])
            attempts[result.engine] += 1
            if result.success:
                durations[result.engine].append(result.duration_ms)

    summaries = []
    for engine, timings in durations.items():
        summaries.append(EngineSummary(
            engine=engine,
            files=attempts[engine],
            successes=len(timings),
            total_ms=sum(timings),
            mean_ms=sum(timings) / len(timings) if timings else None,
            min_ms=min(timings) if timings else None,
            max_ms=max(timings) if timings else None
        ))
    return summaries


def _fmt_ms(value: Optional[float]) -> str:
    return MISSING if value is None else f"{value:.2f} ms"


def _fmt_count(value: Optional[int]) -> str:
    return MISSING if value is None else str(value)


def _fmt_number(value: Optional[float]) -> str:
    return MISSING if value is None else f"{value:.2f}"


class TextReporter:
    """Plain-text report, one block per engine result."""

    def __init__(self, stream: TextIO):
        self.stream = stream

    def render(self, report: BatchReport) -> None:
        write = self.stream.write

        for index, file_results in enumerate(report.files):
            if index > 0:
                write(f"{FILE_SEPARATOR}\n")

            write(f"PDF extraction benchmark for: {file_results.file}\n")
            write("Backends attempted:\n")
            for engine in report.engines:
                write(f"  - {engine}\n")
            for engine in report.disabled_engines:
                write(f"  - {engine}: (not available)\n")

            for result in file_results.results:
                self._render_result(result)

        if len(report.files) > 1:
            write(f"{FILE_SEPARATOR}\n")
            self._render_summary(report)

        write("Done.\n")

    def _render_result(self, result: BenchmarkResult) -> None:
        write = self.stream.write
        outcome = result.outcome

        write(f"{RESULT_SEPARATOR}\n")
        write(f"Backend: {result.engine}\n")
        write(f"  Time: {format_ms(result.duration)}\n")

        if isinstance(outcome, ExtractionSuccess):
            write(f"  Extracted bytes: {outcome.text_length}\n")
            write(f"  Pages: {_fmt_count(outcome.page_count)}\n")
            write("  Success: true\n")
        else:
            write(f"  Extracted bytes: {MISSING}\n")
            write(f"  Pages: {MISSING}\n")
            write("  Success: false\n")
            write(f"  Error: {outcome.error_kind.value}: {outcome.message}\n")

    def _render_summary(self, report: BatchReport) -> None:
        write = self.stream.write
        write(f"Summary over {report.files_processed} files:\n")
        write(f"{'Backend':<14} {'Success':>9} {'Total':>14} {'Mean':>12} {'Min':>12} {'Max':>12}\n")

        for summary in summarize(report):
            success = f"{summary.successes}/{summary.files}"
            write(
                f"{summary.engine:<14} {success:>9} {summary.total_ms:>11.2f} ms "
                f"{_fmt_ms(summary.mean_ms):>12} {_fmt_ms(summary.min_ms):>12} "
                f"{_fmt_ms(summary.max_ms):>12}\n"
            )


class MarkdownReporter:
    """Markdown report with one table per file."""

    def __init__(self, stream: TextIO):
        self.stream = stream

    def render(self, report: BatchReport) -> None:
        write = self.stream.write
        write("# PDF Extraction Benchmark\n\n")
        write(f"**Input:** `{report.input_path}`\n\n")
        if report.disabled_engines:
            write(f"**Not available:** {', '.join(report.disabled_engines)}\n\n")

        for file_results in report.files:
            write(f"## `{file_results.file}`\n\n")
            write("| Backend | Time (ms) | Extracted bytes | Pages | Success | Error |\n")
            write("|---------|-----------|-----------------|-------|---------|-------|\n")

            for result in file_results.results:
                outcome = result.outcome
                if isinstance(outcome, ExtractionFailure):
                    size, pages = MISSING, MISSING
                    error = f"{outcome.error_kind.value}: {outcome.message}".replace("|", "\\|")
                else:
                    size, pages = str(outcome.text_length), _fmt_count(outcome.page_count)
                    error = ""
                write(
                    f"| {result.engine} | {result.duration_ms:.2f} | {size} | {pages} | "
                    f"{str(result.success).lower()} | {error} |\n"
                )
            write("\n")

        if len(report.files) > 1:
            write("## Summary\n\n")
            write("| Backend | Success | Total (ms) | Mean (ms) | Min (ms) | Max (ms) |\n")
            write("|---------|---------|------------|-----------|----------|----------|\n")
            for summary in summarize(report):
                write(
                    f"| {summary.engine} | {summary.successes}/{summary.files} | "
                    f"{summary.total_ms:.2f} | {_fmt_number(summary.mean_ms)} | "
                    f"{_fmt_number(summary.min_ms)} | {_fmt_number(summary.max_ms)} |\n"
                )
            write("\n")


class JsonReporter:
    """Machine-readable report: the BatchReport as JSON."""

    def __init__(self, stream: TextIO, indent: int = 2):
        self.stream = stream
        self.indent = indent

    def render(self, report: BatchReport) -> None:
        self.stream.write(json.dumps(report.model_dump(mode='json'), indent=self.indent, ensure_ascii=False))
        self.stream.write("\n")


REPORTERS = {
    'text': TextReporter,
    'md': MarkdownReporter,
    'json': JsonReporter,
}


def create_reporter(format: str, stream: TextIO):
    """Create a reporter for the given format."""
    try:
        reporter_cls = REPORTERS[format]
    except KeyError:
        raise ValueError(f"Unsupported report format: {format}")
    return reporter_cls(stream)
