from pathlib import Path

import pytest
from pydantic import ValidationError

from pdftext_bench.schema import (
    BatchReport, BenchmarkResult, ErrorKind, ExtractionFailure, ExtractionSuccess, FileResults
)


def make_result(outcome, engine="pypdf", duration=0.0125):
    return BenchmarkResult(engine=engine, file=Path("a.pdf"), duration=duration, outcome=outcome)


def test_failure_rejects_size_fields():
    with pytest.raises(ValidationError):
        ExtractionFailure(error_kind=ErrorKind.CRASHED, message="x", text_length=10)
    with pytest.raises(ValidationError):
        ExtractionFailure(error_kind=ErrorKind.CRASHED, message="x", page_count=2)


def test_success_rejects_negative_sizes():
    with pytest.raises(ValidationError):
        ExtractionSuccess(text_length=-1)
    with pytest.raises(ValidationError):
        ExtractionSuccess(text_length=1, page_count=-3)


def test_success_page_count_is_optional():
    outcome = ExtractionSuccess(text_length=42)
    assert outcome.page_count is None


def test_result_rejects_negative_duration():
    with pytest.raises(ValidationError):
        make_result(ExtractionSuccess(text_length=1), duration=-0.1)


def test_result_is_immutable():
    result = make_result(ExtractionSuccess(text_length=1))
    with pytest.raises(ValidationError):
        result.duration = 5.0


def test_failed_result_json_round_trip_has_no_sizes():
    result = make_result(ExtractionFailure(error_kind=ErrorKind.MALFORMED_DOCUMENT, message="bad xref"))

    data = result.model_dump(mode='json')
    assert 'text_length' not in data['outcome']
    assert 'page_count' not in data['outcome']

    restored = BenchmarkResult.model_validate_json(result.model_dump_json())
    assert isinstance(restored.outcome, ExtractionFailure)
    assert restored.outcome.error_kind is ErrorKind.MALFORMED_DOCUMENT
    assert not restored.success


def test_batch_report_round_trip_keeps_outcome_variants():
    report = BatchReport(
        input_path=Path("docs"),
        engines=["pypdf", "pymupdf"],
        files=[FileResults(file=Path("docs/a.pdf"), results=[
            make_result(ExtractionSuccess(text_length=120, page_count=4), engine="pypdf"),
            make_result(ExtractionFailure(error_kind=ErrorKind.TIMEOUT, message="slow"), engine="pymupdf"),
        ])]
    )

    restored = BatchReport.model_validate_json(report.model_dump_json())

    outcomes = [r.outcome for r in restored.files[0].results]
    assert isinstance(outcomes[0], ExtractionSuccess)
    assert outcomes[0].page_count == 4
    assert isinstance(outcomes[1], ExtractionFailure)
    assert restored.files[0].engines == ["pypdf", "pymupdf"]


def test_duration_ms():
    result = make_result(ExtractionSuccess(text_length=1), duration=0.0125)
    assert result.duration_ms == pytest.approx(12.5)
