"""
Real engines against generated documents.

Each test is skipped when the engine's library is not installed.
"""

import gc
import os
import shutil

import pytest

from conftest import PAGE_COUNT, build_test_pdf
from pdftext_bench.batch import BatchController
from pdftext_bench.engines.base import DocumentSource
from pdftext_bench.engines.pdfminer_engine import PdfminerEngine
from pdftext_bench.engines.pdfplumber_engine import PDFPlumberEngine
from pdftext_bench.engines.pdftotext_engine import PdftotextEngine
from pdftext_bench.engines.pymupdf_engine import PyMuPDFEngine
from pdftext_bench.engines.pypdf_engine import PyPDFEngine
from pdftext_bench.engines.pypdfium2_engine import PyPdfium2Engine
from pdftext_bench.registry import EngineRegistry
from pdftext_bench.runner import BenchmarkRunner, Isolation
from pdftext_bench.schema import ErrorKind, ExtractionFailure, ExtractionSuccess
from pdftext_bench.suite import SuiteOrchestrator

LIBRARY_ENGINES = [
    (PDFPlumberEngine, "pdfplumber"),
    (PyMuPDFEngine, "fitz"),
    (PyPDFEngine, "pypdf"),
    (PdfminerEngine, "pdfminer"),
    (PyPdfium2Engine, "pypdfium2"),
]

BROKEN_KINDS = {ErrorKind.MALFORMED_DOCUMENT, ErrorKind.CRASHED, ErrorKind.INPUT_UNREADABLE}


def load(path):
    return DocumentSource(path=path, data=path.read_bytes())


@pytest.mark.parametrize("engine_cls,module", LIBRARY_ENGINES)
def test_library_engine_reads_four_pages(engine_cls, module, four_page_pdf):
    pytest.importorskip(module)

    outcome = engine_cls().extract(load(four_page_pdf))

    assert isinstance(outcome, ExtractionSuccess)
    assert outcome.text_length > 0
    assert outcome.page_count == PAGE_COUNT


@pytest.mark.parametrize("engine_cls,module", LIBRARY_ENGINES)
def test_library_engine_reads_from_path(engine_cls, module, four_page_pdf):
    pytest.importorskip(module)

    outcome = engine_cls().extract(DocumentSource(path=four_page_pdf))

    assert isinstance(outcome, ExtractionSuccess)
    assert outcome.page_count == PAGE_COUNT


@pytest.mark.skipif(not os.path.isdir("/proc/self/fd"), reason="needs /proc/self/fd")
@pytest.mark.parametrize("engine_cls,module", LIBRARY_ENGINES)
def test_library_engine_closes_file_in_path_mode(engine_cls, module, four_page_pdf):
    pytest.importorskip(module)
    engine = engine_cls()
    engine.extract(DocumentSource(path=four_page_pdf))
    gc.collect()
    before = len(os.listdir("/proc/self/fd"))

    for _ in range(20):
        engine.extract(DocumentSource(path=four_page_pdf))

    assert len(os.listdir("/proc/self/fd")) <= before


def test_pdfplumber_classifies_wrapped_pdfminer_errors(corrupted_pdf):
    pytest.importorskip("pdfplumber")

    outcome = PDFPlumberEngine().extract(DocumentSource(path=corrupted_pdf))

    assert isinstance(outcome, ExtractionFailure)
    assert outcome.error_kind is ErrorKind.MALFORMED_DOCUMENT


@pytest.mark.parametrize("engine_cls,module", LIBRARY_ENGINES)
def test_library_engine_rejects_corrupted_file(engine_cls, module, corrupted_pdf):
    pytest.importorskip(module)
    runner = BenchmarkRunner(isolation=Isolation.INLINE)

    result = runner.run(engine_cls(), load(corrupted_pdf))

    assert isinstance(result.outcome, ExtractionFailure)
    assert result.outcome.error_kind in BROKEN_KINDS


@pytest.mark.skipif(shutil.which("pdftotext") is None, reason="poppler-utils not installed")
def test_pdftotext_engine(four_page_pdf, corrupted_pdf):
    engine = PdftotextEngine()

    good = engine.extract(DocumentSource(path=four_page_pdf))
    bad = engine.extract(DocumentSource(path=corrupted_pdf))

    assert isinstance(good, ExtractionSuccess)
    assert good.page_count == PAGE_COUNT
    assert bad.error_kind is ErrorKind.MALFORMED_DOCUMENT


def test_pdftotext_missing_executable(four_page_pdf):
    engine = PdftotextEngine(executable="pdftotext-not-installed-xyz")

    assert not engine.is_available()
    outcome = engine.extract(DocumentSource(path=four_page_pdf))
    assert outcome.error_kind is ErrorKind.NATIVE_LIBRARY_UNAVAILABLE


def test_valid_and_corrupted_directory(tmp_path, corrupted_pdf):
    pytest.importorskip("pypdf")
    pytest.importorskip("pdfminer")
    pytest.importorskip("reportlab")
    batch_dir = tmp_path / "batch"
    batch_dir.mkdir()
    build_test_pdf(batch_dir / "a_valid.pdf")
    (batch_dir / "b_corrupted.pdf").write_bytes(corrupted_pdf.read_bytes())

    registry = EngineRegistry([PyPDFEngine(), PdfminerEngine()])
    suite = SuiteOrchestrator(registry, BenchmarkRunner(isolation=Isolation.INLINE))
    report = BatchController(suite).run(batch_dir)

    assert [f.file.name for f in report.files] == ["a_valid.pdf", "b_corrupted.pdf"]
    valid, corrupted = report.files
    assert [len(valid.results), len(corrupted.results)] == [2, 2]
    assert all(r.success and r.outcome.page_count == PAGE_COUNT for r in valid.results)
    for result in corrupted.results:
        assert not result.success
        assert result.outcome.error_kind in BROKEN_KINDS
