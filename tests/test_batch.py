import pytest

from fakes import StaticEngine
from pdftext_bench.batch import BatchController
from pdftext_bench.errors import NoInputFoundError
from pdftext_bench.registry import EngineRegistry
from pdftext_bench.runner import BenchmarkRunner, Isolation
from pdftext_bench.suite import SuiteOrchestrator
from pdftext_bench.utils.io import find_pdf_files


class SpyOrchestrator(SuiteOrchestrator):
    def __init__(self, registry):
        super().__init__(registry, BenchmarkRunner(isolation=Isolation.INLINE))
        self.calls = []

    def run(self, file_path):
        self.calls.append(file_path)
        return super().run(file_path)


def touch(path, content=b"%PDF-1.4\n"):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(content)
    return path


def test_directory_files_in_lexicographic_order(tmp_path):
    for name in ["c.pdf", "a.pdf", "b.pdf"]:
        touch(tmp_path / name)

    report = BatchController(SpyOrchestrator(EngineRegistry([StaticEngine("x")]))).run(tmp_path)

    assert [f.file.name for f in report.files] == ["a.pdf", "b.pdf", "c.pdf"]


def test_extension_match_is_case_insensitive(tmp_path):
    touch(tmp_path / "upper.PDF")
    touch(tmp_path / "notes.txt")

    assert [p.name for p in find_pdf_files(tmp_path)] == ["upper.PDF"]


def test_shallow_and_recursive_discovery(tmp_path):
    touch(tmp_path / "top.pdf")
    touch(tmp_path / "sub" / "nested.pdf")

    assert [p.name for p in find_pdf_files(tmp_path)] == ["top.pdf"]
    assert [p.relative_to(tmp_path).as_posix() for p in find_pdf_files(tmp_path, recursive=True)] == [
        "sub/nested.pdf", "top.pdf"
    ]


def test_single_file_is_used_as_is(tmp_path):
    path = touch(tmp_path / "report.bin")
    assert find_pdf_files(path) == [path]


def test_missing_path_never_reaches_orchestrator(tmp_path):
    orchestrator = SpyOrchestrator(EngineRegistry([StaticEngine("x")]))

    with pytest.raises(NoInputFoundError):
        BatchController(orchestrator).run(tmp_path / "missing")

    assert orchestrator.calls == []


def test_directory_without_pdfs(tmp_path):
    touch(tmp_path / "readme.txt")
    with pytest.raises(NoInputFoundError):
        find_pdf_files(tmp_path)


def test_report_shape_and_engine_lists(tmp_path):
    touch(tmp_path / "one.pdf")
    touch(tmp_path / "two.pdf")
    registry = EngineRegistry([StaticEngine("a"), StaticEngine("b")], disabled=["c"])

    report = BatchController(SpyOrchestrator(registry)).run(tmp_path)

    assert report.input_path == tmp_path
    assert report.engines == ["a", "b"]
    assert report.disabled_engines == ["c"]
    assert len(report.files) == 2
    assert all(f.engines == ["a", "b"] for f in report.files)


def test_zero_engines_one_file(placeholder_pdf):
    report = BatchController(SpyOrchestrator(EngineRegistry())).run(placeholder_pdf)

    assert len(report.files) == 1
    assert report.files[0].results == []
