"""
Shared fixtures: generated PDF files and logging cleanup.
"""

import logging
from pathlib import Path

import pytest

PAGE_COUNT = 4
CORRUPTED_BYTES = b'%PDF-1.4\n' + b'\x00\x13not a pdf body\xff' * 64


def build_test_pdf(path: Path, pages: int = PAGE_COUNT) -> Path:
    """Write a text-only PDF with one paragraph block per page."""
    from reportlab.lib.pagesizes import letter
    from reportlab.lib.styles import getSampleStyleSheet
    from reportlab.platypus import PageBreak, Paragraph, SimpleDocTemplate, Spacer

    doc = SimpleDocTemplate(str(path), pagesize=letter)
    styles = getSampleStyleSheet()
    story = []

    for page_num in range(1, pages + 1):
        story.append(Paragraph(f"Benchmark page {page_num}", styles['Title']))
        story.append(Spacer(1, 12))
        story.append(Paragraph(
            "The quick brown fox jumps over the lazy dog. "
            "Invoice #12345, total $3,038.00, due February 15, 2024.",
            styles['Normal']
        ))
        if page_num < pages:
            story.append(PageBreak())

    doc.build(story)
    return path


@pytest.fixture
def four_page_pdf(tmp_path: Path) -> Path:
    pytest.importorskip("reportlab")
    return build_test_pdf(tmp_path / "valid.pdf")


@pytest.fixture
def corrupted_pdf(tmp_path: Path) -> Path:
    path = tmp_path / "corrupted.pdf"
    path.write_bytes(CORRUPTED_BYTES)
    return path


@pytest.fixture
def placeholder_pdf(tmp_path: Path) -> Path:
    """A file with a .pdf name whose content fake engines never parse."""
    path = tmp_path / "placeholder.pdf"
    path.write_bytes(b'%PDF-1.4\n%%EOF\n')
    return path


@pytest.fixture(autouse=True)
def restore_root_logger():
    """The CLI reconfigures the root logger; put its handlers back after each test."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    for handler in root.handlers[:]:
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    for handler in handlers:
        if handler not in root.handlers:
            root.addHandler(handler)
    root.setLevel(level)
