"""
PyMuPDF engine for PDFText-Bench.
"""

import logging

from .base import DocumentSource, ExtractedText, ExtractionEngine
from ..errors import MalformedDocumentError, UnsupportedFeatureError

logger = logging.getLogger(__name__)


class PyMuPDFEngine(ExtractionEngine):
    """Text extraction with PyMuPDF (MuPDF bindings)."""

    engine_id = "pymupdf"
    description = "PyMuPDF page.get_text (MuPDF)"
    requires_modules = ("fitz",)

    def _extract(self, source: DocumentSource) -> ExtractedText:
        fitz = self._import("fitz")
        file_data_error = getattr(fitz, "FileDataError", None)

        try:
            if source.data is not None:
                doc = fitz.open(stream=source.data, filetype="pdf")
            else:
                doc = fitz.open(str(source.path), filetype="pdf")
        except Exception as e:
            if file_data_error is not None and isinstance(e, file_data_error):
                raise MalformedDocumentError(f"MuPDF could not open document: {e}") from e
            raise

        try:
            if doc.needs_pass:
                raise UnsupportedFeatureError("document is password protected")

            page_texts = [page.get_text() for page in doc]
            return ExtractedText(text="".join(page_texts), page_count=doc.page_count)
        finally:
            doc.close()
