"""
pypdfium2 engine for PDFText-Bench.
Uses the PDFium bindings for page text.
"""

import logging

from .base import DocumentSource, ExtractedText, ExtractionEngine
from ..errors import EngineError, MalformedDocumentError, UnsupportedFeatureError

logger = logging.getLogger(__name__)

# FPDF_GetLastError codes
FPDF_ERR_FILE = 2
FPDF_ERR_FORMAT = 3
FPDF_ERR_PASSWORD = 4
FPDF_ERR_SECURITY = 5


class PyPdfium2Engine(ExtractionEngine):
    """Text extraction with PDFium through pypdfium2."""

    engine_id = "pypdfium2"
    description = "pypdfium2 textpage.get_text_range (PDFium)"
    requires_modules = ("pypdfium2",)

    def _extract(self, source: DocumentSource) -> ExtractedText:
        pdfium = self._import("pypdfium2")

        try:
            pdf = pdfium.PdfDocument(source.data if source.data is not None else str(source.path))
        except pdfium.PdfiumError as e:
            raise self._map_error(e) from e

        try:
            page_texts = []
            for page in pdf:
                textpage = page.get_textpage()
                page_texts.append(textpage.get_text_range())
                textpage.close()
                page.close()
            return ExtractedText(text="".join(page_texts), page_count=len(pdf))
        finally:
            pdf.close()

    @staticmethod
    def _map_error(error) -> EngineError:
        err_code = getattr(error, "err_code", None)
        if err_code in (FPDF_ERR_PASSWORD, FPDF_ERR_SECURITY):
            return UnsupportedFeatureError(f"PDFium: {error}")
        if err_code in (FPDF_ERR_FORMAT, FPDF_ERR_FILE):
            return MalformedDocumentError(f"PDFium: {error}")
        return EngineError(f"PDFium: {error}")
