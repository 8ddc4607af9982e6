"""
PDFPlumber engine for PDFText-Bench.
Extracts page text using pdfplumber.
"""

import logging

from .base import DocumentSource, ExtractedText, ExtractionEngine
from .pdfminer_engine import classify_pdfminer_error

logger = logging.getLogger(__name__)


class PDFPlumberEngine(ExtractionEngine):
    """Text extraction with pdfplumber."""

    engine_id = "pdfplumber"
    description = "pdfplumber page.extract_text (pdfminer based)"
    requires_modules = ("pdfplumber",)

    def _extract(self, source: DocumentSource) -> ExtractedText:
        pdfplumber = self._import("pdfplumber")
        exceptions = self._import("pdfplumber.utils.exceptions")

        try:
            # pdfplumber leaves streams it did not open to the caller
            with source.stream() as stream, pdfplumber.open(stream) as pdf:
                page_count = len(pdf.pages)
                page_texts = []

                for page in pdf.pages:
                    page_texts.append(page.extract_text() or "")
                    # Release cached layout objects between pages
                    page.close()
        except exceptions.PdfminerException as e:
            original = e.args[0] if e.args else e.__context__
            mapped = classify_pdfminer_error(original) if original is not None else None
            if mapped is None:
                raise
            raise mapped from e
        except Exception as e:
            mapped = classify_pdfminer_error(e)
            if mapped is None:
                raise
            raise mapped from e

        return ExtractedText(text="\n".join(page_texts), page_count=page_count)
