"""
pdfminer.six engine for PDFText-Bench.
"""

import logging
from typing import Optional

from .base import DocumentSource, ExtractedText, ExtractionEngine
from ..errors import EngineError, MalformedDocumentError, UnsupportedFeatureError
from ..utils.io import count_form_feeds

logger = logging.getLogger(__name__)


def classify_pdfminer_error(error: BaseException) -> Optional[EngineError]:
    """
    Map a pdfminer exception to an engine error.

    Shared with the pdfplumber engine, which parses through pdfminer.

    Returns:
        The matching EngineError, or None when the exception is not a pdfminer error
    """
    from pdfminer.pdfdocument import (
        PDFEncryptionError, PDFPasswordIncorrect, PDFTextExtractionNotAllowed
    )
    from pdfminer.pdfparser import PDFSyntaxError
    from pdfminer.psparser import PSException

    if isinstance(error, (PDFPasswordIncorrect, PDFEncryptionError, PDFTextExtractionNotAllowed)):
        return UnsupportedFeatureError(f"encrypted or protected document: {error!r}")
    if isinstance(error, PDFSyntaxError):
        return MalformedDocumentError(f"pdfminer syntax error: {error}")
    if isinstance(error, PSException):
        return MalformedDocumentError(f"pdfminer parse error: {error!r}")
    return None


class PdfminerEngine(ExtractionEngine):
    """Text extraction with pdfminer.six high-level API."""

    engine_id = "pdfminer"
    description = "pdfminer.six extract_text (pure Python)"
    requires_modules = ("pdfminer",)

    def _extract(self, source: DocumentSource) -> ExtractedText:
        high_level = self._import("pdfminer.high_level")

        try:
            with source.stream() as stream:
                text = high_level.extract_text(stream)
        except Exception as e:
            mapped = classify_pdfminer_error(e)
            if mapped is None:
                raise
            raise mapped from e

        # pdfminer terminates every page with a form feed, empty pages included
        return ExtractedText(text=text, page_count=count_form_feeds(text))
