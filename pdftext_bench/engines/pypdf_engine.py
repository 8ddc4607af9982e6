"""
pypdf engine for PDFText-Bench.
"""

import logging

from .base import DocumentSource, ExtractedText, ExtractionEngine
from ..errors import EngineError, MalformedDocumentError, UnsupportedFeatureError

logger = logging.getLogger(__name__)


class PyPDFEngine(ExtractionEngine):
    """Text extraction with pypdf (pure Python)."""

    engine_id = "pypdf"
    description = "pypdf PdfReader page.extract_text (pure Python)"
    requires_modules = ("pypdf",)

    def _extract(self, source: DocumentSource) -> ExtractedText:
        pypdf = self._import("pypdf")
        errors = pypdf.errors

        try:
            with source.stream() as stream:
                reader = pypdf.PdfReader(stream)

                if reader.is_encrypted and not reader.decrypt(""):
                    raise UnsupportedFeatureError("document is password protected")

                page_texts = [page.extract_text() or "" for page in reader.pages]
                page_count = len(reader.pages)
        except errors.FileNotDecryptedError as e:
            raise UnsupportedFeatureError(f"document is encrypted: {e}") from e
        except errors.DependencyError as e:
            # e.g. AES encryption without the cryptography package
            raise UnsupportedFeatureError(str(e)) from e
        except errors.PdfReadError as e:
            raise MalformedDocumentError(f"pypdf read error: {e}") from e
        except errors.PyPdfError as e:
            raise EngineError(f"pypdf error: {e}") from e

        return ExtractedText(text="\n".join(page_texts), page_count=page_count)
