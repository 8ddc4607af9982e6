"""
Poppler pdftotext engine for PDFText-Bench.
Runs the pdftotext command-line tool and measures its output.
"""

import logging
import shutil
import subprocess

from .base import DocumentSource, ExtractedText, ExtractionEngine
from ..errors import (
    EngineError, MalformedDocumentError, NativeLibraryUnavailableError,
    UnsupportedFeatureError
)
from ..utils.io import count_form_feeds

logger = logging.getLogger(__name__)

# pdftotext exit codes
EXIT_OPEN_PDF_ERROR = 1
EXIT_PERMISSION_ERROR = 3


class PdftotextEngine(ExtractionEngine):
    """
    Text extraction with Poppler's pdftotext utility.

    The tool reads the document from disk, so this engine always uses the
    source path even when the bytes are preloaded.
    """

    engine_id = "pdftotext"
    description = "poppler-utils pdftotext -layout (external process)"

    def __init__(self, executable: str = "pdftotext", layout: bool = True):
        """
        Initialize pdftotext engine.

        Args:
            executable: Name or path of the pdftotext binary
            layout: Pass -layout to keep the physical layout
        """
        self.executable = executable
        self.layout = layout

    def is_available(self) -> bool:
        return shutil.which(self.executable) is not None

    def _extract(self, source: DocumentSource) -> ExtractedText:
        command = [self.executable, '-q', '-enc', 'UTF-8']
        if self.layout:
            command.append('-layout')
        command.extend([str(source.path), '-'])

        try:
            result = subprocess.run(command, capture_output=True)
        except FileNotFoundError as e:
            raise NativeLibraryUnavailableError(
                f"{self.executable} not found; install poppler-utils"
            ) from e

        if result.returncode != 0:
            stderr = result.stderr.decode('utf-8', errors='replace').strip()
            message = f"pdftotext exited with status {result.returncode}"
            if stderr:
                message = f"{message}: {stderr}"

            if result.returncode == EXIT_OPEN_PDF_ERROR:
                raise MalformedDocumentError(message)
            if result.returncode == EXIT_PERMISSION_ERROR:
                raise UnsupportedFeatureError(message)
            raise EngineError(message)

        text = result.stdout.decode('utf-8', errors='replace')
        pages = count_form_feeds(text)
        return ExtractedText(text=text, page_count=pages if pages > 0 else None)
