"""
Base class for extraction engines.

An engine wraps one third-party PDF library behind a single call:
given a document, report how much text it extracted and how many pages it
saw, or report why it could not. Subclasses implement ``_extract`` and
signal expected problems by raising ``EngineError`` subclasses; anything
else they raise is treated as a crash by the benchmark runner.
"""

import importlib.util
import io
import shutil
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, Optional, Tuple

from ..errors import EngineError, MalformedDocumentError, NativeLibraryUnavailableError
from ..schema import ExtractionFailure, ExtractionOutcome, ExtractionSuccess
from ..utils.io import text_byte_length


@dataclass(frozen=True)
class DocumentSource:
    """A document handed to every engine: its path and, once loaded, its bytes."""
    path: Path
    data: Optional[bytes] = None

    def stream(self) -> BinaryIO:
        """Binary stream over the document, from memory when the bytes are loaded."""
        if self.data is not None:
            return io.BytesIO(self.data)
        return open(self.path, 'rb')


@dataclass(frozen=True)
class ExtractedText:
    """Raw output of an engine before it is normalized into an outcome."""
    text: str
    page_count: Optional[int] = None


class ExtractionEngine(ABC):
    """Adapter contract for one extraction backend."""

    engine_id: str = ""
    description: str = ""
    # Python modules the engine imports
    requires_modules: Tuple[str, ...] = ()
    # Executables the engine runs
    requires_executables: Tuple[str, ...] = ()

    def is_available(self) -> bool:
        """Whether the engine's libraries and executables can be found."""
        for module in self.requires_modules:
            if importlib.util.find_spec(module) is None:
                return False
        for executable in self.requires_executables:
            if shutil.which(executable) is None:
                return False
        return True

    def extract(self, source: DocumentSource) -> ExtractionOutcome:
        """
        Extract text from a document.

        Args:
            source: Document to process

        Returns:
            ExtractionSuccess with the UTF-8 length of the text, or
            ExtractionFailure for errors the engine signalled itself
        """
        try:
            extracted = self._extract(source)
            if extracted.page_count == 0:
                # Lenient parsers "recover" garbage into an empty page tree
                raise MalformedDocumentError("document has no pages")
        except EngineError as e:
            return ExtractionFailure(error_kind=e.kind, message=e.message)

        return ExtractionSuccess(
            text_length=text_byte_length(extracted.text),
            page_count=extracted.page_count
        )

    @abstractmethod
    def _extract(self, source: DocumentSource) -> ExtractedText:
        """Run the engine. Raise EngineError subclasses for expected failures."""

    def _import(self, module: str):
        """Import the engine's library, mapping ImportError to an engine error."""
        try:
            return importlib.import_module(module)
        except ImportError as e:
            raise NativeLibraryUnavailableError(
                f"{module} is not installed: {e}"
            ) from e

    def __repr__(self) -> str:
        return f"{type(self).__name__}(engine_id={self.engine_id!r})"
