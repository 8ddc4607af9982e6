"""
I/O utilities for PDFText-Bench.
"""

from pathlib import Path
from typing import List, Union
import logging

from ..errors import NoInputFoundError

logger = logging.getLogger(__name__)

PDF_SUFFIX = ".pdf"


def is_pdf_path(path: Path) -> bool:
    """Whether the path has a .pdf suffix (case-insensitive)."""
    return path.suffix.lower() == PDF_SUFFIX


def find_pdf_files(input_path: Union[str, Path], recursive: bool = False) -> List[Path]:
    """
    Find all PDF files in a path.

    A file is returned as-is whatever its extension. Directory entries are
    filtered by extension and sorted by their POSIX path string so that
    repeated runs list files in the same order.

    Args:
        input_path: File or directory path
        recursive: Walk subdirectories as well

    Returns:
        List of PDF file paths

    Raises:
        NoInputFoundError: The path does not exist or the directory holds no PDFs
    """
    input_path = Path(input_path)

    if input_path.is_file():
        return [input_path]

    elif input_path.is_dir():
        candidates = input_path.rglob("*") if recursive else input_path.iterdir()
        pdf_files = [p for p in candidates if p.is_file() and is_pdf_path(p)]

        if not pdf_files:
            raise NoInputFoundError(
                f"No PDF files found in directory {input_path}",
                recursive=recursive
            )

        return sorted(pdf_files, key=lambda p: p.as_posix())

    else:
        raise NoInputFoundError(f"Path {input_path} does not exist")


def load_document(file_path: Union[str, Path]) -> bytes:
    """Read a document's bytes. Raises OSError when the file is unreadable."""
    file_path = Path(file_path)
    data = file_path.read_bytes()
    logger.debug(f"Loaded {len(data)} bytes from {file_path}")
    return data


def text_byte_length(text: str) -> int:
    """UTF-8 byte length of extracted text."""
    return len(text.encode('utf-8', errors='surrogatepass'))


def count_form_feeds(text: str) -> int:
    """Count page breaks emitted as form feeds by text extractors."""
    return text.count('\x0c')
