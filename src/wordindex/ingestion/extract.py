"""Text extraction for stored documents.

Word documents are read with python-docx; plain text files are decoded
directly.
"""

from __future__ import annotations

import io
import logging
import zipfile
from pathlib import PurePosixPath
from typing import Iterator

from docx import Document
from docx.opc.exceptions import PackageNotFoundError
from lxml.etree import LxmlError

from wordindex.errors import FatalIndexError
from wordindex.utils.text import normalize_whitespace

LOGGER = logging.getLogger(__name__)

TEXT_SUFFIXES = (".txt", ".md")


def iter_docx_text(data: bytes) -> Iterator[str]:
    """Yield paragraph and table-cell text from a .docx payload."""
    document = Document(io.BytesIO(data))
    for paragraph in document.paragraphs:
        yield paragraph.text
    for table in document.tables:
        for row in table.rows:
            for cell in row.cells:
                yield cell.text


def extract_text(data: bytes, name: str) -> str:
    """Extract raw text from document bytes, choosing the reader by suffix."""
    suffix = PurePosixPath(name).suffix.lower()
    if suffix in TEXT_SUFFIXES:
        return data.decode("utf-8", errors="replace")
    if suffix != ".docx":
        raise FatalIndexError(f"Unsupported document type: {name}")

    try:
        return normalize_whitespace(iter_docx_text(data))
    except (PackageNotFoundError, zipfile.BadZipFile, LxmlError, KeyError, ValueError) as exc:
        LOGGER.error("Something went wrong while extracting text from %s: %s", name, exc)
        raise FatalIndexError(f"Cannot extract text from {name}") from exc
