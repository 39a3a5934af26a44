"""Tests for document text extraction."""

from __future__ import annotations

import io
import zipfile

import pytest
from docx import Document

from wordindex.errors import FatalIndexError
from wordindex.ingestion.extract import extract_text


def _docx_bytes(paragraphs, table=None) -> bytes:
    document = Document()
    for text in paragraphs:
        document.add_paragraph(text)
    if table:
        grid = document.add_table(rows=len(table), cols=len(table[0]))
        for r, row in enumerate(table):
            for c, value in enumerate(row):
                grid.cell(r, c).text = value
    buffer = io.BytesIO()
    document.save(buffer)
    return buffer.getvalue()


def _with_document_xml(data: bytes, xml: bytes) -> bytes:
    """Rebuild a .docx package with a replaced main document part."""
    source = zipfile.ZipFile(io.BytesIO(data))
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w") as target:
        for item in source.infolist():
            payload = xml if item.filename == "word/document.xml" else source.read(item)
            target.writestr(item, payload)
    return buffer.getvalue()


class TestExtractText:
    """Tests for extract_text."""

    def test_plain_text(self) -> None:
        assert extract_text("Hello, World!".encode(), "notes.txt") == "Hello, World!"

    def test_markdown_with_bad_bytes(self) -> None:
        assert extract_text(b"ok \xff", "readme.MD") == "ok \ufffd"

    def test_docx_paragraphs(self) -> None:
        data = _docx_bytes(["First paragraph", "", "Second one"])

        assert extract_text(data, "report.docx") == "First paragraph\nSecond one"

    def test_docx_tables(self) -> None:
        data = _docx_bytes(["Intro"], table=[["cell one", "cell two"]])

        text = extract_text(data, "report.docx")

        assert "Intro" in text
        assert "cell one" in text
        assert "cell two" in text

    def test_corrupt_docx(self) -> None:
        with pytest.raises(FatalIndexError):
            extract_text(b"not a zip file", "broken.docx")

    def test_unsupported_suffix(self) -> None:
        with pytest.raises(FatalIndexError):
            extract_text(b"%PDF", "scan.pdf")

    def test_malformed_document_xml(self) -> None:
        """A valid zip whose main part is broken XML is still fatal."""
        data = _with_document_xml(_docx_bytes(["ok"]), b"<w:document><unclosed>")

        with pytest.raises(FatalIndexError):
            extract_text(data, "broken.docx")
