"""Tests for file utility functions."""

from __future__ import annotations

from pathlib import Path

from wordindex.utils.files import is_supported, iter_document_keys, iter_document_paths


class TestIsSupported:
    """Tests for is_supported."""

    def test_supported_suffixes(self) -> None:
        assert is_supported(Path("a.docx"))
        assert is_supported(Path("a.TXT"))
        assert is_supported(Path("notes.md"))

    def test_unsupported_suffix(self) -> None:
        assert not is_supported(Path("a.pdf"))
        assert not is_supported(Path("README"))


class TestIterDocumentPaths:
    """Tests for iter_document_paths."""

    def test_single_file(self, tmp_path: Path) -> None:
        doc = tmp_path / "a.txt"
        doc.write_text("hello")
        assert list(iter_document_paths([doc])) == [doc]

    def test_unsupported_file_skipped(self, tmp_path: Path) -> None:
        doc = tmp_path / "a.pdf"
        doc.write_bytes(b"%PDF")
        assert list(iter_document_paths([doc])) == []

    def test_directory_recursive_sorted(self, tmp_path: Path) -> None:
        (tmp_path / "sub").mkdir()
        (tmp_path / "b.txt").write_text("b")
        (tmp_path / "sub" / "a.md").write_text("a")
        (tmp_path / "skip.bin").write_bytes(b"\0")

        result = list(iter_document_paths([tmp_path]))

        assert result == [tmp_path / "b.txt", tmp_path / "sub" / "a.md"]

    def test_missing_path(self, tmp_path: Path) -> None:
        assert list(iter_document_paths([tmp_path / "missing.txt"])) == []


class TestIterDocumentKeys:
    """Tests for iter_document_keys."""

    def test_directory_keys_include_folder_name(self, tmp_path: Path) -> None:
        docs = tmp_path / "docs"
        (docs / "a").mkdir(parents=True)
        (docs / "b").mkdir()
        (docs / "a" / "report.txt").write_text("alpha")
        (docs / "b" / "report.txt").write_text("beta")

        keys = [key for _, key in iter_document_keys([docs])]

        assert keys == ["docs/a/report.txt", "docs/b/report.txt"]

    def test_sibling_directories_stay_distinct(self, tmp_path: Path) -> None:
        for folder in ("a", "b"):
            (tmp_path / folder).mkdir()
            (tmp_path / folder / "report.txt").write_text(folder)

        keys = [key for _, key in iter_document_keys([tmp_path / "a", tmp_path / "b"])]

        assert keys == ["a/report.txt", "b/report.txt"]

    def test_file_input_keyed_by_name(self, tmp_path: Path) -> None:
        doc = tmp_path / "notes.md"
        doc.write_text("x")

        assert list(iter_document_keys([doc])) == [(doc, "notes.md")]
