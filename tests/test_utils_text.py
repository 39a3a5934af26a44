"""Tests for text utility functions."""

from __future__ import annotations

from wordindex.utils.text import (
    decode_object_key,
    normalize_whitespace,
    strip_non_letters,
    tokenize,
)


class TestStripNonLetters:
    """Tests for strip_non_letters."""

    def test_strips_punctuation_both_ends(self) -> None:
        assert strip_non_letters("(hello!)") == "hello"

    def test_keeps_interior_characters(self) -> None:
        assert strip_non_letters("don't") == "don't"
        assert strip_non_letters("abc123def") == "abc123def"

    def test_strips_edge_digits(self) -> None:
        """Digits are not letters, so they go at the edges."""
        assert strip_non_letters("42nd") == "nd"
        assert strip_non_letters("mp3") == "mp"

    def test_only_non_letters_becomes_empty(self) -> None:
        assert strip_non_letters("1234") == ""
        assert strip_non_letters("--") == ""

    def test_non_ascii_letters_are_stripped_at_edges(self) -> None:
        assert strip_non_letters("café") == "caf"


class TestTokenize:
    """Tests for tokenize."""

    def test_basic_sentence(self) -> None:
        assert tokenize("hello, world!") == {"hello", "world"}

    def test_lowercased_before_tokenizing(self) -> None:
        assert tokenize("Hello, World!".lower()) == {"hello", "world"}

    def test_case_is_preserved(self) -> None:
        """Lowercasing is left to the caller."""
        assert tokenize("Cat cat") == {"Cat", "cat"}

    def test_duplicates_collapse(self) -> None:
        assert tokenize("cat dog cat") == {"cat", "dog"}

    def test_splits_on_whitespace_runs(self) -> None:
        assert tokenize("one\t\ttwo\n\nthree   four") == {"one", "two", "three", "four"}

    def test_keeps_empty_token_for_punctuation(self) -> None:
        assert tokenize("cat ... 2024") == {"cat", ""}

    def test_empty_input(self) -> None:
        assert tokenize("") == set()
        assert tokenize("   ") == set()

    def test_none_input(self) -> None:
        assert tokenize(None) == set()


class TestDecodeObjectKey:
    """Tests for decode_object_key."""

    def test_plus_is_space(self) -> None:
        assert decode_object_key("my+report.docx") == "my report.docx"

    def test_percent_escapes(self) -> None:
        assert decode_object_key("a%2Bb%20c.docx") == "a+b c.docx"

    def test_plain_key_unchanged(self) -> None:
        assert decode_object_key("folder/report.docx") == "folder/report.docx"


class TestNormalizeWhitespace:
    """Tests for normalize_whitespace."""

    def test_drops_blank_lines(self) -> None:
        assert normalize_whitespace(["  first ", "", "   ", "second"]) == "first\nsecond"

    def test_empty(self) -> None:
        assert normalize_whitespace([]) == ""
