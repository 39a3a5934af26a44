"""Exception hierarchy for WordIndex.

Every error raised on purpose by the package derives from ``WordIndexError``.
Per-word failures while indexing are contained by the indexer; fatal ones
propagate to whoever triggered the unit of work.
"""

from __future__ import annotations


class WordIndexError(Exception):
    """Base class for all WordIndex errors."""


class ConfigError(WordIndexError):
    """Missing or malformed configuration values."""


class ValidationError(WordIndexError):
    """Required request input is missing or malformed."""


class AuthError(WordIndexError):
    """The pre-shared API key does not match."""


class NotFoundError(WordIndexError):
    """The requested document or its content is absent."""


class StoreError(WordIndexError):
    """The backing index store failed an operation."""


class PartialIndexError(StoreError):
    """A store write for a single word failed."""

    def __init__(self, word: str, message: str) -> None:
        super().__init__(f"{word}: {message}")
        self.word = word


class FatalIndexError(WordIndexError):
    """Document content could not be fetched or turned into text."""


class IndexTimeoutError(FatalIndexError):
    """The indexing time budget ran out before all words were processed."""
