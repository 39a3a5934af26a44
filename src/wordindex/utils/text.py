"""Text helpers: word tokenization and storage key decoding."""

from __future__ import annotations

import re
from typing import Iterable, Set
from urllib.parse import unquote_plus

_EDGE_NON_LETTERS = re.compile(r"^[^a-zA-Z]+|[^a-zA-Z]+$")


def strip_non_letters(token: str) -> str:
    """Trim leading and trailing characters that are not ASCII letters."""
    return _EDGE_NON_LETTERS.sub("", token)


def tokenize(text: str | None) -> Set[str]:
    """Split text on whitespace into a set of letter-trimmed tokens.

    Case is left untouched, so callers lowercase first. Tokens made only of
    non-letters collapse to ``""`` and are kept; the indexer drops them.
    """
    if not text:
        return set()
    return {strip_non_letters(token) for token in text.split()}


def decode_object_key(key: str) -> str:
    """Decode a storage event object key, treating ``+`` as a space."""
    return unquote_plus(key)


def normalize_whitespace(lines: Iterable[str]) -> str:
    """Collapse whitespace and join lines."""
    return "\n".join(line.strip() for line in lines if line.strip())
