"""Word lookup interface."""

from __future__ import annotations

import logging
from typing import Iterable, List, Set
from urllib.parse import quote

from wordindex.errors import StoreError
from wordindex.index.storage import WordIndexStore

LOGGER = logging.getLogger(__name__)


def parse_query_words(raw: str) -> List[str]:
    """Split a comma-separated ``words`` parameter, dropping empty pieces.

    Words are kept exactly as supplied: no trimming, no lowercasing.
    """
    return [word for word in raw.split(",") if word]


# Characters a browser's encodeURIComponent leaves unescaped, besides -_.~
URI_COMPONENT_SAFE = "!*'()"


def build_download_urls(documents: Iterable[str], base_url: str) -> List[str]:
    return [
        f"{base_url}{quote(document, safe=URI_COMPONENT_SAFE)}" for document in sorted(documents)
    ]


class QueryResolver:
    """Resolves query words to the documents referencing any of them."""

    def __init__(self, store: WordIndexStore) -> None:
        self.store = store

    def resolve(self, words: Iterable[str]) -> Set[str]:
        """Return the union of the documents listed under each word.

        Unknown words contribute nothing. A lookup that fails is logged and
        treated the same way.
        """
        documents: Set[str] = set()
        for word in words:
            try:
                entry = self.store.get_entry(word)
            except StoreError as exc:
                LOGGER.error("Lookup failed for '%s': %s", word, exc)
                continue
            if entry is None:
                continue
            documents.update(entry.documents)
        return documents
