"""Document indexing pipeline."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import List, Tuple

from wordindex.errors import FatalIndexError, IndexTimeoutError, StoreError, ValidationError
from wordindex.index.storage import WordIndexStore
from wordindex.ingestion.extract import extract_text
from wordindex.storage.documents import LocalDocumentStorage
from wordindex.utils.text import tokenize

LOGGER = logging.getLogger(__name__)


@dataclass(slots=True)
class IndexStats:
    words: int = 0
    appended: int = 0
    created: int = 0
    skipped: int = 0
    failed: int = 0

    def merge(self, other: "IndexStats") -> None:
        self.words += other.words
        self.appended += other.appended
        self.created += other.created
        self.skipped += other.skipped
        self.failed += other.failed


class Indexer:
    """Reconciles a document's words against the shared word index."""

    def __init__(
        self,
        store: WordIndexStore,
        storage: LocalDocumentStorage | None = None,
        *,
        timeout: float | None = None,
    ) -> None:
        self.store = store
        self.storage = storage
        self.timeout = timeout

    def index_document(self, document_id: str, raw_text: str) -> int:
        """Index ``raw_text`` under ``document_id``.

        Returns the number of existing entries the document was appended to.
        Newly created entries are not counted.
        """
        return self.index_text(document_id, raw_text).appended

    def index_text(self, document_id: str, raw_text: str) -> IndexStats:
        deadline = None if self.timeout is None else time.monotonic() + self.timeout
        words = [word for word in tokenize(raw_text.lower()) if word]
        stats = IndexStats(words=len(words))
        LOGGER.info("Attempting to index %d words from %s", len(words), document_id)

        pending: List[Tuple[str, str]] = []
        for word in words:
            if deadline is not None and time.monotonic() > deadline:
                raise IndexTimeoutError(
                    f"Indexing {document_id} exceeded {self.timeout}s "
                    f"({stats.appended} appended, {len(pending)} creations dropped)"
                )
            try:
                entry = self.store.get_entry(word)
                if entry is None:
                    pending.append((word, document_id))
                    continue
                if document_id in entry:
                    stats.skipped += 1
                    continue
                if self.store.append_document(word, document_id):
                    stats.appended += 1
                else:
                    stats.skipped += 1
            except StoreError as exc:
                LOGGER.error("Error updating index for '%s': %s. Skipping...", word, exc)
                stats.failed += 1

        if pending:
            stats.created = self.store.create_entries(pending)
            stats.failed += len(pending) - stats.created

        LOGGER.info("%d words in %s indexed successfully", stats.appended, document_id)
        return stats

    def ingest(self, document_id: str) -> IndexStats:
        """Fetch a stored document, extract its text and index it.

        Raises FatalIndexError when the content cannot be fetched or yields
        no text; nothing is written in that case.
        """
        if self.storage is None:
            raise FatalIndexError("No document storage configured")

        LOGGER.info("Indexing %s", document_id)
        try:
            data = self.storage.get_bytes(document_id)
        except (OSError, ValidationError) as exc:
            raise FatalIndexError(f"Cannot fetch {document_id}: {exc}") from exc
        if data is None:
            LOGGER.error("Cannot process %s", document_id)
            raise FatalIndexError(f"Document not found: {document_id}")

        raw_text = extract_text(data, document_id)
        if not raw_text.strip():
            LOGGER.error("Something went wrong while indexing %s", document_id)
            raise FatalIndexError(f"No text extracted from {document_id}")

        return self.index_text(document_id, raw_text)
