"""SQLite-backed word index store."""

from __future__ import annotations

import json
import logging
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Protocol, Sequence, Tuple, runtime_checkable

from wordindex.errors import PartialIndexError, StoreError
from wordindex.models import IndexEntry

LOGGER = logging.getLogger(__name__)

# Largest number of items written by one physical batch call.
BATCH_WRITE_LIMIT = 25

# Appends ``document`` unless it is already listed. Runs as a single
# statement so concurrent writers cannot lose each other's appends.
_APPEND_SQL = """
    UPDATE entries
    SET documents = json_insert(documents, '$[#]', :document),
        updated_at = CURRENT_TIMESTAMP
    WHERE word = :word
      AND NOT EXISTS (
          SELECT 1 FROM json_each(entries.documents) WHERE value = :document
      )
"""

_CREATE_SQL = """
    INSERT INTO entries(word, documents) VALUES (:word, json_array(:document))
    ON CONFLICT(word) DO NOTHING
"""


@runtime_checkable
class WordIndexStore(Protocol):
    """Read/write access to the word -> documents mapping."""

    def get_entry(self, word: str) -> IndexEntry | None:
        """Return the entry for ``word`` or ``None``. Raises StoreError."""
        ...

    def create_entries(self, batch: Sequence[Tuple[str, str]]) -> int:
        """Create ``(word, first_document)`` entries, returning how many were written."""
        ...

    def append_document(self, word: str, document: str) -> bool:
        """Append ``document`` to ``word``. Raises PartialIndexError on failure."""
        ...


class SQLiteWordStore:
    """Persistence layer for the inverted word index."""

    def __init__(self, db_path: Path, *, batch_size: int = BATCH_WRITE_LIMIT) -> None:
        if not 0 < batch_size <= BATCH_WRITE_LIMIT:
            raise ValueError(f"batch_size must be between 1 and {BATCH_WRITE_LIMIT}")
        self.db_path = Path(db_path)
        self.batch_size = batch_size
        self._conn = sqlite3.connect(self.db_path, timeout=30.0)
        self._conn.row_factory = sqlite3.Row
        self._conn.execute("PRAGMA journal_mode=WAL;")
        self._conn.execute("PRAGMA synchronous=NORMAL;")
        self._ensure_schema()

    @property
    def connection(self) -> sqlite3.Connection:
        return self._conn

    def close(self) -> None:
        self._conn.close()

    def __enter__(self) -> "SQLiteWordStore":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    @contextmanager
    def transaction(self) -> Iterator[sqlite3.Connection]:
        try:
            yield self._conn
            self._conn.commit()
        except Exception:
            self._conn.rollback()
            raise

    def _ensure_schema(self) -> None:
        with self.transaction() as conn:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS entries (
                    word TEXT PRIMARY KEY,
                    documents TEXT NOT NULL DEFAULT '[]',
                    created_at TEXT DEFAULT CURRENT_TIMESTAMP,
                    updated_at TEXT DEFAULT CURRENT_TIMESTAMP
                )
                """
            )

    def get_entry(self, word: str) -> IndexEntry | None:
        try:
            row = self._conn.execute(
                "SELECT word, documents FROM entries WHERE word = ?", (word,)
            ).fetchone()
        except sqlite3.Error as exc:
            raise StoreError(f"Lookup failed for '{word}': {exc}") from exc
        if row is None:
            return None
        return IndexEntry(word=row["word"], documents=json.loads(row["documents"]))

    def append_document(self, word: str, document: str) -> bool:
        """Append ``document`` to an existing entry.

        Returns ``False`` when nothing changed: the word has no entry, or the
        document was already listed (e.g. added by a concurrent writer).
        """
        try:
            with self.transaction() as conn:
                cursor = conn.execute(_APPEND_SQL, {"word": word, "document": document})
        except sqlite3.Error as exc:
            raise PartialIndexError(word, str(exc)) from exc
        return cursor.rowcount == 1

    def create_entries(self, batch: Sequence[Tuple[str, str]]) -> int:
        """Create new entries in chunks of at most ``batch_size`` items.

        A chunk that fails is logged and skipped; later chunks are still
        attempted. Words that already exist get the document appended instead.
        """
        written = 0
        for start in range(0, len(batch), self.batch_size):
            chunk = batch[start : start + self.batch_size]
            try:
                self._write_batch(chunk)
            except sqlite3.Error as exc:
                LOGGER.error("Error indexing chunk %s: %s", [word for word, _ in chunk], exc)
                continue
            written += len(chunk)
        return written

    def _write_batch(self, chunk: Sequence[Tuple[str, str]]) -> None:
        params = [{"word": word, "document": document} for word, document in chunk]
        with self.transaction() as conn:
            conn.executemany(_CREATE_SQL, params)
            # Entries created concurrently since the caller's lookup.
            conn.executemany(_APPEND_SQL, params)

    def get_stats(self) -> dict:
        row = self._conn.execute(
            """
            SELECT COUNT(*) AS word_count,
                   COALESCE(SUM(json_array_length(documents)), 0) AS posting_count
            FROM entries
            """
        ).fetchone()
        return {"word_count": row["word_count"], "posting_count": row["posting_count"]}
