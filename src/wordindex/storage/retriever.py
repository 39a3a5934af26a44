"""Streaming retrieval of stored documents."""

from __future__ import annotations

import logging
from typing import BinaryIO, Iterator

from wordindex.errors import NotFoundError, ValidationError
from wordindex.storage.documents import LocalDocumentStorage

LOGGER = logging.getLogger(__name__)

# Every stored document is served as a Word document.
DOCUMENT_CONTENT_TYPE = (
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
)
CHUNK_SIZE = 1 << 16


class StreamingRetriever:
    """Looks up documents by identifier and streams their bytes."""

    content_type = DOCUMENT_CONTENT_TYPE

    def __init__(self, storage: LocalDocumentStorage, *, chunk_size: int = CHUNK_SIZE) -> None:
        self.storage = storage
        self.chunk_size = chunk_size

    def retrieve(self, document_id: str | None) -> Iterator[bytes]:
        """Return an iterator over the document bytes.

        Raises NotFoundError before any bytes are produced when the
        identifier is missing or nothing readable is stored under it. The
        underlying handle is closed however the iteration ends.
        """
        if not document_id:
            raise NotFoundError("Document identifier is missing")

        try:
            handle = self.storage.open(document_id)
        except ValidationError as exc:
            raise NotFoundError(str(exc)) from exc
        if handle is None:
            LOGGER.error("Cannot process %s", document_id)
            raise NotFoundError(f"Document not found: {document_id}")

        LOGGER.info("Downloading %s", document_id)
        return self._iter_chunks(handle)

    def _iter_chunks(self, handle: BinaryIO) -> Iterator[bytes]:
        with handle:
            for chunk in iter(lambda: handle.read(self.chunk_size), b""):
                yield chunk
