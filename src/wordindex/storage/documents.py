"""Local directory acting as the document bucket."""

from __future__ import annotations

import logging
from pathlib import Path, PurePosixPath
from typing import BinaryIO, List

from wordindex.errors import ValidationError

LOGGER = logging.getLogger(__name__)


class LocalDocumentStorage:
    """Stores document bytes under ``root``, keyed by relative identifiers."""

    def __init__(self, root: Path) -> None:
        self.root = Path(root)

    def _path_for(self, document_id: str) -> Path:
        key = PurePosixPath(document_id)
        if not document_id or key.is_absolute() or ".." in key.parts or "\0" in document_id:
            raise ValidationError(f"Invalid document identifier: {document_id!r}")
        return self.root.joinpath(*key.parts)

    def put(self, document_id: str, data: bytes) -> Path:
        path = self._path_for(document_id)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)
        LOGGER.debug("Stored %s (%d bytes)", document_id, len(data))
        return path

    def open(self, document_id: str) -> BinaryIO | None:
        """Open the document for binary reading, or ``None`` if it is not a stored file."""
        path = self._path_for(document_id)
        if not path.is_file():
            return None
        return path.open("rb")

    def get_bytes(self, document_id: str) -> bytes | None:
        handle = self.open(document_id)
        if handle is None:
            return None
        with handle:
            return handle.read()

    def list_documents(self) -> List[str]:
        if not self.root.is_dir():
            return []
        return sorted(
            path.relative_to(self.root).as_posix()
            for path in self.root.rglob("*")
            if path.is_file()
        )
