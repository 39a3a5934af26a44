"""Core WordIndex data models."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List


@dataclass(slots=True)
class IndexEntry:
    """Record mapping one word to the documents that contain it."""

    word: str
    documents: List[str] = field(default_factory=list)

    def __contains__(self, document_id: object) -> bool:
        return document_id in self.documents
