"""Utility helpers for working with files."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Iterator, Tuple

SUPPORTED_SUFFIXES = (".docx", ".txt", ".md")


def is_supported(path: Path) -> bool:
    return path.suffix.lower() in SUPPORTED_SUFFIXES


def iter_document_paths(inputs: Iterable[Path]) -> Iterator[Path]:
    """Yield indexable document paths, descending into directories."""
    for item in inputs:
        if item.is_dir():
            yield from iter_document_paths(
                sorted(child for child in item.rglob("*") if child.is_file())
            )
        elif item.is_file() and is_supported(item):
            yield item


def iter_document_keys(inputs: Iterable[Path]) -> Iterator[Tuple[Path, str]]:
    """Yield ``(path, key)`` pairs for indexable documents.

    Files found under a directory input are keyed by their path relative to
    that directory's parent, so ``docs/a/report.txt`` becomes
    ``docs/a/report.txt`` when ``docs`` is given and ``a/report.txt`` when
    ``docs/a`` is. File inputs are keyed by name.
    """
    for item in inputs:
        if item.is_dir():
            for path in iter_document_paths([item]):
                yield path, path.relative_to(item.parent).as_posix()
        elif item.is_file() and is_supported(item):
            yield item, item.name
