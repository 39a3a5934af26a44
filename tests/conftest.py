"""Shared pytest fixtures."""

from __future__ import annotations

import pytest

from wordindex.config import ENV_FIELDS


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep host configuration variables out of the tests."""
    for name in ENV_FIELDS:
        monkeypatch.delenv(name, raising=False)
