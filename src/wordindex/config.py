"""Application configuration defaults."""

from __future__ import annotations

import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Mapping

from wordindex.errors import ConfigError

DEFAULT_APP_NAME = "wordindex"
DEFAULT_ENVIRONMENT = "dev"
DEFAULT_INDEX_TIMEOUT = 300.0

# Environment variable -> AppConfig field
ENV_FIELDS = {
    "APP_NAME": "app_name",
    "ENV": "environment",
    "DATA_DIR": "data_dir",
    "TABLE_NAME": "table_name",
    "BUCKET_NAME": "bucket_name",
    "DOWNLOAD_API_URL": "download_url",
    "API_KEY": "api_key",
    "INDEX_TIMEOUT": "index_timeout",
}


@dataclass(slots=True)
class AppConfig:
    app_name: str = DEFAULT_APP_NAME
    environment: str = DEFAULT_ENVIRONMENT
    data_dir: Path = Path("data")
    table_name: str | None = None
    bucket_name: str | None = None
    download_url: str = ""
    api_key: str | None = None
    index_timeout: float | None = DEFAULT_INDEX_TIMEOUT

    def __post_init__(self) -> None:
        self.data_dir = Path(self.data_dir)
        if self.table_name is None:
            self.table_name = f"{self.app_name}-words-cache-{self.environment}"
        if self.bucket_name is None:
            self.bucket_name = f"{self.app_name}-document-storage-{self.environment}"
        if self.index_timeout is not None:
            self.index_timeout = _parse_timeout(self.index_timeout)

    @classmethod
    def load(
        cls, environ: Mapping[str, str] | None = None, **overrides: Any
    ) -> "AppConfig":
        """Build a config from defaults, then the environment, then ``overrides``.

        Later sources win per field; ``None`` values never override.
        """
        values = env_overrides(os.environ if environ is None else environ)
        values.update({key: value for key, value in overrides.items() if value is not None})
        return cls.from_mapping(values)

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> "AppConfig":
        known = {item.name for item in fields(cls)}
        unknown = set(values) - known
        if unknown:
            raise ConfigError(f"Unknown configuration fields: {', '.join(sorted(unknown))}")
        return cls(**values)

    def resolve_data_dir(self, base_dir: Path | None = None) -> Path:
        if self.data_dir.is_absolute() or base_dir is None:
            return self.data_dir
        return base_dir / self.data_dir

    def resolve_db_path(self, base_dir: Path | None = None) -> Path:
        return self.resolve_data_dir(base_dir) / f"{self.table_name}.db"

    def resolve_bucket_dir(self, base_dir: Path | None = None) -> Path:
        return self.resolve_data_dir(base_dir) / str(self.bucket_name)


def env_overrides(environ: Mapping[str, str]) -> Dict[str, Any]:
    """Collect config fields present (and non-empty) in ``environ``."""
    values: Dict[str, Any] = {}
    for env_name, field_name in ENV_FIELDS.items():
        raw = environ.get(env_name)
        if raw:
            values[field_name] = raw
    return values


def _parse_timeout(value: Any) -> float | None:
    try:
        timeout = float(value)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"Invalid index timeout: {value!r}") from exc
    if timeout <= 0:
        return None
    return timeout
