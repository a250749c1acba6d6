"""Where the catalog database and the HTTP cache live on disk."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Final

from .env import optional_env_var

APP_DIR_NAME: Final[str] = "softcat"
DEFAULT_DB_FILENAME: Final[str] = "catalog.db"
HTTP_CACHE_FILENAME: Final[str] = "http_cache.db"


@dataclass(frozen=True, slots=True)
class StorageConfig:
    data_dir: Path
    database_uri_override: str | None = None

    def data_file(self, filename: str) -> Path:
        """Path of ``filename`` in the data directory, which is created on demand."""

        data_dir = self.data_dir.expanduser().resolve()
        data_dir.mkdir(parents=True, exist_ok=True)
        return data_dir / filename

    @property
    def database_uri(self) -> str:
        if self.database_uri_override is not None:
            return self.database_uri_override
        return f"sqlite+pysqlite:///{self.data_file(DEFAULT_DB_FILENAME)}"

    @property
    def http_cache_path(self) -> Path:
        return self.data_file(HTTP_CACHE_FILENAME)


def default_data_dir() -> Path:
    if os.name == "nt":
        local = optional_env_var("LOCALAPPDATA")
        base = Path(local) if local else Path.home() / "AppData" / "Local"
    else:
        xdg = optional_env_var("XDG_DATA_HOME")
        base = Path(xdg) if xdg else Path.home() / ".local" / "share"
    return base / APP_DIR_NAME


def get_storage_config() -> StorageConfig:
    data_dir = optional_env_var("SOFTCAT_DATA_DIR")
    return StorageConfig(
        data_dir=Path(data_dir) if data_dir else default_data_dir(),
        database_uri_override=optional_env_var("DATABASE_URI"),
    )


def get_database_uri() -> str:
    return get_storage_config().database_uri


def get_http_cache_path() -> Path:
    return get_storage_config().http_cache_path
