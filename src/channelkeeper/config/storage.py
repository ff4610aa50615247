"""Where the catalog database and the credentials file live on disk."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Final

APP_DIR_NAME: Final[str] = "channelkeeper"
DATABASE_FILENAME: Final[str] = "channelkeeper.db"
CREDENTIALS_FILENAME: Final[str] = "credentials.json"


@dataclass(frozen=True, slots=True)
class StorageConfig:
    data_dir: Path
    credentials_file: Path | None = None

    def _directory(self) -> Path:
        directory = self.data_dir.expanduser().resolve()
        directory.mkdir(parents=True, exist_ok=True)
        return directory

    def database_path(self) -> Path:
        return self._directory() / DATABASE_FILENAME

    def credentials_path(self) -> Path:
        if self.credentials_file is not None:
            return self.credentials_file.expanduser().resolve()
        return self._directory() / CREDENTIALS_FILENAME

    def database_uri(self) -> str:
        return f"sqlite+pysqlite:///{self.database_path()}"


@dataclass(frozen=True, slots=True)
class DatabaseConfig:
    uri: str


def _platform_data_root() -> Path:
    # %LOCALAPPDATA% on Windows, $XDG_DATA_HOME elsewhere
    if os.name == "nt":
        root = os.getenv("LOCALAPPDATA")
        return Path(root) if root else Path.home() / "AppData" / "Local"
    root = os.getenv("XDG_DATA_HOME")
    return Path(root) if root else Path.home() / ".local" / "share"


def get_storage_config() -> StorageConfig:
    data_dir = os.getenv("CHANNELKEEPER_DATA_DIR")
    credentials_file = os.getenv("CHANNELKEEPER_CREDENTIALS_FILE")
    return StorageConfig(
        data_dir=Path(data_dir) if data_dir else _platform_data_root() / APP_DIR_NAME,
        credentials_file=Path(credentials_file) if credentials_file else None,
    )


def get_database_config(*, storage: StorageConfig | None = None) -> DatabaseConfig:
    uri = os.getenv("DATABASE_URI")
    if uri:
        return DatabaseConfig(uri=uri)
    return DatabaseConfig(uri=(storage or get_storage_config()).database_uri())
