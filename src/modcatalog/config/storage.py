"""Data storage configuration helpers."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Final

APP_DIR_NAME: Final[str] = "modcatalog"
DOWNLOADED_CATALOG_FILENAME: Final[str] = "ModCatalog_Downloaded.json"
UPDATER_DIRNAME: Final[str] = "updater"
UPDATER_LOG_FILENAME: Final[str] = "ModCatalog_Updater.log"
DATA_DUMP_FILENAME: Final[str] = "ModCatalog_DataDump.txt"


@dataclass(frozen=True, slots=True)
class StorageConfig:
    data_dir: Path
    bundled_catalog: Path | None = None
    downloaded_catalog_filename: str = DOWNLOADED_CATALOG_FILENAME
    updater_dirname: str = UPDATER_DIRNAME
    updater_log_filename: str = UPDATER_LOG_FILENAME
    data_dump_filename: str = DATA_DUMP_FILENAME

    def resolve_data_dir(self) -> Path:
        return self.data_dir.expanduser().resolve()

    def ensure_data_dir(self) -> Path:
        data_dir = self.resolve_data_dir()
        data_dir.mkdir(parents=True, exist_ok=True)
        return data_dir

    def downloaded_catalog_path(self, *, ensure: bool = True) -> Path:
        base = self.ensure_data_dir() if ensure else self.resolve_data_dir()
        return base / self.downloaded_catalog_filename

    def updater_dir(self, *, ensure: bool = True) -> Path:
        path = self.resolve_data_dir() / self.updater_dirname
        if ensure:
            path.mkdir(parents=True, exist_ok=True)
        return path

    def updater_log_path(self, *, ensure: bool = True) -> Path:
        return self.updater_dir(ensure=ensure) / self.updater_log_filename

    def data_dump_path(self, *, ensure: bool = True) -> Path:
        return self.updater_dir(ensure=ensure) / self.data_dump_filename


def _default_data_dir() -> Path:
    if os.name == "nt":
        base = os.getenv("LOCALAPPDATA")
        base_path = Path(base) if base else (Path.home() / "AppData" / "Local")
    else:
        base = os.getenv("XDG_DATA_HOME")
        base_path = Path(base) if base else (Path.home() / ".local" / "share")
    return (base_path / APP_DIR_NAME).expanduser().resolve()


def get_storage_config() -> StorageConfig:
    env_dir = os.getenv("MODCATALOG_DATA_DIR")
    data_dir = Path(env_dir) if env_dir else _default_data_dir()
    bundled = os.getenv("MODCATALOG_BUNDLED_CATALOG")
    return StorageConfig(
        data_dir=data_dir,
        bundled_catalog=Path(bundled).expanduser() if bundled else None,
    )
