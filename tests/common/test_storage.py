from __future__ import annotations

from pathlib import Path  # noqa: TC003

import pytest  # noqa: TC002

from modcatalog.config import storage


def test_data_dir_prefers_explicit_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    custom = tmp_path / "custom-data"
    monkeypatch.setenv("MODCATALOG_DATA_DIR", str(custom))

    config = storage.get_storage_config()

    assert config.resolve_data_dir() == custom.resolve()
    assert config.bundled_catalog is None


def test_data_dir_falls_back_to_xdg(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path))

    config = storage.get_storage_config()

    assert config.resolve_data_dir() == (tmp_path / storage.APP_DIR_NAME).resolve()


def test_paths_create_directories(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("MODCATALOG_DATA_DIR", str(tmp_path / "data"))
    monkeypatch.setenv("MODCATALOG_BUNDLED_CATALOG", str(tmp_path / "bundled.json"))

    config = storage.get_storage_config()
    downloaded = config.downloaded_catalog_path()
    dump = config.data_dump_path()

    assert config.bundled_catalog == tmp_path / "bundled.json"
    assert downloaded == (tmp_path / "data" / storage.DOWNLOADED_CATALOG_FILENAME).resolve()
    assert dump.parent == config.updater_dir()
    assert dump.parent.is_dir()
    assert config.updater_log_path().name == storage.UPDATER_LOG_FILENAME


def test_paths_without_ensure_touch_nothing(tmp_path: Path) -> None:
    config = storage.StorageConfig(data_dir=tmp_path / "absent")

    config.updater_log_path(ensure=False)
    config.downloaded_catalog_path(ensure=False)

    assert not (tmp_path / "absent").exists()
