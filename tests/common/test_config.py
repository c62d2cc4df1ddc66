from __future__ import annotations

import pytest

from modcatalog.config import (
    ConfigurationError,
    MissingConfigurationError,
    RetryPolicy,
    env_bool,
    env_float,
    env_int,
    get_download_config,
    get_updater_config,
    require_env_vars,
)


def test_require_env_vars_returns_values(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EXAMPLE_VAR", "value")

    result = require_env_vars(["EXAMPLE_VAR"])

    assert result["EXAMPLE_VAR"] == "value"


def test_require_env_vars_lists_every_missing_name(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("MISSING_VAR", raising=False)
    monkeypatch.setenv("BLANK_VAR", "   ")

    with pytest.raises(MissingConfigurationError) as exc:
        require_env_vars(["MISSING_VAR", "BLANK_VAR"])

    assert "BLANK_VAR, MISSING_VAR" in str(exc.value)


@pytest.mark.parametrize(
    ("raw", "expected"),
    [("1", True), ("Yes", True), (" on ", True), ("false", False), ("0", False), ("", True)],
)
def test_env_bool(monkeypatch: pytest.MonkeyPatch, raw: str, expected: bool) -> None:
    monkeypatch.setenv("FLAG", raw)

    assert env_bool("FLAG", default=True) is expected


def test_env_bool_rejects_garbage(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("FLAG", "maybe")

    with pytest.raises(ConfigurationError):
        env_bool("FLAG", default=False)


def test_env_numbers(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("MONTHS", "0")
    monkeypatch.setenv("TIMEOUT", "abc")

    assert env_int("UNSET_MONTHS", default=12) == 12
    with pytest.raises(ConfigurationError, match="at least 1"):
        env_int("MONTHS", default=12, minimum=1)
    with pytest.raises(ConfigurationError, match="number"):
        env_float("TIMEOUT", default=30.0)


def test_updater_config_defaults_to_disabled() -> None:
    config = get_updater_config()

    assert not config.enabled
    assert config.scraper_enabled
    assert config.importer_enabled
    assert config.retirement_months == 12


def test_updater_config_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("MODCATALOG_UPDATER_ENABLED", "true")
    monkeypatch.setenv("MODCATALOG_IMPORTER_ENABLED", "false")
    monkeypatch.setenv("MODCATALOG_RETIREMENT_MONTHS", "6")

    config = get_updater_config()

    assert config.enabled
    assert not config.importer_enabled
    assert config.retirement_months == 6


def test_download_config(monkeypatch: pytest.MonkeyPatch) -> None:
    assert get_download_config().url is None

    monkeypatch.setenv("MODCATALOG_CATALOG_URL", " https://catalog.example/c.json ")
    monkeypatch.setenv("MODCATALOG_DOWNLOAD_TIMEOUT", "5")
    policy = RetryPolicy(total=1)

    config = get_download_config(retry=policy)

    assert config.url == "https://catalog.example/c.json"
    assert config.resilience.timeout_seconds == 5.0
    assert config.resilience.retry is policy
