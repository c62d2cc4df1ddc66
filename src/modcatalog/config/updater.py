"""Catalog updater and download configuration values."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Final

from .env import env_bool, env_float, env_int
from .http_resilience import ResilienceConfig, RetryPolicy

DEFAULT_RETIREMENT_MONTHS: Final[int] = 12
DEFAULT_IMPORTER_MIN_VERSION: Final[int] = 3
DEFAULT_DOWNLOAD_TIMEOUT_SECONDS: Final[float] = 30.0
SECOND_CATALOG_NOTE: Final[str] = (
    "This is the second catalog. Manual reviews are added from catalog version 3 on."
)


@dataclass(frozen=True, slots=True)
class UpdaterConfig:
    """Holds switches for the updater run and its collectors."""

    enabled: bool = False
    scraper_enabled: bool = True
    importer_enabled: bool = True
    data_dump_enabled: bool = True
    retirement_months: int = DEFAULT_RETIREMENT_MONTHS
    importer_min_version: int = DEFAULT_IMPORTER_MIN_VERSION
    second_catalog_note: str = SECOND_CATALOG_NOTE


@dataclass(frozen=True, slots=True)
class DownloadConfig:
    """Where to fetch the newest published catalog from, if anywhere."""

    url: str | None = None
    resilience: ResilienceConfig = field(
        default_factory=lambda: ResilienceConfig(name="catalog-download")
    )


def get_updater_config() -> UpdaterConfig:
    return UpdaterConfig(
        enabled=env_bool("MODCATALOG_UPDATER_ENABLED", default=False),
        scraper_enabled=env_bool("MODCATALOG_SCRAPER_ENABLED", default=True),
        importer_enabled=env_bool("MODCATALOG_IMPORTER_ENABLED", default=True),
        data_dump_enabled=env_bool("MODCATALOG_DATA_DUMP_ENABLED", default=True),
        retirement_months=env_int(
            "MODCATALOG_RETIREMENT_MONTHS", default=DEFAULT_RETIREMENT_MONTHS, minimum=1
        ),
    )


def get_download_config(*, retry: RetryPolicy | None = None) -> DownloadConfig:
    url = os.getenv("MODCATALOG_CATALOG_URL")
    return DownloadConfig(
        url=url.strip() if url and url.strip() else None,
        resilience=ResilienceConfig(
            name="catalog-download",
            timeout_seconds=env_float(
                "MODCATALOG_DOWNLOAD_TIMEOUT", default=DEFAULT_DOWNLOAD_TIMEOUT_SECONDS
            ),
            retry=retry or RetryPolicy(),
        ),
    )
