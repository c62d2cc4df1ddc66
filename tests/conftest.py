from __future__ import annotations

import pytest

from modcatalog.domain.model import Catalog  # noqa: TC001
from modcatalog.domain.reconciliation import ReconciliationContext  # noqa: TC001
from tests.helpers.catalog import make_catalog, make_context


@pytest.fixture
def catalog() -> Catalog:
    return make_catalog()


@pytest.fixture
def ctx(catalog: Catalog) -> ReconciliationContext:
    return make_context(catalog)


@pytest.fixture(autouse=True)
def _isolated_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "MODCATALOG_DATA_DIR",
        "MODCATALOG_BUNDLED_CATALOG",
        "MODCATALOG_CATALOG_URL",
        "MODCATALOG_UPDATER_ENABLED",
        "MODCATALOG_SCRAPER_ENABLED",
        "MODCATALOG_IMPORTER_ENABLED",
        "MODCATALOG_DATA_DUMP_ENABLED",
        "MODCATALOG_RETIREMENT_MONTHS",
        "MODCATALOG_DOWNLOAD_TIMEOUT",
    ):
        monkeypatch.delenv(name, raising=False)
