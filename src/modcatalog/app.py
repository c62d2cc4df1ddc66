"""Application orchestration entry points."""

from __future__ import annotations

from importlib.metadata import entry_points
from logging import getLogger
from typing import TYPE_CHECKING, Final

from modcatalog.adapters.catalog_file import ActiveCatalogLoader, JsonCatalogStore
from modcatalog.config import (
    get_download_config,
    get_storage_config,
    get_updater_config,
    require_env_vars,
)
from modcatalog.domain.data_dump import build_data_dump
from modcatalog.domain.model import Source
from modcatalog.domain.ports import Collector
from modcatalog.domain.time_windows import utcnow
from modcatalog.domain.updater import CatalogUpdater, RunResult, RunState

if TYPE_CHECKING:
    from collections.abc import Sequence
    from datetime import datetime

    import httpx

    from modcatalog.config import DownloadConfig, StorageConfig, UpdaterConfig
    from modcatalog.domain.model import Catalog
    from modcatalog.domain.ports import CatalogStore
    from modcatalog.domain.time_windows import Clock

log = getLogger(__name__)

COLLECTOR_ENTRY_POINT_GROUP: Final[str] = "modcatalog.collectors"
CATALOG_URL_ENV: Final[str] = "MODCATALOG_CATALOG_URL"

_update_started = False


def discover_collectors(config: UpdaterConfig) -> list[Collector]:
    """Load the collectors registered under ``modcatalog.collectors``.

    Each entry point names a zero-argument factory (usually a class). Broken
    plugins are logged and skipped; disabled sources are filtered out.
    """

    collectors: list[Collector] = []
    for entry_point in entry_points(group=COLLECTOR_ENTRY_POINT_GROUP):
        try:
            factory = entry_point.load()
            collector = factory()
        except Exception:
            log.exception("Could not load collector %s.", entry_point.name)
            continue
        if not isinstance(collector, Collector):
            log.warning("Entry point %s is not a collector; ignoring it.", entry_point.name)
            continue
        if collector.source == Source.SCRAPER and not config.scraper_enabled:
            log.info("Scraper %s is disabled.", collector.name)
            continue
        if collector.source == Source.IMPORTER and not config.importer_enabled:
            log.info("Importer %s is disabled.", collector.name)
            continue
        collectors.append(collector)
    return collectors


def write_data_dump(
    catalog: Catalog,
    *,
    store: CatalogStore,
    storage: StorageConfig,
    retirement_months: int,
    now: datetime | None = None,
) -> bool:
    """Write the maintainer data dump for ``catalog`` to the updater directory."""

    content = build_data_dump(catalog, now=now or utcnow(), retirement_months=retirement_months)
    path = storage.data_dump_path()
    if store.save_text(content, path):
        log.info("Data dump saved to %s.", path)
        return True
    return False


def update_catalog(
    *,
    collectors: Sequence[Collector] | None = None,
    store: CatalogStore | None = None,
    storage: StorageConfig | None = None,
    updater_config: UpdaterConfig | None = None,
    download: DownloadConfig | None = None,
    clock: Clock = utcnow,
    transport: httpx.BaseTransport | None = None,
    force: bool = False,
) -> RunResult:
    """Run the catalog updater once per process.

    ``force`` runs the updater even when it is disabled in the configuration.
    """

    global _update_started  # noqa: PLW0603
    config = updater_config or get_updater_config()
    if not (config.enabled or force):
        log.info("Catalog updater is disabled.")
        return RunResult(outcome=RunState.ABORTED)
    if _update_started:
        log.warning("Catalog updater already ran in this session.")
        return RunResult(outcome=RunState.ABORTED)
    _update_started = True

    effective_storage = storage or get_storage_config()
    effective_store = store or JsonCatalogStore()
    effective_collectors = (
        list(collectors) if collectors is not None else discover_collectors(config)
    )
    loader = ActiveCatalogLoader(
        store=effective_store,
        storage=effective_storage,
        download=download if download is not None else get_download_config(),
        transport=transport,
    )

    def _dump(catalog: Catalog) -> None:
        write_data_dump(
            catalog,
            store=effective_store,
            storage=effective_storage,
            retirement_months=config.retirement_months,
            now=clock(),
        )

    updater_log = effective_storage.updater_log_path()
    updater = CatalogUpdater(
        load_catalog=loader,
        reopen_catalog=lambda: loader.load(fetch=False),
        store=effective_store,
        collectors=effective_collectors,
        output_dir=effective_storage.updater_dir(),
        retirement_months=config.retirement_months,
        importer_min_version=config.importer_min_version,
        second_catalog_note=config.second_catalog_note,
        updater_log=updater_log if updater_log.exists() else None,
        clock=clock,
        after_run=_dump if config.data_dump_enabled else None,
    )
    log.info("Starting catalog update with %d collectors.", len(effective_collectors))
    result = updater.run()
    log.info(
        "Finished catalog update: outcome=%s, version=%s, persisted=%s",
        result.outcome,
        result.version,
        result.persisted,
    )
    return result


def download_catalog(
    *,
    store: CatalogStore | None = None,
    storage: StorageConfig | None = None,
    download: DownloadConfig | None = None,
    transport: httpx.BaseTransport | None = None,
) -> Catalog | None:
    """Fetch the published catalog into the data directory.

    Without an explicit ``download`` config the catalog URL must be set in the
    environment.
    """

    if download is None:
        require_env_vars([CATALOG_URL_ENV])
        download = get_download_config()
    effective_store = store or JsonCatalogStore()
    loader = ActiveCatalogLoader(
        store=effective_store,
        storage=storage or get_storage_config(),
        download=download,
        transport=transport,
    )
    return loader.fetch(loader.load(fetch=False))


def dump_active_catalog(
    *,
    store: CatalogStore | None = None,
    storage: StorageConfig | None = None,
    updater_config: UpdaterConfig | None = None,
    now: datetime | None = None,
) -> bool:
    """Write the data dump for the active catalog without downloading."""

    effective_store = store or JsonCatalogStore()
    effective_storage = storage or get_storage_config()
    config = updater_config or get_updater_config()
    catalog = ActiveCatalogLoader(store=effective_store, storage=effective_storage).load(
        fetch=False
    )
    if catalog is None:
        return False
    return write_data_dump(
        catalog,
        store=effective_store,
        storage=effective_storage,
        retirement_months=config.retirement_months,
        now=now,
    )


__all__ = [
    "COLLECTOR_ENTRY_POINT_GROUP",
    "discover_collectors",
    "download_catalog",
    "dump_active_catalog",
    "update_catalog",
    "write_data_dump",
]
