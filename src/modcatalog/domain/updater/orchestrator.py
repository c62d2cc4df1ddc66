"""Catalog updater: one reconciliation run from loaded catalog to saved version.

IDLE -> INITIALIZED -> COLLECTING -> FINALIZING -> PERSISTED | NO_OP -> IDLE,
or IDLE -> ABORTED when there is no catalog or nothing to collect with. Each
instance runs at most once.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING, Final

from modcatalog.domain.model.enums import Source
from modcatalog.domain.reconciliation import (
    ReconciliationContext,
    retire_eligible_authors,
    set_catalog_note,
    update_authors_last_seen,
)
from modcatalog.domain.reconciliation.context import DEFAULT_RETIREMENT_MONTHS
from modcatalog.domain.time_windows import utcnow
from modcatalog.domain.updater.state import ALLOWED_TRANSITIONS, InvalidTransitionError, RunState

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence
    from pathlib import Path

    from modcatalog.domain.model import Catalog
    from modcatalog.domain.ports import CatalogStore, Collector
    from modcatalog.domain.time_windows import Clock

    type CatalogLoader = Callable[[], Catalog | None]
    type CatalogHook = Callable[[Catalog], object]

log = getLogger(__name__)

DEFAULT_IMPORTER_MIN_VERSION: Final[int] = 3
SECOND_CATALOG_VERSION: Final[int] = 2
CATALOG_FILE_PREFIX: Final[str] = "ModCatalog"


@dataclass(frozen=True, slots=True)
class RunResult:
    """Outcome of one updater run.

    ``persisted`` is ``False`` for no-op and aborted runs, and for runs whose
    save failed (the changes are then lost).
    """

    outcome: RunState
    version: str = ""
    persisted: bool = False
    change_log: str = ""
    catalog_path: Path | None = None
    unknown_assets: tuple[int, ...] = ()
    failed_collectors: tuple[str, ...] = ()


@dataclass(slots=True)
class CatalogUpdater:
    load_catalog: CatalogLoader
    store: CatalogStore
    collectors: Sequence[Collector]
    output_dir: Path
    retirement_months: int = DEFAULT_RETIREMENT_MONTHS
    importer_min_version: int = DEFAULT_IMPORTER_MIN_VERSION
    second_catalog_note: str = ""
    updater_log: Path | None = None
    clock: Clock = utcnow
    reopen_catalog: CatalogLoader | None = None
    after_run: CatalogHook | None = None

    state: RunState = field(default=RunState.IDLE, init=False)
    catalog: Catalog | None = field(default=None, init=False)
    _has_run: bool = field(default=False, init=False, repr=False)

    def run(self) -> RunResult:
        if self._has_run:
            log.warning("Catalog updater already ran; skipping.")
            return RunResult(outcome=self.state)
        self._has_run = True

        catalog = self.load_catalog()
        if catalog is None:
            log.error("No catalog available. Catalog updater aborted.")
            self._transition(RunState.ABORTED)
            return RunResult(outcome=RunState.ABORTED)
        if not self.collectors:
            log.error("No collector enabled. Catalog updater aborted.")
            self._transition(RunState.ABORTED)
            return RunResult(outcome=RunState.ABORTED)

        self.catalog = catalog
        log.info(
            "Catalog updater started. Current catalog version %s.", catalog.version_string()
        )

        ctx = self._initialize(catalog)
        failed = self._collect(ctx)
        result = self._finalize(ctx, failed)
        self._close(ctx, catalog)
        log.info("Catalog updater has finished.")
        return result

    # Phases

    def _initialize(self, catalog: Catalog) -> ReconciliationContext:
        self._transition(RunState.INITIALIZED)
        run_date = self.clock()
        catalog.new_version(run_date)
        ctx = ReconciliationContext(
            catalog=catalog, run_date=run_date, retirement_months=self.retirement_months
        )

        if catalog.version == SECOND_CATALOG_VERSION:
            set_catalog_note(ctx, self.second_catalog_note)
        elif catalog.version == SECOND_CATALOG_VERSION + 1:
            set_catalog_note(ctx, "")
        return ctx

    def _collect(self, ctx: ReconciliationContext) -> list[str]:
        self._transition(RunState.COLLECTING)
        failed: list[str] = []
        ordered = sorted(self.collectors, key=lambda c: c.source != Source.SCRAPER)
        for collector in ordered:
            if (
                collector.source == Source.IMPORTER
                and ctx.catalog.version < self.importer_min_version
            ):
                log.info(
                    "Skipping %s: manual imports start with catalog version %d.",
                    collector.name,
                    self.importer_min_version,
                )
                continue

            log.info("Running %s.", collector.name)
            try:
                collector(ctx)
            except Exception:
                log.exception(
                    "%s failed; continuing with the facts gathered so far (catalog %s).",
                    collector.name,
                    ctx.catalog.version_string(),
                )
                failed.append(collector.name)
        return failed

    def _finalize(self, ctx: ReconciliationContext, failed: list[str]) -> RunResult:
        self._transition(RunState.FINALIZING)
        catalog = ctx.catalog

        update_authors_last_seen(ctx)
        retire_eligible_authors(ctx)

        unknown_assets = tuple(ctx.unknown_assets)
        if unknown_assets:
            log.info(
                "CSV action for adding assets to the catalog (after verification): "
                "Add_RequiredAssets, %s",
                ", ".join(str(asset) for asset in unknown_assets),
            )

        if not ctx.ledger.has_changes():
            log.info("No changes or new additions found. No new catalog created.")
            self._transition(RunState.NO_OP)
            return RunResult(
                outcome=RunState.NO_OP,
                version=catalog.version_string(),
                unknown_assets=unknown_assets,
                failed_collectors=tuple(failed),
            )

        ctx.ledger.flush_into_entities(ctx.date_string)
        change_log = ctx.ledger.render(catalog)
        stem = f"{CATALOG_FILE_PREFIX}_v{catalog.version_string()}"
        catalog_path = self.output_dir / f"{stem}.json"

        persisted = self.store.save_catalog(catalog, catalog_path)
        if persisted:
            self.store.save_text(change_log, self.output_dir / f"{stem}_ChangeNotes.txt")
            self.store.save_text(
                "".join(f"{line}\n" for line in ctx.imports),
                self.output_dir / f"{stem}_Imports.txt",
            )
            log.info("New catalog %s created and change notes saved.", catalog.version_string())
            if self.updater_log is not None:
                self.store.copy_file(self.updater_log, self.output_dir / f"{stem}_Updater.log")
        else:
            log.error("Could not save the new catalog. All updates were lost.")

        self._transition(RunState.PERSISTED)
        return RunResult(
            outcome=RunState.PERSISTED,
            version=catalog.version_string(),
            persisted=persisted,
            change_log=change_log,
            catalog_path=catalog_path if persisted else None,
            unknown_assets=unknown_assets,
            failed_collectors=tuple(failed),
        )

    def _close(self, ctx: ReconciliationContext, catalog: Catalog) -> None:
        ctx.reset()
        self._transition(RunState.IDLE)

        log.info("Closing and reopening the active catalog.")
        reopen = self.reopen_catalog or self.load_catalog
        reopened = reopen()
        if reopened is None:
            log.warning("Could not reopen the catalog; keeping the in-memory version.")
            self.catalog = catalog
        else:
            self.catalog = reopened

        if self.after_run is not None:
            self.after_run(self.catalog)

    def _transition(self, target: RunState) -> None:
        if target not in ALLOWED_TRANSITIONS[self.state]:
            raise InvalidTransitionError(self.state, target)
        log.debug("Catalog updater: %s -> %s", self.state, target)
        self.state = target


__all__ = ["CATALOG_FILE_PREFIX", "DEFAULT_IMPORTER_MIN_VERSION", "CatalogUpdater", "RunResult"]
