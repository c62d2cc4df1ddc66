"""Explicit state shared by every reconciliation operation during one run."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Final

from modcatalog.domain.ledger import ChangeLedger
from modcatalog.domain.time_windows import format_date, is_older_than, utcnow

if TYPE_CHECKING:
    from datetime import datetime

    from modcatalog.domain.model import Catalog

DEFAULT_RETIREMENT_MONTHS: Final[int] = 12


@dataclass(slots=True)
class ReconciliationContext:
    """Catalog, ledger and run-scoped values handed to each operation.

    ``review_date`` defaults to the run date; the importer may move it to the
    day the manual review actually happened.
    """

    catalog: Catalog
    ledger: ChangeLedger = field(default_factory=ChangeLedger)
    run_date: datetime = field(default_factory=utcnow)
    review_date: datetime | None = None
    retirement_months: int = DEFAULT_RETIREMENT_MONTHS
    unknown_assets: list[int] = field(default_factory=list[int])
    imports: list[str] = field(default_factory=list[str])

    def __post_init__(self) -> None:
        if self.review_date is None:
            self.review_date = self.run_date

    @property
    def date_string(self) -> str:
        return format_date(self.run_date)

    def is_inactive(self, last_seen: datetime | None) -> bool:
        return is_older_than(last_seen, months=self.retirement_months, now=self.run_date)

    def note_unknown_asset(self, asset_id: int) -> bool:
        if asset_id in self.unknown_assets:
            return False
        self.unknown_assets.append(asset_id)
        return True

    def record_import(self, line: str) -> None:
        """Keep a manual-override line for the imports snapshot saved with the catalog."""

        self.imports.append(line)

    def reset(self) -> None:
        self.ledger.clear()
        self.unknown_assets.clear()
        self.imports.clear()
        self.review_date = self.run_date


__all__ = ["DEFAULT_RETIREMENT_MONTHS", "ReconciliationContext"]
