"""Port for the fact collectors driven by the updater."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from modcatalog.domain.model import Source
    from modcatalog.domain.reconciliation import ReconciliationContext


@runtime_checkable
class Collector(Protocol):
    """A scraper or importer reporting facts through the reconciliation API."""

    name: str
    source: Source

    def __call__(self, ctx: ReconciliationContext) -> None: ...
