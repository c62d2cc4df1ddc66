"""Catalog-level texts and the run's review date."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from datetime import datetime

    from modcatalog.domain.reconciliation.context import ReconciliationContext

log = getLogger(__name__)


def set_catalog_note(ctx: ReconciliationContext, text: str) -> bool:
    return _set_text(ctx, "note", "Catalog note", text)


def set_report_header(ctx: ReconciliationContext, text: str) -> bool:
    return _set_text(ctx, "report_header_text", "Catalog header text", text)


def set_report_footer(ctx: ReconciliationContext, text: str) -> bool:
    return _set_text(ctx, "report_footer_text", "Catalog footer text", text)


def set_review_date(ctx: ReconciliationContext, review_date: datetime | None) -> bool:
    """Use ``review_date`` for the review dates set during the rest of the run."""

    if review_date is None:
        log.warning("set_review_date: invalid date, keeping %s.", ctx.review_date)
        return False
    ctx.review_date = review_date
    return True


def _set_text(ctx: ReconciliationContext, attribute: str, label: str, text: str) -> bool:
    current: str = getattr(ctx.catalog, attribute)
    if text == current:
        return False

    if not text:
        change = "removed"
    elif not current:
        change = "added"
    else:
        change = "changed"
    setattr(ctx.catalog, attribute, text)
    ctx.ledger.catalog_change(f"{label} {change}.")
    return True


__all__ = ["set_catalog_note", "set_report_footer", "set_report_header", "set_review_date"]
