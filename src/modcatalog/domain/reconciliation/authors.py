"""Author reconciliation: lookup/creation, identity changes and retirement."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from modcatalog.domain.model.enums import EntryKind, Source
from modcatalog.domain.model.identifiers import coerce_id

if TYPE_CHECKING:
    from datetime import datetime

    from modcatalog.domain.model import Author, Mod
    from modcatalog.domain.reconciliation.context import ReconciliationContext

log = getLogger(__name__)


def get_or_add_author(
    ctx: ReconciliationContext, steam_id: object, custom_url: str | None, name: str
) -> Author | None:
    """Find an author by profile ID, then custom URL; create one when neither matches.

    For an existing author only the name is updated. An author without any
    identity is logged and skipped.
    """

    parsed_id = 0
    if steam_id:
        parsed = coerce_id(steam_id, operation="get_or_add_author")
        if parsed is None:
            return None
        parsed_id = parsed
    url = (custom_url or "").strip()
    if not parsed_id and not url:
        log.warning("get_or_add_author: skipping author %r without profile ID or custom URL.", name)
        return None

    catalog = ctx.catalog
    author = catalog.get_author(parsed_id, url)

    if parsed_id and name == str(parsed_id) and (author is None or author.name != name):
        log.warning(
            "Author found with profile ID as name (%s). This could be a Steam error.", parsed_id
        )

    if author is None:
        author = catalog.add_author(parsed_id, url, name)
        author.add_change_note(f"{ctx.date_string}: added")
        ctx.ledger.record(EntryKind.NEW_AUTHOR, f"Author added: {author.label()}")
        return author

    update_author(ctx, author, name=name)
    return author


def update_author(
    ctx: ReconciliationContext,
    author: Author,
    *,
    steam_id: int | None = None,
    custom_url: str | None = None,
    name: str | None = None,
    last_seen: datetime | None = None,
    retired: bool | None = None,
    source: Source = Source.SCRAPER,
) -> bool:
    """Apply new author facts; ``None`` leaves a field unchanged.

    A new last-seen date recomputes retirement: inactive authors retire unless
    a human override keeps them active, active authors are never retired and
    lose that override. New identifiers are pushed to all of the author's mods.
    """

    fragments: list[str] = []
    owned = ctx.catalog.mods_by_author(author)

    if steam_id and steam_id != author.steam_id:
        fragments.extend(_change_profile_id(ctx, author, steam_id, owned))
    if custom_url is not None and custom_url != author.custom_url:
        fragments.extend(_change_custom_url(ctx, author, custom_url.strip(), owned))

    if name is not None and name != author.name:
        if not name and author.name:
            log.warning("Author name not found: %s.", author.label())
        author.name = name
        fragments.append("name changed")

    if last_seen is not None and last_seen != author.last_seen:
        author.last_seen = last_seen
        if ctx.is_inactive(last_seen):
            retired = not author.exclusion_for_retired
        else:
            author.exclusion_for_retired = False
            retired = False

    elif retired is not None and source == Source.IMPORTER:
        author.exclusion_for_retired = not retired and ctx.is_inactive(author.last_seen)

    if retired is not None and retired != author.retired:
        author.retired = retired
        fragments.append("retired" if retired else "no longer retired")

    for fragment in fragments:
        ctx.ledger.author_updated(author, fragment)
    return bool(fragments)


def _change_profile_id(
    ctx: ReconciliationContext, author: Author, steam_id: int, owned: list[Mod]
) -> list[str]:
    parsed = coerce_id(steam_id, operation="update_author")
    if parsed is None:
        return []
    other = ctx.catalog.get_author(parsed)
    if other is not None and other is not author:
        log.warning(
            "Not giving %s profile ID %s: it already belongs to %s.",
            author.label(),
            parsed,
            other.label(),
        )
        return []

    old_id = author.steam_id
    author.steam_id = parsed
    ctx.catalog.reindex_author(author, old_id=old_id)
    for mod in owned:
        if mod.author_id != parsed:
            mod.author_id = parsed
            ctx.ledger.mod_updated(mod, "author ID added")
    return ["profile ID changed" if old_id else "profile ID added"]


def _change_custom_url(
    ctx: ReconciliationContext, author: Author, custom_url: str, owned: list[Mod]
) -> list[str]:
    if not custom_url and not author.steam_id:
        log.warning("Not removing the custom URL of %s: it is its only identity.", author.label())
        return []
    other = ctx.catalog.get_author(custom_url=custom_url) if custom_url else None
    if other is not None and other is not author:
        log.warning(
            "Not giving %s custom URL %r: it already belongs to %s.",
            author.label(),
            custom_url,
            other.label(),
        )
        return []

    old_url = author.custom_url
    author.custom_url = custom_url
    ctx.catalog.reindex_author(author, old_url=old_url)
    for mod in owned:
        if mod.author_url != custom_url:
            mod.author_url = custom_url
            ctx.ledger.mod_updated(mod, "author URL")

    if not old_url:
        return ["custom URL added"]
    return ["custom URL changed" if custom_url else "custom URL removed"]


def update_authors_last_seen(ctx: ReconciliationContext) -> int:
    """Move each author's last-seen date up to the newest update among their mods."""

    moved = 0
    for author in ctx.catalog.authors:
        dates = [mod.updated for mod in ctx.catalog.mods_by_author(author) if mod.updated]
        if not dates:
            continue
        newest = max(dates)
        if author.last_seen is None or newest > author.last_seen:
            update_author(ctx, author, last_seen=newest)
            moved += 1
    return moved


def retire_eligible_authors(ctx: ReconciliationContext) -> int:
    """Retire inactive authors without an override, and authors with no mod left on the workshop.

    Mods marked as removed from the workshop do not count as owned.
    """

    retired = 0
    for author in ctx.catalog.authors:
        if author.retired:
            continue
        if ctx.is_inactive(author.last_seen) and not author.exclusion_for_retired:
            update_author(ctx, author, retired=True)
            retired += 1
        elif all(mod.is_removed() for mod in ctx.catalog.mods_by_author(author)):
            author.exclusion_for_retired = False
            update_author(ctx, author, retired=True)
            ctx.ledger.author_updated(author, "no longer has mods on the workshop")
            retired += 1
    if retired:
        log.info("Retired %d authors.", retired)
    return retired


__all__ = [
    "get_or_add_author",
    "retire_eligible_authors",
    "update_author",
    "update_authors_last_seen",
]
