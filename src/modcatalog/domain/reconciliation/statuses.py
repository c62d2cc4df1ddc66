"""Status add/remove with conflict-group resolution and the no-description exclusion."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING, Final

from modcatalog.domain.model.enums import ExclusionState, Source, Status
from modcatalog.domain.model.exclusions import (
    after_status_added,
    after_status_removed,
    scraper_may_touch,
)

if TYPE_CHECKING:
    from collections.abc import Callable

    from modcatalog.domain.model import Mod
    from modcatalog.domain.reconciliation.context import ReconciliationContext

    type Recorder = Callable[[str], object]

log = getLogger(__name__)

STATUS_CONFLICTS: Final[dict[Status, tuple[Status, ...]]] = {
    Status.UNLISTED_IN_WORKSHOP: (Status.REMOVED_FROM_WORKSHOP,),
    Status.REMOVED_FROM_WORKSHOP: (
        Status.UNLISTED_IN_WORKSHOP,
        Status.NO_COMMENT_SECTION,
        Status.NO_DESCRIPTION,
    ),
    Status.NO_LONGER_NEEDED: (Status.DEPRECATED, Status.ABANDONED),
    Status.DEPRECATED: (Status.NO_LONGER_NEEDED, Status.ABANDONED),
    Status.ABANDONED: (Status.NO_LONGER_NEEDED, Status.DEPRECATED),
    Status.SOURCE_UNAVAILABLE: (
        Status.SOURCE_BUNDLED,
        Status.SOURCE_NOT_UPDATED,
        Status.SOURCE_OBFUSCATED,
    ),
    Status.SOURCE_BUNDLED: (Status.SOURCE_UNAVAILABLE,),
    Status.SOURCE_NOT_UPDATED: (Status.SOURCE_UNAVAILABLE,),
    Status.SOURCE_OBFUSCATED: (Status.SOURCE_UNAVAILABLE,),
    Status.MUSIC_COPYRIGHTED: (Status.MUSIC_COPYRIGHT_FREE, Status.MUSIC_COPYRIGHT_UNKNOWN),
    Status.MUSIC_COPYRIGHT_FREE: (Status.MUSIC_COPYRIGHTED, Status.MUSIC_COPYRIGHT_UNKNOWN),
    Status.MUSIC_COPYRIGHT_UNKNOWN: (Status.MUSIC_COPYRIGHTED, Status.MUSIC_COPYRIGHT_FREE),
}


def add_status(
    ctx: ReconciliationContext, mod: Mod, status: Status, *, source: Source
) -> bool:
    """Add ``status`` and drop every status it conflicts with.

    Returns ``False`` when the status was already present or the scraper is
    not allowed to touch it.
    """

    return apply_status_add(mod, status, source=source, note=_recorder(ctx, mod))


def remove_status(
    ctx: ReconciliationContext, mod: Mod, status: Status, *, source: Source
) -> bool:
    return apply_status_remove(mod, status, source=source, note=_recorder(ctx, mod))


def apply_status_add(
    mod: Mod,
    status: Status,
    *,
    source: Source,
    note: Recorder,
) -> bool:
    if status == Status.NO_DESCRIPTION and not _may_touch_no_description(mod, source):
        return False

    if status in mod.statuses:
        if status == Status.NO_DESCRIPTION:
            _observe_no_description(mod, source)
        return False

    mod.statuses.append(status)
    note(f"{status} added")

    for conflicting in STATUS_CONFLICTS.get(status, ()):
        _drop_status(mod, conflicting, note)

    match status:
        case Status.NO_DESCRIPTION:
            mod.exclusion_for_no_description = after_status_added(source=source)
        case Status.REMOVED_FROM_WORKSHOP:
            mod.exclusion_for_no_description = ExclusionState.NONE
        case Status.SOURCE_UNAVAILABLE:
            if mod.source_url:
                mod.source_url = ""
                note("source URL")
            mod.exclusion_for_source_url = True
        case _:
            pass
    return True


def apply_status_remove(
    mod: Mod,
    status: Status,
    *,
    source: Source,
    note: Recorder,
) -> bool:
    if status == Status.NO_DESCRIPTION and not _may_touch_no_description(mod, source):
        return False

    if status not in mod.statuses:
        if status == Status.NO_DESCRIPTION:
            _observe_no_description(mod, source)
        return False

    _drop_status(mod, status, note)

    if status == Status.NO_DESCRIPTION:
        mod.exclusion_for_no_description = after_status_removed(
            mod.exclusion_for_no_description, source=source
        )
    elif status == Status.SOURCE_UNAVAILABLE:
        mod.exclusion_for_source_url = False
    return True


def _drop_status(mod: Mod, status: Status, note: Recorder) -> None:
    if status in mod.statuses:
        mod.statuses.remove(status)
        note(f"{status} removed")


def _may_touch_no_description(mod: Mod, source: Source) -> bool:
    if source == Source.SCRAPER and not scraper_may_touch(mod.exclusion_for_no_description):
        log.debug(
            "Scraper left the no-description status of %s alone: it was set manually.",
            mod.label(),
        )
        return False
    return True


def _observe_no_description(mod: Mod, source: Source) -> None:
    # A no-op observation still settles the flag.
    if source == Source.SCRAPER:
        mod.exclusion_for_no_description = ExclusionState.NONE
    else:
        mod.exclusion_for_no_description = ExclusionState.MANUAL


def _recorder(ctx: ReconciliationContext, mod: Mod) -> Recorder:
    return lambda fragment: ctx.ledger.mod_updated(mod, fragment)
