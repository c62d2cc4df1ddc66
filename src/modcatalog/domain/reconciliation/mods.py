"""Mod reconciliation: creation, partial updates and the relationship lists.

Requirement edits go through ``RequirementSet`` so provenance and exclusions
stay in step with the lists. Successors, alternatives and recommendations are
plain idempotent list edits.
"""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING, Final

from modcatalog.domain.model.enums import EntryKind, Source, Stability, Status
from modcatalog.domain.model.identifiers import (
    coerce_id,
    is_group_id,
    is_workshop_id,
    workshop_url,
)
from modcatalog.domain.model.patch import UNSET
from modcatalog.domain.reconciliation.statuses import apply_status_add, apply_status_remove

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Sequence

    from modcatalog.domain.model import DLC, Mod, ModPatch
    from modcatalog.domain.reconciliation.context import ReconciliationContext

    type Recorder = Callable[[str], object]

log = getLogger(__name__)

_SCALAR_FRAGMENTS: Final[dict[str, str]] = {
    "name": "mod name changed",
    "updated": "new update",
    "author_url": "author URL",
    "archive_url": "archive URL",
    "source_url": "source URL",
    "compatible_game_version": "compatible game version",
    "stability": "stability",
    "stability_note": "stability note",
    "generic_note": "mod note",
}
_LIST_FRAGMENTS: Final[dict[str, str]] = {
    "required_dlc": "required DLC",
    "required_mods": "required mod",
    "successors": "successor mod",
    "alternatives": "alternative mod",
    "recommendations": "recommended mod",
    "statuses": "status",
}
_RELATIONS: Final[dict[str, str]] = {
    "successors": "successor",
    "alternatives": "alternative",
    "recommendations": "recommendation",
}


# Creation


def get_or_add_mod(
    ctx: ReconciliationContext,
    steam_id: object,
    name: str = "",
    *,
    incompatible: bool = False,
    unlisted: bool = False,
    removed: bool = False,
) -> Mod | None:
    """Return the catalog mod for ``steam_id``, creating it when unknown.

    The flags only apply when the mod is created; an existing mod is returned
    untouched. A malformed identifier is logged and yields ``None``.
    """

    parsed = coerce_id(steam_id, operation="get_or_add_mod")
    if parsed is None:
        return None

    existing = ctx.catalog.get_mod(parsed)
    if existing is not None:
        return existing

    mod = ctx.catalog.add_mod(parsed, name)
    mod_type = "Mod"
    if incompatible:
        mod.stability = Stability.INCOMPATIBLE_ACCORDING_TO_WORKSHOP
        mod_type = "Incompatible mod"
    if unlisted or removed:
        mod.statuses.append(
            Status.UNLISTED_IN_WORKSHOP if unlisted else Status.REMOVED_FROM_WORKSHOP
        )
        mod_type = ("Unlisted " if unlisted else "Removed ") + mod_type.lower()

    mod.add_change_note(f"{ctx.date_string}: added")
    ctx.ledger.record(EntryKind.NEW_MOD, f"{mod_type} added: {mod.label()}")
    log.debug("%s added: %s", mod_type, mod.label())
    return mod


# Partial updates


def update_mod(
    ctx: ReconciliationContext,
    mod: Mod,
    patch: ModPatch,
    *,
    source: Source,
    always_update_review_date: bool = False,
) -> bool:
    """Apply every supplied ``patch`` field and record one fragment per changed field.

    Review dates move when something changed or ``always_update_review_date``
    is set: the importer sets the manual review date, the scraper the
    automatic one. Returns whether anything changed.
    """

    if patch.is_empty() and not always_update_review_date:
        return False

    fragments: list[str] = []

    for field_name, value in patch.supplied():
        if field_name in _LIST_FRAGMENTS:
            continue
        if _set_scalar(mod, field_name, value, source=source):
            fragment = _scalar_fragment(field_name, value)
            if fragment:
                fragments.append(fragment)

    for field_name, fragment in _LIST_FRAGMENTS.items():
        value = getattr(patch, field_name)
        if value is UNSET:
            continue
        before = list(getattr(mod, field_name))
        _replace_list(ctx, mod, field_name, value, source=source)
        if getattr(mod, field_name) != before:
            fragments.append(fragment)

    mod.clamp_updated()
    for fragment in fragments:
        ctx.ledger.mod_updated(mod, fragment)

    if fragments or always_update_review_date:
        if source == Source.IMPORTER:
            mod.review_date = ctx.review_date
        else:
            mod.auto_review_date = ctx.review_date
    return bool(fragments)


def _set_scalar(mod: Mod, field_name: str, value: object, *, source: Source) -> bool:
    if field_name == "author_id":
        parsed = coerce_id(value, operation="update_mod") if value else 0
        if parsed is None:
            return False
        value = parsed

    current = getattr(mod, field_name)
    if value == current:
        return False

    match field_name:
        case "source_url":
            if source == Source.SCRAPER and mod.exclusion_for_source_url:
                return False
            if source == Source.IMPORTER:
                mod.exclusion_for_source_url = True
        case "compatible_game_version":
            if source == Source.SCRAPER and mod.exclusion_for_game_version:
                if _version_key(str(value)) <= _version_key(current):
                    return False
                mod.exclusion_for_game_version = False
            if source == Source.IMPORTER:
                mod.exclusion_for_game_version = True
        case "name":
            if not value and current:
                log.warning("Mod name not found: %s.", mod.label())
        case _:
            pass

    setattr(mod, field_name, value)
    return True


def _scalar_fragment(field_name: str, value: object) -> str:
    if field_name == "author_id":
        return "author ID added" if value else "author ID removed"
    return _SCALAR_FRAGMENTS.get(field_name, "")


def _replace_list(
    ctx: ReconciliationContext,
    mod: Mod,
    field_name: str,
    wanted: Sequence[object],
    *,
    source: Source,
) -> None:
    current = list(getattr(mod, field_name))
    for item in current:
        if item not in wanted:
            _list_remove(ctx, mod, field_name, item, source=source)
    for item in wanted:
        if item not in getattr(mod, field_name):
            _list_add(ctx, mod, field_name, item, source=source)


def _list_add(
    ctx: ReconciliationContext, mod: Mod, field_name: str, item: object, *, source: Source
) -> None:
    match field_name:
        case "required_dlc":
            mod.dlc_requirements.add(item, source=source)  # type: ignore[arg-type]
        case "required_mods":
            required_id = coerce_id(item, operation="update_mod")
            if required_id is not None:
                _add_required_mod(ctx, mod, required_id, source=source, note=_ignore)
        case "statuses":
            apply_status_add(mod, item, source=source, note=_ignore)  # type: ignore[arg-type]
        case _:
            other_id = coerce_id(item, operation="update_mod")
            if other_id is not None:
                _add_relation(mod, field_name, other_id)


def _list_remove(
    ctx: ReconciliationContext, mod: Mod, field_name: str, item: object, *, source: Source
) -> None:
    match field_name:
        case "required_dlc":
            mod.dlc_requirements.remove(item)  # type: ignore[arg-type]
        case "required_mods":
            _remove_required_mod(ctx, mod, item, note=_ignore)  # type: ignore[arg-type]
        case "statuses":
            apply_status_remove(mod, item, source=source, note=_ignore)  # type: ignore[arg-type]
        case _:
            _remove_relation(mod, field_name, item)  # type: ignore[arg-type]


def _version_key(version: str) -> tuple[int, ...]:
    parts: list[int] = []
    for part in version.split("."):
        digits = "".join(ch for ch in part if ch.isdecimal())
        parts.append(int(digits) if digits else 0)
    return tuple(parts)


# Required DLC


def add_required_dlc(ctx: ReconciliationContext, mod: Mod, dlc: DLC, *, source: Source) -> bool:
    if mod.dlc_requirements.is_suppressed(dlc) and source == Source.SCRAPER:
        log.debug("Required DLC %s for %s was removed manually; not re-adding.", dlc, mod.label())
        return False
    if not mod.dlc_requirements.add(dlc, source=source):
        return False
    ctx.ledger.mod_updated(mod, f"required DLC {dlc} added")
    return True


def remove_required_dlc(
    ctx: ReconciliationContext, mod: Mod, dlc: DLC, *, source: Source
) -> bool:
    if not mod.dlc_requirements.remove(dlc):
        return False
    log.debug("Required DLC %s removed from %s by the %s.", dlc, mod.label(), source)
    ctx.ledger.mod_updated(mod, f"required DLC {dlc} removed")
    return True


# Required mods and groups


def add_required_mod(
    ctx: ReconciliationContext, mod: Mod, required_id: object, *, source: Source
) -> bool:
    """Add a required mod or group.

    A required mod that belongs to a group pulls in the group as well. An ID
    that is neither a known mod, group, builtin mod nor registered asset is
    collected as an unknown asset and never added.
    """

    parsed = coerce_id(required_id, operation="add_required_mod")
    if parsed is None:
        return False
    return _add_required_mod(ctx, mod, parsed, source=source, note=_recorder(ctx, mod))


def remove_required_mod(
    ctx: ReconciliationContext, mod: Mod, required_id: object, *, source: Source
) -> bool:
    """Remove a required mod or group.

    Removing the last member of a group from the list also removes the group.
    A removed scraper discovery stays excluded so the next scrape cannot
    bring it back; a removed manual entry loses its exclusion.
    """

    parsed = coerce_id(required_id, operation="remove_required_mod")
    if parsed is None:
        return False
    if not _remove_required_mod(ctx, mod, parsed, note=_recorder(ctx, mod)):
        return False
    log.debug("Required mod %s removed from %s by the %s.", parsed, mod.label(), source)
    return True


def _add_required_mod(
    ctx: ReconciliationContext,
    mod: Mod,
    required_id: int,
    *,
    source: Source,
    note: Recorder,
) -> bool:
    catalog = ctx.catalog
    if required_id == mod.steam_id:
        log.warning("Not adding %s as a requirement of itself.", mod.label())
        return False

    if catalog.is_valid_id(required_id, allow_group=True, allow_local=True):
        if is_group_id(required_id):
            return _add_required_group(mod, required_id, note)

        requirements = mod.mod_requirements
        if source == Source.SCRAPER and requirements.is_suppressed(required_id):
            log.debug(
                "Required mod %s for %s was removed manually; not re-adding.",
                required_id,
                mod.label(),
            )
            return False
        if not requirements.add(required_id, source=source):
            return False
        note(f"required mod {required_id} added")

        group = catalog.get_group_of(required_id)
        if group is not None:
            _add_required_group(mod, group.group_id, note)
        return True

    if required_id in catalog.required_assets:
        return False
    if is_workshop_id(required_id):
        if ctx.note_unknown_asset(required_id):
            log.info(
                "Required item not found, probably an asset: %s (for %s).",
                workshop_url(required_id),
                mod.label(),
            )
        return False

    log.warning("Skipping invalid required mod ID %s for %s.", required_id, mod.label())
    return False


def _add_required_group(mod: Mod, group_id: int, note: Recorder) -> bool:
    if group_id in mod.required_mods:
        return False
    mod.required_mods.append(group_id)
    note(f"required group {group_id} added")
    return True


def _remove_required_mod(
    ctx: ReconciliationContext,
    mod: Mod,
    required_id: int,
    *,
    note: Recorder,
) -> bool:
    if required_id not in mod.required_mods:
        return False

    if is_group_id(required_id):
        mod.required_mods.remove(required_id)
        note(f"required Group {required_id} removed")
        return True

    mod.mod_requirements.remove(required_id)
    note(f"required Mod {required_id} removed")

    group = ctx.catalog.get_group_of(required_id)
    if (
        group is not None
        and group.group_id in mod.required_mods
        and not any(member in mod.required_mods for member in group.members)
    ):
        mod.required_mods.remove(group.group_id)
        note(f"required Group {group.group_id} removed")
    return True


# Successors, alternatives, recommendations


def add_successor(ctx: ReconciliationContext, mod: Mod, successor_id: object) -> bool:
    return _edit_relation(ctx, mod, "successors", successor_id, add=True)


def remove_successor(ctx: ReconciliationContext, mod: Mod, successor_id: object) -> bool:
    return _edit_relation(ctx, mod, "successors", successor_id, add=False)


def add_alternative(ctx: ReconciliationContext, mod: Mod, alternative_id: object) -> bool:
    return _edit_relation(ctx, mod, "alternatives", alternative_id, add=True)


def remove_alternative(ctx: ReconciliationContext, mod: Mod, alternative_id: object) -> bool:
    return _edit_relation(ctx, mod, "alternatives", alternative_id, add=False)


def add_recommendation(ctx: ReconciliationContext, mod: Mod, recommendation_id: object) -> bool:
    return _edit_relation(ctx, mod, "recommendations", recommendation_id, add=True)


def remove_recommendation(
    ctx: ReconciliationContext, mod: Mod, recommendation_id: object
) -> bool:
    return _edit_relation(ctx, mod, "recommendations", recommendation_id, add=False)


def _edit_relation(
    ctx: ReconciliationContext, mod: Mod, attribute: str, other_id: object, *, add: bool
) -> bool:
    label = _RELATIONS[attribute]
    parsed = coerce_id(other_id, operation=f"{'add' if add else 'remove'}_{label}")
    if parsed is None:
        return False
    if add and parsed == mod.steam_id:
        log.warning("Not adding %s as its own %s.", mod.label(), label)
        return False

    changed = _add_relation(mod, attribute, parsed) if add else _remove_relation(
        mod, attribute, parsed
    )
    if changed:
        ctx.ledger.mod_updated(mod, f"{label} {parsed} {'added' if add else 'removed'}")
    return changed


def _add_relation(mod: Mod, attribute: str, other_id: int) -> bool:
    items: list[int] = getattr(mod, attribute)
    if other_id in items:
        return False
    items.append(other_id)
    return True


def _remove_relation(mod: Mod, attribute: str, other_id: int) -> bool:
    items: list[int] = getattr(mod, attribute)
    if other_id not in items:
        return False
    items.remove(other_id)
    return True


# Removal and assets


def remove_mod(ctx: ReconciliationContext, mod: Mod) -> bool:
    """Drop a mod that is gone from the workshop and referenced nowhere."""

    if is_workshop_id(mod.steam_id) and not mod.is_removed():
        log.warning("Not removing %s: it is not removed from the workshop.", mod.label())
        return False
    if ctx.catalog.is_referenced(mod.steam_id):
        log.warning("Not removing %s: other catalog entries still refer to it.", mod.label())
        return False
    if not ctx.catalog.remove_mod(mod):
        return False

    ctx.ledger.record(EntryKind.REMOVED_MOD, f"Mod removed: {mod.label()}")
    return True


def add_required_assets(ctx: ReconciliationContext, asset_ids: Iterable[object]) -> int:
    """Register known asset IDs so they stop being reported as unknown requirements."""

    catalog = ctx.catalog
    added = 0
    for raw in asset_ids:
        asset_id = coerce_id(raw, operation="add_required_assets")
        if asset_id is None or asset_id in catalog.required_assets:
            continue
        if not is_workshop_id(asset_id) or catalog.get_mod(asset_id) is not None:
            log.warning("Skipping asset %s: not a free workshop ID.", asset_id)
            continue
        catalog.required_assets.append(asset_id)
        if asset_id in ctx.unknown_assets:
            ctx.unknown_assets.remove(asset_id)
        added += 1

    if added:
        ctx.ledger.catalog_change(f"{added} required assets added.")
    return added


def _recorder(ctx: ReconciliationContext, mod: Mod) -> Recorder:
    return lambda fragment: ctx.ledger.mod_updated(mod, fragment)


def _ignore(_fragment: str) -> None:
    return None


__all__ = [
    "add_alternative",
    "add_recommendation",
    "add_required_assets",
    "add_required_dlc",
    "add_required_mod",
    "add_successor",
    "get_or_add_mod",
    "remove_alternative",
    "remove_mod",
    "remove_recommendation",
    "remove_required_dlc",
    "remove_required_mod",
    "remove_successor",
    "update_mod",
]
