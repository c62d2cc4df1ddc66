"""Group and compatibility reconciliation."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from modcatalog.domain.model.compatibility import Compatibility
from modcatalog.domain.model.enums import EntryKind
from modcatalog.domain.model.identifiers import coerce_id

if TYPE_CHECKING:
    from collections.abc import Iterable

    from modcatalog.domain.model import CompatibilityStatus, Group
    from modcatalog.domain.reconciliation.context import ReconciliationContext

log = getLogger(__name__)


# Groups


def add_group(
    ctx: ReconciliationContext, name: str, members: Iterable[object] = ()
) -> Group | None:
    """Create a group under the next free group ID and add ``members`` one by one."""

    group = ctx.catalog.add_group(name)
    if group is None:
        return None

    ctx.ledger.record(EntryKind.NEW_GROUP, f"Group added: {group.label()}")
    for member in members:
        add_group_member(ctx, group, member)
    return group


def remove_group(ctx: ReconciliationContext, group_id: object) -> bool:
    """Remove a group, purging it from every requirement list first."""

    parsed = coerce_id(group_id, operation="remove_group")
    group = ctx.catalog.get_group(parsed) if parsed is not None else None
    if group is None:
        log.warning("remove_group: no group with ID %r.", group_id)
        return False

    for mod in ctx.catalog.mods:
        if group.group_id in mod.required_mods:
            mod.required_mods.remove(group.group_id)
            ctx.ledger.mod_updated(mod, f"required Group {group.group_id} removed")

    ctx.catalog.remove_group(group)
    ctx.ledger.record(EntryKind.REMOVED_GROUP, f"Group removed: {group.label()}")
    for member in group.members:
        mod = ctx.catalog.get_mod(member)
        if mod is not None:
            ctx.ledger.mod_updated(mod, f"removed from {group.label()}")
    return True


def add_group_member(ctx: ReconciliationContext, group: Group, mod_id: object) -> bool:
    parsed = coerce_id(mod_id, operation="add_group_member")
    if parsed is None:
        return False
    mod = ctx.catalog.get_mod(parsed)
    if mod is None:
        log.warning("Not adding unknown mod %s to %s.", parsed, group.label())
        return False
    if parsed in group.members:
        return False
    current = ctx.catalog.get_group_of(parsed)
    if current is not None:
        log.warning(
            "Not adding %s to %s: it is already a member of %s.",
            mod.label(),
            group.label(),
            current.label(),
        )
        return False

    group.members.append(parsed)
    ctx.ledger.mod_updated(mod, f"added to {group.label()}")
    return True


def remove_group_member(ctx: ReconciliationContext, group: Group, mod_id: object) -> bool:
    parsed = coerce_id(mod_id, operation="remove_group_member")
    if parsed is None or parsed not in group.members:
        return False

    group.members.remove(parsed)
    mod = ctx.catalog.get_mod(parsed)
    if mod is not None:
        ctx.ledger.mod_updated(mod, f"removed from {group.label()}")
    if group.is_degenerate:
        log.info("%s has %d members left.", group.label(), len(group.members))
    return True


# Compatibilities


def add_compatibility(
    ctx: ReconciliationContext,
    first_mod_id: object,
    second_mod_id: object,
    status: CompatibilityStatus,
    note: str = "",
) -> bool:
    first = coerce_id(first_mod_id, operation="add_compatibility")
    second = coerce_id(second_mod_id, operation="add_compatibility")
    if first is None or second is None:
        return False
    if first == second:
        log.warning("Not adding a compatibility of mod %s with itself.", first)
        return False
    catalog = ctx.catalog
    if catalog.get_mod(first) is None or catalog.get_mod(second) is None:
        log.warning("Not adding compatibility between %s and %s: unknown mod.", first, second)
        return False
    if _find_compatibility(ctx, first, second, status) is not None:
        return False

    catalog.compatibilities.append(
        Compatibility(first_mod_id=first, second_mod_id=second, status=status, note=note)
    )
    ctx.ledger.record(
        EntryKind.NEW_COMPATIBILITY,
        f'Compatibility added between {first} and {second}: "{status}"'
        + (f", {note}" if note else ""),
    )
    return True


def remove_compatibility(
    ctx: ReconciliationContext,
    first_mod_id: object,
    second_mod_id: object,
    status: CompatibilityStatus,
) -> bool:
    first = coerce_id(first_mod_id, operation="remove_compatibility")
    second = coerce_id(second_mod_id, operation="remove_compatibility")
    if first is None or second is None:
        return False
    compatibility = _find_compatibility(ctx, first, second, status)
    if compatibility is None:
        return False

    ctx.catalog.compatibilities.remove(compatibility)
    ctx.ledger.record(
        EntryKind.REMOVED_COMPATIBILITY,
        f'Compatibility removed between {first} and {second}: "{status}"',
    )
    return True


def _find_compatibility(
    ctx: ReconciliationContext, first: int, second: int, status: CompatibilityStatus
) -> Compatibility | None:
    for compatibility in ctx.catalog.compatibilities:
        if compatibility.matches(first, second, status):
            return compatibility
    return None


__all__ = [
    "add_compatibility",
    "add_group",
    "add_group_member",
    "remove_compatibility",
    "remove_group",
    "remove_group_member",
]
