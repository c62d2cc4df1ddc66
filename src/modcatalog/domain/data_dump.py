"""Maintainer triage lists for the current catalog.

The dump is plain text, meant to help with writing the next manual import:
groups to clean up, authors to check for activity, mods that need a review.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Final

from modcatalog.domain.model.enums import Stability
from modcatalog.domain.model.identifiers import author_workshop_url, workshop_url
from modcatalog.domain.time_windows import format_date, is_older_than

if TYPE_CHECKING:
    from datetime import datetime

    from modcatalog.domain.model import Author, Catalog, Mod

SOON_RETIRED_MONTHS: Final[int] = 2
OLD_REVIEW_MONTHS: Final[int] = 2


@dataclass(frozen=True, slots=True)
class DumpSection:
    title: str
    lines: tuple[str, ...]

    def render(self) -> str:
        separator = "=" * len(self.title)
        body = "".join(f"{line}\n" for line in self.lines)
        return f"\n\n{separator}\n{self.title}\n{separator}\n\n{body}"


def unused_groups(catalog: Catalog) -> DumpSection:
    required = {required_id for mod in catalog.mods for required_id in mod.required_mods}
    return DumpSection(
        "Unused groups:",
        tuple(group.label() for group in catalog.groups if group.group_id not in required),
    )


def small_groups(catalog: Catalog) -> DumpSection:
    lines: list[str] = []
    for group in catalog.groups:
        if not group.members:
            lines.append(f"{group.label()}: no members")
        elif len(group.members) == 1:
            member = catalog.get_mod(group.members[0])
            member_label = member.label() if member else str(group.members[0])
            lines.append(f"{group.label()}: only member is {member_label}")
    return DumpSection("Groups with less than 2 members:", tuple(lines))


def required_ungrouped_mods(catalog: Catalog) -> DumpSection:
    required = {required_id for mod in catalog.mods for required_id in mod.required_mods}
    lines = [
        f"{mod.name}{_statuses(mod)}, {workshop_url(mod.steam_id)}"
        for mod in catalog.mods
        if mod.steam_id in required and not catalog.is_group_member(mod.steam_id)
    ]
    return DumpSection("All required mods that are not in a group:", tuple(lines))


def authors_retiring_soon(
    catalog: Catalog, *, now: datetime, retirement_months: int, months: int = SOON_RETIRED_MONTHS
) -> DumpSection:
    lines = [
        _author_line(author)
        for author in catalog.authors
        if not author.retired
        and author.last_seen is not None
        and not is_older_than(author.last_seen, months=retirement_months, now=now)
        and is_older_than(author.last_seen, months=retirement_months - months, now=now)
    ]
    return DumpSection(f"Authors that will retire within {months} months:", tuple(lines))


def retired_authors(catalog: Catalog) -> DumpSection:
    return DumpSection(
        "Retired authors:",
        tuple(_author_line(author) for author in catalog.authors if author.retired),
    )


def authors_with_multiple_mods(catalog: Catalog) -> DumpSection:
    lines = [
        f"{author.name}{' [retired]' if author.retired else ''}, "
        f"{author_workshop_url(author.steam_id, author.custom_url)}"
        for author in catalog.authors
        if len(catalog.mods_by_author(author)) > 1
    ]
    return DumpSection("Authors with more than one mod:", tuple(lines))


def mods_without_review(catalog: Catalog) -> DumpSection:
    lines = [
        f"{mod.name}, {workshop_url(mod.steam_id)}"
        for mod in catalog.mods
        if mod.review_date is None and mod.stability != Stability.INCOMPATIBLE_ACCORDING_TO_WORKSHOP
    ]
    return DumpSection("Mods without a review:", tuple(lines))


def mods_with_old_review(
    catalog: Catalog, *, now: datetime, months: int = OLD_REVIEW_MONTHS
) -> DumpSection:
    lines = [
        f"last review {format_date(mod.review_date)}: {mod.name}, {workshop_url(mod.steam_id)}"
        for mod in catalog.mods
        if mod.review_date is not None
        and is_older_than(mod.review_date, months=months, now=now)
        and mod.stability != Stability.INCOMPATIBLE_ACCORDING_TO_WORKSHOP
    ]
    return DumpSection(f"Mods with an old review (> {months} months):", tuple(lines))


def build_data_dump(catalog: Catalog, *, now: datetime, retirement_months: int) -> str:
    sections = (
        unused_groups(catalog),
        small_groups(catalog),
        required_ungrouped_mods(catalog),
        authors_retiring_soon(catalog, now=now, retirement_months=retirement_months),
        retired_authors(catalog),
        authors_with_multiple_mods(catalog),
        mods_without_review(catalog),
        mods_with_old_review(catalog, now=now),
    )
    header = (
        f"Catalog {catalog.version_string()}. "
        f"Data dump, created on {now.strftime('%A, %d %B %Y, %H:%M')}.\n"
    )
    return header + "".join(section.render() for section in sections)


def _author_line(author: Author) -> str:
    return f"{author.name}, {author_workshop_url(author.steam_id, author.custom_url)}"


def _statuses(mod: Mod) -> str:
    if not mod.statuses:
        return ""
    return " [" + ", ".join(str(status) for status in mod.statuses) + "]"


__all__ = [
    "DumpSection",
    "authors_retiring_soon",
    "authors_with_multiple_mods",
    "build_data_dump",
    "mods_with_old_review",
    "mods_without_review",
    "required_ungrouped_mods",
    "retired_authors",
    "small_groups",
    "unused_groups",
]
