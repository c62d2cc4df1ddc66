from __future__ import annotations

from datetime import UTC, datetime

from modcatalog.domain.data_dump import (
    authors_retiring_soon,
    build_data_dump,
    mods_with_old_review,
    mods_without_review,
    required_ungrouped_mods,
    small_groups,
    unused_groups,
)
from modcatalog.domain.model import Author, Catalog, Group, Mod, Stability, Status
from tests.helpers.catalog import make_catalog, workshop_id

NOW = datetime(2024, 6, 15, tzinfo=UTC)


def _catalog() -> Catalog:
    required = Mod(steam_id=workshop_id(1), name="Library", statuses=[Status.DEPRECATED])
    grouped = Mod(steam_id=workshop_id(2), name="Grouped")
    dependent = Mod(
        steam_id=workshop_id(3),
        name="Dependent",
        required_mods=[workshop_id(1), 1002],
        review_date=datetime(2024, 1, 1, tzinfo=UTC),
    )
    incompatible = Mod(
        steam_id=workshop_id(4),
        name="Broken",
        stability=Stability.INCOMPATIBLE_ACCORDING_TO_WORKSHOP,
    )
    return make_catalog(
        mods=[required, grouped, dependent, incompatible],
        groups=[
            Group(group_id=1001, name="Unused", members=[]),
            Group(group_id=1002, name="Single", members=[workshop_id(2)]),
        ],
        authors=[
            Author(steam_id=1, name="Soon", last_seen=datetime(2023, 7, 1, tzinfo=UTC)),
            Author(steam_id=2, name="Fresh", last_seen=datetime(2024, 6, 1, tzinfo=UTC)),
            Author(steam_id=3, name="Gone", last_seen=datetime(2022, 1, 1, tzinfo=UTC)),
        ],
    )


def test_group_sections() -> None:
    catalog = _catalog()

    assert unused_groups(catalog).lines == ("[Group 1001] Unused",)
    assert small_groups(catalog).lines == (
        "[Group 1001] Unused: no members",
        "[Group 1002] Single: only member is [Steam ID    1000003] Grouped",
    )


def test_required_ungrouped_mods_lists_statuses() -> None:
    lines = required_ungrouped_mods(_catalog()).lines

    assert lines == (
        "Library [Deprecated], https://steamcommunity.com/sharedfiles/filedetails/?id=1000002",
    )


def test_authors_retiring_soon_excludes_retired_window() -> None:
    section = authors_retiring_soon(_catalog(), now=NOW, retirement_months=12)

    assert section.lines == ("Soon, https://steamcommunity.com/profiles/1/myworkshopfiles/",)


def test_review_sections() -> None:
    catalog = _catalog()

    assert [line.split(",")[0] for line in mods_without_review(catalog).lines] == [
        "Library",
        "Grouped",
    ]
    assert mods_with_old_review(catalog, now=NOW).lines == (
        "last review 2024-01-01: Dependent, "
        "https://steamcommunity.com/sharedfiles/filedetails/?id=1000004",
    )


def test_build_data_dump_has_every_section() -> None:
    dump = build_data_dump(_catalog(), now=NOW, retirement_months=12)

    assert dump.startswith("Catalog 2.0001. Data dump, created on Saturday, 15 June 2024, 00:00.")
    for title in (
        "Unused groups:",
        "Groups with less than 2 members:",
        "All required mods that are not in a group:",
        "Authors that will retire within 2 months:",
        "Retired authors:",
        "Authors with more than one mod:",
        "Mods without a review:",
        "Mods with an old review (> 2 months):",
    ):
        assert f"\n{'=' * len(title)}\n{title}\n" in dump
