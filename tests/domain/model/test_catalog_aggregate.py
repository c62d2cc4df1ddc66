from __future__ import annotations

from datetime import UTC, datetime

import pytest

from modcatalog.domain.model import (
    HIGHEST_GROUP_ID,
    LOWEST_GROUP_ID,
    Author,
    Catalog,
    Group,
    Mod,
)
from tests.helpers.catalog import make_catalog, workshop_id


def test_version_string_pads_the_version() -> None:
    assert Catalog(version=7).version_string() == "2.0007"


def test_new_version_advances_version_and_date() -> None:
    catalog = make_catalog(version=4)
    moment = datetime(2025, 1, 2, tzinfo=UTC)

    catalog.new_version(moment)

    assert catalog.version == 5
    assert catalog.update_date == moment


def test_validate_requires_version_and_date() -> None:
    assert make_catalog().validate()
    assert not Catalog().validate()
    assert not make_catalog(update_date=None).validate()


def test_indices_are_rebuilt_on_construction() -> None:
    mod = Mod(steam_id=workshop_id(), name="Roads")
    author = Author(steam_id=7656, custom_url="someone", name="Someone")
    catalog = make_catalog(mods=[mod], authors=[author])

    assert catalog.get_mod(workshop_id()) is mod
    assert catalog.get_author(7656) is author
    assert catalog.get_author(custom_url="someone") is author


def test_add_mod_rejects_duplicates(catalog: Catalog) -> None:
    catalog.add_mod(workshop_id(), "Roads")

    with pytest.raises(ValueError, match="already exists"):
        catalog.add_mod(workshop_id(), "Roads again")


def test_author_lookup_prefers_profile_id(catalog: Catalog) -> None:
    by_id = catalog.add_author(7656, "", "By ID")
    by_url = catalog.add_author(0, "someone", "By URL")

    assert catalog.get_author(7656, "someone") is by_id
    assert catalog.get_author(9999, "someone") is by_url
    assert catalog.get_author(9999) is None


def test_reindex_author_drops_old_keys(catalog: Catalog) -> None:
    author = catalog.add_author(0, "old-url", "Someone")

    author.custom_url = "new-url"
    catalog.reindex_author(author, old_url="old-url")

    assert catalog.get_author(custom_url="old-url") is None
    assert catalog.get_author(custom_url="new-url") is author


def test_next_group_id_fills_gaps() -> None:
    catalog = make_catalog(
        groups=[
            Group(group_id=LOWEST_GROUP_ID, name="A"),
            Group(group_id=LOWEST_GROUP_ID + 2, name="C"),
        ]
    )

    assert catalog.next_group_id() == LOWEST_GROUP_ID + 1


def test_add_group_returns_none_when_range_is_exhausted(catalog: Catalog) -> None:
    catalog.groups = [
        Group(group_id=group_id, name="full")
        for group_id in range(LOWEST_GROUP_ID, HIGHEST_GROUP_ID + 1)
    ]
    catalog.rebuild_indices()

    assert catalog.add_group("One too many") is None


def test_is_referenced_covers_all_relations(catalog: Catalog) -> None:
    target = catalog.add_mod(workshop_id(1), "Target")
    other = catalog.add_mod(workshop_id(2), "Other")
    assert not catalog.is_referenced(target.steam_id)

    other.recommendations.append(target.steam_id)
    assert catalog.is_referenced(target.steam_id)

    other.recommendations.clear()
    group = catalog.add_group("Group")
    assert group is not None
    group.members.append(target.steam_id)
    assert catalog.is_referenced(target.steam_id)


def test_mods_by_author_uses_id_or_url(catalog: Catalog) -> None:
    by_id = catalog.add_author(7656, "", "By ID")
    by_url = catalog.add_author(0, "someone", "By URL")
    first = catalog.add_mod(workshop_id(1), "First")
    first.author_id = 7656
    second = catalog.add_mod(workshop_id(2), "Second")
    second.author_url = "someone"

    assert catalog.mods_by_author(by_id) == [first]
    assert catalog.mods_by_author(by_url) == [second]


@pytest.mark.parametrize(
    ("steam_id", "kwargs", "expected"),
    [
        (1, {}, True),
        (6, {}, False),
        (1, {"allow_builtin": False}, False),
        (LOWEST_GROUP_ID, {"allow_group": True, "should_exist": False}, True),
        (LOWEST_GROUP_ID, {"allow_group": True}, False),
        (LOWEST_GROUP_ID, {}, False),
        (10001, {"allow_local": True, "should_exist": False}, True),
        (10001, {}, False),
        (workshop_id(), {}, False),
        (workshop_id(), {"should_exist": False}, True),
        (500000, {"should_exist": False}, False),
    ],
)
def test_is_valid_id(
    catalog: Catalog, steam_id: int, kwargs: dict[str, bool], expected: bool
) -> None:
    assert catalog.is_valid_id(steam_id, **kwargs) is expected
