from __future__ import annotations

from datetime import UTC, datetime

import pytest

from modcatalog.domain.model import (
    DLC,
    Author,
    Compatibility,
    CompatibilityStatus,
    Group,
    Mod,
    Source,
    Status,
)
from tests.helpers.catalog import workshop_id


def test_mod_rejects_non_positive_id() -> None:
    with pytest.raises(ValueError, match="positive"):
        Mod(steam_id=0)


def test_author_requires_an_identity() -> None:
    with pytest.raises(ValueError, match="profile ID or a custom URL"):
        Author(name="Nobody")

    assert Author(custom_url="someone", name="Someone").label() == "[someone] Someone"


def test_group_id_must_be_in_group_range() -> None:
    with pytest.raises(ValueError, match="out of range"):
        Group(group_id=workshop_id(), name="Not a group")


def test_mod_label_variants() -> None:
    assert Mod(steam_id=1234567, name="Roads").label() == "[Steam ID    1234567] Roads"
    assert Mod(steam_id=2, name="Unlimited Money").label() == "[builtin mod 2] Unlimited Money"
    assert Mod(steam_id=10001, name="Local").label(name_first=True) == "Local [local mod 10001]"


def test_mod_label_cut_off() -> None:
    mod = Mod(steam_id=workshop_id(), name="x" * 200)

    label = mod.label(cut_off=True)

    assert len(label) == 90
    assert label.endswith("...")


def test_clamp_updated_never_before_published() -> None:
    published = datetime(2024, 3, 1, tzinfo=UTC)
    mod = Mod(steam_id=workshop_id(), published=published, updated=datetime(2023, 1, 1, tzinfo=UTC))

    mod.clamp_updated()

    assert mod.updated == published


def test_requirement_views_share_the_mod_lists() -> None:
    mod = Mod(steam_id=workshop_id())

    mod.dlc_requirements.add(DLC.AIRPORTS, source=Source.IMPORTER)
    mod.mod_requirements.add(workshop_id(1), source=Source.SCRAPER)

    assert mod.required_dlc == [DLC.AIRPORTS]
    assert mod.exclusion_for_required_dlc == [DLC.AIRPORTS]
    assert mod.required_mods == [workshop_id(1)]
    assert mod.required_mod_sources == {workshop_id(1): Source.SCRAPER}


def test_removed_flag_follows_status() -> None:
    mod = Mod(steam_id=workshop_id(), statuses=[Status.REMOVED_FROM_WORKSHOP])

    assert mod.is_removed()
    assert mod.has_status(Status.REMOVED_FROM_WORKSHOP)


def test_compatibility_matching_is_directional() -> None:
    compatibility = Compatibility(
        first_mod_id=workshop_id(1),
        second_mod_id=workshop_id(2),
        status=CompatibilityStatus.INCOMPATIBLE,
    )

    assert compatibility.matches(workshop_id(1), workshop_id(2), CompatibilityStatus.INCOMPATIBLE)
    assert not compatibility.matches(
        workshop_id(2), workshop_id(1), CompatibilityStatus.INCOMPATIBLE
    )
    assert compatibility.involves(workshop_id(2))
