from __future__ import annotations

import json
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from modcatalog.adapters.catalog_file import JsonCatalogStore
from modcatalog.domain.model import (
    DLC,
    Author,
    Compatibility,
    CompatibilityStatus,
    ExclusionState,
    Group,
    Mod,
    Source,
    Stability,
    Status,
)
from tests.helpers.catalog import make_catalog, workshop_id

if TYPE_CHECKING:
    from pathlib import Path


def _full_catalog():  # noqa: ANN202
    mod = Mod(
        steam_id=workshop_id(),
        name="Roads",
        published=datetime(2023, 1, 1, tzinfo=UTC),
        updated=datetime(2024, 5, 1, tzinfo=UTC),
        author_id=7656,
        source_url="https://github.example/roads",
        compatible_game_version="1.17.1-f2",
        required_dlc=[DLC.AFTER_DARK],
        required_dlc_sources={DLC.AFTER_DARK: Source.IMPORTER},
        exclusion_for_required_dlc=[DLC.AFTER_DARK, DLC.CAMPUS],
        required_mods=[workshop_id(1), 1001],
        required_mod_sources={workshop_id(1): Source.SCRAPER},
        stability=Stability.MINOR_ISSUES,
        statuses=[Status.SOURCE_BUNDLED],
        exclusion_for_no_description=ExclusionState.PENDING_REAPPLICATION,
        review_date=datetime(2024, 5, 2, tzinfo=UTC),
        change_notes=["2023-01-01: added"],
    )
    dependency = Mod(steam_id=workshop_id(1), name="Library")
    return make_catalog(
        version=12,
        mods=[mod, dependency],
        authors=[Author(steam_id=7656, name="Someone", last_seen=datetime(2024, 5, 1, tzinfo=UTC))],
        groups=[Group(group_id=1001, name="Libraries", members=[workshop_id(1)])],
    )


def test_round_trip_preserves_catalog(tmp_path: Path) -> None:
    store = JsonCatalogStore()
    original = _full_catalog()
    original.compatibilities.append(
        Compatibility(
            first_mod_id=workshop_id(),
            second_mod_id=workshop_id(1),
            status=CompatibilityStatus.MINOR_ISSUES,
            note="needs settings",
        )
    )
    original.required_assets.append(workshop_id(9))
    path = tmp_path / "catalog.json"

    assert store.save_catalog(original, path)
    loaded = store.load_catalog(path)

    assert loaded is not None
    assert loaded.version_string() == "2.0012"
    mod = loaded.get_mod(workshop_id())
    assert mod is not None
    assert mod.required_dlc_sources == {DLC.AFTER_DARK: Source.IMPORTER}
    assert mod.exclusion_for_required_dlc == [DLC.AFTER_DARK, DLC.CAMPUS]
    assert mod.required_mods == [workshop_id(1), 1001]
    assert mod.exclusion_for_no_description == ExclusionState.PENDING_REAPPLICATION
    assert mod.statuses == [Status.SOURCE_BUNDLED]
    assert mod.updated == datetime(2024, 5, 1, tzinfo=UTC)
    assert loaded.get_author(7656) is not None
    assert loaded.get_group_of(workshop_id(1)) is not None
    assert loaded.compatibilities[0].note == "needs settings"
    assert loaded.required_assets == [workshop_id(9)]
    assert not list(tmp_path.glob("*.tmp"))


def test_legacy_document_infers_provenance(tmp_path: Path) -> None:
    path = tmp_path / "legacy.json"
    path.write_text(
        json.dumps(
            {
                "version": 3,
                "update_date": "2021-11-01T10:00:00",
                "mods": [
                    {
                        "steam_id": workshop_id(),
                        "required_mods": [workshop_id(1), workshop_id(2)],
                        "exclusion_for_required_mods": [workshop_id(2), workshop_id(3)],
                        "exclusion_for_no_description": True,
                        "unknown_field": "ignored",
                    }
                ],
            }
        ),
        encoding="utf-8",
    )

    catalog = JsonCatalogStore().load_catalog(path)

    assert catalog is not None
    assert catalog.update_date == datetime(2021, 11, 1, 10, 0, tzinfo=UTC)
    mod = catalog.get_mod(workshop_id())
    assert mod is not None
    assert mod.required_mod_sources == {
        workshop_id(1): Source.SCRAPER,
        workshop_id(2): Source.IMPORTER,
    }
    assert mod.exclusion_for_no_description == ExclusionState.MANUAL


def test_invalid_documents_load_as_none(tmp_path: Path) -> None:
    store = JsonCatalogStore()
    broken = tmp_path / "broken.json"
    broken.write_text("{not json", encoding="utf-8")
    no_version = tmp_path / "no_version.json"
    no_version.write_text(json.dumps({"mods": []}), encoding="utf-8")
    nameless_author = tmp_path / "author.json"
    nameless_author.write_text(
        json.dumps({"version": 1, "update_date": "2024-01-01T00:00:00Z", "authors": [{}]}),
        encoding="utf-8",
    )
    duplicate = tmp_path / "duplicate.json"
    duplicate.write_text(
        json.dumps(
            {
                "version": 1,
                "update_date": "2024-01-01T00:00:00Z",
                "mods": [{"steam_id": workshop_id()}, {"steam_id": workshop_id()}],
            }
        ),
        encoding="utf-8",
    )

    assert store.load_catalog(broken) is None
    assert store.load_catalog(no_version) is None
    assert store.load_catalog(nameless_author) is None
    assert store.load_catalog(duplicate) is None
    assert store.load_catalog(tmp_path / "missing.json") is None


def test_save_text_and_copy(tmp_path: Path) -> None:
    store = JsonCatalogStore()
    source = tmp_path / "updater.log"

    assert store.save_text("log line\n", source)
    assert store.copy_file(source, tmp_path / "out" / "copy.log")
    assert (tmp_path / "out" / "copy.log").read_text(encoding="utf-8") == "log line\n"
    assert not store.copy_file(tmp_path / "missing.log", tmp_path / "out" / "other.log")
