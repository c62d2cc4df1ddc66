from __future__ import annotations

from datetime import UTC, datetime

from modcatalog.domain.ledger import ChangeLedger
from modcatalog.domain.model import Author, EntryKind, Mod
from tests.helpers.catalog import make_catalog, workshop_id


def test_record_deduplicates_per_subject() -> None:
    ledger = ChangeLedger()
    first = Mod(steam_id=workshop_id(1))
    second = Mod(steam_id=workshop_id(2))

    ledger.mod_updated(first, "stability")
    ledger.mod_updated(first, "stability")
    ledger.mod_updated(second, "stability")

    assert ledger.fragments_for(first) == ["stability"]
    assert ledger.fragments_for(second) == ["stability"]
    assert not ledger.record(EntryKind.NEW_MOD, "   ")


def test_has_changes_ignores_catalog_notes() -> None:
    ledger = ChangeLedger()

    ledger.catalog_change("Catalog note added.")
    assert not ledger.has_changes()

    ledger.record(EntryKind.NEW_AUTHOR, "Author added: [someone] Someone")
    assert ledger.has_changes()


def test_flush_into_entities_appends_one_dated_note() -> None:
    ledger = ChangeLedger()
    mod = Mod(steam_id=workshop_id(), change_notes=["2024-01-01: added"])
    author = Author(steam_id=7656, name="Someone")

    ledger.mod_updated(mod, "new update")
    ledger.mod_updated(mod, "stability")
    ledger.author_updated(author, "name changed")

    assert ledger.flush_into_entities("2024-06-15") == 2
    assert mod.change_notes == ["2024-01-01: added", "2024-06-15: new update, stability"]
    assert author.change_notes == ["2024-06-15: name changed"]


def test_render_orders_sections_and_skips_empty_ones() -> None:
    catalog = make_catalog(version=5, update_date=datetime(2024, 6, 15, 12, 30, tzinfo=UTC))
    ledger = ChangeLedger()
    mod = Mod(steam_id=workshop_id(), name="Roads")
    author = Author(custom_url="someone", name="Someone")

    ledger.record(EntryKind.REMOVED_MOD, "Mod removed: [Steam ID    1000002] Gone")
    ledger.mod_updated(mod, "new update")
    ledger.author_updated(author, "retired")
    ledger.record(EntryKind.NEW_GROUP, "Group added: [Group 1001] Options")
    ledger.record(EntryKind.NEW_MOD, "Mod added: [Steam ID    1000003] Fresh")

    rendered = ledger.render(catalog)

    assert rendered == (
        "Change Notes for Catalog 2.0005\n"
        "-------------------------------\n"
        "Saturday, 15 June 2024, 12:30\n"
        "These change notes were automatically created by the updater process.\n"
        "\n"
        "\n"
        "*** ADDED: ***\n"
        "Mod added: [Steam ID    1000003] Fresh\n"
        "Group added: [Group 1001] Options\n"
        "\n"
        "*** UPDATED: ***\n"
        "Mod [Steam ID    1000001] Roads: new update\n"
        "Author [someone] Someone: retired\n"
        "\n"
        "*** REMOVED: ***\n"
        "Mod removed: [Steam ID    1000002] Gone\n"
    )
    assert "CATALOG CHANGES" not in rendered


def test_clear_forgets_seen_entries() -> None:
    ledger = ChangeLedger()
    ledger.catalog_change("Catalog note added.")

    ledger.clear()

    assert ledger.entries == []
    ledger.catalog_change("Catalog note added.")
    assert ledger.lines(EntryKind.CATALOG) == ["Catalog note added."]
