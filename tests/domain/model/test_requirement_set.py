from __future__ import annotations

from modcatalog.domain.model import DLC, ExclusionState, RequirementSet, Source, infer_sources
from modcatalog.domain.model.exclusions import after_status_added, after_status_removed


def _empty() -> RequirementSet[int]:
    return RequirementSet(items=[], sources={}, exclusions=[])


def test_scraper_add_has_no_exclusion() -> None:
    requirements = _empty()

    assert requirements.add(200, source=Source.SCRAPER)

    assert requirements.items == [200]
    assert requirements.sources[200] == Source.SCRAPER
    assert not requirements.is_excluded(200)


def test_importer_add_is_a_manual_decision() -> None:
    requirements = _empty()

    assert requirements.add(200, source=Source.IMPORTER)

    assert requirements.sources[200] == Source.IMPORTER
    assert requirements.exclusions == [200]


def test_importer_confirming_scraper_entry_upgrades_provenance() -> None:
    requirements = _empty()
    requirements.add(200, source=Source.SCRAPER)

    assert not requirements.add(200, source=Source.IMPORTER)

    assert requirements.sources[200] == Source.IMPORTER
    assert requirements.exclusions == [200]


def test_removing_scraper_entry_suppresses_it() -> None:
    requirements = _empty()
    requirements.add(200, source=Source.SCRAPER)

    assert requirements.remove(200)

    assert requirements.items == []
    assert requirements.is_suppressed(200)
    assert not requirements.add(200, source=Source.SCRAPER)
    assert requirements.items == []


def test_removing_importer_entry_clears_exclusion() -> None:
    requirements = _empty()
    requirements.add(200, source=Source.IMPORTER)

    assert requirements.remove(200)

    assert requirements.exclusions == []
    assert 200 not in requirements.sources


def test_importer_lifts_its_own_suppression() -> None:
    requirements = _empty()
    requirements.add(200, source=Source.SCRAPER)
    requirements.remove(200)

    assert requirements.add(200, source=Source.IMPORTER)

    assert requirements.items == [200]
    assert requirements.sources[200] == Source.IMPORTER


def test_removing_twice_is_a_no_op() -> None:
    requirements = _empty()
    requirements.add(200, source=Source.SCRAPER)

    assert requirements.remove(200)
    assert not requirements.remove(200)

    assert requirements.exclusions == [200]


def test_set_without_suppression_only_shadows_present_items() -> None:
    requirements: RequirementSet[DLC] = RequirementSet(
        items=[], sources={}, exclusions=[], suppress_removed=False
    )
    requirements.add(DLC.AFTER_DARK, source=Source.SCRAPER)
    requirements.add(DLC.CAMPUS, source=Source.IMPORTER)

    assert requirements.remove(DLC.AFTER_DARK)
    assert requirements.remove(DLC.CAMPUS)

    assert requirements.exclusions == []
    assert requirements.add(DLC.AFTER_DARK, source=Source.SCRAPER)


def test_infer_sources_for_legacy_data() -> None:
    sources = infer_sources([DLC.AIRPORTS, DLC.CAMPUS], [DLC.CAMPUS, DLC.PARKLIFE])

    assert sources == {DLC.AIRPORTS: Source.SCRAPER, DLC.CAMPUS: Source.IMPORTER}


def test_no_description_state_transitions() -> None:
    assert after_status_added(source=Source.IMPORTER) == ExclusionState.MANUAL
    assert after_status_added(source=Source.SCRAPER) == ExclusionState.NONE
    assert (
        after_status_removed(ExclusionState.MANUAL, source=Source.IMPORTER)
        == ExclusionState.PENDING_REAPPLICATION
    )
    assert after_status_removed(ExclusionState.NONE, source=Source.IMPORTER) == (
        ExclusionState.MANUAL
    )
    assert (
        after_status_removed(ExclusionState.PENDING_REAPPLICATION, source=Source.SCRAPER)
        == ExclusionState.NONE
    )
