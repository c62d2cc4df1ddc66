"""Exclusion tracking: shields human decisions from automated rediscovery.

Two kinds of exclusion exist:

- requirement exclusions (required DLC and required mods), kept next to the
  requirement list together with the provenance of every present entry;
- the three-state no-description exclusion, see ``ExclusionState``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from modcatalog.domain.model.enums import ExclusionState, Source

if TYPE_CHECKING:
    from collections.abc import Hashable


@dataclass(slots=True)
class RequirementSet[T: Hashable]:
    """View over one requirement list of a mod and its exclusion bookkeeping.

    The view mutates the lists it was built from; it owns no state itself.

    - ``items``: the requirement list, in insertion order
    - ``sources``: provenance of each present item
    - ``exclusions``: items a human decided on; present items are manual
      additions, absent items are suppressed scraper discoveries
    - ``suppress_removed``: whether removing a scraper discovery leaves an
      exclusion behind; when off, exclusions only ever shadow present items
    """

    items: list[T]
    sources: dict[T, Source]
    exclusions: list[T]
    suppress_removed: bool = True

    def __contains__(self, item: T) -> bool:
        return item in self.items

    def is_suppressed(self, item: T) -> bool:
        return item in self.exclusions and item not in self.items

    def is_excluded(self, item: T) -> bool:
        return item in self.exclusions

    def add(self, item: T, *, source: Source) -> bool:
        """Add ``item``; return whether the list changed.

        A scraper may not re-add what a human suppressed. An importer add
        lifts any suppression and marks the entry as a manual decision, which
        also upgrades the provenance of an entry the scraper found earlier.
        """

        if source == Source.SCRAPER and self.is_suppressed(item):
            return False

        if item in self.items:
            if source == Source.IMPORTER and self.sources.get(item) != Source.IMPORTER:
                self.sources[item] = Source.IMPORTER
                self._exclude(item)
            return False

        self.items.append(item)
        self.sources[item] = source
        if source == Source.IMPORTER:
            self._exclude(item)
        else:
            self._include(item)
        return True

    def remove(self, item: T) -> bool:
        """Remove ``item``; return whether the list changed.

        Removing a manual entry clears its exclusion. Removing a scraper
        discovery, by either source, leaves an exclusion behind so the scraper
        cannot bring it back next run.
        """

        if item not in self.items:
            return False

        self.items.remove(item)
        provenance = self.sources.pop(item, Source.SCRAPER)
        if provenance == Source.IMPORTER or not self.suppress_removed:
            self._include(item)
        else:
            self._exclude(item)
        return True

    def _exclude(self, item: T) -> None:
        if item not in self.exclusions:
            self.exclusions.append(item)

    def _include(self, item: T) -> None:
        if item in self.exclusions:
            self.exclusions.remove(item)


def infer_sources[T: Hashable](items: list[T], exclusions: list[T]) -> dict[T, Source]:
    """Provenance for catalogs written before provenance was stored.

    Older catalogs only know the exclusion list; an excluded present entry was
    added manually, everything else came from the scraper.
    """

    return {
        item: (Source.IMPORTER if item in exclusions else Source.SCRAPER) for item in items
    }


def scraper_may_touch(state: ExclusionState) -> bool:
    return state != ExclusionState.MANUAL


def after_status_added(*, source: Source) -> ExclusionState:
    if source == Source.IMPORTER:
        return ExclusionState.MANUAL
    return ExclusionState.NONE


def after_status_removed(state: ExclusionState, *, source: Source) -> ExclusionState:
    if source == Source.SCRAPER:
        return ExclusionState.NONE
    if state == ExclusionState.MANUAL:
        return ExclusionState.PENDING_REAPPLICATION
    return ExclusionState.MANUAL
