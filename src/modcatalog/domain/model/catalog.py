"""Catalog aggregate: the four entity collections plus derived lookup indices.

The indices are never persisted; ``rebuild_indices`` restores them after a
load. Collection mutation goes through the reconciliation layer, which calls
the primitives below and records change notes.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from logging import getLogger
from typing import TYPE_CHECKING, Final

from modcatalog.domain.model.author import Author
from modcatalog.domain.model.group import Group
from modcatalog.domain.model.identifiers import (
    BUILTIN_MODS,
    HIGHEST_GROUP_ID,
    LOWEST_GROUP_ID,
    is_builtin_id,
    is_group_id,
    is_local_id,
    is_workshop_id,
)
from modcatalog.domain.model.mod import UNKNOWN_GAME_VERSION, Mod

if TYPE_CHECKING:
    from modcatalog.domain.model.compatibility import Compatibility

log = getLogger(__name__)

CURRENT_STRUCTURE_VERSION: Final[int] = 2


@dataclass(eq=False, kw_only=True)
class Catalog:
    version: int = 0
    structure_version: int = CURRENT_STRUCTURE_VERSION
    update_date: datetime | None = None
    compatible_game_version: str = UNKNOWN_GAME_VERSION
    note: str = ""
    report_header_text: str = ""
    report_footer_text: str = ""

    mods: list[Mod] = field(default_factory=list[Mod])
    compatibilities: list[Compatibility] = field(default_factory=list["Compatibility"])
    groups: list[Group] = field(default_factory=list[Group])
    authors: list[Author] = field(default_factory=list[Author])
    required_assets: list[int] = field(default_factory=list[int])

    _mods_by_id: dict[int, Mod] = field(default_factory=dict[int, Mod], init=False, repr=False)
    _groups_by_id: dict[int, Group] = field(
        default_factory=dict[int, Group], init=False, repr=False
    )
    _authors_by_id: dict[int, Author] = field(
        default_factory=dict[int, Author], init=False, repr=False
    )
    _authors_by_url: dict[str, Author] = field(
        default_factory=dict[str, Author], init=False, repr=False
    )

    def __post_init__(self) -> None:
        self.rebuild_indices()

    # Indices

    def rebuild_indices(self) -> None:
        self._mods_by_id = {mod.steam_id: mod for mod in self.mods}
        self._groups_by_id = {group.group_id: group for group in self.groups}
        self._authors_by_id = {a.steam_id: a for a in self.authors if a.steam_id}
        self._authors_by_url = {a.custom_url: a for a in self.authors if a.custom_url}

    def reindex_author(self, author: Author, *, old_id: int = 0, old_url: str = "") -> None:
        if old_id and self._authors_by_id.get(old_id) is author:
            del self._authors_by_id[old_id]
        if old_url and self._authors_by_url.get(old_url) is author:
            del self._authors_by_url[old_url]
        if author.steam_id:
            self._authors_by_id[author.steam_id] = author
        if author.custom_url:
            self._authors_by_url[author.custom_url] = author

    # Versioning

    def version_string(self) -> str:
        return f"{self.structure_version}.{self.version:04}"

    def new_version(self, update_date: datetime) -> None:
        self.version += 1
        self.update_date = update_date

    def validate(self) -> bool:
        if self.version <= 0 or self.update_date is None:
            log.error(
                "Invalid catalog %s: incorrect version or missing update date.",
                self.version_string(),
            )
            return False
        return True

    # Mods

    def get_mod(self, steam_id: int) -> Mod | None:
        return self._mods_by_id.get(steam_id)

    def add_mod(self, steam_id: int, name: str) -> Mod:
        if steam_id in self._mods_by_id:
            raise ValueError(f"Mod {steam_id} already exists in the catalog")
        mod = Mod(steam_id=steam_id, name=name)
        self.mods.append(mod)
        self._mods_by_id[steam_id] = mod
        return mod

    def remove_mod(self, mod: Mod) -> bool:
        if self._mods_by_id.get(mod.steam_id) is not mod:
            return False
        self.mods.remove(mod)
        del self._mods_by_id[mod.steam_id]
        return True

    def is_referenced(self, steam_id: int) -> bool:
        """Return whether anything else in the catalog points at ``steam_id``."""

        if self.get_group_of(steam_id) is not None:
            return True
        if any(c.involves(steam_id) for c in self.compatibilities):
            return True
        return any(
            steam_id in mod.required_mods
            or steam_id in mod.successors
            or steam_id in mod.alternatives
            or steam_id in mod.recommendations
            for mod in self.mods
            if mod.steam_id != steam_id
        )

    def mods_by_author(self, author: Author) -> list[Mod]:
        if author.steam_id:
            return [mod for mod in self.mods if mod.author_id == author.steam_id]
        return [mod for mod in self.mods if mod.author_url == author.custom_url]

    # Groups

    def get_group(self, group_id: int) -> Group | None:
        return self._groups_by_id.get(group_id)

    def get_group_of(self, steam_id: int) -> Group | None:
        """Return the group ``steam_id`` is a member of, if any."""

        for group in self.groups:
            if steam_id in group.members:
                return group
        return None

    def is_group_member(self, steam_id: int) -> bool:
        return self.get_group_of(steam_id) is not None

    def next_group_id(self) -> int | None:
        used = set(self._groups_by_id)
        for candidate in range(LOWEST_GROUP_ID, HIGHEST_GROUP_ID + 1):
            if candidate not in used:
                return candidate
        return None

    def add_group(self, name: str) -> Group | None:
        group_id = self.next_group_id()
        if group_id is None:
            log.error("No free group identifier left for group %r.", name)
            return None
        group = Group(group_id=group_id, name=name)
        self.groups.append(group)
        self._groups_by_id[group_id] = group
        return group

    def remove_group(self, group: Group) -> bool:
        if self._groups_by_id.get(group.group_id) is not group:
            return False
        self.groups.remove(group)
        del self._groups_by_id[group.group_id]
        return True

    # Authors

    def get_author(self, steam_id: int = 0, custom_url: str = "") -> Author | None:
        """Look up by profile ID first, then by custom URL."""

        if steam_id and steam_id in self._authors_by_id:
            return self._authors_by_id[steam_id]
        if custom_url:
            return self._authors_by_url.get(custom_url)
        return None

    def add_author(self, steam_id: int, custom_url: str, name: str) -> Author:
        author = Author(steam_id=steam_id, custom_url=custom_url, name=name)
        self.authors.append(author)
        self.reindex_author(author)
        return author

    # Identifiers

    def is_valid_id(
        self,
        steam_id: int,
        *,
        allow_builtin: bool = True,
        allow_group: bool = False,
        allow_local: bool = False,
        should_exist: bool = True,
    ) -> bool:
        """Check an identifier against the ID ranges and, optionally, the catalog."""

        if is_builtin_id(steam_id):
            return allow_builtin and steam_id in BUILTIN_MODS.values()
        if is_group_id(steam_id):
            return allow_group and (not should_exist or steam_id in self._groups_by_id)
        if is_local_id(steam_id):
            return allow_local and (not should_exist or steam_id in self._mods_by_id)
        if is_workshop_id(steam_id):
            return not should_exist or steam_id in self._mods_by_id
        return False
