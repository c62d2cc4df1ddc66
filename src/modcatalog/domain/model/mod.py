"""Mod entity: one workshop item (or builtin/local mod) tracked by the catalog."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Final

from modcatalog.domain.model.entity import ChangeNotedEntity
from modcatalog.domain.model.enums import DLC, ExclusionState, Source, Stability, Status
from modcatalog.domain.model.exclusions import RequirementSet
from modcatalog.domain.model.identifiers import is_builtin_id, is_local_id, is_workshop_id

if TYPE_CHECKING:
    from datetime import datetime

UNKNOWN_GAME_VERSION: Final[str] = "0.0.0.0"
MAX_LABEL_WIDTH: Final[int] = 90


@dataclass(eq=False, kw_only=True)
class Mod(ChangeNotedEntity):
    steam_id: int
    name: str = ""

    published: datetime | None = None
    updated: datetime | None = None

    author_id: int = 0
    author_url: str = ""

    archive_url: str = ""
    source_url: str = ""
    compatible_game_version: str = UNKNOWN_GAME_VERSION

    required_dlc: list[DLC] = field(default_factory=list[DLC])
    required_mods: list[int] = field(default_factory=list[int])
    successors: list[int] = field(default_factory=list[int])
    alternatives: list[int] = field(default_factory=list[int])
    recommendations: list[int] = field(default_factory=list[int])

    stability: Stability = Stability.NOT_REVIEWED
    stability_note: str = ""
    statuses: list[Status] = field(default_factory=list[Status])
    generic_note: str = ""

    exclusion_for_source_url: bool = False
    exclusion_for_game_version: bool = False
    exclusion_for_no_description: ExclusionState = ExclusionState.NONE
    exclusion_for_required_dlc: list[DLC] = field(default_factory=list[DLC])
    exclusion_for_required_mods: list[int] = field(default_factory=list[int])

    required_dlc_sources: dict[DLC, Source] = field(default_factory=dict[DLC, Source], repr=False)
    required_mod_sources: dict[int, Source] = field(
        default_factory=dict[int, Source], repr=False
    )

    review_date: datetime | None = None
    auto_review_date: datetime | None = None

    def __post_init__(self) -> None:
        if self.steam_id <= 0:
            raise ValueError(f"Mod identifier must be positive, got {self.steam_id}")

    @property
    def dlc_requirements(self) -> RequirementSet[DLC]:
        return RequirementSet(
            self.required_dlc,
            self.required_dlc_sources,
            self.exclusion_for_required_dlc,
            suppress_removed=False,
        )

    @property
    def mod_requirements(self) -> RequirementSet[int]:
        return RequirementSet(
            self.required_mods, self.required_mod_sources, self.exclusion_for_required_mods
        )

    def has_status(self, status: Status) -> bool:
        return status in self.statuses

    def is_removed(self) -> bool:
        return Status.REMOVED_FROM_WORKSHOP in self.statuses

    def clamp_updated(self) -> None:
        if self.published is not None and (self.updated is None or self.updated < self.published):
            self.updated = self.published

    def label(self, *, name_first: bool = False, cut_off: bool = False) -> str:
        if is_workshop_id(self.steam_id):
            ident = f"[Steam ID {self.steam_id:>10}]"
        elif is_local_id(self.steam_id):
            ident = f"[local mod {self.steam_id}]"
        elif is_builtin_id(self.steam_id):
            ident = f"[builtin mod {self.steam_id}]"
        else:
            ident = f"[ID {self.steam_id}]"

        name = self.name
        max_name_length = MAX_LABEL_WIDTH - 1 - len(ident)
        if cut_off and len(name) > max_name_length:
            name = name[: max_name_length - 3] + "..."

        return f"{name} {ident}" if name_first else f"{ident} {name}"
