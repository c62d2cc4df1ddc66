"""Public domain model surface."""

from __future__ import annotations

from modcatalog.domain.model.author import Author
from modcatalog.domain.model.catalog import CURRENT_STRUCTURE_VERSION, Catalog
from modcatalog.domain.model.compatibility import Compatibility
from modcatalog.domain.model.entity import ChangeNotedEntity
from modcatalog.domain.model.enums import (
    DLC,
    CompatibilityStatus,
    EntryKind,
    ExclusionState,
    Source,
    Stability,
    Status,
)
from modcatalog.domain.model.exclusions import RequirementSet, infer_sources
from modcatalog.domain.model.group import Group
from modcatalog.domain.model.identifiers import (
    BUILTIN_MODS,
    HIGHEST_FAKE_ID,
    HIGHEST_GROUP_ID,
    HIGHEST_LOCAL_MOD_ID,
    LOWEST_GROUP_ID,
    LOWEST_LOCAL_MOD_ID,
    coerce_id,
    is_builtin_id,
    is_group_id,
    is_local_id,
    is_workshop_id,
)
from modcatalog.domain.model.mod import UNKNOWN_GAME_VERSION, Mod
from modcatalog.domain.model.patch import UNSET, ModPatch

__all__ = [  # noqa: RUF022
    # base
    "ChangeNotedEntity",
    # enums
    "CompatibilityStatus",
    "DLC",
    "EntryKind",
    "ExclusionState",
    "Source",
    "Stability",
    "Status",
    # identifiers
    "BUILTIN_MODS",
    "HIGHEST_FAKE_ID",
    "HIGHEST_GROUP_ID",
    "HIGHEST_LOCAL_MOD_ID",
    "LOWEST_GROUP_ID",
    "LOWEST_LOCAL_MOD_ID",
    "coerce_id",
    "is_builtin_id",
    "is_group_id",
    "is_local_id",
    "is_workshop_id",
    # entities
    "Author",
    "Catalog",
    "Compatibility",
    "Group",
    "Mod",
    "CURRENT_STRUCTURE_VERSION",
    "UNKNOWN_GAME_VERSION",
    # exclusions
    "RequirementSet",
    "infer_sources",
    # updates
    "ModPatch",
    "UNSET",
]
