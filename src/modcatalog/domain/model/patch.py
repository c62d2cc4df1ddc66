"""Partial mod updates.

``UNSET`` means "leave the field alone"; it is distinct from an explicit empty
value such as ``""`` or ``None``, which clears the field.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from enum import Enum
from typing import TYPE_CHECKING, Final, Literal

if TYPE_CHECKING:
    from collections.abc import Iterator
    from datetime import datetime

    from modcatalog.domain.model.enums import DLC, Stability, Status


class _Unset(Enum):
    UNSET = "UNSET"

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False


UNSET: Final = _Unset.UNSET

type Maybe[T] = T | Literal[_Unset.UNSET]


@dataclass(frozen=True, slots=True, kw_only=True)
class ModPatch:
    name: Maybe[str] = UNSET
    published: Maybe[datetime | None] = UNSET
    updated: Maybe[datetime | None] = UNSET
    author_id: Maybe[int] = UNSET
    author_url: Maybe[str] = UNSET
    archive_url: Maybe[str] = UNSET
    source_url: Maybe[str] = UNSET
    compatible_game_version: Maybe[str] = UNSET
    required_dlc: Maybe[tuple[DLC, ...]] = UNSET
    required_mods: Maybe[tuple[int, ...]] = UNSET
    successors: Maybe[tuple[int, ...]] = UNSET
    alternatives: Maybe[tuple[int, ...]] = UNSET
    recommendations: Maybe[tuple[int, ...]] = UNSET
    stability: Maybe[Stability] = UNSET
    stability_note: Maybe[str] = UNSET
    statuses: Maybe[tuple[Status, ...]] = UNSET
    generic_note: Maybe[str] = UNSET

    def supplied(self) -> Iterator[tuple[str, object]]:
        """Yield ``(field, value)`` for every field that was explicitly set."""

        for item in fields(self):
            value = getattr(self, item.name)
            if value is not UNSET:
                yield item.name, value

    def is_empty(self) -> bool:
        return next(self.supplied(), None) is None
