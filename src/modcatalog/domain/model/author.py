"""Author entity."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from modcatalog.domain.model.entity import ChangeNotedEntity

if TYPE_CHECKING:
    from datetime import datetime


@dataclass(eq=False, kw_only=True)
class Author(ChangeNotedEntity):
    """A workshop author, known by profile ID, custom URL, or both.

    The profile ID is the more reliable identity; the custom URL is only used
    when no ID is known.
    """

    steam_id: int = 0
    custom_url: str = ""
    name: str = ""
    last_seen: datetime | None = None
    retired: bool = False
    exclusion_for_retired: bool = False

    def __post_init__(self) -> None:
        if self.steam_id < 0:
            raise ValueError(f"Author profile ID must not be negative, got {self.steam_id}")
        if not self.steam_id and not self.custom_url:
            raise ValueError("Author needs a profile ID or a custom URL")

    def label(self) -> str:
        ident = f"[Steam ID {self.steam_id}]" if self.steam_id else f"[{self.custom_url}]"
        return f"{ident} {self.name}"
