"""Compatibility between two mods."""

from __future__ import annotations

from dataclasses import dataclass

from modcatalog.domain.model.enums import CompatibilityStatus  # noqa: TC001


@dataclass(eq=False, kw_only=True)
class Compatibility:
    first_mod_id: int
    second_mod_id: int
    status: CompatibilityStatus
    note: str = ""

    def matches(self, first_mod_id: int, second_mod_id: int, status: CompatibilityStatus) -> bool:
        return (
            self.first_mod_id == first_mod_id
            and self.second_mod_id == second_mod_id
            and self.status == status
        )

    def involves(self, steam_id: int) -> bool:
        return steam_id in (self.first_mod_id, self.second_mod_id)

    def label(self) -> str:
        return f"between {self.first_mod_id} and {self.second_mod_id}: \"{self.status}\""
