"""Group entity: an OR-set of mods filling one requirement slot."""

from __future__ import annotations

from dataclasses import dataclass, field

from modcatalog.domain.model.identifiers import is_group_id


@dataclass(eq=False, kw_only=True)
class Group:
    group_id: int
    name: str
    members: list[int] = field(default_factory=list[int])

    def __post_init__(self) -> None:
        if not is_group_id(self.group_id):
            raise ValueError(f"Group identifier out of range: {self.group_id}")

    @property
    def is_degenerate(self) -> bool:
        return len(self.members) <= 1

    def label(self) -> str:
        return f"[Group {self.group_id}] {self.name}"
