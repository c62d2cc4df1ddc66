"""
Base building blocks:
numeric identity and permanent change-note history.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field


@dataclass(eq=False, kw_only=True)
class ChangeNotedEntity(ABC):
    """Entity carrying a dated, append-only change-note history."""

    change_notes: list[str] = field(default_factory=list[str], repr=False)

    @abstractmethod
    def label(self) -> str: ...

    def add_change_note(self, note: str) -> None:
        if note:
            self.change_notes.append(note)
