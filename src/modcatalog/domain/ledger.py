"""Run-scoped change-note ledger.

Reconciliation operations record structured ``(kind, subject, text)`` entries.
Nothing is formatted until the run finalizes: ``flush_into_entities`` appends a
single dated note per updated mod or author, and ``render`` produces the
combined change log saved next to the new catalog.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Final

from modcatalog.domain.model.enums import EntryKind

if TYPE_CHECKING:
    from modcatalog.domain.model import Author, Catalog, ChangeNotedEntity, Mod

FRAGMENT_SEPARATOR: Final[str] = ", "

_ADDED_KINDS: Final = (
    EntryKind.NEW_MOD,
    EntryKind.NEW_GROUP,
    EntryKind.NEW_COMPATIBILITY,
    EntryKind.NEW_AUTHOR,
)
_UPDATED_KINDS: Final = (EntryKind.UPDATED_MOD, EntryKind.UPDATED_AUTHOR)
_REMOVED_KINDS: Final = (
    EntryKind.REMOVED_MOD,
    EntryKind.REMOVED_GROUP,
    EntryKind.REMOVED_COMPATIBILITY,
)


@dataclass(frozen=True, slots=True)
class LedgerEntry:
    """One recorded change.

    ``subject`` is only set for updated mods and authors; the other kinds are
    complete lines.
    """

    kind: EntryKind
    text: str
    subject: ChangeNotedEntity | None = field(default=None, compare=False)
    subject_key: int = 0


@dataclass(slots=True)
class ChangeLedger:
    entries: list[LedgerEntry] = field(default_factory=list[LedgerEntry])
    _seen: set[tuple[EntryKind, int, str]] = field(
        default_factory=set[tuple[EntryKind, int, str]], repr=False
    )

    # Recording

    def record(
        self, kind: EntryKind, text: str, *, subject: ChangeNotedEntity | None = None
    ) -> bool:
        """Append an entry unless it is empty or already recorded for the same subject."""

        text = text.strip()
        if not text:
            return False
        subject_key = id(subject) if subject is not None else 0
        marker = (kind, subject_key, text)
        if marker in self._seen:
            return False
        self._seen.add(marker)
        self.entries.append(LedgerEntry(kind, text, subject, subject_key))
        return True

    def catalog_change(self, text: str) -> None:
        self.record(EntryKind.CATALOG, text)

    def mod_updated(self, mod: Mod, fragment: str) -> None:
        self.record(EntryKind.UPDATED_MOD, fragment, subject=mod)

    def author_updated(self, author: Author, fragment: str) -> None:
        self.record(EntryKind.UPDATED_AUTHOR, fragment, subject=author)

    def clear(self) -> None:
        self.entries.clear()
        self._seen.clear()

    # Queries

    def lines(self, kind: EntryKind) -> list[str]:
        return [entry.text for entry in self.entries if entry.kind == kind]

    def fragments_for(self, subject: ChangeNotedEntity) -> list[str]:
        return [
            entry.text
            for entry in self.entries
            if entry.kind in _UPDATED_KINDS and entry.subject is subject
        ]

    def has_changes(self) -> bool:
        """Return whether anything beyond catalog-level notes was recorded."""

        return any(entry.kind != EntryKind.CATALOG for entry in self.entries)

    def updated_subjects(self, kind: EntryKind) -> list[ChangeNotedEntity]:
        subjects: dict[int, ChangeNotedEntity] = {}
        for entry in self.entries:
            if entry.kind == kind and entry.subject is not None:
                subjects.setdefault(entry.subject_key, entry.subject)
        return list(subjects.values())

    # Finalization

    def combined_note(self, subject: ChangeNotedEntity) -> str:
        return FRAGMENT_SEPARATOR.join(self.fragments_for(subject))

    def flush_into_entities(self, date_string: str) -> int:
        """Append one dated note to every updated mod and author; return how many."""

        flushed = 0
        for kind in _UPDATED_KINDS:
            for subject in self.updated_subjects(kind):
                note = self.combined_note(subject)
                if note:
                    subject.add_change_note(f"{date_string}: {note}")
                    flushed += 1
        return flushed

    def render(self, catalog: Catalog) -> str:
        """Render the change log for the new catalog version."""

        stamp = catalog.update_date.strftime("%A, %d %B %Y, %H:%M") if catalog.update_date else ""
        header = (
            f"Change Notes for Catalog {catalog.version_string()}\n"
            "-------------------------------\n"
            f"{stamp}\n"
            "These change notes were automatically created by the updater process.\n"
            "\n"
            "\n"
        )

        updated: list[str] = []
        for subject in self.updated_subjects(EntryKind.UPDATED_MOD):
            updated.append(f"Mod {subject.label()}: {self.combined_note(subject)}")
        for subject in self.updated_subjects(EntryKind.UPDATED_AUTHOR):
            updated.append(f"Author {subject.label()}: {self.combined_note(subject)}")

        sections = [
            ("CATALOG CHANGES", self.lines(EntryKind.CATALOG)),
            ("ADDED", [line for kind in _ADDED_KINDS for line in self.lines(kind)]),
            ("UPDATED", updated),
            ("REMOVED", [line for kind in _REMOVED_KINDS for line in self.lines(kind)]),
        ]
        body = [
            f"*** {title}: ***\n" + "".join(f"{line}\n" for line in lines)
            for title, lines in sections
            if lines
        ]
        return header + "\n".join(body)


__all__ = ["FRAGMENT_SEPARATOR", "ChangeLedger", "LedgerEntry"]
