"""Port for loading and saving catalogs and companion text files."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from pathlib import Path

    from modcatalog.domain.model import Catalog


@runtime_checkable
class CatalogStore(Protocol):
    """Persistence contract for catalog documents.

    Implementations log and swallow I/O and validation problems; callers only
    see ``None`` or ``False``.
    """

    def load_catalog(self, path: Path) -> Catalog | None: ...

    def save_catalog(self, catalog: Catalog, path: Path) -> bool: ...

    def save_text(self, content: str, path: Path) -> bool: ...

    def copy_file(self, source: Path, target: Path) -> bool: ...
