"""JSON file persistence for catalogs."""

from __future__ import annotations

import os
import shutil
from logging import getLogger
from typing import TYPE_CHECKING

from pydantic import ValidationError

from .schema import CatalogDocument
from .translator import catalog_from_document, catalog_to_document

if TYPE_CHECKING:
    from pathlib import Path

    from modcatalog.domain.model import Catalog
    from modcatalog.domain.ports import CatalogStore

log = getLogger(__name__)

JSON_INDENT = 2


class JsonCatalogStore:
    """Reads and writes catalog documents as UTF-8 JSON.

    Writes go to a sibling temporary file first and replace the target in one
    step, so a crash never leaves a half-written catalog behind.
    """

    def load_catalog(self, path: Path) -> Catalog | None:
        try:
            raw = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            log.debug("No catalog at %s.", path)
            return None
        except OSError:
            log.exception("Could not read catalog file %s.", path)
            return None

        try:
            document = CatalogDocument.model_validate_json(raw)
            catalog = catalog_from_document(document)
        except ValidationError as exc:
            log.warning("Catalog file %s is not a valid catalog: %s", path, exc)
            return None
        except ValueError as exc:
            log.warning("Catalog file %s is inconsistent: %s", path, exc)
            return None

        if not catalog.validate():
            return None
        log.info("Loaded catalog %s from %s.", catalog.version_string(), path)
        return catalog

    def save_catalog(self, catalog: Catalog, path: Path) -> bool:
        payload = catalog_to_document(catalog).model_dump_json(indent=JSON_INDENT)
        if self._write(payload, path):
            log.info("Catalog %s saved to %s.", catalog.version_string(), path)
            return True
        return False

    def save_text(self, content: str, path: Path) -> bool:
        return self._write(content, path)

    def copy_file(self, source: Path, target: Path) -> bool:
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            shutil.copyfile(source, target)
        except OSError:
            log.exception("Could not copy %s to %s.", source, target)
            return False
        return True

    def _write(self, content: str, path: Path) -> bool:
        temp = path.with_name(f"{path.name}.tmp")
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            temp.write_text(content, encoding="utf-8")
            os.replace(temp, path)
        except OSError:
            log.exception("Could not write %s.", path)
            temp.unlink(missing_ok=True)
            return False
        return True


if TYPE_CHECKING:
    _store_check: CatalogStore = JsonCatalogStore()


__all__ = ["JsonCatalogStore"]
