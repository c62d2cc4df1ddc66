"""Public interface for the JSON catalog file adapter."""

from __future__ import annotations

from .active import ActiveCatalogLoader
from .schema import CatalogDocument
from .store import JsonCatalogStore
from .translator import catalog_from_document, catalog_to_document

__all__ = [
    "ActiveCatalogLoader",
    "CatalogDocument",
    "JsonCatalogStore",
    "catalog_from_document",
    "catalog_to_document",
]
