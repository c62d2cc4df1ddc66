"""Domain port definitions for adapters."""

from __future__ import annotations

from .collectors import Collector
from .persistence import CatalogStore

__all__ = ["CatalogStore", "Collector"]
