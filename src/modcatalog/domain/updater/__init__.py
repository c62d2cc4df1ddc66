"""Run orchestration for catalog updates."""

from __future__ import annotations

from .orchestrator import (
    CATALOG_FILE_PREFIX,
    DEFAULT_IMPORTER_MIN_VERSION,
    CatalogUpdater,
    RunResult,
)
from .state import ALLOWED_TRANSITIONS, InvalidTransitionError, RunState

__all__ = [
    "ALLOWED_TRANSITIONS",
    "CATALOG_FILE_PREFIX",
    "DEFAULT_IMPORTER_MIN_VERSION",
    "CatalogUpdater",
    "InvalidTransitionError",
    "RunResult",
    "RunState",
]
