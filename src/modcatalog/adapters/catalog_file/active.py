"""Select the active catalog: the newest of bundled, previously downloaded and fresh."""

from __future__ import annotations

import os
from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

import httpx

from modcatalog.adapters.http_resilience import ResilientClient

if TYPE_CHECKING:
    from pathlib import Path

    from modcatalog.config import DownloadConfig, StorageConfig
    from modcatalog.domain.model import Catalog
    from modcatalog.domain.ports import CatalogStore

log = getLogger(__name__)

PARTIAL_SUFFIX = ".part"


@dataclass(slots=True)
class ActiveCatalogLoader:
    """Load whichever available catalog has the highest version.

    On equal versions a downloaded catalog wins over the bundled one, and a
    fresh download wins over the previous one. A previously downloaded file
    that no longer loads is deleted.
    """

    store: CatalogStore
    storage: StorageConfig
    download: DownloadConfig | None = None
    transport: httpx.BaseTransport | None = None

    def __call__(self) -> Catalog | None:
        return self.load()

    def load(self, *, fetch: bool = True) -> Catalog | None:
        candidates: list[tuple[str, Catalog]] = []

        bundled = self._load_bundled()
        if bundled is not None:
            candidates.append(("bundled", bundled))

        previous = self._load_previous()
        if previous is not None:
            candidates.append(("previously downloaded", previous))

        if fetch:
            fresh = self.fetch(previous)
            if fresh is not None:
                candidates.append(("downloaded", fresh))

        if not candidates:
            log.error("No valid catalog found.")
            return None

        label, active = candidates[0]
        for candidate_label, candidate in candidates[1:]:
            if candidate.version >= active.version:
                label, active = candidate_label, candidate
        log.info("Using %s catalog %s.", label, active.version_string())
        return active

    def fetch(self, previous: Catalog | None = None) -> Catalog | None:
        """Download the published catalog; keep it when it is at least as new as ``previous``."""

        if self.download is None or not self.download.url:
            log.debug("No catalog download URL configured.")
            return None

        url = self.download.url
        target = self.storage.downloaded_catalog_path()
        partial = target.with_name(target.name + PARTIAL_SUFFIX)
        if not self._download_to(url, partial, self.download):
            return None

        fresh = self.store.load_catalog(partial)
        if fresh is None:
            log.warning("Downloaded catalog from %s is not valid.", url)
            partial.unlink(missing_ok=True)
            return None

        if previous is not None and fresh.version < previous.version:
            log.info(
                "Downloaded catalog %s is older than the previous download %s.",
                fresh.version_string(),
                previous.version_string(),
            )
            partial.unlink(missing_ok=True)
            return None

        try:
            os.replace(partial, target)
        except OSError:
            log.exception("Could not keep the downloaded catalog at %s.", target)
            partial.unlink(missing_ok=True)
        log.info("Downloaded catalog %s.", fresh.version_string())
        return fresh

    def _download_to(self, url: str, partial: Path, download: DownloadConfig) -> bool:
        try:
            with ResilientClient(download.resilience, transport=self.transport) as client:
                response = client.get(url)
                response.raise_for_status()
            partial.write_bytes(response.content)
        except httpx.HTTPError as exc:
            log.warning("Could not download the catalog from %s: %s", url, exc)
            return False
        except OSError:
            log.exception("Could not write the downloaded catalog to %s.", partial)
            partial.unlink(missing_ok=True)
            return False
        return True

    def _load_bundled(self) -> Catalog | None:
        path = self.storage.bundled_catalog
        if path is None:
            return None
        catalog = self.store.load_catalog(path)
        if catalog is None:
            log.error("Bundled catalog at %s could not be loaded.", path)
        return catalog

    def _load_previous(self) -> Catalog | None:
        path = self.storage.downloaded_catalog_path()
        if not path.exists():
            return None
        catalog = self.store.load_catalog(path)
        if catalog is None:
            log.warning("Previously downloaded catalog is not valid and will be deleted.")
            try:
                path.unlink(missing_ok=True)
            except OSError:
                log.exception("Could not delete %s.", path)
        return catalog


__all__ = ["PARTIAL_SUFFIX", "ActiveCatalogLoader"]
