"""
Known-solids catalog - published displacement values for common solids.

A catalog is a JSON object mapping solid names to displacement, served from a
short link (`{CATALOG_BASE_URL}/{catalog_key}`). It only pre-fills solid rows;
recipes compute fine without it.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

import requests
from cachetools import TTLCache
from pydantic import TypeAdapter, ValidationError

from core.config import settings

logger = logging.getLogger(__name__)

KnownSolids = dict[str, float]

_KNOWN_SOLIDS_ADAPTER = TypeAdapter(KnownSolids)


class KnownSolidsFetchError(RuntimeError):
    """Raised when a known-solids catalog cannot be fetched or parsed."""

    def __init__(self, catalog_key: str, reason: str) -> None:
        super().__init__(f"Failed to fetch known solids for {catalog_key!r}: {reason}")
        self.catalog_key = catalog_key


class KnownSolidsService:
    """Fetches known-solids catalogs over HTTP and caches the successful ones."""

    def __init__(
        self,
        base_url: str,
        request_timeout_seconds: float,
        cache: Optional[TTLCache] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.request_timeout_seconds = request_timeout_seconds
        self.session = requests.Session()
        self.cache: TTLCache = cache if cache is not None else TTLCache(maxsize=64, ttl=3600)

    def fetch(self, catalog_key: str) -> KnownSolids:
        """Return the catalog behind `catalog_key`, raising KnownSolidsFetchError on failure."""
        if not catalog_key:
            raise KnownSolidsFetchError(catalog_key, "empty catalog key")

        cached = self.cache.get(catalog_key)
        if cached is not None:
            logger.debug("Known solids for %s served from cache", catalog_key)
            return dict(cached)

        url = f"{self.base_url}/{catalog_key}"
        logger.info("Fetching known solids from %s", url)
        try:
            response = self.session.get(url, timeout=self.request_timeout_seconds)
            response.raise_for_status()
            known_solids = _KNOWN_SOLIDS_ADAPTER.validate_python(response.json())
        except requests.RequestException as error:
            raise KnownSolidsFetchError(catalog_key, str(error)) from error
        except (ValueError, ValidationError) as error:
            raise KnownSolidsFetchError(catalog_key, f"unexpected payload: {error}") from error

        self.cache[catalog_key] = known_solids
        logger.info("Fetched %d known solids for %s", len(known_solids), catalog_key)
        return dict(known_solids)

    def invalidate_cache(self) -> None:
        self.cache.clear()
        logger.info("Known solids cache invalidated")


class KnownSolidsLookup:
    """
    Side lookup table filled by an asynchronous catalog fetch.

    Only one refresh runs at a time: starting a new one cancels the previous task,
    and `cancel()` is called when the page is torn down. Failures leave the table
    as it was.
    """

    def __init__(self, service: KnownSolidsService) -> None:
        self.service = service
        self.known_solids: KnownSolids = {}
        self._task: Optional[asyncio.Task] = None

    def start_refresh(self, catalog_key: str) -> asyncio.Task:
        """Start fetching `catalog_key` on the running loop."""
        self.cancel()
        self._task = asyncio.get_running_loop().create_task(self._refresh(catalog_key))
        return self._task

    async def refresh(self, catalog_key: str) -> KnownSolids:
        """Fetch `catalog_key` and wait for the result."""
        return await self.start_refresh(catalog_key)

    def cancel(self) -> None:
        if self._task is not None and not self._task.done():
            logger.debug("Cancelling in-flight known solids lookup")
            self._task.cancel()
        self._task = None

    @property
    def in_flight(self) -> bool:
        return self._task is not None and not self._task.done()

    def names(self) -> list[str]:
        return list(self.known_solids)

    def displacement_for(self, name: str) -> float | None:
        return self.known_solids.get(name)

    async def _refresh(self, catalog_key: str) -> KnownSolids:
        try:
            known_solids = await asyncio.to_thread(self.service.fetch, catalog_key)
        except KnownSolidsFetchError:
            logger.exception("Known solids lookup failed")
            return self.known_solids

        self.known_solids = known_solids
        return known_solids


# Global service instance
_known_solids_service: Optional[KnownSolidsService] = None


def get_known_solids_service() -> KnownSolidsService:
    """Get the global known-solids service instance."""
    global _known_solids_service
    if _known_solids_service is None:
        _known_solids_service = KnownSolidsService(
            base_url=settings.CATALOG_BASE_URL,
            request_timeout_seconds=settings.CATALOG_REQUEST_TIMEOUT_SECONDS,
            cache=TTLCache(
                maxsize=settings.CATALOG_CACHE_MAX_ENTRIES,
                ttl=settings.CATALOG_CACHE_TTL_SECONDS,
            ),
        )
    return _known_solids_service
