"""
Border resolvers backed by the REST Countries API.

LiveBordersResolver issues one request per lookup. PrefetchedBordersResolver
downloads every country's borders in a single request and answers from memory.
Both report failures (network errors, bad payloads, unknown codes) as
ResolutionFailure rather than an empty neighbour set.
"""

import asyncio
import logging
from typing import Dict, FrozenSet, Optional

import httpx

from border_routes.adjacency import AdjacencyResolver
from border_routes.exceptions import ResolutionFailure

from .client import RestCountriesClient

logger = logging.getLogger(__name__)


def _parse_borders(code: str, payload) -> FrozenSet[str]:
    if not isinstance(payload, dict) or not isinstance(payload.get("borders"), list):
        raise ResolutionFailure(code, f"Unexpected API response format for '{code}' borders")
    return frozenset(payload["borders"])


class LiveBordersResolver(AdjacencyResolver):
    """Every lookup goes to the API."""

    def __init__(self, client: RestCountriesClient):
        self.client = client

    async def resolve(self, code: str) -> FrozenSet[str]:
        try:
            payload = await self.client.get_borders(code)
        except httpx.HTTPStatusError as e:
            logger.error(f"Borders request for '{code}' returned {e.response.status_code}")
            raise ResolutionFailure(code, f"Countries API returned {e.response.status_code} for '{code}'") from e
        except httpx.HTTPError as e:
            logger.error(f"Failed to fetch borders for '{code}': {e}")
            raise ResolutionFailure(code, f"Countries API request failed for '{code}': {e}") from e
        except ValueError as e:
            raise ResolutionFailure(code, f"Malformed API response for '{code}': {e}") from e
        return _parse_borders(code, payload)


class PrefetchedBordersResolver(AdjacencyResolver):
    """One bulk request fills an in-memory borders table; lookups never touch the network again."""

    def __init__(self, client: RestCountriesClient):
        self.client = client
        self._borders: Optional[Dict[str, FrozenSet[str]]] = None
        self._load_lock = asyncio.Lock()

    @property
    def is_loaded(self) -> bool:
        return self._borders is not None

    async def load(self) -> None:
        """
        Fetch the borders of every country. Safe to call repeatedly; only the
        first successful call hits the API.

        Raises:
            ResolutionFailure: If the bulk request fails or returns garbage.
        """
        async with self._load_lock:
            if self._borders is not None:
                return
            try:
                countries = await self.client.get_all(fields=("cca3", "borders"))
            except (httpx.HTTPError, ValueError) as e:
                logger.error(f"Failed to prefetch borders: {e}")
                raise ResolutionFailure(None, f"Countries API bulk request failed: {e}") from e

            if not isinstance(countries, list):
                raise ResolutionFailure(None, "Unexpected API response format for bulk borders request")

            borders: Dict[str, FrozenSet[str]] = {}
            for country in countries:
                code = country.get("cca3") if isinstance(country, dict) else None
                if not code:
                    logger.warning(f"Skipping country entry without cca3: {country!r}")
                    continue
                borders[code] = _parse_borders(code, country)
            self._borders = borders
            logger.info(f"Prefetched borders for {len(borders)} countries")

    async def resolve(self, code: str) -> FrozenSet[str]:
        if self._borders is None:
            await self.load()
        try:
            return self._borders[code]
        except KeyError:
            raise ResolutionFailure(code, f"Unknown country code: '{code}'") from None
