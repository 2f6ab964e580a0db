import logging
from typing import Any, Dict, Optional, Sequence

import httpx

logger = logging.getLogger(__name__)


class RestCountriesClient:
    """
    Thin asynchronous wrapper over the REST Countries API.
    Each call opens its own short-lived httpx client.
    """
    def __init__(
        self,
        base_url: str = "https://restcountries.com/v3.1",
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        # Tests plug an httpx.MockTransport in here
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(base_url=self.base_url, timeout=self.timeout, transport=self._transport)

    async def get_json(self, path: str, fields: Sequence[str] = ()) -> Any:
        """
        GET a path below the API root and decode the JSON body.

        Raises:
            httpx.HTTPError: Network failure or non-2xx status.
            ValueError: The body is not valid JSON.
        """
        params: Dict[str, str] = {}
        if fields:
            params["fields"] = ",".join(fields)
        async with self._client() as client:
            response = await client.get(path, params=params)
            response.raise_for_status()
        return response.json()

    async def get_borders(self, code: str) -> Any:
        """Raw payload of /alpha/{code}?fields=borders."""
        return await self.get_json(f"/alpha/{code}", fields=("borders",))

    async def get_all(self, fields: Sequence[str]) -> Any:
        """Raw payload of /all restricted to the given fields."""
        return await self.get_json("/all", fields=fields)
