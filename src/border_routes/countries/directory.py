"""
CountryDirectory - country metadata used to turn user input into codes and
codes back into display names.
"""

import asyncio
import logging
from typing import Dict, List, Optional

import httpx
from pydantic import BaseModel, Field

from border_routes.exceptions import CountryServiceUnavailableException, UnknownCountryException

from .client import RestCountriesClient

logger = logging.getLogger(__name__)


class CountryName(BaseModel):
    common: str = Field(..., min_length=1)


class Country(BaseModel):
    """One entry of /all?fields=name,cca3,area."""
    cca3: str = Field(..., min_length=3, max_length=3, description="ISO 3166-1 alpha-3 code")
    name: CountryName
    area: float = Field(0.0, description="Area in square kilometres")

    @property
    def common_name(self) -> str:
        return self.name.common


class CountryDirectory:
    """Lookup table of countries keyed by cca3 code."""

    def __init__(self, client: RestCountriesClient):
        self.client = client
        self._countries: Dict[str, Country] = {}
        self._load_lock = asyncio.Lock()

    @classmethod
    def from_countries(cls, countries: List[Country], client: Optional[RestCountriesClient] = None) -> "CountryDirectory":
        """Build an already-loaded directory (no request needed)."""
        directory = cls(client or RestCountriesClient())
        directory._countries = {country.cca3: country for country in countries}
        return directory

    @property
    def is_loaded(self) -> bool:
        return bool(self._countries)

    async def load(self) -> None:
        """
        Fetch names, codes and areas of all countries once.

        Raises:
            CountryServiceUnavailableException: If the request fails or the payload is malformed.
        """
        async with self._load_lock:
            if self._countries:
                return
            try:
                payload = await self.client.get_all(fields=("name", "cca3", "area"))
                countries = [Country.model_validate(entry) for entry in payload]
            except (httpx.HTTPError, ValueError, TypeError) as e:
                # pydantic's ValidationError is a ValueError
                logger.error(f"Failed to load country metadata: {e}")
                raise CountryServiceUnavailableException(f"Countries API request failed: {e}") from e

            self._countries = {country.cca3: country for country in countries}
            logger.info(f"Loaded metadata for {len(self._countries)} countries")

    def get(self, code: str) -> Optional[Country]:
        return self._countries.get(code)

    def name_for(self, code: str) -> str:
        """Display name for a code; unknown codes are shown as-is."""
        country = self._countries.get(code)
        return country.common_name if country else code

    def find_code(self, name_or_code: str) -> Optional[str]:
        """
        Resolve user input to a cca3 code.

        Exact common names win, then case-insensitive names, then 3-letter codes.
        """
        query = name_or_code.strip()
        if not query:
            return None
        for code, country in self._countries.items():
            if country.common_name == query:
                return code
        folded = query.casefold()
        for code, country in self._countries.items():
            if country.common_name.casefold() == folded:
                return code
        if len(query) == 3 and query.upper() in self._countries:
            return query.upper()
        return None

    def require_code(self, name_or_code: str) -> str:
        code = self.find_code(name_or_code)
        if code is None:
            raise UnknownCountryException(f"Country '{name_or_code}' not found.")
        return code

    def names_by_area(self) -> List[str]:
        """Common names, largest country first."""
        countries = sorted(self._countries.values(), key=lambda country: country.area, reverse=True)
        return [country.common_name for country in countries]

    def __len__(self) -> int:
        return len(self._countries)
