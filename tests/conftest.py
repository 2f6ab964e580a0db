"""
Pytest configuration and shared fixtures.
"""

import asyncio
import json
import logging
from typing import Dict, FrozenSet, Hashable, Iterable, List, Mapping, Set

import httpx
import pytest

from border_routes.adjacency import StaticAdjacencyResolver
from border_routes.countries import Country, CountryDirectory, RestCountriesClient
from border_routes.exceptions import ResolutionFailure

# Configure logging for tests
logging.basicConfig(level=logging.INFO)

API_URL = "https://restcountries.test/v3.1"

# A corner of Western Europe plus an island, borders kept symmetric
WESTERN_EUROPE: Dict[str, Dict] = {
    "PRT": {"name": "Portugal", "area": 92090.0, "borders": ["ESP"]},
    "ESP": {"name": "Spain", "area": 505992.0, "borders": ["PRT", "FRA", "AND"]},
    "AND": {"name": "Andorra", "area": 468.0, "borders": ["ESP", "FRA"]},
    "FRA": {"name": "France", "area": 551695.0, "borders": ["ESP", "AND", "BEL", "LUX", "DEU", "CHE", "ITA"]},
    "BEL": {"name": "Belgium", "area": 30528.0, "borders": ["FRA", "LUX", "DEU", "NLD"]},
    "NLD": {"name": "Netherlands", "area": 41850.0, "borders": ["BEL", "DEU"]},
    "LUX": {"name": "Luxembourg", "area": 2586.0, "borders": ["FRA", "BEL", "DEU"]},
    "DEU": {"name": "Germany", "area": 357114.0, "borders": ["FRA", "BEL", "LUX", "NLD", "POL", "AUT", "CHE"]},
    "CHE": {"name": "Switzerland", "area": 41284.0, "borders": ["FRA", "DEU", "AUT", "ITA"]},
    "AUT": {"name": "Austria", "area": 83871.0, "borders": ["DEU", "CHE", "ITA"]},
    "ITA": {"name": "Italy", "area": 301336.0, "borders": ["FRA", "CHE", "AUT"]},
    "POL": {"name": "Poland", "area": 312679.0, "borders": ["DEU"]},
    "ISL": {"name": "Iceland", "area": 103000.0, "borders": []},
}


class RecordingResolver(StaticAdjacencyResolver):
    """Static resolver that records every lookup and fails on chosen nodes."""

    def __init__(self, adjacency: Mapping[Hashable, Iterable[Hashable]], failing: Iterable[Hashable] = ()):
        super().__init__(adjacency)
        self.failing: Set[Hashable] = set(failing)
        self.calls: List[Hashable] = []
        self.batches: List[List[Hashable]] = []
        self.in_flight = 0
        self.max_in_flight = 0

    async def resolve(self, node_id: Hashable) -> FrozenSet[Hashable]:
        self.calls.append(node_id)
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            # Yield so that concurrent lookups of a batch overlap
            await asyncio.sleep(0)
            if node_id in self.failing:
                raise ResolutionFailure(node_id, f"Lookup of {node_id} refused")
            return await super().resolve(node_id)
        finally:
            self.in_flight -= 1

    async def resolve_batch(self, node_ids):
        self.batches.append(list(node_ids))
        return await super().resolve_batch(node_ids)


@pytest.fixture
def recording_resolver():
    """Factory for RecordingResolver instances."""
    return RecordingResolver


@pytest.fixture
def line_graph() -> Dict[str, List[str]]:
    return {"A": ["B"], "B": ["A", "C"], "C": ["B", "D"], "D": ["C"]}


@pytest.fixture
def diamond_graph() -> Dict[str, List[str]]:
    return {"A": ["B", "C"], "B": ["A", "D"], "C": ["A", "D"], "D": ["B", "C"]}


@pytest.fixture
def disconnected_graph() -> Dict[str, List[str]]:
    return {"A": ["B"], "B": ["A"], "C": ["D"], "D": ["C"]}


@pytest.fixture
def europe_borders() -> Dict[str, List[str]]:
    return {code: entry["borders"] for code, entry in WESTERN_EUROPE.items()}


@pytest.fixture
def europe_countries() -> List[Country]:
    return [
        Country.model_validate({"cca3": code, "name": {"common": entry["name"]}, "area": entry["area"]})
        for code, entry in WESTERN_EUROPE.items()
    ]


@pytest.fixture
def europe_directory(europe_countries: List[Country]) -> CountryDirectory:
    return CountryDirectory.from_countries(europe_countries)


class FakeRestCountries:
    """In-process stand-in for the REST Countries API, served through httpx.MockTransport."""

    def __init__(self, countries: Dict[str, Dict]):
        self.countries = countries
        self.requests: List[httpx.Request] = []
        self.broken_codes: Set[str] = set()
        self.offline = False

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.offline:
            raise httpx.ConnectError("Connection refused", request=request)

        path = request.url.path
        if path.endswith("/all"):
            payload = [
                {"cca3": code, "name": {"common": entry["name"]}, "area": entry["area"], "borders": entry["borders"]}
                for code, entry in self.countries.items()
            ]
            return httpx.Response(200, json=payload)

        if "/alpha/" in path:
            code = path.rsplit("/", 1)[-1]
            if code in self.broken_codes:
                return httpx.Response(500, json={"message": "Internal Server Error"})
            if code not in self.countries:
                return httpx.Response(404, json={"status": 404, "message": "Not Found"})
            return httpx.Response(200, content=json.dumps({"borders": self.countries[code]["borders"]}))

        return httpx.Response(404, json={"status": 404, "message": "Not Found"})

    def paths(self) -> List[str]:
        return [request.url.path for request in self.requests]

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@pytest.fixture
def fake_api() -> FakeRestCountries:
    return FakeRestCountries(WESTERN_EUROPE)


@pytest.fixture
def api_client(fake_api: FakeRestCountries) -> RestCountriesClient:
    return RestCountriesClient(API_URL, timeout=1.0, transport=fake_api.transport)
