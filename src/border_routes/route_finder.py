"""
RouteFinder - service that turns country names into a finished route report.

It resolves names to codes through the CountryDirectory, picks a border
resolver for the requested mode, runs the bidirectional search and maps the
resulting codes back to display names.
"""

import logging
import time
from typing import Callable, Dict, Optional

from border_routes.adjacency import AdjacencyResolver, CachingResolver
from border_routes.config import BorderRoutesConfig, ResolverMode
from border_routes.countries import (
    CountryDirectory,
    LiveBordersResolver,
    PrefetchedBordersResolver,
    RestCountriesClient,
)
from border_routes.exceptions import InvalidEndpointsException
from border_routes.models import RouteReport
from border_routes.solver import BidirectionalRouteSearch

logger = logging.getLogger(__name__)

ResolverFactory = Callable[[ResolverMode], AdjacencyResolver]


def build_resolver(mode: ResolverMode, client: RestCountriesClient, cache_ttl_seconds: Optional[float] = None) -> AdjacencyResolver:
    """
    Create a border resolver for the given mode.

    A cache TTL wraps the live resolver in a CachingResolver so repeated
    searches reuse earlier answers.
    """
    if mode is ResolverMode.PREFETCHED:
        return PrefetchedBordersResolver(client)
    resolver: AdjacencyResolver = LiveBordersResolver(client)
    if cache_ttl_seconds:
        resolver = CachingResolver(resolver, ttl_seconds=cache_ttl_seconds)
    return resolver


class RouteFinder:
    """Finds all shortest land-border routes between two named countries."""

    def __init__(
        self,
        directory: CountryDirectory,
        resolver_factory: ResolverFactory,
        default_mode: ResolverMode = ResolverMode.PREFETCHED,
    ):
        self.directory = directory
        self.resolver_factory = resolver_factory
        self.default_mode = default_mode

    @classmethod
    def from_config(cls, config: BorderRoutesConfig, shared_resolvers: bool = False) -> "RouteFinder":
        """
        Wire a finder against the live API.

        Args:
            config: Connection and default-mode settings
            shared_resolvers: Reuse one resolver per mode across searches
                (long-running backend). Otherwise every search gets a fresh one,
                so prefetched mode downloads the borders table each time.
        """
        client = RestCountriesClient(config.api_base_url, timeout=config.request_timeout)
        directory = CountryDirectory(client)

        if not shared_resolvers:
            def factory(mode: ResolverMode) -> AdjacencyResolver:
                return build_resolver(mode, client)
        else:
            resolvers: Dict[ResolverMode, AdjacencyResolver] = {}

            def factory(mode: ResolverMode) -> AdjacencyResolver:
                if mode not in resolvers:
                    resolvers[mode] = build_resolver(mode, client, cache_ttl_seconds=config.cache_ttl_seconds)
                return resolvers[mode]

        return cls(directory, factory, default_mode=config.resolver_mode)

    async def find_routes(self, from_country: str, to_country: str, mode: Optional[ResolverMode] = None) -> RouteReport:
        """
        Find every shortest route between two countries.

        Args:
            from_country: Common name or cca3 code of the start
            to_country: Common name or cca3 code of the destination
            mode: Border lookup mode, the finder's default when None

        Returns:
            RouteReport; lookup failures are reported in-band with ok=False

        Raises:
            UnknownCountryException: If either country is not in the directory
            InvalidEndpointsException: If both inputs name the same country
            CountryServiceUnavailableException: If the directory cannot be loaded
        """
        await self.directory.load()
        from_code = self.directory.require_code(from_country)
        to_code = self.directory.require_code(to_country)
        if from_code == to_code:
            raise InvalidEndpointsException(
                f"Start and destination countries must be different (both are {self.directory.name_for(from_code)})."
            )

        mode = mode or self.default_mode
        resolver = self.resolver_factory(mode)

        search_start_time = time.perf_counter()
        result = await BidirectionalRouteSearch(resolver).search(from_code, to_code)
        computation_time_ms = (time.perf_counter() - search_start_time) * 1000

        code_routes = result.route_lists()
        name_routes = [[self.directory.name_for(code) for code in route] for route in code_routes]

        logger.info(
            f"Route search {from_code} -> {to_code} ({mode.value}): "
            f"ok={result.ok}, routes={len(code_routes)}, queries={result.query_count}, "
            f"{computation_time_ms:.1f}ms"
        )

        return RouteReport(
            from_country=self.directory.name_for(from_code),
            to_country=self.directory.name_for(to_code),
            ok=result.ok,
            query_count=result.query_count,
            hop_count=result.hop_count,
            routes=name_routes,
            codes=code_routes,
            error=result.error,
            computation_time_ms=computation_time_ms,
        )
