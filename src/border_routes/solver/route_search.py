"""
BidirectionalRouteSearch - finds every shortest route between two nodes.

The adjacency relation is discovered as the search goes, one batched lookup per
round. Forward and backward frontiers take turns growing by one hop; the first
round after which they share a tail node fixes the shortest distance, and all
routes through the shared tails are stitched together.
"""

import logging
import time
from collections import defaultdict
from typing import Dict, List, Set, Tuple

from border_routes.adjacency import AdjacencyResolver, FailedBatch, NodeId

from .models import Frontier, Route, RouteSearchResult, SearchSide, SearchState

logger = logging.getLogger(__name__)


class BidirectionalRouteSearch:
    """Meet-in-the-middle, level-synchronous BFS over a lazily resolved graph."""

    def __init__(self, resolver: AdjacencyResolver):
        self.resolver = resolver

    async def search(self, origin: NodeId, destination: NodeId) -> RouteSearchResult:
        """
        Find all shortest routes from origin to destination.

        Args:
            origin: Node the forward frontier grows from
            destination: Node the backward frontier grows from

        Returns:
            RouteSearchResult. `ok` is False when a lookup failed; an empty
            `routes` with `ok` True means the nodes are not connected.
        """
        search_start_time = time.perf_counter()

        forward = Frontier.seed(SearchSide.FORWARD, origin)
        backward = Frontier.seed(SearchSide.BACKWARD, destination)
        query_count = 0
        rounds = 0
        side = SearchSide.FORWARD

        meeting_nodes = self._meeting_nodes(forward, backward)
        while not meeting_nodes and not forward.is_exhausted() and not backward.is_exhausted():
            active = forward if side is SearchSide.FORWARD else backward

            tails = active.tails()
            query_count += len(tails)
            logger.debug(
                f"Round {rounds}: {side.value.upper()} expansion at depth {active.depth}, "
                f"{len(active.routes)} routes, {len(tails)} distinct tails"
            )

            batch = await self.resolver.resolve_batch(tails)
            if isinstance(batch, FailedBatch):
                logger.warning(
                    f"Search {origin!r} -> {destination!r} aborted in round {rounds}: "
                    f"lookup of {batch.node_id!r} failed ({batch.message})"
                )
                return RouteSearchResult(
                    ok=False,
                    query_count=query_count,
                    state=SearchState.FAILED,
                    error=batch.message,
                    rounds=rounds + 1,
                )

            advanced = active.advance(batch.adjacency)
            logger.debug(f"  {side.value.capitalize()} expansion result: {len(advanced.routes)} routes")
            if side is SearchSide.FORWARD:
                forward = advanced
            else:
                backward = advanced

            rounds += 1
            meeting_nodes = self._meeting_nodes(forward, backward)
            side = side.opposite

        if not meeting_nodes:
            logger.info(
                f"SEARCH SUMMARY for {origin!r} -> {destination!r}: no route, "
                f"queries: {query_count}, rounds: {rounds}"
            )
            return RouteSearchResult(
                ok=True, query_count=query_count, state=SearchState.EXHAUSTED, rounds=rounds,
            )

        routes = self._combine_routes(forward, backward, meeting_nodes)
        elapsed_ms = (time.perf_counter() - search_start_time) * 1000
        logger.info(
            f"SEARCH SUMMARY for {origin!r} -> {destination!r}: "
            f"Route length: {routes[0].hops}, "
            f"Routes found: {len(routes)}, "
            f"Meeting nodes: {len(meeting_nodes)}, "
            f"Queries: {query_count}, "
            f"Rounds: {rounds}, "
            f"Total time: {elapsed_ms:.1f}ms"
        )
        return RouteSearchResult(
            ok=True,
            query_count=query_count,
            routes=tuple(routes),
            state=SearchState.CONVERGED,
            rounds=rounds,
        )

    @staticmethod
    def _meeting_nodes(forward: Frontier, backward: Frontier) -> Set[NodeId]:
        """Tails present in both frontiers."""
        return set(forward.tails()).intersection(backward.tails())

    @staticmethod
    def _combine_routes(forward: Frontier, backward: Frontier, meeting_nodes: Set[NodeId]) -> List[Route]:
        """
        Join forward and backward routes on their shared tail.

        Every forward route into a meeting node is paired with every backward
        route into the same node.
        """
        by_tail: Dict[NodeId, Tuple[List[Route], List[Route]]] = defaultdict(lambda: ([], []))
        for route in forward.routes:
            if route.tail in meeting_nodes:
                by_tail[route.tail][0].append(route)
        for route in backward.routes:
            if route.tail in meeting_nodes:
                by_tail[route.tail][1].append(route)

        routes: List[Route] = []
        for meeting_node in sorted(by_tail):
            forward_routes, backward_routes = by_tail[meeting_node]
            for forward_route in forward_routes:
                for backward_route in backward_routes:
                    routes.append(forward_route.join(backward_route))
        return routes


async def search_routes(origin: NodeId, destination: NodeId, resolver: AdjacencyResolver) -> RouteSearchResult:
    """Run a single search with a throwaway engine."""
    return await BidirectionalRouteSearch(resolver).search(origin, destination)
