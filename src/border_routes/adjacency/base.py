"""
AdjacencyResolver - the contract the route search consumes.

A resolver answers one question: which nodes are directly adjacent to this one?
Answers may come from the network, so every lookup is asynchronous and may fail.
"""

import asyncio
import logging
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Awaitable, Callable, Dict, FrozenSet, Hashable, Iterable, Mapping, Sequence, Union

from border_routes.exceptions import ResolutionFailure

logger = logging.getLogger(__name__)

# Opaque, hashable and comparable (a cca3 code in the countries domain)
NodeId = Hashable


@dataclass(frozen=True)
class ResolvedBatch:
    """Every lookup of a batch succeeded."""
    adjacency: Mapping[NodeId, FrozenSet[NodeId]]


@dataclass(frozen=True)
class FailedBatch:
    """At least one lookup of a batch failed; no partial results are kept."""
    node_id: NodeId
    error: BaseException

    @property
    def message(self) -> str:
        return str(self.error) or type(self.error).__name__


BatchResolution = Union[ResolvedBatch, FailedBatch]


class AdjacencyResolver(ABC):
    """Base class for anything that can look up the neighbours of a node."""

    @abstractmethod
    async def resolve(self, node_id: NodeId) -> FrozenSet[NodeId]:
        """
        Return the nodes directly adjacent to node_id.

        Raises:
            ResolutionFailure: If the lookup fails or node_id is unknown.
        """

    async def resolve_batch(self, node_ids: Sequence[NodeId]) -> BatchResolution:
        """
        Resolve many nodes concurrently and join the results.

        All lookups are awaited before returning, so no request is left running
        in the background. Results are keyed by the requesting id, whatever the
        completion order. If any lookup failed the whole batch is a FailedBatch.
        """
        unique_ids = list(dict.fromkeys(node_ids))
        fetch_start_time = time.perf_counter()
        results = await asyncio.gather(
            *[self.resolve(node_id) for node_id in unique_ids],
            return_exceptions=True,
        )
        fetch_time = time.perf_counter() - fetch_start_time

        adjacency: Dict[NodeId, FrozenSet[NodeId]] = {}
        for node_id, result in zip(unique_ids, results):
            if isinstance(result, asyncio.CancelledError):
                raise result
            if isinstance(result, BaseException):
                logger.warning(f"Lookup failed for {node_id!r}: {result}")
                return FailedBatch(node_id=node_id, error=result)
            adjacency[node_id] = result

        logger.debug(
            f"  Batch fetch: {len(unique_ids)} nodes, "
            f"{sum(len(neighbours) for neighbours in adjacency.values())} neighbours, "
            f"{fetch_time*1000:.1f}ms"
        )
        return ResolvedBatch(adjacency=adjacency)


class StaticAdjacencyResolver(AdjacencyResolver):
    """Resolver over an adjacency table that is known up front."""

    def __init__(self, adjacency: Mapping[NodeId, Iterable[NodeId]]):
        self._adjacency: Dict[NodeId, FrozenSet[NodeId]] = {
            node_id: frozenset(neighbours) for node_id, neighbours in adjacency.items()
        }

    def __contains__(self, node_id: NodeId) -> bool:
        return node_id in self._adjacency

    def __len__(self) -> int:
        return len(self._adjacency)

    async def resolve(self, node_id: NodeId) -> FrozenSet[NodeId]:
        try:
            return self._adjacency[node_id]
        except KeyError:
            raise ResolutionFailure(node_id, f"Unknown node: {node_id!r}") from None


class FunctionResolver(AdjacencyResolver):
    """Adapts a plain `async def lookup(node_id) -> Iterable[node_id]` to the resolver contract."""

    def __init__(self, lookup: Callable[[NodeId], Awaitable[Iterable[NodeId]]]):
        self._lookup = lookup

    async def resolve(self, node_id: NodeId) -> FrozenSet[NodeId]:
        neighbours = await self._lookup(node_id)
        if neighbours is None:
            raise ResolutionFailure(node_id, f"No adjacency returned for {node_id!r}")
        return frozenset(neighbours)
