"""
Value types for the bidirectional route search.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import FrozenSet, Iterator, List, Mapping, Optional, Tuple

from border_routes.adjacency import NodeId


class SearchSide(Enum):
    FORWARD = "forward"    # grows from the origin
    BACKWARD = "backward"  # grows from the destination

    @property
    def opposite(self) -> "SearchSide":
        return SearchSide.BACKWARD if self is SearchSide.FORWARD else SearchSide.FORWARD


class SearchState(Enum):
    """Lifecycle of a single search."""
    IDLE = "idle"
    EXPANDING = "expanding"
    CONVERGED = "converged"   # frontiers met, routes reconstructed
    EXHAUSTED = "exhausted"   # a frontier ran dry, no route exists
    FAILED = "failed"         # a lookup failed


@dataclass(frozen=True)
class Route:
    """Immutable, non-repeating sequence of nodes starting at a search endpoint."""
    nodes: Tuple[NodeId, ...]

    def __post_init__(self):
        if not self.nodes:
            raise ValueError("A route needs at least one node")

    @classmethod
    def of(cls, *nodes: NodeId) -> "Route":
        return cls(tuple(nodes))

    @property
    def tail(self) -> NodeId:
        return self.nodes[-1]

    @property
    def hops(self) -> int:
        """Number of edges travelled."""
        return len(self.nodes) - 1

    def extend(self, node_id: NodeId) -> "Route":
        return Route(self.nodes + (node_id,))

    def join(self, backward: "Route") -> "Route":
        """
        Glue a backward route onto this forward one at their shared tail.

        [A, B, M] joined with [D, C, M] gives [A, B, M, C, D].
        """
        if self.tail != backward.tail:
            raise ValueError(f"Routes do not meet: {self.tail!r} != {backward.tail!r}")
        return Route(self.nodes[:-1] + tuple(reversed(backward.nodes)))

    def __iter__(self) -> Iterator[NodeId]:
        return iter(self.nodes)

    def __len__(self) -> int:
        return len(self.nodes)

    def as_list(self) -> List[NodeId]:
        return list(self.nodes)


@dataclass(frozen=True)
class Frontier:
    """
    The routes one side of the search is currently extending, plus that side's
    visited set. Every route in a frontier has the same length.
    """
    side: SearchSide
    routes: Tuple[Route, ...]
    visited: FrozenSet[NodeId]

    @classmethod
    def seed(cls, side: SearchSide, node_id: NodeId) -> "Frontier":
        return cls(side=side, routes=(Route.of(node_id),), visited=frozenset([node_id]))

    @property
    def depth(self) -> int:
        return self.routes[0].hops if self.routes else -1

    def is_exhausted(self) -> bool:
        return not self.routes

    def tails(self) -> List[NodeId]:
        """Distinct route tails, in first-seen order. Many routes can share one tail."""
        return list(dict.fromkeys(route.tail for route in self.routes))

    def advance(self, adjacency: Mapping[NodeId, FrozenSet[NodeId]]) -> "Frontier":
        """
        Produce the next frontier from the resolved neighbours of the current tails.

        The current tails join the visited set first, so a neighbour that is
        also a tail this round is pruned along with everything seen before.
        """
        visited = self.visited.union(self.tails())
        new_routes = tuple(
            route.extend(neighbour)
            for route in self.routes
            for neighbour in sorted(adjacency[route.tail])
            if neighbour not in visited
        )
        return Frontier(side=self.side, routes=new_routes, visited=visited)


@dataclass(frozen=True)
class RouteSearchResult:
    """Outcome of a search. `ok` is False only when a lookup failed."""
    ok: bool
    query_count: int
    routes: Tuple[Route, ...] = ()
    state: SearchState = SearchState.CONVERGED
    error: Optional[str] = None
    rounds: int = field(default=0, compare=False)

    @property
    def hop_count(self) -> Optional[int]:
        return self.routes[0].hops if self.routes else None

    def route_lists(self) -> List[List[NodeId]]:
        return [route.as_list() for route in self.routes]
