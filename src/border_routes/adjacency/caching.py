"""
CachingResolver - memoizes another resolver's answers across searches.

Concurrent lookups of the same node share a single in-flight request, and
answers expire after a configurable time-to-live. Failures are never cached.
"""

import asyncio
import logging
import time
from typing import Dict, FrozenSet, Optional, Tuple

from .base import AdjacencyResolver, NodeId

logger = logging.getLogger(__name__)


class CachingResolver(AdjacencyResolver):
    """Wraps a resolver with a TTL cache and cooperative fetching."""

    def __init__(self, inner: AdjacencyResolver, ttl_seconds: Optional[float] = 300.0):
        """
        Args:
            inner: The resolver that performs the actual lookups.
            ttl_seconds: Lifetime of a cached answer. None keeps answers forever.
        """
        self.inner = inner
        self.ttl = ttl_seconds

        # node_id -> (neighbours, stored_at)
        self._cache: Dict[NodeId, Tuple[FrozenSet[NodeId], float]] = {}
        # node_id -> in-flight lookup task
        self._pending: Dict[NodeId, asyncio.Task] = {}

        self.hits = 0
        self.misses = 0

    def _is_fresh(self, stored_at: float) -> bool:
        return self.ttl is None or time.monotonic() - stored_at <= self.ttl

    async def resolve(self, node_id: NodeId) -> FrozenSet[NodeId]:
        cached = self._cache.get(node_id)
        if cached is not None:
            neighbours, stored_at = cached
            if self._is_fresh(stored_at):
                self.hits += 1
                return neighbours
            self._cache.pop(node_id, None)

        # Cooperative fetch: one lookup task per node, awaited by every caller
        # through a shield. Cancelling a caller never cancels the shared lookup.
        task = self._pending.get(node_id)
        if task is not None:
            self.hits += 1
        else:
            self.misses += 1
            task = asyncio.ensure_future(self._fetch(node_id))
            task.add_done_callback(self._retrieve_outcome)
            self._pending[node_id] = task
        return await asyncio.shield(task)

    async def _fetch(self, node_id: NodeId) -> FrozenSet[NodeId]:
        try:
            result = await self.inner.resolve(node_id)
            self._cache[node_id] = (result, time.monotonic())
            return result
        finally:
            self._pending.pop(node_id, None)

    @staticmethod
    def _retrieve_outcome(task: asyncio.Task) -> None:
        # Every caller may have been cancelled; mark a failure retrieved so the loop does not warn
        if not task.cancelled():
            task.exception()

    def purge_expired(self) -> int:
        """Drop expired answers. Returns how many were removed."""
        expired = [node_id for node_id, (_, stored_at) in self._cache.items() if not self._is_fresh(stored_at)]
        for node_id in expired:
            self._cache.pop(node_id, None)
        if expired:
            logger.info(f"Cleaned up {len(expired)} expired cache entries")
        return len(expired)

    def clear(self) -> None:
        self._cache.clear()

    def __len__(self) -> int:
        return len(self._cache)
