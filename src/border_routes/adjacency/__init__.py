# Adjacency lookups consumed by the route search

from .base import (
    AdjacencyResolver,
    BatchResolution,
    FailedBatch,
    FunctionResolver,
    NodeId,
    ResolvedBatch,
    StaticAdjacencyResolver,
)
from .caching import CachingResolver

__all__ = [
    "AdjacencyResolver",
    "BatchResolution",
    "CachingResolver",
    "FailedBatch",
    "FunctionResolver",
    "NodeId",
    "ResolvedBatch",
    "StaticAdjacencyResolver",
]
