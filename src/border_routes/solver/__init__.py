# Bidirectional shortest-route search

from .models import Frontier, Route, RouteSearchResult, SearchSide, SearchState
from .route_search import BidirectionalRouteSearch, search_routes

__all__ = [
    "BidirectionalRouteSearch",
    "Frontier",
    "Route",
    "RouteSearchResult",
    "SearchSide",
    "SearchState",
    "search_routes",
]
