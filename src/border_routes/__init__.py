"""
Border Routes - Core Library

Finds every shortest chain of land borders between two countries, discovering
the border graph one lookup at a time.
"""

from .solver import BidirectionalRouteSearch, RouteSearchResult, search_routes

__all__ = ['BidirectionalRouteSearch', 'RouteSearchResult', 'search_routes']
