from fastapi import Request

from border_routes.route_finder import RouteFinder


async def get_route_finder(request: Request) -> RouteFinder:
    """Dependency provider to get the shared RouteFinder instance."""
    return request.app.state.route_finder
