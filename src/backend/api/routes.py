from fastapi import APIRouter, HTTPException, Depends
from typing import Dict, Any, List
import logging

from border_routes.exceptions import (
    CountryServiceUnavailableException,
    InvalidEndpointsException,
    UnknownCountryException,
)
from border_routes.models import RouteRequest, RouteReport
from border_routes.route_finder import RouteFinder
from backend.dependencies import get_route_finder

router = APIRouter(prefix="/api/routes", tags=["routes"])
logger = logging.getLogger(__name__)


@router.post("/path", response_model=RouteReport)
async def find_routes(
    request: RouteRequest,
    finder: RouteFinder = Depends(get_route_finder)
) -> RouteReport:
    """
    Find every shortest land-border route between two countries.

    Border lookup failures are not HTTP errors: they come back with ok=false
    and the number of lookups issued before the failure.
    """
    try:
        report = await finder.find_routes(request.from_country, request.to_country, request.mode)
    except UnknownCountryException as e:
        logger.warning(f"Route finding failed: {e.message}")
        raise HTTPException(status_code=404, detail=e.message)
    except InvalidEndpointsException as e:
        logger.warning(f"Route finding rejected: {e.message}")
        raise HTTPException(status_code=422, detail=e.message)
    except CountryServiceUnavailableException as e:
        logger.error(f"Country metadata unavailable: {e.message}")
        raise HTTPException(status_code=503, detail=e.message)

    logger.info(
        f"Routes found: {report.from_country} -> {report.to_country} "
        f"({len(report.routes)} routes, {report.query_count} requests, {report.computation_time_ms:.1f}ms)"
    )
    return report


@router.get("/countries")
async def list_countries(finder: RouteFinder = Depends(get_route_finder)) -> List[str]:
    """Known country names, largest first. Suitable for input suggestions."""
    try:
        await finder.directory.load()
    except CountryServiceUnavailableException as e:
        raise HTTPException(status_code=503, detail=e.message)
    return finder.directory.names_by_area()


@router.get("/validate/{country}")
async def validate_country(country: str, finder: RouteFinder = Depends(get_route_finder)) -> Dict[str, Any]:
    """
    Check whether a country name or code is known.

    Useful for validating user input before attempting route finding.
    """
    try:
        await finder.directory.load()
    except CountryServiceUnavailableException as e:
        raise HTTPException(status_code=503, detail=e.message)

    code = finder.directory.find_code(country)
    return {
        "country": country,
        "exists": code is not None,
        "code": code,
        "name": finder.directory.name_for(code) if code else None,
        "message": "Country found" if code else "Country not found",
    }
