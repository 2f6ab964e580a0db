"""
Plain-text rendering of route reports.
"""

from typing import List, Sequence

from border_routes.models import RouteReport

ARROW = " → "


def format_route(names: Sequence[str]) -> str:
    """'France → Germany → Poland (2 borders)'"""
    hops = len(names) - 1
    unit = "border" if hops == 1 else "borders"
    return f"{ARROW.join(names)} ({hops} {unit})"


def render_report(report: RouteReport) -> List[str]:
    """Lines shown to the user: the routes or an explanation, then the request count."""
    if not report.ok:
        lines = [f"Error on request, no routes computed: {report.error or 'unknown error'}"]
    elif not report.routes:
        lines = [f"No land route from {report.from_country} to {report.to_country}"]
    else:
        lines = [format_route(route) for route in report.routes]
    lines.append(f"Done in {report.query_count} requests")
    return lines
