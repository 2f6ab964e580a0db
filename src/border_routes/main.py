import asyncio
from typing import List, Optional

import typer

from border_routes.config import BorderRoutesConfig, ResolverMode
from border_routes.exceptions import BorderRoutesException, InvalidEndpointsException
from border_routes.logging_config import setup_logging
from border_routes.presentation import render_report
from border_routes.route_finder import RouteFinder


app = typer.Typer(help="Find every shortest chain of land borders between two countries.")


@app.command()
def route(
    from_country: str = typer.Argument(..., help="Starting country (common name or cca3 code)."),
    to_country: str = typer.Argument(..., help="Destination country (common name or cca3 code)."),
    mode: Optional[ResolverMode] = typer.Option(
        None,
        "--mode",
        "-m",
        help="'live' sends every border lookup to the API, 'prefetched' downloads all borders once.",
    ),
    log_level: Optional[str] = typer.Option(None, "--log-level", "-l", help="Log level, e.g. DEBUG."),
):
    """
    Print all shortest border routes from one country to another.
    """
    config = BorderRoutesConfig.from_env()
    setup_logging(level=log_level or config.log_level)

    if from_country.strip().casefold() == to_country.strip().casefold():
        typer.echo("Start and destination countries must be different.", err=True)
        raise typer.Exit(code=2)

    finder = RouteFinder.from_config(config)
    try:
        report = asyncio.run(finder.find_routes(from_country, to_country, mode))
    except InvalidEndpointsException as e:
        typer.echo(e.message, err=True)
        raise typer.Exit(code=2)
    except BorderRoutesException as e:
        typer.echo(e.message, err=True)
        raise typer.Exit(code=1)

    for line in render_report(report):
        typer.echo(line)
    if not report.ok:
        raise typer.Exit(code=1)


@app.command()
def countries(
    limit: int = typer.Option(0, "--limit", "-n", min=0, help="Show only the N largest countries (0 = all)."),
):
    """
    List known country names, largest first.
    """
    config = BorderRoutesConfig.from_env()
    setup_logging(level=config.log_level)

    finder = RouteFinder.from_config(config)
    try:
        names = asyncio.run(_load_names(finder))
    except BorderRoutesException as e:
        typer.echo(e.message, err=True)
        raise typer.Exit(code=1)

    for name in names[:limit] if limit else names:
        typer.echo(name)


async def _load_names(finder: RouteFinder) -> List[str]:
    await finder.directory.load()
    return finder.directory.names_by_area()


if __name__ == "__main__":
    app()
