"""CLI entrypoint for place-distance."""

from __future__ import annotations

import asyncio
import json
import logging

import click
from rich.console import Console
from rich.table import Table

from place_distance.clients.nominatim_client import GeocodeClient
from place_distance.controller import SearchController
from place_distance.errors import GeocodeError, InvalidQueryError
from place_distance.geo import UNITS
from place_distance.messages import MISSING_INPUT_MESSAGE, describe_outcome
from place_distance.models import SearchOutcome, Success
from place_distance.orchestrator import SearchOrchestrator
from place_distance.providers import REGIONS

console = Console()

REGION_CHOICES = click.Choice(sorted(REGIONS) + ["none"], case_sensitive=False)


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
def cli(verbose: bool):
    """Place Distance: straight-line distance between two places."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )


def _outcome_table(outcome: Success, labels: tuple[str, str], unit: str) -> Table:
    table = Table(title=describe_outcome(outcome, unit))
    table.add_column("Query", style="bold")
    table.add_column("Match")
    table.add_column("Coords", width=22)

    for label, result in zip(labels, (outcome.a, outcome.b)):
        table.add_row(label, result.display_name, f"{result.latitude:.4f}, {result.longitude:.4f}")
    return table


def _print_outcome(controller: SearchController, unit: str) -> None:
    outcome = controller.current
    if isinstance(outcome, Success):
        console.print(_outcome_table(outcome, controller.current_labels, unit))
    else:
        console.print(f"[red]{describe_outcome(outcome, unit)}[/]")


async def _calculate(
    place1: str, place2: str, region: str | None, map_path: str | None,
) -> tuple[SearchController, SearchOutcome]:
    async with GeocodeClient() as client:
        controller = SearchController(SearchOrchestrator(client, region_hint=region))
        outcome = await controller.calculate(place1, place2)
    if map_path and isinstance(outcome, Success):
        controller.presenter.save(controller.session, map_path)
    return controller, outcome


@cli.command()
@click.argument("place1")
@click.argument("place2")
@click.option("--unit", default="km", type=click.Choice(UNITS), help="Distance unit.")
@click.option("--region", default=None, type=REGION_CHOICES,
              help="Region for the scoped lookup ('none' to search worldwide only).")
@click.option("--json", "as_json", is_flag=True, help="Print the outcome as JSON.")
@click.option("--map", "map_path", default=None, type=click.Path(dir_okay=False),
              help="Write an interactive HTML map here on success.")
def distance(place1: str, place2: str, unit: str, region: str | None, as_json: bool,
             map_path: str | None):
    """Geocode PLACE1 and PLACE2 and show the distance between them."""
    try:
        controller, outcome = asyncio.run(_calculate(place1, place2, region, map_path))
    except InvalidQueryError:
        raise click.UsageError(MISSING_INPUT_MESSAGE) from None

    if as_json:
        click.echo(outcome.to_json())
    else:
        _print_outcome(controller, unit)
        if map_path and isinstance(outcome, Success):
            console.print(f"Map: {map_path}")

    if not isinstance(outcome, Success):
        raise SystemExit(1)


@cli.command()
@click.argument("query")
@click.option("--region", default=None, type=REGION_CHOICES,
              help="Region for the scoped lookup ('none' to search worldwide only).")
@click.option("--json", "as_json", is_flag=True, help="Print the match as JSON.")
def geocode(query: str, region: str | None, as_json: bool):
    """Resolve QUERY to coordinates."""

    async def _lookup():
        async with GeocodeClient() as client:
            return await client.geocode(query, region)

    try:
        result = asyncio.run(_lookup())
    except InvalidQueryError:
        raise click.UsageError("Please enter a place.") from None
    except GeocodeError as exc:
        console.print(f"[red]{exc}[/]")
        raise SystemExit(1)

    if result is None:
        if as_json:
            click.echo(json.dumps(None))
        else:
            console.print("[yellow]Place not found.[/]")
        raise SystemExit(1)

    if as_json:
        click.echo(result.to_json())
    else:
        console.print(f"[bold]{result.display_name}[/]  {result.latitude:.5f}, {result.longitude:.5f}")


@cli.command()
@click.option("--unit", default="km", type=click.Choice(UNITS), help="Distance unit.")
@click.option("--region", default=None, type=REGION_CHOICES,
              help="Region for the scoped lookup ('none' to search worldwide only).")
@click.option("--map", "map_path", default=None, type=click.Path(dir_okay=False),
              help="Keep an interactive HTML map of the latest result here.")
def interactive(unit: str, region: str | None, map_path: str | None):
    """Prompt for place pairs until ':q'.

    An empty first place or ':clear' resets the result and the map.
    """
    asyncio.run(_interactive(unit, region, map_path))


async def _interactive(unit: str, region: str | None, map_path: str | None) -> None:
    async with GeocodeClient() as client:
        controller = SearchController(SearchOrchestrator(client, region_hint=region))
        while True:
            place1 = click.prompt("First place", default="", show_default=False)
            if place1.strip() == ":q":
                break
            if place1.strip() in ("", ":clear"):
                controller.reset()
                if map_path:
                    controller.presenter.save(controller.session, map_path)
                console.print("Cleared.")
                continue
            place2 = click.prompt("Second place", default="", show_default=False)

            try:
                with console.status("Searching..."):
                    await controller.calculate(place1, place2)
            except InvalidQueryError:
                console.print(f"[red]{MISSING_INPUT_MESSAGE}[/]")
                continue

            _print_outcome(controller, unit)
            if map_path:
                controller.presenter.save(controller.session, map_path)


if __name__ == "__main__":
    cli()
