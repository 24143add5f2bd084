"""Catalog commands -- meteorite landings, stars, comets and asteroids.

Records are shown as a table of their headline fields. With ``--json``
the complete records, nested properties included, are printed instead.
"""

from __future__ import annotations

from typing import Any, Callable

import typer

from skyfetch.commands import space_client
from skyfetch.facade import SpaceDataClient
from skyfetch.output import print_records


catalog_app = typer.Typer(no_args_is_help=True)


def _catalog_command(
    fetch: Callable[[SpaceDataClient], list[dict[str, Any]]],
    columns: list[str],
    title: str,
) -> Callable[[typer.Context], None]:
    def command(ctx: typer.Context) -> None:
        with space_client(ctx) as client:
            print_records(fetch(client), columns, title)

    command.__doc__ = f"List {title.lower()}."
    return command


catalog_app.command("meteorites")(
    _catalog_command(
        SpaceDataClient.meteorites,
        ["name", "type", "location", "date", "size"],
        "Meteorite landings",
    )
)
catalog_app.command("stars")(
    _catalog_command(
        SpaceDataClient.stars,
        ["name", "type", "distance", "magnitude"],
        "Stars",
    )
)
catalog_app.command("comets")(
    _catalog_command(
        SpaceDataClient.comets,
        ["name", "type", "orbitalPeriod", "perihelion"],
        "Comets",
    )
)
catalog_app.command("asteroids")(
    _catalog_command(
        SpaceDataClient.asteroids,
        ["name", "type", "orbitalPeriod", "perihelion"],
        "Asteroids",
    )
)
