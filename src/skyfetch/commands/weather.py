"""Space-weather commands backed by NASA's DONKI feeds.

``notifications`` and ``events`` return DONKI's latest entries;
``flares``, ``cme`` and ``storms`` accept a date window that defaults to
calendar year 2023.
"""

from __future__ import annotations

import typer

from skyfetch.commands import space_client
from skyfetch.endpoints.catalog import DONKI_DEFAULT_END, DONKI_DEFAULT_START
from skyfetch.output import format_response


weather_app = typer.Typer(no_args_is_help=True)

_START = typer.Option(DONKI_DEFAULT_START, "--start", help="Start date (YYYY-MM-DD).")
_END = typer.Option(DONKI_DEFAULT_END, "--end", help="End date (YYYY-MM-DD).")


@weather_app.command("notifications")
def notifications(ctx: typer.Context) -> None:
    """Show space-weather notifications (cached for 30 minutes)."""
    with space_client(ctx) as client:
        format_response(client.space_weather_notifications())


@weather_app.command("events")
def events(ctx: typer.Context) -> None:
    """Show solar system events."""
    with space_client(ctx) as client:
        format_response(client.solar_system_events())


@weather_app.command("flares")
def flares(ctx: typer.Context, start: str = _START, end: str = _END) -> None:
    """Show solar flares (FLR)."""
    with space_client(ctx) as client:
        format_response(client.solar_flares(start, end))


@weather_app.command("cme")
def cme(ctx: typer.Context, start: str = _START, end: str = _END) -> None:
    """Show coronal mass ejections (CME)."""
    with space_client(ctx) as client:
        format_response(client.coronal_mass_ejections(start, end))


@weather_app.command("storms")
def storms(ctx: typer.Context, start: str = _START, end: str = _END) -> None:
    """Show geomagnetic storms (GST)."""
    with space_client(ctx) as client:
        format_response(client.geomagnetic_storms(start, end))
