"""Imagery commands -- APOD, planets, meteorite and star images, rovers, Earth, NEOs.

Image commands print an :class:`~skyfetch.models.ImageResult` record. When
the record is a fallback, a warning on stderr names the reason so scripts
reading stdout still receive a usable image URL.
"""

from __future__ import annotations

from typing import Optional

import typer

from skyfetch.commands import space_client
from skyfetch.models import ImageResult
from skyfetch.output import format_response, warning


image_app = typer.Typer(no_args_is_help=True)


def _show_image(result: ImageResult) -> None:
    if result.is_fallback:
        reason = result.fallback_reason.value if result.fallback_reason else "unknown"
        warning(f"Using fallback image for {result.title} ({reason})")
    format_response(result)


def apod_command(
    ctx: typer.Context,
    date: Optional[str] = typer.Option(None, "--date", "-d", help="Date (YYYY-MM-DD)."),
    start: Optional[str] = typer.Option(None, "--start", help="First date of a range."),
    end: Optional[str] = typer.Option(None, "--end", help="Last date of a range."),
) -> None:
    """Show the Astronomy Picture of the Day.

    Example::

        skyfetch apod
        skyfetch apod --date 2024-01-01
        skyfetch apod --start 2024-01-01 --end 2024-01-07
    """
    if (start is None) != (end is None):
        raise typer.BadParameter("--start and --end must be given together")
    if start is not None and date is not None:
        raise typer.BadParameter("--date cannot be combined with --start/--end")

    with space_client(ctx) as client:
        if start is not None and end is not None:
            results = client.apod_range(start, end)
            format_response(results)
        else:
            _show_image(client.apod(date))


def planet_command(
    ctx: typer.Context,
    name: str = typer.Argument(help="Planet name, e.g. 'Mars'."),
    enhanced: bool = typer.Option(
        False, "--enhanced", help="Include rover photos (Mars) or Earth imagery (Earth)."
    ),
) -> None:
    """Show the image for a planet of the solar system."""
    with space_client(ctx) as client:
        if enhanced:
            data = client.enhanced_planet_data(name)
            image = data["image_data"]
            if image.is_fallback:
                warning(f"Using fallback image for {image.title}")
            format_response(data)
        else:
            _show_image(client.planet_image(name))


@image_app.command("meteorite")
def meteorite_image(
    ctx: typer.Context,
    name: str = typer.Argument(help="Meteorite name."),
) -> None:
    """Show an image associated with a meteorite."""
    with space_client(ctx) as client:
        _show_image(client.meteorite_image(name))


@image_app.command("star")
def star_image(
    ctx: typer.Context,
    name: str = typer.Argument(help="Star name."),
) -> None:
    """Show an image associated with a star."""
    with space_client(ctx) as client:
        _show_image(client.star_image(name))


def mars_command(
    ctx: typer.Context,
    rover: str = typer.Option("curiosity", "--rover", help="Rover name."),
    sol: int = typer.Option(1000, "--sol", help="Martian sol."),
    camera: str = typer.Option("fhaz", "--camera", help="Camera abbreviation."),
) -> None:
    """List Mars rover photos for a sol and camera."""
    with space_client(ctx) as client:
        format_response(client.mars_rover_photos(rover=rover, sol=sol, camera=camera))


def neo_command(
    ctx: typer.Context,
    start: Optional[str] = typer.Option(None, "--start", help="Start date (YYYY-MM-DD)."),
    end: Optional[str] = typer.Option(None, "--end", help="End date (YYYY-MM-DD)."),
) -> None:
    """List near-Earth objects approaching in a date window."""
    with space_client(ctx) as client:
        format_response(client.near_earth_objects(start, end))


def earth_command(
    ctx: typer.Context,
    date: Optional[str] = typer.Option(None, "--date", "-d", help="Date (YYYY-MM-DD)."),
    lat: Optional[float] = typer.Option(None, "--lat", help="Latitude."),
    lon: Optional[float] = typer.Option(None, "--lon", help="Longitude."),
    enhance: bool = typer.Option(True, "--enhance/--no-enhance", help="Request enhanced imagery."),
) -> None:
    """Show Earth imagery metadata."""
    with space_client(ctx) as client:
        format_response(client.earth_imagery(date, lat=lat, lon=lon, enhance=enhance))
