"""Typer application and CLI entry point for skyfetch.

This module wires together the top-level Typer application and registers
the built-in command groups (``apod``, ``planet``, ``image``, ``mars``,
``neo``, ``earth``, ``weather``, ``catalog``, ``config``).

The :func:`main` function is the console-script entry point declared in
``pyproject.toml``. It installs signal handlers and invokes the Typer app.
Unhandled exceptions are written to a crash log under the data directory.

See Also:
    :mod:`skyfetch.config`: Global configuration and API key resolution.
    :mod:`skyfetch.output`: Output formatting initialised in :func:`main_callback`.
"""

from __future__ import annotations

import logging
import signal
import sys
import traceback
from datetime import datetime
from typing import Any, Optional

import typer

from skyfetch import __version__
from skyfetch.commands.catalog import catalog_app
from skyfetch.commands.config import config_app
from skyfetch.commands.imagery import (
    apod_command,
    earth_command,
    image_app,
    mars_command,
    neo_command,
    planet_command,
)
from skyfetch.commands.weather import weather_app
from skyfetch.exit_codes import EXIT_GENERIC_FAILURE


app = typer.Typer(
    name="skyfetch",
    help="Fetch astronomy pictures, space weather and solar system catalogs.",
    no_args_is_help=True,
    add_completion=True,
    rich_markup_mode="rich",
)

app.command("apod")(apod_command)
app.command("planet")(planet_command)
app.command("mars")(mars_command)
app.command("neo")(neo_command)
app.command("earth")(earth_command)
app.add_typer(image_app, name="image", help="Images for meteorites and stars.")
app.add_typer(weather_app, name="weather", help="DONKI space-weather feeds.")
app.add_typer(catalog_app, name="catalog", help="Solar system body catalogs.")
app.add_typer(config_app, name="config", help="Configuration management.")


def _version_callback(value: bool) -> None:
    """Print version and exit when --version is passed."""
    if value:
        typer.echo(f"skyfetch {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    api_key: Optional[str] = typer.Option(
        None, "--api-key", help="API key for api.nasa.gov (overrides config)."
    ),
    json_output: bool = typer.Option(
        False, "--json", help="JSON output format."
    ),
    plain_output: bool = typer.Option(
        False, "--plain", help="Plain text output."
    ),
    no_color: bool = typer.Option(
        False, "--no-color", help="Disable color output."
    ),
    quiet: bool = typer.Option(
        False, "--quiet", "-q", help="Suppress non-essential output."
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable debug output."
    ),
    output_file: Optional[str] = typer.Option(
        None, "-o", "--output", help="Output file path."
    ),
) -> None:
    """Root callback executed before every sub-command.

    Initialises the global :class:`~skyfetch.output.OutputManager` and the
    ``skyfetch`` logger level from CLI flags, and stores the API key
    override in ``ctx.obj`` for the data commands.
    """
    from skyfetch.output import OutputFormat, OutputManager, set_output

    fmt = OutputFormat.AUTO
    if json_output:
        fmt = OutputFormat.JSON
    elif plain_output:
        fmt = OutputFormat.PLAIN

    set_output(
        OutputManager(
            format=fmt,
            no_color=no_color,
            quiet=quiet,
            verbose=verbose,
            output_file=output_file,
        )
    )
    logging.getLogger("skyfetch").setLevel(logging.DEBUG if verbose else logging.WARNING)

    ctx.ensure_object(dict)
    ctx.obj["api_key"] = api_key
    ctx.obj["verbose"] = verbose


def _setup_signal_handlers() -> None:
    """Install a SIGINT handler so Ctrl-C exits cleanly."""

    def _handler(signum: int, frame: Any) -> None:  # noqa: ANN401
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)

    signal.signal(signal.SIGINT, _handler)


def _write_crash_log(exc: Exception) -> str:
    """Write a crash traceback to disk and return the log file path."""
    from skyfetch.config import get_data_dir

    logs_dir = get_data_dir() / "logs"
    logs_dir.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now().strftime("%Y%m%d-%H%M%S")
    log_path = logs_dir / f"crash-{timestamp}.log"
    log_path.write_text(traceback.format_exc())
    return str(log_path)


def main() -> None:
    """CLI entry point invoked by the ``skyfetch`` console script.

    :class:`~skyfetch.exceptions.SkyfetchError` instances that escape a
    command cause a clean exit with the error's ``exit_code``. All other
    exceptions produce a crash log and a generic failure exit.

    Raises:
        SystemExit: Always raised (either by Typer or explicitly).
    """
    _setup_signal_handlers()
    logging.basicConfig(format="%(levelname)s %(name)s: %(message)s")
    try:
        app()
    except SystemExit:
        raise
    except KeyboardInterrupt:
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)
    except Exception as exc:
        from skyfetch.exceptions import SkyfetchError
        from skyfetch.output import error

        if isinstance(exc, SkyfetchError):
            error(str(exc))
            sys.exit(exc.exit_code)
        log_path = _write_crash_log(exc)
        error(f"Unexpected error. Debug log: {log_path}")
        sys.exit(EXIT_GENERIC_FAILURE)
