"""Built-in CLI sub-commands for skyfetch.

This package groups the Typer command modules that form the CLI's
command tree:

* :mod:`~skyfetch.commands.imagery` -- APOD, planet, meteorite and star
  images, Mars rover photos, Earth imagery and the NEO feed.
* :mod:`~skyfetch.commands.weather` -- DONKI space-weather feeds.
* :mod:`~skyfetch.commands.catalog` -- meteorite, star, comet and asteroid
  catalogs rendered as tables.
* :mod:`~skyfetch.commands.config` -- view and modify global settings.

Every data command obtains its client through :func:`space_client`, which
turns :class:`~skyfetch.exceptions.SkyfetchError` into an error message
and the matching exit code.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator, Optional

import typer

from skyfetch.exceptions import SkyfetchError
from skyfetch.facade import SpaceDataClient
from skyfetch.output import error


def build_client(api_key: Optional[str] = None) -> SpaceDataClient:
    """Create a client from the on-disk configuration and *api_key* override."""
    return SpaceDataClient.from_config(api_key)


@contextmanager
def space_client(ctx: typer.Context) -> Iterator[SpaceDataClient]:
    """Yield a configured client, closing it afterwards.

    Raises:
        typer.Exit: With the error's ``exit_code`` on any
            :class:`~skyfetch.exceptions.SkyfetchError`.
    """
    api_key = (ctx.obj or {}).get("api_key")
    try:
        with build_client(api_key) as client:
            yield client
    except SkyfetchError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None
