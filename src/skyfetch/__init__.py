"""skyfetch -- one cached, retrying client for public space-data APIs.

This package wraps NASA's APOD, Mars rover photo, NEO, DONKI space-weather
and Earth imagery endpoints, the data.nasa.gov meteorite landings feed and
the le-systeme-solaire.net body catalog behind
:class:`~skyfetch.facade.SpaceDataClient`. Every request goes through a
pipeline that checks an in-memory response cache, retries failures with
exponential backoff and caches the decoded result.

Typical usage::

    from skyfetch.facade import SpaceDataClient

    with SpaceDataClient(api_key="DEMO_KEY") as client:
        picture = client.apod()
        comets = client.comets()

Modules:
    app: Typer application and CLI entry point.
    facade: :class:`SpaceDataClient`, the per-category accessors.
    client: Blocking and non-blocking request pipelines.
    cache: The in-memory response cache.
    endpoints: Endpoint table and payload transforms.
    models: Pydantic configuration models and result types.
    config: XDG-aware configuration and API key resolution.
    exceptions: Exception hierarchy with exit-code mapping.
    output: stdout/stderr formatting system with Rich support.
"""

__version__ = "0.1.0"
