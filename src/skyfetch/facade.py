"""The single entry point for every space-data category.

:class:`SpaceDataClient` owns one :class:`~skyfetch.client.RequestPipeline`
(and through it one :class:`~skyfetch.cache.ResponseCache`) and exposes one
method per data category. Each method is a thin binding of an
:class:`~skyfetch.endpoints.Endpoint` from :mod:`skyfetch.endpoints.catalog`
to the caller's arguments.

Two kinds of accessors exist:

* **Data accessors** (:meth:`SpaceDataClient.mars_rover_photos`,
  :meth:`SpaceDataClient.comets`, ...) return the endpoint's payload and
  let :class:`~skyfetch.exceptions.RetriesExhausted` and
  :class:`~skyfetch.exceptions.PayloadError` propagate.
* **Image accessors** (:meth:`SpaceDataClient.apod`,
  :meth:`SpaceDataClient.planet_image`, ...) always return an
  :class:`~skyfetch.models.ImageResult`. When the lookup does not produce
  a usable image they substitute a fallback and record whether the fetch
  failed or the payload was unusable in ``fallback_reason``.
"""

from __future__ import annotations

import logging
from datetime import date, timedelta
from typing import Any, Callable, Optional, Union

from skyfetch.cache import ResponseCache
from skyfetch.client import RequestPipeline
from skyfetch.config import DEMO_API_KEY, load_global_config, resolve_api_key
from skyfetch.endpoints import catalog
from skyfetch.endpoints.base import Endpoint
from skyfetch.endpoints.images import (
    METEOR_DATES,
    PLANET_APOD_DATES,
    STAR_DATES,
    fallback_image,
    image_from_apod,
    pick_date,
)
from skyfetch.exceptions import InvalidUsageError, PayloadError, RetriesExhausted, SkyfetchError
from skyfetch.models import FallbackReason, GlobalConfig, ImageResult

logger = logging.getLogger(__name__)

DateLike = Union[str, date]


def _iso(value: Optional[DateLike]) -> Optional[str]:
    if isinstance(value, date):
        return value.isoformat()
    return value


def _parse_date(value: DateLike) -> date:
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(value)
    except ValueError as exc:
        raise InvalidUsageError(f"Invalid date '{value}', expected YYYY-MM-DD") from exc


class SpaceDataClient:
    """Facade over the space-data endpoints.

    Args:
        api_key: Key appended to api.nasa.gov requests. Defaults to
            :data:`~skyfetch.config.DEMO_API_KEY`.
        pipeline: Request pipeline to use. When omitted, one is built from
            ``config.request`` and closed by :meth:`close`.
        config: Settings for the pipeline and the cache.

    Example::

        with SpaceDataClient(api_key="...") as client:
            picture = client.apod("2024-01-01")
            flares = client.solar_flares("2024-01-01", "2024-01-31")
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        pipeline: Optional[RequestPipeline] = None,
        config: Optional[GlobalConfig] = None,
    ) -> None:
        self._config = config or GlobalConfig()
        self._api_key = api_key or DEMO_API_KEY
        self._owns_pipeline = pipeline is None
        self._pipeline = pipeline or RequestPipeline(config=self._config.request)

    @classmethod
    def from_config(cls, cli_api_key: Optional[str] = None) -> SpaceDataClient:
        """Build a client from the on-disk configuration.

        Raises:
            ConfigError: If the configuration or the API key source is invalid.
        """
        config = load_global_config()
        return cls(api_key=resolve_api_key(config, cli_api_key), config=config)

    @property
    def pipeline(self) -> RequestPipeline:
        return self._pipeline

    @property
    def cache(self) -> ResponseCache:
        return self._pipeline.cache

    # ------------------------------------------------------------------ #
    # Lifecycle
    # ------------------------------------------------------------------ #

    def __enter__(self) -> SpaceDataClient:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    def close(self) -> None:
        """Drop all cached responses and close the pipeline if this client built it."""
        self.clear_cache()
        if self._owns_pipeline:
            self._pipeline.close()

    def clear_cache(self) -> None:
        self._pipeline.cache.clear()

    def cache_size(self) -> int:
        return self._pipeline.cache.size()

    # ------------------------------------------------------------------ #
    # Generic fetch
    # ------------------------------------------------------------------ #

    def fetch(self, endpoint: Union[Endpoint, str], **values: Any) -> Any:
        """Fetch *endpoint* for *values* through the pipeline and apply its transform.

        Args:
            endpoint: An :class:`Endpoint` or the name it is registered
                under in :data:`skyfetch.endpoints.ENDPOINTS`.

        Raises:
            InvalidUsageError: If *endpoint* names no registered endpoint.
            RetriesExhausted: If every attempt failed.
            PayloadError: If the payload did not have the expected shape.
        """
        if isinstance(endpoint, str):
            try:
                endpoint = catalog.ENDPOINTS[endpoint]
            except KeyError:
                raise InvalidUsageError(f"Unknown endpoint '{endpoint}'") from None
        url = endpoint.build_url(values, self._api_key)
        cache_key = endpoint.build_cache_key(values) if self._config.cache.enabled else None
        ttl = endpoint.ttl if endpoint.ttl is not None else self._config.cache.default_ttl_seconds
        payload = self._pipeline.fetch_with_cache(url, cache_key=cache_key, ttl=ttl)
        return endpoint.apply(payload)

    # ------------------------------------------------------------------ #
    # Image accessors
    # ------------------------------------------------------------------ #

    def apod(self, on: Optional[DateLike] = None) -> ImageResult:
        """Astronomy Picture of the Day for *on* (today when omitted).

        Falls back to the Sun.
        """
        day = _iso(on)
        return self._image(
            lambda: self.fetch(catalog.APOD, date=day),
            title="Astronomy Picture of the Day",
            default_date=day,
            fallback_key="sun",
            fallback_title="The Sun",
        )

    def apod_range(self, start: DateLike, end: DateLike) -> list[ImageResult]:
        """One :meth:`apod` result per day from *start* to *end* inclusive.

        Raises:
            InvalidUsageError: If a date is not in ``YYYY-MM-DD`` form.
        """
        first, last = _parse_date(start), _parse_date(end)
        results = []
        day = first
        while day <= last:
            results.append(self.apod(day))
            day += timedelta(days=1)
        return results

    def planet_image(self, planet: str) -> ImageResult:
        """APOD image on the planet's curated date, else the planet's stand-in."""
        key = planet.lower()
        on = PLANET_APOD_DATES.get(key)
        if on is None:
            logger.info("No APOD date configured for %r, using fallback image", planet)
            return fallback_image(key, planet, FallbackReason.NOT_CONFIGURED)
        return self._image(
            lambda: self.fetch(catalog.APOD_IMAGE, date=on, kind="planet", subject=planet),
            title=planet,
            default_date=on,
            fallback_key=key,
            fallback_title=planet,
        )

    def meteorite_image(self, name: str) -> ImageResult:
        on = pick_date(name, METEOR_DATES)
        return self._image(
            lambda: self.fetch(catalog.APOD_IMAGE, date=on, kind="meteorite", subject=name),
            title=name,
            default_date=on,
            fallback_key="meteorite",
            fallback_title=name,
        )

    def star_image(self, name: str) -> ImageResult:
        on = pick_date(name, STAR_DATES)
        return self._image(
            lambda: self.fetch(catalog.APOD_IMAGE, date=on, kind="star", subject=name),
            title=name,
            default_date=on,
            fallback_key="star",
            fallback_title=name,
        )

    def enhanced_planet_data(self, planet: str) -> dict[str, Any]:
        """Planet image plus rover photos (Mars) or Earth imagery (Earth).

        Failures of the additional lookups are logged and replaced by an
        empty list (Mars) or ``None`` (Earth).
        """
        additional: dict[str, Any] = {}
        key = planet.lower()
        if key == "mars":
            try:
                photos = self.mars_rover_photos()
                additional["mars_photos"] = (photos or [])[:3]
            except SkyfetchError as exc:
                logger.warning("Mars rover photos unavailable: %s", exc)
                additional["mars_photos"] = []
        elif key == "earth":
            try:
                additional["earth_imagery"] = self.earth_imagery()
            except SkyfetchError as exc:
                logger.warning("Earth imagery unavailable: %s", exc)
                additional["earth_imagery"] = None
        return {"image_data": self.planet_image(planet), "additional_data": additional}

    def _image(
        self,
        fetch: Callable[[], Any],
        title: str,
        default_date: Optional[str],
        fallback_key: str,
        fallback_title: str,
    ) -> ImageResult:
        try:
            return image_from_apod(fetch(), title, default_date)
        except RetriesExhausted as exc:
            logger.warning("Image lookup for %r failed: %s", fallback_title, exc)
            return fallback_image(fallback_key, fallback_title, FallbackReason.FETCH_FAILED)
        except PayloadError as exc:
            logger.warning("Image lookup for %r returned no image: %s", fallback_title, exc)
            return fallback_image(fallback_key, fallback_title, FallbackReason.UNEXPECTED_PAYLOAD)

    # ------------------------------------------------------------------ #
    # Data accessors
    # ------------------------------------------------------------------ #

    def apod_raw(self, on: Optional[DateLike] = None) -> Any:
        """The undecorated APOD payload for *on*."""
        return self.fetch(catalog.APOD, date=_iso(on))

    def mars_rover_photos(
        self, rover: str = "curiosity", sol: int = 1000, camera: str = "fhaz"
    ) -> list[dict[str, Any]]:
        return self.fetch(catalog.MARS_PHOTOS, rover=rover, sol=sol, camera=camera)

    def near_earth_objects(
        self, start_date: Optional[DateLike] = None, end_date: Optional[DateLike] = None
    ) -> dict[str, Any]:
        """NEO feed grouped by date, as returned by the ``near_earth_objects`` field."""
        return self.fetch(
            catalog.NEO_FEED, start_date=_iso(start_date), end_date=_iso(end_date)
        )

    def space_weather_notifications(self) -> Any:
        return self.fetch(catalog.SPACE_WEATHER)

    def solar_system_events(self) -> Any:
        return self.fetch(catalog.SOLAR_EVENTS)

    def solar_flares(
        self,
        start_date: DateLike = catalog.DONKI_DEFAULT_START,
        end_date: DateLike = catalog.DONKI_DEFAULT_END,
    ) -> Any:
        return self.fetch(catalog.SOLAR_FLARES, startDate=_iso(start_date), endDate=_iso(end_date))

    def coronal_mass_ejections(
        self,
        start_date: DateLike = catalog.DONKI_DEFAULT_START,
        end_date: DateLike = catalog.DONKI_DEFAULT_END,
    ) -> Any:
        return self.fetch(
            catalog.CORONAL_MASS_EJECTIONS, startDate=_iso(start_date), endDate=_iso(end_date)
        )

    def geomagnetic_storms(
        self,
        start_date: DateLike = catalog.DONKI_DEFAULT_START,
        end_date: DateLike = catalog.DONKI_DEFAULT_END,
    ) -> Any:
        return self.fetch(
            catalog.GEOMAGNETIC_STORMS, startDate=_iso(start_date), endDate=_iso(end_date)
        )

    def earth_imagery(
        self,
        on: Optional[DateLike] = None,
        lat: Optional[float] = None,
        lon: Optional[float] = None,
        enhance: bool = True,
    ) -> Any:
        # enhance is only ever sent as true.
        return self.fetch(
            catalog.EARTH_IMAGERY,
            date=_iso(on),
            lat=lat,
            lon=lon,
            enhance=True if enhance else None,
        )

    def meteorites(self) -> list[dict[str, Any]]:
        return self.fetch(catalog.METEORITES)

    def stars(self) -> list[dict[str, Any]]:
        return self.fetch(catalog.STARS)

    def comets(self) -> list[dict[str, Any]]:
        return self.fetch(catalog.COMETS)

    def asteroids(self) -> list[dict[str, Any]]:
        return self.fetch(catalog.ASTEROIDS)
