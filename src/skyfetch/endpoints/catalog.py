"""The endpoint table: one :class:`~skyfetch.endpoints.base.Endpoint` per data category."""

from __future__ import annotations

from skyfetch.endpoints import formatters
from skyfetch.endpoints.base import Endpoint

NASA_API = "https://api.nasa.gov"
DONKI = f"{NASA_API}/DONKI"
SOLAR_SYSTEM_API = "https://api.le-systeme-solaire.net/rest/bodies"

HOUR = 3600.0
DAY = 24 * HOUR

# DONKI feeds cover this window unless the caller asks for another one.
DONKI_DEFAULT_START = "2023-01-01"
DONKI_DEFAULT_END = "2023-12-31"

APOD = Endpoint(
    name="apod",
    url=f"{NASA_API}/planetary/apod",
    query=("date",),
    cache_key="apod_{date}",
    key_defaults={"date": "today"},
)

# Same request as APOD, cached under the subject the image was looked up for.
APOD_IMAGE = Endpoint(
    name="apod_image",
    url=f"{NASA_API}/planetary/apod",
    query=("date",),
    cache_key="{kind}_{subject}",
)

MARS_PHOTOS = Endpoint(
    name="mars_photos",
    url=f"{NASA_API}/mars-photos/api/v1/rovers/{{rover}}/photos",
    query=("sol", "camera"),
    cache_key="mars_{rover}_{sol}_{camera}",
    transform=lambda payload: payload["photos"],
)

NEO_FEED = Endpoint(
    name="neo_feed",
    url=f"{NASA_API}/neo/rest/v1/feed",
    query=("start_date", "end_date"),
    cache_key="neo_{start_date}_{end_date}",
    key_defaults={"start_date": "today", "end_date": "today"},
    transform=lambda payload: payload["near_earth_objects"],
)

SPACE_WEATHER = Endpoint(
    name="space_weather",
    url=f"{DONKI}/notifications",
    cache_key="space_weather",
    ttl=HOUR / 2,
)

SOLAR_EVENTS = Endpoint(
    name="solar_events",
    url=f"{DONKI}/events",
    cache_key="solar_events",
)


def _donki_feed(name: str, feed: str) -> Endpoint:
    return Endpoint(
        name=name,
        url=f"{DONKI}/{feed}",
        query=("startDate", "endDate"),
        cache_key=f"{name}_{{startDate}}_{{endDate}}",
        ttl=HOUR,
    )


SOLAR_FLARES = _donki_feed("solar_flares", "FLR")
CORONAL_MASS_EJECTIONS = _donki_feed("cme", "CME")
GEOMAGNETIC_STORMS = _donki_feed("geomagnetic_storms", "GST")

EARTH_IMAGERY = Endpoint(
    name="earth_imagery",
    url=f"{NASA_API}/planetary/earth/imagery",
    query=("lat", "lon", "date", "enhance"),
    cache_key="earth_{date}_{lat}_{lon}",
    key_defaults={"date": "latest", "lat": "any", "lon": "any"},
)

METEORITES = Endpoint(
    name="meteorites",
    url="https://data.nasa.gov/resource/gh4g-9sfh.json",
    cache_key="meteorites",
    ttl=DAY,
    requires_key=False,
    transform=formatters.format_meteorites,
)

STARS = Endpoint(
    name="stars",
    url=SOLAR_SYSTEM_API,
    static_query=(("filter[]", "isPlanet,false"), ("filter[]", "bodyType,Star")),
    cache_key="stars",
    ttl=DAY,
    requires_key=False,
    transform=formatters.format_stars,
)

COMETS = Endpoint(
    name="comets",
    url=SOLAR_SYSTEM_API,
    static_query=(("filter[]", "bodyType,Comet"),),
    cache_key="comets",
    ttl=DAY,
    requires_key=False,
    transform=formatters.format_comets,
)

ASTEROIDS = Endpoint(
    name="asteroids",
    url=SOLAR_SYSTEM_API,
    static_query=(("filter[]", "bodyType,Asteroid"),),
    cache_key="asteroids",
    ttl=DAY,
    requires_key=False,
    transform=formatters.format_asteroids,
)

ENDPOINTS = {
    endpoint.name: endpoint
    for endpoint in (
        APOD,
        APOD_IMAGE,
        MARS_PHOTOS,
        NEO_FEED,
        SPACE_WEATHER,
        SOLAR_EVENTS,
        SOLAR_FLARES,
        CORONAL_MASS_EJECTIONS,
        GEOMAGNETIC_STORMS,
        EARTH_IMAGERY,
        METEORITES,
        STARS,
        COMETS,
        ASTEROIDS,
    )
}
