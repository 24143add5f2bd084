"""Payload transforms for the catalog endpoints.

Each ``format_*`` function receives the decoded response of its endpoint
and returns a short list of flat, display-ready records. Absent fields are
rendered as ``"Unknown"`` rather than omitted so that every record of a
catalog has the same keys. Derived keys are camelCase to match the upstream
field names (``specialFeature``, ``orbitalPeriod``).

The transforms index into the payload directly; a payload of the wrong
shape raises ``KeyError`` or ``TypeError``, which
:meth:`~skyfetch.endpoints.base.Endpoint.apply` turns into
:class:`~skyfetch.exceptions.PayloadError`.
"""

from __future__ import annotations

from typing import Any

UNKNOWN = "Unknown"

METEORITE_LIMIT = 10
STAR_LIMIT = 6
COMET_LIMIT = 5
ASTEROID_LIMIT = 5


def _known(value: Any) -> bool:
    return value is not None and value != "" and value != 0


def _or_unknown(value: Any) -> Any:
    return value if _known(value) else UNKNOWN


def _quantity(value: Any, unit: str = "") -> str:
    """Render a measured quantity from the catalog.

    Accepts ``{"value", "unit"}`` objects, ``{"massValue", "massExponent"}``
    objects (kg) and bare numbers, which take *unit*.
    """
    if isinstance(value, dict):
        if "massValue" in value:
            return f"{value['massValue']}e{value.get('massExponent', 0)} kg"
        if "value" in value:
            return f"{value['value']} {value.get('unit', unit)}".strip()
        return UNKNOWN
    if _known(value):
        return f"{value} {unit}".strip()
    return UNKNOWN


def _location(meteorite: dict[str, Any]) -> str:
    geo = meteorite.get("geolocation")
    if isinstance(geo, dict) and "latitude" in geo and "longitude" in geo:
        return f"{geo['latitude']}, {geo['longitude']}"
    if _known(geo):
        return str(geo)
    if _known(meteorite.get("reclat")) and _known(meteorite.get("reclong")):
        return f"{meteorite['reclat']}, {meteorite['reclong']}"
    return UNKNOWN


def _mass_kg(grams: Any) -> str:
    if not _known(grams):
        return UNKNOWN
    try:
        kilograms = float(grams) / 1000
    except (TypeError, ValueError):
        return UNKNOWN
    return f"{kilograms:.2f} kg"


def format_meteorite(meteorite: dict[str, Any]) -> dict[str, Any]:
    recclass = meteorite.get("recclass")
    location = _location(meteorite)
    return {
        "name": meteorite["name"],
        "type": recclass or UNKNOWN,
        "location": location,
        "date": meteorite.get("year") or UNKNOWN,
        "size": _mass_kg(meteorite.get("mass")),
        "description": (
            f"A {recclass or 'unknown'} type meteorite that fell in "
            f"{location if location != UNKNOWN else 'an unknown location'}."
        ),
        "composition": f"Classification: {recclass}" if recclass else "Unknown composition",
        "impact": f"Fall type: {meteorite['fall']}" if meteorite.get("fall") else "Unknown impact details",
    }


def format_meteorites(payload: list[dict[str, Any]]) -> list[dict[str, Any]]:
    """Format the first meteorite landings from the data.nasa.gov feed."""
    return [format_meteorite(m) for m in payload[:METEORITE_LIMIT]]


def format_star(star: dict[str, Any]) -> dict[str, Any]:
    moons = star.get("moons")
    return {
        "name": star["englishName"],
        "type": star.get("bodyType"),
        "distance": _quantity(star.get("distanceFromSun")),
        "magnitude": _or_unknown(star.get("magnitude")),
        "description": f"A {star.get('bodyType')} in our cosmic neighborhood.",
        "properties": {
            "mass": _quantity(star.get("mass")),
            "radius": _quantity(star.get("meanRadius"), "km"),
            "temperature": _quantity(star.get("avgTemp"), "K"),
            "luminosity": (
                f"{star['luminosity']} solar luminosities"
                if _known(star.get("luminosity"))
                else UNKNOWN
            ),
            "age": _or_unknown(star.get("age")),
            "planets": f"{len(moons)} known planets" if moons is not None else "No confirmed planets",
        },
        "specialFeature": (
            f"Discovered in {star['discoveryDate']}" if star.get("discoveryDate") else "Ancient star"
        ),
    }


def format_stars(payload: dict[str, Any]) -> list[dict[str, Any]]:
    return [format_star(s) for s in payload["bodies"][:STAR_LIMIT]]


def format_small_body(body: dict[str, Any], kind: str) -> dict[str, Any]:
    """Shared record for comets and asteroids.

    Args:
        body: One entry of the ``bodies`` array.
        kind: Noun with article used in the description, e.g. ``"A comet"``.
    """
    orbit = body.get("sideralOrbit")
    return {
        "name": body["englishName"],
        "type": body.get("bodyType"),
        "orbitalPeriod": f"{orbit} days" if _known(orbit) else UNKNOWN,
        "perihelion": _quantity(body.get("perihelion"), "AU"),
        "description": (
            f"{kind} with an orbital period of {orbit if _known(orbit) else 'unknown'} days."
        ),
        "properties": {
            "mass": _quantity(body.get("mass")),
            "radius": _quantity(body.get("meanRadius"), "km"),
            "temperature": _quantity(body.get("avgTemp"), "K"),
            "eccentricity": _or_unknown(body.get("eccentricity")),
            "inclination": (
                f"{body['inclination']}°" if _known(body.get("inclination")) else UNKNOWN
            ),
        },
    }


def format_comets(payload: dict[str, Any]) -> list[dict[str, Any]]:
    return [format_small_body(b, "A comet") for b in payload["bodies"][:COMET_LIMIT]]


def format_asteroids(payload: dict[str, Any]) -> list[dict[str, Any]]:
    return [format_small_body(b, "An asteroid") for b in payload["bodies"][:ASTEROID_LIMIT]]
