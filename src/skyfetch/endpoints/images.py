"""Image lookups resolved through the Astronomy Picture of the Day.

Planets, meteorites and stars have no image endpoint of their own. Their
images come from APOD entries on fixed dates: each planet has a curated
date, while meteorites and stars pick one of a handful of themed dates
from a checksum of their name. When the lookup fails, a NASA image
library picture stands in.
"""

from __future__ import annotations

from datetime import date
from typing import Any, Optional, Sequence

from skyfetch.exceptions import PayloadError
from skyfetch.models import FallbackReason, ImageResult, ImageSource

PLANET_APOD_DATES = {
    "sun": "2023-05-01",
    "mercury": "2023-05-08",
    "venus": "2022-06-03",
    "earth": "2022-04-22",
    "mars": "2022-07-06",
    "jupiter": "2022-09-25",
    "saturn": "2022-08-15",
    "uranus": "2022-10-04",
    "neptune": "2022-09-14",
}

_IMAGE_LIBRARY = "https://images-assets.nasa.gov/image/{0}/{0}~orig.jpg"

FALLBACK_IMAGES = {
    "sun": _IMAGE_LIBRARY.format("PIA12348"),
    "mercury": _IMAGE_LIBRARY.format("PIA19254"),
    "venus": _IMAGE_LIBRARY.format("PIA00271"),
    "earth": _IMAGE_LIBRARY.format("PIA00133"),
    "mars": _IMAGE_LIBRARY.format("PIA04253"),
    "jupiter": _IMAGE_LIBRARY.format("PIA02863"),
    "saturn": _IMAGE_LIBRARY.format("PIA03550"),
    "uranus": _IMAGE_LIBRARY.format("PIA01279"),
    "neptune": _IMAGE_LIBRARY.format("PIA01492"),
    "meteorite": _IMAGE_LIBRARY.format("PIA02194"),
    "star": _IMAGE_LIBRARY.format("PIA04206"),
}

# Chelyabinsk anniversary and the major meteor showers.
METEOR_DATES = (
    "2023-02-15",
    "2023-11-18",
    "2023-08-12",
    "2023-01-04",
    "2023-10-21",
    "2023-05-06",
)

# Solstices, equinoxes, a full moon and new year.
STAR_DATES = (
    "2023-06-21",
    "2023-12-21",
    "2023-03-20",
    "2023-09-23",
    "2023-08-31",
    "2023-01-01",
)


def pick_date(name: str, dates: Sequence[str]) -> str:
    """Choose one of *dates* from the sum of the code points of *name*."""
    checksum = sum(ord(ch) for ch in name)
    return dates[checksum % len(dates)]


def today() -> str:
    return date.today().isoformat()


def image_from_apod(payload: Any, default_title: str, default_date: Optional[str]) -> ImageResult:
    """Build an :class:`ImageResult` from a decoded APOD payload.

    Missing ``title`` and ``date`` fall back to the given defaults; a
    missing ``url`` means the payload is unusable.

    Raises:
        PayloadError: If the payload is not an object with a ``url``.
    """
    if not isinstance(payload, dict) or not payload.get("url"):
        raise PayloadError("APOD payload has no url", "apod")
    return ImageResult(
        url=payload["url"],
        title=payload.get("title") or default_title,
        date=payload.get("date") or default_date or today(),
        source=ImageSource.API,
    )


def fallback_image(key: str, title: str, reason: FallbackReason) -> ImageResult:
    """Return the stand-in image for *key* (the Sun when *key* has none)."""
    return ImageResult(
        url=FALLBACK_IMAGES.get(key, FALLBACK_IMAGES["sun"]),
        title=title,
        date=today(),
        source=ImageSource.FALLBACK,
        fallback_reason=reason,
    )
