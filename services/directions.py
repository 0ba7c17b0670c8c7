"""Hand a leg's endpoints to an external maps application."""

from __future__ import annotations

import logging
import webbrowser
from typing import Callable, Optional, Tuple

import requests

from config import DIRECTIONS_BASE_URL, OPEN_DIRECTIONS_IN_BROWSER
from itinerary.model import RawLeg

Opener = Callable[[str], object]


def directions_coordinates(leg: RawLeg) -> Tuple[float, float, float, float]:
    """Return ``(from_lat, from_lon, to_lat, to_lon)`` exactly as the leg carries them."""

    return (leg.from_place.lat, leg.from_place.lon, leg.to_place.lat, leg.to_place.lon)


def build_directions_url(
    from_lat: float,
    from_lon: float,
    to_lat: float,
    to_lon: float,
    base_url: str = DIRECTIONS_BASE_URL,
) -> str:
    prepared = requests.Request(
        "GET",
        base_url,
        params={
            "api": 1,
            "origin": f"{from_lat},{from_lon}",
            "destination": f"{to_lat},{to_lon}",
        },
    ).prepare()
    return prepared.url


def open_directions(leg: RawLeg, opener: Optional[Opener] = None) -> Optional[str]:
    """Open turn-by-turn directions for *leg*.

    Returns the URL handed to the opener, or ``None`` when opening is disabled
    or the opener failed.
    """

    url = build_directions_url(*directions_coordinates(leg))

    if opener is None:
        if not OPEN_DIRECTIONS_IN_BROWSER:
            logging.info("🧭 Directions available at %s", url)
            return None
        opener = webbrowser.open

    try:
        opener(url)
    except Exception as exc:
        logging.error("Error opening directions for %s → %s: %s", leg.from_place.name, leg.to_place.name, exc)
        return None

    logging.info("🧭 Opened directions %s → %s", leg.from_place.name, leg.to_place.name)
    return url


__all__ = ["build_directions_url", "directions_coordinates", "open_directions"]
