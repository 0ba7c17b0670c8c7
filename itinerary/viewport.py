"""Camera framing for decoded itinerary geometry."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Sequence, Tuple

from config import (
    DEFAULT_REGION_LATITUDE,
    DEFAULT_REGION_LONGITUDE,
    DEFAULT_REGION_SPAN,
    INITIAL_REGION_SPAN,
    VIEWPORT_PADDING,
)
from itinerary.errors import NoGeometryError
from itinerary.model import RenderedLeg
from itinerary.polyline import Coordinate


@dataclass(frozen=True)
class Viewport:
    """Map region described by its centre and the degrees it spans."""

    center_latitude: float
    center_longitude: float
    latitude_span: float
    longitude_span: float

    @property
    def center(self) -> Coordinate:
        return Coordinate(self.center_latitude, self.center_longitude)

    def bounds(self) -> Tuple[Tuple[float, float], Tuple[float, float]]:
        """Return ``((min_lat, min_lng), (max_lat, max_lng))`` covered by the region."""

        half_lat = self.latitude_span / 2
        half_lng = self.longitude_span / 2
        return (
            (self.center_latitude - half_lat, self.center_longitude - half_lng),
            (self.center_latitude + half_lat, self.center_longitude + half_lng),
        )


DEFAULT_REGION = Viewport(
    DEFAULT_REGION_LATITUDE,
    DEFAULT_REGION_LONGITUDE,
    DEFAULT_REGION_SPAN,
    DEFAULT_REGION_SPAN,
)


def _flatten(legs: Iterable[RenderedLeg]) -> List[Coordinate]:
    flattened: List[Coordinate] = []
    for leg in legs:
        flattened.extend(leg.coordinates)
    return flattened


def compute_viewport(rendered_legs: Sequence[RenderedLeg], padding: float = VIEWPORT_PADDING) -> Viewport:
    points = _flatten(rendered_legs)
    if not points:
        raise NoGeometryError("No coordinates to frame")

    lats = [p.latitude for p in points]
    lngs = [p.longitude for p in points]
    min_lat, max_lat = min(lats), max(lats)
    min_lng, max_lng = min(lngs), max(lngs)

    return Viewport(
        center_latitude=(min_lat + max_lat) / 2,
        center_longitude=(min_lng + max_lng) / 2,
        latitude_span=max_lat - min_lat + padding,
        longitude_span=max_lng - min_lng + padding,
    )


def viewport_or_default(rendered_legs: Sequence[RenderedLeg]) -> Viewport:
    try:
        return compute_viewport(rendered_legs)
    except NoGeometryError:
        return DEFAULT_REGION


def initial_region(rendered_legs: Sequence[RenderedLeg]) -> Viewport:
    """Region shown before the camera animates to the fitted viewport."""

    if rendered_legs and rendered_legs[0].coordinates:
        first = rendered_legs[0].coordinates[0]
        return Viewport(first.latitude, first.longitude, INITIAL_REGION_SPAN, INITIAL_REGION_SPAN)
    return DEFAULT_REGION


__all__ = [
    "DEFAULT_REGION",
    "Viewport",
    "compute_viewport",
    "initial_region",
    "viewport_or_default",
]
