"""Parse itinerary payloads and build the legs drawn on the map."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

from itinerary.errors import MalformedItineraryError, PolylineDecodeError
from itinerary.modes import DEFAULT_ROUTE_COLOR, TransitMode
from itinerary.polyline import Coordinate, decode_polyline


def _coerce_float(value: Any, field_name: str, default: Optional[float] = None) -> Optional[float]:
    if value is None:
        return default
    if isinstance(value, bool):
        raise MalformedItineraryError(f"{field_name} must be numeric, got {value!r}")
    try:
        return float(value)
    except (TypeError, ValueError):
        raise MalformedItineraryError(f"{field_name} must be numeric, got {value!r}") from None


def _coerce_int(value: Any, field_name: str) -> int:
    if value is None or isinstance(value, bool):
        raise MalformedItineraryError(f"{field_name} must be an epoch timestamp, got {value!r}")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise MalformedItineraryError(
            f"{field_name} must be an epoch timestamp, got {value!r}"
        ) from None


@dataclass(frozen=True)
class LegEndpoint:
    """Named origin or destination of a leg."""

    name: str
    lat: float
    lon: float

    @classmethod
    def from_dict(cls, data: Any, field_name: str) -> "LegEndpoint":
        if not isinstance(data, Mapping):
            raise MalformedItineraryError(f"{field_name} must be an object")
        if data.get("lat") is None or data.get("lon") is None:
            raise MalformedItineraryError(f"{field_name} is missing lat/lon")
        return cls(
            name=str(data.get("name") or ""),
            lat=_coerce_float(data.get("lat"), f"{field_name}.lat"),
            lon=_coerce_float(data.get("lon"), f"{field_name}.lon"),
        )


@dataclass(frozen=True)
class RawLeg:
    """One leg of a structured itinerary as supplied by the planner."""

    mode: str
    leg_geometry_points: str
    distance: float
    start_time: int
    end_time: int
    route: str
    from_place: LegEndpoint
    to_place: LegEndpoint
    route_short_name: Optional[str] = None
    raw: Dict[str, Any] = field(default_factory=dict, compare=False, hash=False, repr=False)

    @property
    def identity(self) -> Tuple[int, int]:
        return (self.start_time, self.end_time)

    @property
    def transit_mode(self) -> TransitMode:
        return TransitMode.from_value(self.mode)

    @property
    def bookable(self) -> bool:
        return self.transit_mode.bookable

    @classmethod
    def from_dict(cls, data: Any) -> "RawLeg":
        if not isinstance(data, Mapping):
            raise MalformedItineraryError("Each leg must be an object")

        points = data.get("legGeometryPoints")
        geometry = data.get("legGeometry")
        if points is None and isinstance(geometry, Mapping):
            points = geometry.get("points")
        if not isinstance(points, str):
            raise MalformedItineraryError("Leg is missing its encoded geometry")

        short_name = data.get("routeShortName")
        return cls(
            mode=str(data.get("mode") or ""),
            leg_geometry_points=points,
            distance=_coerce_float(data.get("distance"), "distance", 0.0),
            start_time=_coerce_int(data.get("startTime"), "startTime"),
            end_time=_coerce_int(data.get("endTime"), "endTime"),
            route=str(data.get("route") or ""),
            route_short_name=str(short_name) if short_name is not None else None,
            from_place=LegEndpoint.from_dict(data.get("from"), "from"),
            to_place=LegEndpoint.from_dict(data.get("to"), "to"),
            raw=dict(data),
        )

    def to_dict(self) -> Dict[str, Any]:
        if self.raw:
            return dict(self.raw)
        return {
            "mode": self.mode,
            "legGeometry": {"points": self.leg_geometry_points},
            "distance": self.distance,
            "startTime": self.start_time,
            "endTime": self.end_time,
            "route": self.route,
            "routeShortName": self.route_short_name,
            "from": {"name": self.from_place.name, "lat": self.from_place.lat, "lon": self.from_place.lon},
            "to": {"name": self.to_place.name, "lat": self.to_place.lat, "lon": self.to_place.lon},
        }


@dataclass(frozen=True)
class RawItinerary:
    """Structured itinerary: ordered legs plus trip totals."""

    duration: float
    legs: Tuple[RawLeg, ...]
    total_cost: Optional[float] = None
    raw: Dict[str, Any] = field(default_factory=dict, compare=False, hash=False, repr=False)

    @property
    def total_distance(self) -> float:
        return sum(leg.distance for leg in self.legs)

    @classmethod
    def from_dict(cls, data: Any) -> "RawItinerary":
        if not isinstance(data, Mapping):
            raise MalformedItineraryError("Itinerary must be an object")

        legs_blob = data.get("legs")
        if legs_blob is None:
            legs_blob = []
        if not isinstance(legs_blob, list):
            raise MalformedItineraryError("Itinerary legs must be a list")

        return cls(
            duration=_coerce_float(data.get("duration"), "duration", 0.0),
            legs=tuple(RawLeg.from_dict(leg) for leg in legs_blob),
            total_cost=_coerce_float(data.get("totalCost"), "totalCost"),
            raw=dict(data),
        )


@dataclass(frozen=True)
class OverviewPolyline:
    """Flat itinerary: one encoded path with no leg breakdown."""

    points: str


@dataclass(frozen=True)
class RenderedLeg:
    """Decoded geometry for one leg, ready to draw."""

    coordinates: Tuple[Coordinate, ...]
    color: str
    mode: Optional[str] = None


ItineraryPayload = Union[RawItinerary, OverviewPolyline, Mapping[str, Any], str, None]


def parse_itinerary(payload: Union[Mapping[str, Any], str, bytes]) -> RawItinerary:
    """Parse a structured itinerary from a JSON string or mapping."""

    if isinstance(payload, RawItinerary):
        return payload
    if isinstance(payload, (str, bytes)):
        try:
            payload = json.loads(payload)
        except (TypeError, ValueError) as exc:
            raise MalformedItineraryError(f"Itinerary is not valid JSON: {exc}") from exc
    return RawItinerary.from_dict(payload)


def _decode_leg(points: str, position: int) -> Tuple[Coordinate, ...]:
    try:
        return tuple(decode_polyline(points))
    except PolylineDecodeError as exc:
        logging.warning("Itinerary: failed to decode geometry for leg %d: %s", position, exc)
        raise MalformedItineraryError(f"Leg {position} has malformed geometry") from exc


def build_rendered_legs(raw: ItineraryPayload) -> List[RenderedLeg]:
    """Decode every leg of *raw* into coloured coordinate runs.

    A flat :class:`OverviewPolyline` yields a single leg with the default
    colour. Structured itineraries yield one leg per planner leg, coloured by
    mode. Any leg that fails to decode fails the whole build.
    """

    if raw is None:
        return []

    if isinstance(raw, OverviewPolyline):
        if not raw.points:
            return []
        return [RenderedLeg(_decode_leg(raw.points, 0), DEFAULT_ROUTE_COLOR, None)]

    if isinstance(raw, str) and not raw.strip():
        return []

    itinerary = parse_itinerary(raw)
    return [
        RenderedLeg(
            coordinates=_decode_leg(leg.leg_geometry_points, position),
            color=leg.transit_mode.color,
            mode=leg.mode,
        )
        for position, leg in enumerate(itinerary.legs)
    ]


__all__ = [
    "ItineraryPayload",
    "LegEndpoint",
    "OverviewPolyline",
    "RawItinerary",
    "RawLeg",
    "RenderedLeg",
    "build_rendered_legs",
    "parse_itinerary",
]
