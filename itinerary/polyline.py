"""Encoded polyline geometry.

https://developers.google.com/maps/documentation/utilities/polylinealgorithm
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Tuple

from itinerary.errors import DecodeBoundsError, PolylineDecodeError

PRECISION = 1e5
_ALPHABET_MIN = 63
_ALPHABET_MAX = 126


@dataclass(frozen=True)
class Coordinate:
    """A WGS84 point in decimal degrees."""

    latitude: float
    longitude: float

    def as_tuple(self) -> Tuple[float, float]:
        return (self.latitude, self.longitude)


def _read_value(polyline: str, index: int) -> Tuple[int, int]:
    shift = result = 0
    length = len(polyline)
    while True:
        if index >= length:
            raise DecodeBoundsError(index, length)
        char = polyline[index]
        code = ord(char)
        if code < _ALPHABET_MIN or code > _ALPHABET_MAX:
            raise PolylineDecodeError(f"Invalid polyline character {char!r} at index {index}")
        b = code - _ALPHABET_MIN
        index += 1
        result |= (b & 0x1F) << shift
        shift += 5
        if b < 0x20:
            break

    delta = ~(result >> 1) if result & 1 else result >> 1
    return delta, index


def decode_polyline(polyline: str) -> List[Coordinate]:
    points: List[Coordinate] = []
    index = 0
    lat = lng = 0

    while index < len(polyline):
        dlat, index = _read_value(polyline, index)
        dlng, index = _read_value(polyline, index)
        lat += dlat
        lng += dlng
        points.append(Coordinate(lat / PRECISION, lng / PRECISION))

    return points


def _encode_value(value: int) -> List[str]:
    value = ~(value << 1) if value < 0 else value << 1
    chunks: List[str] = []
    while value >= 0x20:
        chunks.append(chr((0x20 | (value & 0x1F)) + _ALPHABET_MIN))
        value >>= 5
    chunks.append(chr(value + _ALPHABET_MIN))
    return chunks


def encode_polyline(coordinates: Iterable[Coordinate | Tuple[float, float]]) -> str:
    """Encode ``(lat, lng)`` pairs or :class:`Coordinate` values."""

    encoded: List[str] = []
    prev_lat = prev_lng = 0

    for point in coordinates:
        if isinstance(point, Coordinate):
            lat, lng = point.latitude, point.longitude
        else:
            lat, lng = point
        lat_int = int(round(lat * PRECISION))
        lng_int = int(round(lng * PRECISION))
        encoded.extend(_encode_value(lat_int - prev_lat))
        encoded.extend(_encode_value(lng_int - prev_lng))
        prev_lat, prev_lng = lat_int, lng_int

    return "".join(encoded)


__all__ = ["Coordinate", "PRECISION", "decode_polyline", "encode_polyline"]
