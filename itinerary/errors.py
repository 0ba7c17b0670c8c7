"""Exceptions raised while decoding and aggregating itineraries."""

from __future__ import annotations


class ItineraryError(Exception):
    """Base class for itinerary failures."""


class MalformedItineraryError(ItineraryError):
    """The payload is present but cannot be parsed into an itinerary."""


class NoGeometryError(ItineraryError):
    """There are no decoded coordinates to frame a map around."""


class EmptySelectionError(ItineraryError):
    """A booking was requested without any selected legs."""


class PolylineDecodeError(ItineraryError, ValueError):
    """The encoded polyline is not valid."""


class DecodeBoundsError(PolylineDecodeError):
    """Decoding would read past the end of the encoded string."""

    def __init__(self, index: int, length: int):
        super().__init__(
            f"Polyline ended mid-value at index {index} (length {length})"
        )
        self.index = index
        self.length = length


__all__ = [
    "DecodeBoundsError",
    "EmptySelectionError",
    "ItineraryError",
    "MalformedItineraryError",
    "NoGeometryError",
    "PolylineDecodeError",
]
