"""Explicit state for the itinerary map screen and its transitions.

Every transition is a pure function taking the current :class:`ScreenState`
and returning a new one, so the screen can be driven and tested without a
display attached.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Any, Dict, Optional, Tuple

from config import NO_ROUTE_MESSAGE
from itinerary.errors import MalformedItineraryError
from itinerary.model import (
    ItineraryPayload,
    OverviewPolyline,
    RawItinerary,
    RenderedLeg,
    build_rendered_legs,
    parse_itinerary,
)
from itinerary.selection import (
    EMPTY_SELECTION,
    SelectionState,
    build_booking_payload,
    toggle_selection,
)
from itinerary.viewport import DEFAULT_REGION, Viewport, initial_region, viewport_or_default


@dataclass(frozen=True)
class NavigationParams:
    """Parameters the screen is opened with."""

    id: Optional[str] = None
    route: Optional[str] = None
    overview_polyline: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "NavigationParams":
        return cls(
            id=data.get("id"),
            route=data.get("route"),
            overview_polyline=data.get("overview_polyline"),
        )

    def payload(self) -> ItineraryPayload:
        """Pick the itinerary form to load; a structured route wins over an overview."""

        if self.route:
            if self.overview_polyline:
                logging.warning(
                    "Route %s supplied both a route and an overview polyline; using the route.",
                    self.id,
                )
            return self.route
        if self.overview_polyline:
            return OverviewPolyline(self.overview_polyline)
        return None


@dataclass(frozen=True)
class ScreenState:
    loading: bool = True
    itinerary: Optional[RawItinerary] = None
    rendered_legs: Tuple[RenderedLeg, ...] = ()
    viewport: Viewport = DEFAULT_REGION
    initial_region: Viewport = DEFAULT_REGION
    selection: SelectionState = EMPTY_SELECTION
    details_visible: bool = False
    error: Optional[str] = None

    @property
    def has_route(self) -> bool:
        return not self.loading and self.error is None

    @property
    def can_book(self) -> bool:
        return bool(self.selection.selected_legs)


INITIAL_STATE = ScreenState()


def begin_loading(state: ScreenState) -> ScreenState:
    return replace(state, loading=True)


def load_payload(state: ScreenState, payload: ItineraryPayload) -> ScreenState:
    """Rebuild legs for a new payload, resetting the selection."""

    if payload is None or (isinstance(payload, str) and not payload.strip()):
        logging.info("🗺️  No route payload supplied.")
        return replace(INITIAL_STATE, loading=False, error=NO_ROUTE_MESSAGE)

    try:
        itinerary = None if isinstance(payload, OverviewPolyline) else parse_itinerary(payload)
        legs = tuple(build_rendered_legs(itinerary if itinerary is not None else payload))
    except MalformedItineraryError as exc:
        logging.warning("🗺️  Could not load route: %s", exc)
        return replace(INITIAL_STATE, loading=False, error=NO_ROUTE_MESSAGE)

    logging.info(
        "🗺️  Loaded %d leg(s), %d point(s).",
        len(legs),
        sum(len(leg.coordinates) for leg in legs),
    )
    return ScreenState(
        loading=False,
        itinerary=itinerary,
        rendered_legs=legs,
        viewport=viewport_or_default(legs),
        initial_region=initial_region(legs),
        selection=EMPTY_SELECTION,
        details_visible=state.details_visible,
        error=None,
    )


def toggle_leg(state: ScreenState, index: int) -> ScreenState:
    if state.itinerary is None:
        return state
    try:
        leg = state.itinerary.legs[index]
    except IndexError:
        logging.warning("Ignoring selection of unknown leg %d", index)
        return state
    selection = toggle_selection(leg, state.selection, state.itinerary)
    if selection is state.selection:
        return state
    return replace(state, selection=selection)


def show_details(state: ScreenState) -> ScreenState:
    return replace(state, details_visible=True)


def hide_details(state: ScreenState) -> ScreenState:
    return replace(state, details_visible=False)


def confirm_booking(state: ScreenState) -> Tuple[ScreenState, Dict[str, Any]]:
    """Close the details sheet and return the payload for the booking screen."""

    payload = build_booking_payload(state.selection)
    return hide_details(state), payload


__all__ = [
    "INITIAL_STATE",
    "NavigationParams",
    "ScreenState",
    "begin_loading",
    "confirm_booking",
    "hide_details",
    "load_payload",
    "show_details",
    "toggle_leg",
]
