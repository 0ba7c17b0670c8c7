"""Text shown in the journey details sheet."""

from __future__ import annotations

import datetime
import math
from dataclasses import dataclass
from typing import List, Optional

from config import CURRENCY_SYMBOL, LOCAL_TIMEZONE
from itinerary.model import RawItinerary, RawLeg
from itinerary.modes import TransitMode
from itinerary.selection import SelectionState, is_selected


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def format_distance(meters: float) -> str:
    if meters > 1000:
        return f"{_round_half_up(meters / 1000)} km"
    return f"{_round_half_up(meters)} m"


def format_duration_minutes(seconds: float) -> str:
    return f"{_round_half_up(seconds / 60)} min"


def format_amount(value: Optional[float]) -> str:
    return f"{CURRENCY_SYMBOL}{(value or 0.0):.2f}"


def format_clock(epoch_ms: int, tz=LOCAL_TIMEZONE) -> str:
    moment = datetime.datetime.fromtimestamp(epoch_ms / 1000, tz=datetime.timezone.utc)
    return moment.astimezone(tz).strftime("%H:%M")


def describe_leg(leg: RawLeg) -> str:
    mode = leg.transit_mode
    if mode is TransitMode.WALK:
        title = "Walk"
    elif mode is TransitMode.BUS:
        name = f"Bus {leg.route_short_name}" if leg.route_short_name else "Bus"
        title = f"{name} · {leg.route}"
    else:
        title = leg.route
    return f"{title} · {format_distance(leg.distance)}"


@dataclass(frozen=True)
class LegRow:
    """One row of the journey details list."""

    description: str
    places: str
    times: str
    icon: str
    selectable: bool
    selected: bool
    show_connector: bool


@dataclass(frozen=True)
class ItinerarySummary:
    duration: str
    distance: str
    cost: str


def summarize_itinerary(itinerary: RawItinerary) -> ItinerarySummary:
    return ItinerarySummary(
        duration=format_duration_minutes(itinerary.duration),
        distance=format_distance(itinerary.total_distance),
        cost=format_amount(itinerary.total_cost),
    )


def leg_rows(itinerary: RawItinerary, selection: SelectionState) -> List[LegRow]:
    rows: List[LegRow] = []
    last = len(itinerary.legs) - 1
    for index, leg in enumerate(itinerary.legs):
        rows.append(
            LegRow(
                description=describe_leg(leg),
                places=f"{leg.from_place.name} → {leg.to_place.name}",
                times=f"{format_clock(leg.start_time)} - {format_clock(leg.end_time)}",
                icon=leg.transit_mode.style.icon,
                selectable=leg.bookable,
                selected=is_selected(leg, selection),
                show_connector=index != last,
            )
        )
    return rows


def book_button_label(selection: SelectionState) -> str:
    if not selection.selected_legs:
        return "Select Transport Modes to Book"
    return f"Book Now for {format_amount(selection.total_amount)}"


__all__ = [
    "ItinerarySummary",
    "LegRow",
    "book_button_label",
    "describe_leg",
    "format_amount",
    "format_clock",
    "format_distance",
    "format_duration_minutes",
    "leg_rows",
    "summarize_itinerary",
]
