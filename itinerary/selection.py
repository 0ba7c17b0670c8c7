"""Leg selection, booking totals and the booking hand-off payload."""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Any, Dict, List, Optional, Tuple

from itinerary.errors import EmptySelectionError
from itinerary.model import RawItinerary, RawLeg


@dataclass(frozen=True)
class SelectionState:
    """Legs chosen for booking, in the order they were picked.

    Legs are matched by ``(start_time, end_time)`` rather than object identity
    because they are rebuilt whenever the itinerary is parsed again. Walking
    legs never appear in ``selected_legs``.
    """

    selected_legs: Tuple[RawLeg, ...] = ()
    total_amount: float = 0.0

    @property
    def identities(self) -> Tuple[Tuple[int, int], ...]:
        return tuple(leg.identity for leg in self.selected_legs)

    def __len__(self) -> int:
        return len(self.selected_legs)


EMPTY_SELECTION = SelectionState()


def is_selected(leg: RawLeg, state: SelectionState) -> bool:
    if not leg.bookable:
        return False
    return leg.identity in state.identities


def compute_total(state: SelectionState, itinerary: Optional[RawItinerary]) -> float:
    """Amount charged for booking the current selection.

    This is the itinerary-wide ``totalCost``, independent of which legs are
    selected.
    """

    if itinerary is None or itinerary.total_cost is None:
        return 0.0
    return float(itinerary.total_cost)


def toggle_selection(
    leg: RawLeg,
    state: SelectionState,
    itinerary: Optional[RawItinerary] = None,
) -> SelectionState:
    if not leg.bookable:
        logging.debug("Ignoring selection of non-bookable %s leg", leg.mode)
        return state

    if leg.identity in state.identities:
        legs = tuple(s for s in state.selected_legs if s.identity != leg.identity)
    else:
        legs = state.selected_legs + (leg,)

    updated = replace(state, selected_legs=legs)
    if itinerary is not None:
        updated = replace(updated, total_amount=compute_total(updated, itinerary))
    return updated


def bookable_legs(itinerary: RawItinerary) -> List[RawLeg]:
    return [leg for leg in itinerary.legs if leg.bookable]


def build_booking_payload(state: SelectionState) -> Dict[str, Any]:
    """Serializable payload forwarded to the booking screen."""

    if not state.selected_legs:
        raise EmptySelectionError("Select at least one leg to book")
    return {
        "selectedLegs": [leg.to_dict() for leg in state.selected_legs],
        "amount": float(state.total_amount),
    }


__all__ = [
    "EMPTY_SELECTION",
    "SelectionState",
    "bookable_legs",
    "build_booking_payload",
    "compute_total",
    "is_selected",
    "toggle_selection",
]
