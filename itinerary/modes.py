"""Transit modes and their display attributes."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional

DEFAULT_ROUTE_COLOR = "#000000"


class TransitMode(Enum):
    WALK = "WALK"
    RAIL = "RAIL"
    BUS = "BUS"
    SUBWAY = "SUBWAY"
    UNKNOWN = "UNKNOWN"

    @classmethod
    def from_value(cls, value: Optional[str]) -> "TransitMode":
        """Match planner mode names exactly; anything else is ``UNKNOWN``."""

        try:
            return cls(value)
        except ValueError:
            return cls.UNKNOWN

    @property
    def style(self) -> "ModeStyle":
        return MODE_STYLES[self]

    @property
    def color(self) -> str:
        return self.style.color

    @property
    def bookable(self) -> bool:
        return self.style.bookable


@dataclass(frozen=True)
class ModeStyle:
    """Legend colour, icon name and whether legs of this mode can be booked."""

    color: str
    icon: str
    label: str
    bookable: bool = True


MODE_STYLES: Dict[TransitMode, ModeStyle] = {
    TransitMode.WALK: ModeStyle("#77DD77", "male", "Walk", bookable=False),
    TransitMode.RAIL: ModeStyle("#779ECB", "train", "Rail"),
    TransitMode.BUS: ModeStyle("#FFB347", "bus", "Bus"),
    TransitMode.SUBWAY: ModeStyle("#D3A4FF", "subway", "Subway"),
    TransitMode.UNKNOWN: ModeStyle(DEFAULT_ROUTE_COLOR, "question", "Other"),
}

# Modes shown in the map legend, in display order.
LEGEND_MODES = (TransitMode.WALK, TransitMode.RAIL, TransitMode.BUS, TransitMode.SUBWAY)


__all__ = [
    "DEFAULT_ROUTE_COLOR",
    "LEGEND_MODES",
    "MODE_STYLES",
    "ModeStyle",
    "TransitMode",
]
