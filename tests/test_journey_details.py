import datetime

import pytz

from itinerary.model import parse_itinerary
from itinerary.selection import EMPTY_SELECTION, toggle_selection
from screens.journey_details import (
    book_button_label,
    describe_leg,
    format_amount,
    format_clock,
    format_distance,
    format_duration_minutes,
    leg_rows,
    summarize_itinerary,
)

KOLKATA = pytz.timezone("Asia/Kolkata")


def _ms(hour, minute):
    moment = KOLKATA.localize(datetime.datetime(2024, 5, 1, hour, minute))
    return int(moment.timestamp() * 1000)


def _itinerary():
    def leg(mode, distance, start, end, route="", short=None):
        return {
            "mode": mode,
            "legGeometry": {"points": "??"},
            "distance": distance,
            "startTime": start,
            "endTime": end,
            "route": route,
            "routeShortName": short,
            "from": {"name": "Bandra", "lat": 19.05, "lon": 72.84},
            "to": {"name": "Kurla", "lat": 19.07, "lon": 72.88},
        }

    return parse_itinerary(
        {
            "duration": 2520,
            "totalCost": 30,
            "legs": [
                leg("WALK", 320.4, _ms(9, 0), _ms(9, 5)),
                leg("BUS", 4200, _ms(9, 5), _ms(9, 30), route="Bandra - Kurla", short="310"),
                leg("RAIL", 2600, _ms(9, 30), _ms(9, 42), route="Harbour Line"),
            ],
        }
    )


def test_distance_switches_to_km_above_one_km():
    assert format_distance(999.6) == "1000 m"
    assert format_distance(1000) == "1000 m"
    assert format_distance(4200) == "4 km"


def test_exact_halves_round_up():
    assert format_distance(2500) == "3 km"
    assert format_distance(0.5) == "1 m"
    assert format_duration_minutes(150) == "3 min"


def test_duration_and_amount_formatting():
    assert format_duration_minutes(2520) == "42 min"
    assert format_amount(45) == "₹45.00"
    assert format_amount(None) == "₹0.00"


def test_clock_uses_requested_timezone():
    assert format_clock(_ms(9, 5), tz=KOLKATA) == "09:05"


def test_leg_descriptions_by_mode():
    walk, bus, rail = _itinerary().legs

    assert describe_leg(walk) == "Walk · 320 m"
    assert describe_leg(bus) == "Bus 310 · Bandra - Kurla · 4 km"
    assert describe_leg(rail) == "Harbour Line · 3 km"


def test_summary_totals_all_legs():
    summary = summarize_itinerary(_itinerary())

    assert summary.duration == "42 min"
    assert summary.distance == "7 km"
    assert summary.cost == "₹30.00"


def test_rows_reflect_selection_and_walk_lockout():
    itinerary = _itinerary()
    selection = toggle_selection(itinerary.legs[1], EMPTY_SELECTION, itinerary)

    rows = leg_rows(itinerary, selection)

    assert [row.selectable for row in rows] == [False, True, True]
    assert [row.selected for row in rows] == [False, True, False]
    assert [row.show_connector for row in rows] == [True, True, False]
    assert rows[0].icon == "male"
    assert rows[1].places == "Bandra → Kurla"


def test_book_button_label():
    itinerary = _itinerary()

    assert book_button_label(EMPTY_SELECTION) == "Select Transport Modes to Book"
    selection = toggle_selection(itinerary.legs[2], EMPTY_SELECTION, itinerary)
    assert book_button_label(selection) == "Book Now for ₹30.00"
