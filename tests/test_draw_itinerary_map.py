import importlib
import json

from PIL import ImageChops

from itinerary.model import OverviewPolyline
from itinerary.polyline import Coordinate, encode_polyline
from screens import map_state
from screens.map_state import INITIAL_STATE

itinerary_map = importlib.import_module("screens.draw_itinerary_map")

REFERENCE = "_p~iF~ps|U_ulLnnqC_mqNvxq`@"


class _FakeDisplay:
    width = 160
    height = 120

    def __init__(self):
        self.images = []
        self.shown = 0

    def image(self, img):
        self.images.append(img)

    def show(self):
        self.shown += 1


def test_overview_route_is_drawn_with_start_and_end_markers():
    state = map_state.load_payload(INITIAL_STATE, OverviewPolyline(REFERENCE))

    img = itinerary_map.compose_itinerary_map(state)
    colors = {color for _count, color in img.getcolors(maxcolors=1 << 16)}

    # Route line, green start marker and red end marker all reach the canvas.
    assert (0, 0, 0) in colors
    assert (0, 128, 0) in colors
    assert (255, 0, 0) in colors


def test_marker_colors_flag_first_and_last_leg():
    assert itinerary_map._marker_colors(0, 3) == ("green", "black")
    assert itinerary_map._marker_colors(1, 3) == ("black", "black")
    assert itinerary_map._marker_colors(2, 3) == ("black", "red")
    assert itinerary_map._marker_colors(0, 1) == ("green", "red")


def test_projection_maps_viewport_corners_inside_margins():
    state = map_state.load_payload(INITIAL_STATE, OverviewPolyline(REFERENCE))
    (min_lat, min_lng), (max_lat, max_lng) = state.viewport.bounds()

    top_left = itinerary_map._project(Coordinate(max_lat, min_lng), state.viewport, 320, 240)
    bottom_right = itinerary_map._project(Coordinate(min_lat, max_lng), state.viewport, 320, 240)

    assert top_left == (itinerary_map.MAP_MARGIN, itinerary_map.MAP_MARGIN)
    assert bottom_right == (320 - itinerary_map.MAP_MARGIN, 240 - itinerary_map.MAP_MARGIN)


def test_error_state_renders_message_only():
    state = map_state.load_payload(INITIAL_STATE, None)

    img = itinerary_map.compose_itinerary_map(state)
    colors = {color for _count, color in img.getcolors(maxcolors=1 << 16)}

    assert (255, 0, 0) not in colors
    assert itinerary_map.BACKGROUND_COLOR in colors


def test_screen_pushes_to_display():
    display = _FakeDisplay()
    state = map_state.load_payload(INITIAL_STATE, OverviewPolyline(REFERENCE))

    result = itinerary_map.draw_itinerary_map_screen(display, state)

    assert result.displayed is True
    assert result.image.size == (160, 120)
    assert display.images == [result.image]
    assert display.shown == 1


def test_screen_without_display_is_not_marked_displayed():
    result = itinerary_map.draw_itinerary_map_screen(None, INITIAL_STATE)

    assert result.displayed is False
    assert result.image.size == (itinerary_map.WIDTH, itinerary_map.HEIGHT)


def _walk_bus_route():
    def leg(mode, start, points):
        return {
            "mode": mode,
            "legGeometry": {"points": encode_polyline(points)},
            "distance": 1200,
            "startTime": start,
            "endTime": start + 600_000,
            "route": "" if mode == "WALK" else "Andheri - Kurla",
            "routeShortName": None if mode == "WALK" else "332",
            "from": {"name": "Start", "lat": points[0][0], "lon": points[0][1]},
            "to": {"name": "End", "lat": points[-1][0], "lon": points[-1][1]},
        }

    return json.dumps(
        {
            "duration": 1200,
            "totalCost": 20,
            "legs": [
                leg("WALK", 0, [(19.11, 72.84), (19.112, 72.846)]),
                leg("BUS", 600_000, [(19.112, 72.846), (19.07, 72.88)]),
            ],
        }
    )


def _colors(img):
    return {color for _count, color in img.getcolors(maxcolors=1 << 16)}


def test_details_sheet_is_drawn_over_the_map():
    state = map_state.load_payload(INITIAL_STATE, _walk_bus_route())

    plain = itinerary_map.compose_itinerary_map(state)
    details = itinerary_map.compose_itinerary_map(map_state.show_details(state))

    assert ImageChops.difference(plain, details).getbbox() is not None
    assert itinerary_map.PANEL_COLOR in _colors(details)
    # Nothing selected yet, so the book button is greyed out.
    assert itinerary_map.BUTTON_COLOR not in _colors(details)


def test_selecting_a_leg_enables_the_book_button():
    state = map_state.show_details(map_state.load_payload(INITIAL_STATE, _walk_bus_route()))
    unselected = itinerary_map.compose_itinerary_map(state)

    selected = itinerary_map.compose_itinerary_map(map_state.toggle_leg(state, 1))

    assert itinerary_map.BUTTON_COLOR in _colors(selected)
    assert ImageChops.difference(unselected, selected).getbbox() is not None


def test_details_sheet_is_skipped_for_overview_routes():
    state = map_state.load_payload(INITIAL_STATE, OverviewPolyline(REFERENCE))

    plain = itinerary_map.compose_itinerary_map(state)
    details = itinerary_map.compose_itinerary_map(map_state.show_details(state))

    assert ImageChops.difference(plain, details).getbbox() is None
