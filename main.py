#!/usr/bin/env python3
"""
Itinerary map screen driver.

Receives navigation parameters, debounces route payload changes, rebuilds the
decoded legs and selection state, and renders the map to a display or to a
screenshot PNG.
"""
import argparse
import datetime
import logging
import os
import sys
import threading
from typing import Any, Callable, Dict, Optional

from config import DEBOUNCE_SECONDS, ENABLE_SCREENSHOTS
from itinerary.errors import EmptySelectionError
from paths import resolve_storage_paths
from screens import map_state
from screens.draw_itinerary_map import draw_itinerary_map_screen
from screens.map_state import INITIAL_STATE, NavigationParams, ScreenState
from services.debounce import Debouncer
from services.directions import open_directions
from utils import HeadlessDisplay, ScreenImage, configure_logging, save_screen_image

BookingHandler = Callable[[Dict[str, Any]], None]


class MapScreenController:
    """Owns the :class:`ScreenState` for one open map screen.

    State transitions run under a lock so a toggle always sees the state it
    replaces, even when a debounced reload lands on the timer thread.
    """

    def __init__(
        self,
        display=None,
        *,
        delay: float = DEBOUNCE_SECONDS,
        timer_factory: Callable[..., Any] = threading.Timer,
        on_booking: Optional[BookingHandler] = None,
        opener: Optional[Callable[[str], object]] = None,
        render_on_change: bool = True,
    ):
        self.display = display
        self._on_booking = on_booking
        self._opener = opener
        self._render_on_change = render_on_change
        self._lock = threading.Lock()
        self._state: ScreenState = INITIAL_STATE
        self._params: Optional[NavigationParams] = None
        self._debouncer = Debouncer(self._apply_payload, delay=delay, timer_factory=timer_factory)

    @property
    def state(self) -> ScreenState:
        with self._lock:
            return self._state

    def _transition(self, func, *args) -> ScreenState:
        with self._lock:
            self._state = func(self._state, *args)
            return self._state

    # ----- Navigation ---------------------------------------------------------
    def on_navigation(self, params: NavigationParams) -> None:
        if params == self._params:
            logging.debug("Navigation params unchanged; skipping reload")
            return
        self._params = params
        self._transition(map_state.begin_loading)
        self._debouncer.submit(params.payload())

    def flush(self) -> bool:
        """Apply a pending payload immediately instead of waiting for the timer."""

        return self._debouncer.flush()

    def _apply_payload(self, payload) -> None:
        self._refresh(self._transition(map_state.load_payload, payload))

    def _refresh(self, state: ScreenState) -> ScreenState:
        if self._render_on_change:
            self.render(state)
        return state

    # ----- Journey details ------------------------------------------------------
    def show_details(self) -> ScreenState:
        return self._refresh(self._transition(map_state.show_details))

    def hide_details(self) -> ScreenState:
        return self._refresh(self._transition(map_state.hide_details))

    def toggle_leg(self, index: int) -> ScreenState:
        return self._refresh(self._transition(map_state.toggle_leg, index))

    def confirm_booking(self) -> Optional[Dict[str, Any]]:
        with self._lock:
            try:
                self._state, payload = map_state.confirm_booking(self._state)
            except EmptySelectionError as exc:
                logging.warning("Booking not started: %s", exc)
                return None
            state = self._state
        self._refresh(state)

        logging.info(
            "🎟️  Booking %d leg(s) for %.2f",
            len(payload["selectedLegs"]),
            payload["amount"],
        )
        if self._on_booking is not None:
            self._on_booking(payload)
        return payload

    def open_leg_directions(self, index: int) -> Optional[str]:
        itinerary = self.state.itinerary
        if itinerary is None or not 0 <= index < len(itinerary.legs):
            logging.warning("No leg %d to open directions for", index)
            return None
        return open_directions(itinerary.legs[index], opener=self._opener)

    # ----- Rendering --------------------------------------------------------------
    def render(self, state: Optional[ScreenState] = None) -> Optional[ScreenImage]:
        return draw_itinerary_map_screen(self.display, state or self.state)

    def close(self) -> None:
        self._debouncer.close()


def _build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Render an itinerary map to PNG.")
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("route", nargs="?", help="Path to a structured itinerary JSON file.")
    source.add_argument("--overview", help="Encoded overview polyline to draw instead of a route.")
    parser.add_argument("--id", dest="route_id", default=None, help="Identifier logged with the route.")
    parser.add_argument("--details", action="store_true", help="Render with the journey details sheet open.")
    parser.add_argument(
        "--select",
        dest="selected",
        type=int,
        action="append",
        default=[],
        metavar="INDEX",
        help="Select a leg for booking (repeatable).",
    )
    parser.add_argument("-o", "--output", default=None, help="PNG path (defaults to the screenshots directory).")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")
    return parser


def _default_output_path() -> str:
    storage = resolve_storage_paths(logger=logging.getLogger(__name__))
    stamp = datetime.datetime.now().strftime("%Y%m%d_%H%M%S")
    return os.path.join(str(storage.screenshot_dir), f"itinerary_map_{stamp}.png")


def main(argv: Optional[list] = None) -> int:
    args = _build_arg_parser().parse_args(argv)
    configure_logging(logging.DEBUG if args.verbose else logging.INFO)
    logging.info("🖥️  Starting itinerary map…")

    route_json = None
    if args.route:
        try:
            with open(args.route, "r", encoding="utf-8") as fh:
                route_json = fh.read()
        except OSError as exc:
            logging.error("Unable to read route file %s: %s", args.route, exc)
            return 1

    controller = MapScreenController(HeadlessDisplay(), render_on_change=False)
    try:
        controller.on_navigation(
            NavigationParams(id=args.route_id, route=route_json, overview_polyline=args.overview)
        )
        controller.flush()
        for index in args.selected:
            controller.toggle_leg(index)
        if args.details:
            controller.show_details()
        result = controller.render()
    finally:
        controller.close()

    if args.output:
        output = args.output
    elif ENABLE_SCREENSHOTS:
        output = _default_output_path()
    else:
        logging.info("Screenshots disabled; nothing written.")
        return 0 if controller.state.error is None else 2

    save_screen_image(result, output)
    return 0 if controller.state.error is None else 2


if __name__ == "__main__":
    sys.exit(main())
