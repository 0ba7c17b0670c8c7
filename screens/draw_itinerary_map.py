#!/usr/bin/env python3
"""Render the decoded itinerary legs onto a map canvas."""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence, Tuple

from PIL import Image, ImageColor, ImageDraw

from config import FONT_MAP_LEGEND, FONT_MAP_MESSAGE, HEIGHT, LOADING_MESSAGE, WIDTH
from itinerary.model import RenderedLeg
from itinerary.modes import LEGEND_MODES
from itinerary.polyline import Coordinate
from itinerary.viewport import Viewport
from screens.journey_details import book_button_label, leg_rows, summarize_itinerary
from screens.map_state import ScreenState
from utils import ScreenImage, log_call

MAP_MARGIN = 12
LEG_WIDTH = 4
MARKER_RADIUS = 4
LEGEND_SWATCH = 10
LEGEND_PADDING = 6
BACKGROUND_COLOR = (245, 245, 240)
TEXT_COLOR = (51, 65, 85)
START_MARKER_COLOR = "green"
END_MARKER_COLOR = "red"
WAYPOINT_MARKER_COLOR = "black"

# ─── Journey details panel ────────────────────────────────────────────────────
PANEL_COLOR = (255, 255, 255)
PANEL_BORDER_COLOR = (203, 213, 225)
ROW_HEIGHT = 14
CHECKBOX_SIZE = 9
BUTTON_HEIGHT = 20
BUTTON_COLOR = (37, 99, 235)
BUTTON_DISABLED_COLOR = (148, 163, 184)
BUTTON_TEXT_COLOR = (255, 255, 255)

Point = Tuple[int, int]


def _project(point: Coordinate, viewport: Viewport, width: int, height: int) -> Point:
    (min_lat, min_lng), (max_lat, max_lng) = viewport.bounds()

    if max_lat == min_lat or max_lng == min_lng:
        return width // 2, height // 2

    x = (point.longitude - min_lng) / (max_lng - min_lng)
    y = 1 - (point.latitude - min_lat) / (max_lat - min_lat)

    return int(MAP_MARGIN + x * (width - 2 * MAP_MARGIN)), int(
        MAP_MARGIN + y * (height - 2 * MAP_MARGIN)
    )


def _marker_colors(index: int, count: int) -> Tuple[str, str]:
    start = START_MARKER_COLOR if index == 0 else WAYPOINT_MARKER_COLOR
    end = END_MARKER_COLOR if index == count - 1 else WAYPOINT_MARKER_COLOR
    return start, end


def _draw_marker(draw: ImageDraw.ImageDraw, center: Point, color: str) -> None:
    x, y = center
    draw.ellipse(
        (x - MARKER_RADIUS, y - MARKER_RADIUS, x + MARKER_RADIUS, y + MARKER_RADIUS),
        fill=color,
        outline="white",
    )


def _draw_legs(
    draw: ImageDraw.ImageDraw,
    legs: Sequence[RenderedLeg],
    viewport: Viewport,
    canvas_size: Tuple[int, int],
) -> None:
    count = len(legs)
    for index, leg in enumerate(legs):
        if not leg.coordinates:
            continue
        color = ImageColor.getrgb(leg.color)
        projected = [_project(pt, viewport, *canvas_size) for pt in leg.coordinates]
        if len(projected) >= 2:
            draw.line(projected, fill=color, width=LEG_WIDTH, joint="curve")
        start_color, end_color = _marker_colors(index, count)
        _draw_marker(draw, projected[0], start_color)
        _draw_marker(draw, projected[-1], end_color)


def _draw_legend(draw: ImageDraw.ImageDraw, canvas_size: Tuple[int, int]) -> None:
    _width, height = canvas_size
    line_height = LEGEND_SWATCH + 4
    top = height - LEGEND_PADDING - line_height * len(LEGEND_MODES)
    for offset, mode in enumerate(LEGEND_MODES):
        y = top + offset * line_height
        draw.ellipse(
            (LEGEND_PADDING, y, LEGEND_PADDING + LEGEND_SWATCH, y + LEGEND_SWATCH),
            fill=ImageColor.getrgb(mode.color),
        )
        draw.text(
            (LEGEND_PADDING + LEGEND_SWATCH + 4, y - 1),
            mode.value,
            font=FONT_MAP_LEGEND,
            fill=TEXT_COLOR,
        )


def _draw_message(draw: ImageDraw.ImageDraw, message: str, canvas_size: Tuple[int, int]) -> None:
    width, height = canvas_size
    words = message.split()
    lines: List[str] = []
    current = ""
    for word in words:
        candidate = f"{current} {word}".strip()
        if draw.textlength(candidate, font=FONT_MAP_MESSAGE) > width - 2 * MAP_MARGIN and current:
            lines.append(current)
            current = word
        else:
            current = candidate
    if current:
        lines.append(current)

    line_height = 18
    y = (height - line_height * len(lines)) // 2
    for line in lines:
        line_w = draw.textlength(line, font=FONT_MAP_MESSAGE)
        draw.text(((width - line_w) // 2, y), line, font=FONT_MAP_MESSAGE, fill=TEXT_COLOR)
        y += line_height


def _draw_checkbox(draw: ImageDraw.ImageDraw, x: int, y: int, selectable: bool, selected: bool) -> None:
    box = (x, y, x + CHECKBOX_SIZE, y + CHECKBOX_SIZE)
    if not selectable:
        # Walking legs cannot be booked.
        draw.rectangle(box, outline=BUTTON_DISABLED_COLOR)
        draw.line((box[0], box[1], box[2], box[3]), fill=BUTTON_DISABLED_COLOR)
        draw.line((box[0], box[3], box[2], box[1]), fill=BUTTON_DISABLED_COLOR)
        return
    draw.rectangle(box, outline=TEXT_COLOR, fill=BUTTON_COLOR if selected else PANEL_COLOR)


def _draw_details(draw: ImageDraw.ImageDraw, state: ScreenState, canvas_size: Tuple[int, int]) -> None:
    """Journey details sheet: trip summary, one row per leg and the book button."""

    itinerary = state.itinerary
    width, height = canvas_size
    summary = summarize_itinerary(itinerary)
    rows = leg_rows(itinerary, state.selection)

    fixed = 3 * LEGEND_PADDING + ROW_HEIGHT + BUTTON_HEIGHT
    room = max(0, (height - MAP_MARGIN - fixed) // ROW_HEIGHT)
    if len(rows) > room:
        logging.debug("Journey details: showing %d of %d legs", room, len(rows))
        rows = rows[:room]

    top = height - (fixed + ROW_HEIGHT * len(rows))
    draw.rectangle((0, top, width - 1, height - 1), fill=PANEL_COLOR, outline=PANEL_BORDER_COLOR)

    y = top + LEGEND_PADDING
    draw.text(
        (LEGEND_PADDING, y),
        f"{summary.duration} · {summary.distance} · {summary.cost}",
        font=FONT_MAP_LEGEND,
        fill=TEXT_COLOR,
    )
    y += ROW_HEIGHT

    for row in rows:
        _draw_checkbox(draw, LEGEND_PADDING, y + 2, row.selectable, row.selected)
        draw.text(
            (LEGEND_PADDING + CHECKBOX_SIZE + 6, y),
            f"{row.times}  {row.description}",
            font=FONT_MAP_LEGEND,
            fill=TEXT_COLOR,
        )
        y += ROW_HEIGHT

    y += LEGEND_PADDING
    button = (LEGEND_PADDING, y, width - LEGEND_PADDING, y + BUTTON_HEIGHT)
    draw.rounded_rectangle(
        button,
        radius=4,
        fill=BUTTON_COLOR if state.can_book else BUTTON_DISABLED_COLOR,
    )
    label = book_button_label(state.selection)
    label_w = draw.textlength(label, font=FONT_MAP_LEGEND)
    draw.text(
        ((width - label_w) // 2, y + (BUTTON_HEIGHT - 11) // 2),
        label,
        font=FONT_MAP_LEGEND,
        fill=BUTTON_TEXT_COLOR,
    )


def compose_itinerary_map(state: ScreenState, size: Tuple[int, int] = (WIDTH, HEIGHT)) -> Image.Image:
    canvas = Image.new("RGB", size, BACKGROUND_COLOR)
    draw = ImageDraw.Draw(canvas)

    if state.loading:
        _draw_message(draw, LOADING_MESSAGE, size)
        return canvas

    if state.error is not None:
        _draw_message(draw, state.error, size)
        return canvas

    _draw_legs(draw, state.rendered_legs, state.viewport, size)
    if state.details_visible and state.itinerary is not None:
        _draw_details(draw, state, size)
    else:
        _draw_legend(draw, size)
    return canvas


@log_call
def draw_itinerary_map_screen(display, state: ScreenState) -> Optional[ScreenImage]:
    size = (getattr(display, "width", WIDTH), getattr(display, "height", HEIGHT)) if display is not None else (WIDTH, HEIGHT)
    img = compose_itinerary_map(state, size)

    if display is not None:
        display.image(img)
        display.show()

    return ScreenImage(img, displayed=display is not None)


__all__ = ["compose_itinerary_map", "draw_itinerary_map_screen"]
