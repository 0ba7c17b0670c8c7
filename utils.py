#!/usr/bin/env python3
"""
utils.py

Core utilities for the itinerary map screen:
- Logging setup and call tracing
- Screen image container
- Headless display stand-in
"""
import functools
import logging
from dataclasses import dataclass
from typing import Optional, Tuple

from PIL import Image

from config import HEIGHT, WIDTH

# Colored logging
from colorama import init as colorama_init, Fore, Style
colorama_init(autoreset=True)

_LEVEL_COLORS = {
    logging.DEBUG: Fore.CYAN,
    logging.INFO: Fore.GREEN,
    logging.WARNING: Fore.YELLOW,
    logging.ERROR: Fore.RED,
    logging.CRITICAL: Fore.RED + Style.BRIGHT,
}


class ColorLevelFormatter(logging.Formatter):
    """Formatter that tints the level name by severity."""

    def format(self, record: logging.LogRecord) -> str:
        color = _LEVEL_COLORS.get(record.levelno, "")
        original = record.levelname
        record.levelname = f"{color}{original:<8}{Style.RESET_ALL}"
        try:
            return super().format(record)
        finally:
            record.levelname = original


def configure_logging(level: int = logging.INFO) -> None:
    handler = logging.StreamHandler()
    handler.setFormatter(
        ColorLevelFormatter("%(asctime)s %(levelname)s %(message)s", datefmt="%H:%M:%S")
    )
    logging.basicConfig(level=level, handlers=[handler], force=True)
    logging.getLogger("requests").setLevel(logging.WARNING)
    logging.getLogger("urllib3").setLevel(logging.WARNING)
    logging.getLogger("PIL").setLevel(logging.WARNING)


# ─── Logging decorator ──────────────────────────────────────────────────────
def log_call(func):
    """
    Decorator that logs entry & exit at DEBUG level only.
    """
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        logging.debug(f"→ {func.__name__}()")
        result = func(*args, **kwargs)
        logging.debug(f"← {func.__name__}()")
        return result
    return wrapper


@dataclass
class ScreenImage:
    """Container for a rendered screen image.

    Attributes
    ----------
    image:
        The full PIL image representing the screen.
    displayed:
        Whether the image has already been pushed to the display by the
        originating function. This allows callers to skip redundant redraws
        while still accessing the image data (e.g., for screenshots).
    """

    image: Image.Image
    displayed: bool = False


class HeadlessDisplay:
    """Frame buffer used when no physical screen is attached."""

    def __init__(self, size: Tuple[int, int] = (WIDTH, HEIGHT)):
        self.width, self.height = size
        self._buffer = Image.new("RGB", size, "black")
        self._frame_id = 0

    def image(self, pil_img: Image.Image) -> None:
        if pil_img.size != (self.width, self.height):
            pil_img = pil_img.resize((self.width, self.height), Image.Resampling.LANCZOS)
        if pil_img.mode != "RGB":
            pil_img = pil_img.convert("RGB")
        self._buffer = pil_img.copy()
        self._frame_id += 1

    def show(self) -> None:
        pass

    def capture(self) -> Image.Image:
        """Return a copy of the currently buffered frame."""

        return self._buffer.copy()

    def frame_id(self) -> int:
        return self._frame_id


def save_screen_image(result: Optional[ScreenImage], path: str) -> Optional[str]:
    if result is None:
        return None
    try:
        result.image.save(path)
    except OSError as exc:
        logging.warning("Could not save screenshot %s: %s", path, exc)
        return None
    logging.info("📸 Saved screenshot to %s", path)
    return path
