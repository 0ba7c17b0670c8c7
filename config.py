# config.py

#!/usr/bin/env python3
import logging
import os
from pathlib import Path
from typing import Optional

# ─── Environment helpers ───────────────────────────────────────────────────────

SCRIPT_DIR = os.path.dirname(os.path.abspath(__file__))


def _initialise_env() -> None:
    """Load environment variables from `.env` if present."""

    from dotenv import load_dotenv

    candidate_paths = []

    project_root = Path(SCRIPT_DIR)
    candidate_paths.append(project_root / ".env")

    cwd_path = Path.cwd() / ".env"
    if cwd_path != candidate_paths[0]:
        candidate_paths.append(cwd_path)

    for path in candidate_paths:
        if path.is_file():
            load_dotenv(path, override=False)


_ENV_INITIALISED = False


def initialise_env_if_requested(force: bool = False) -> None:
    """Conditionally load `.env` files based on CONFIG_LOAD_DOTENV flag."""

    global _ENV_INITIALISED

    if _ENV_INITIALISED and not force:
        return

    raw_flag = os.environ.get("CONFIG_LOAD_DOTENV", "0").strip().lower()
    should_load = raw_flag in {"1", "true", "yes", "on"}

    if should_load:
        _initialise_env()

    _ENV_INITIALISED = True


initialise_env_if_requested()


def _get_first_env_var(*names: str):
    """Return the first populated environment variable from *names.*"""

    for name in names:
        value = os.environ.get(name)
        if value:
            return value

    return None


def _get_bool_env(name: str, default: bool) -> bool:
    """Parse boolean feature flags from environment variables."""

    raw = os.environ.get(name)
    if raw is None:
        return default

    value = raw.strip().lower()
    if value in {"1", "true", "yes", "on"}:
        return True
    if value in {"0", "false", "no", "off"}:
        return False
    return default


def _get_float_env(name: str, default: float, minimum: Optional[float] = None) -> float:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = float(raw)
    except (TypeError, ValueError):
        logging.warning("Invalid %s value %r; defaulting to %s.", name, raw, default)
        return default
    if minimum is not None and value < minimum:
        logging.warning("%s too low; clamping to %s.", name, minimum)
        return minimum
    return value


import pytz
from PIL import ImageFont

# ─── Feature flags ────────────────────────────────────────────────────────────
ENABLE_SCREENSHOTS         = _get_bool_env("ENABLE_SCREENSHOTS", True)
OPEN_DIRECTIONS_IN_BROWSER = _get_bool_env("OPEN_DIRECTIONS_IN_BROWSER", True)

# ─── Route loading ────────────────────────────────────────────────────────────
# Quiet period before a changed route payload is decoded.
DEBOUNCE_SECONDS = _get_float_env("ROUTE_DEBOUNCE_SECONDS", 0.3, minimum=0.0)

# ─── Map framing ──────────────────────────────────────────────────────────────
VIEWPORT_PADDING    = 0.01
INITIAL_REGION_SPAN = 0.02

DEFAULT_REGION_LATITUDE  = _get_float_env("DEFAULT_REGION_LATITUDE", 19.29462)
DEFAULT_REGION_LONGITUDE = _get_float_env("DEFAULT_REGION_LONGITUDE", 72.85618)
DEFAULT_REGION_SPAN      = _get_float_env("DEFAULT_REGION_SPAN", 0.1, minimum=VIEWPORT_PADDING)

DIRECTIONS_BASE_URL = os.environ.get(
    "DIRECTIONS_BASE_URL", "https://www.google.com/maps/dir/"
)

# ─── Localisation ─────────────────────────────────────────────────────────────
_timezone_name = _get_first_env_var("ITINERARY_TIMEZONE") or "Asia/Kolkata"
try:
    LOCAL_TIMEZONE = pytz.timezone(_timezone_name)
except pytz.UnknownTimeZoneError:
    logging.warning("Unknown timezone %r; defaulting to Asia/Kolkata.", _timezone_name)
    LOCAL_TIMEZONE = pytz.timezone("Asia/Kolkata")

CURRENCY_SYMBOL = os.environ.get("CURRENCY_SYMBOL", "₹")

# ─── Display configuration ─────────────────────────────────────────────────────
WIDTH  = 320
HEIGHT = 240

FONTS_DIR = os.path.join(SCRIPT_DIR, "fonts")

NO_ROUTE_MESSAGE = "No route data available. Please go back and try again."
LOADING_MESSAGE  = "Loading map data..."


def _try_load_font(name: str, size: int):
    path = os.path.join(FONTS_DIR, name)
    if not os.path.isfile(path):
        return None

    try:
        return ImageFont.truetype(path, size)
    except OSError as exc:
        logging.warning("Unable to load font %s: %s", path, exc)
        return None


def _load_font(name: str, size: int):
    font = _try_load_font(name, size)
    if font is None:
        logging.debug("Font %s not found; using PIL default font", name)
        return ImageFont.load_default()
    return font


FONT_MAP_LEGEND  = _load_font("DejaVuSans.ttf", 11)
FONT_MAP_MESSAGE = _load_font("DejaVuSans-Bold.ttf", 14)
