"""Shared helpers for locating writable storage directories."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

SCREENSHOT_DIR_ENV = "ITINERARY_SCREENSHOT_DIR"


@dataclass(frozen=True)
class StoragePaths:
    """Resolved filesystem locations for runtime storage."""

    screenshot_dir: Path


def _project_root() -> Path:
    return Path(__file__).resolve().parent


def resolve_storage_paths(*, logger: Optional[object] = None) -> StoragePaths:
    """Return the directory rendered map screenshots are written to.

    ``ITINERARY_SCREENSHOT_DIR`` wins when set; otherwise screenshots go to
    ``<project_root>/screenshots``.
    """

    override = os.environ.get(SCREENSHOT_DIR_ENV, "").strip()
    screenshot_dir = Path(override).expanduser() if override else _project_root() / "screenshots"

    screenshot_dir.mkdir(parents=True, exist_ok=True)

    if logger:
        logger.info("Using screenshot directory %s", screenshot_dir)

    return StoragePaths(screenshot_dir=screenshot_dir)
