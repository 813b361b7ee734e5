"""Runtime configuration defaults for the menu, map and debug log."""

from __future__ import annotations

import os
from pathlib import Path

RESTAURANT_NAME = "Sample Restaurant"

MENU_RESOURCE_PATH = Path(__file__).resolve().parent / "resources" / "fooditem.json"
DEBUG_LOG_PATH = "/tmp/food-ordering-debug.log"

# Map region shown above the menu.
MAP_CENTER_LATITUDE = 37.786996
MAP_CENTER_LONGITUDE = -122.419281
MAP_SPAN_DEGREES = 0.02
MAP_COLLAPSED_HEIGHT = 9

_MENU_PATH_ENV = "FOOD_ORDERING_MENU_PATH"
_DEBUG_LOG_ENV = "FOOD_ORDERING_DEBUG_LOG"
LOCATION_STATUS_ENV = "FOOD_ORDERING_LOCATION_STATUS"
LOCATION_SERVICES_ENV = "FOOD_ORDERING_LOCATION_SERVICES"


def resolve_menu_path() -> Path:
    """Return the menu resource path, honoring FOOD_ORDERING_MENU_PATH."""
    override = os.environ.get(_MENU_PATH_ENV, "").strip()
    if override:
        return Path(override).expanduser()
    return MENU_RESOURCE_PATH


def resolve_debug_log_path() -> Path:
    override = os.environ.get(_DEBUG_LOG_ENV, "").strip()
    return Path(override or DEBUG_LOG_PATH).expanduser()
