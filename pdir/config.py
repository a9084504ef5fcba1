"""Persistent JSON defaults for listings.

Stores the preferred visibility mode, output format, and timestamp source.
All access is defensive: malformed or missing config falls back safely.
"""

from __future__ import annotations

import json
from pathlib import Path

from platformdirs import user_config_dir

from .listing.types import (
    TIME_SOURCES,
    TIME_MTIME,
    VISIBILITY_DEFAULT,
    VISIBILITY_MODES,
    ListingOptions,
)

APP_NAME = "pdir"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except Exception:
        return {}
    return data if isinstance(data, dict) else {}


def _load_choice(data: dict[str, object], key: str, choices: tuple[str, ...], default: str) -> str:
    value = data.get(key)
    if isinstance(value, str) and value in choices:
        return value
    return default


def load_listing_defaults() -> ListingOptions:
    """Return listing options seeded from config, before CLI overrides.

    Only explicit booleans are accepted for ``long_format``; unknown mode
    strings fall back to the built-in defaults.
    """
    data = load_config()
    long_format = data.get("long_format")
    return ListingOptions(
        visibility=_load_choice(data, "visibility", VISIBILITY_MODES, VISIBILITY_DEFAULT),
        long_format=long_format if isinstance(long_format, bool) else False,
        time_source=_load_choice(data, "time_source", TIME_SOURCES, TIME_MTIME),
    )


__all__ = ["CONFIG_PATH", "load_config", "load_listing_defaults"]
