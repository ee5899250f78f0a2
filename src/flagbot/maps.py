"""
Built-in arena maps for FlagBot.

Maps are ASCII layouts (see flagbot.arena for the character legend) stored
in data/maps.json as ``{name: {"description": ..., "rows": [...]}}``.

Design Decisions:
    - Lazy loading: The JSON file is read on first use and cached for the
      rest of the process.
    - Plain-text map files: load_map_file() reads one layout row per line,
      so new maps can be tried without touching the package data.

Dependencies:
    - json/pathlib: For loading maps.json and map files
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

_MAPS: dict[str, Any] | None = None


def _load_maps() -> dict[str, Any]:
    """Load and cache data/maps.json."""
    global _MAPS
    if _MAPS is None:
        data_path = Path(__file__).parent / "data" / "maps.json"
        with open(data_path) as f:
            _MAPS = json.load(f)
    return _MAPS


def list_maps() -> dict[str, str]:
    """Map names and their one-line descriptions, sorted by name."""
    maps = _load_maps()
    return {name: maps[name].get("description", "") for name in sorted(maps)}


def get_map(name: str) -> list[str]:
    """
    Rows of the built-in map ``name``.

    Raises:
        KeyError: If there is no such map; the message lists known names.
    """
    maps = _load_maps()
    if name not in maps:
        raise KeyError(f"Unknown map {name!r}; known maps: {', '.join(sorted(maps))}")
    return list(maps[name]["rows"])


def load_map_file(path: str | Path) -> list[str]:
    """Read a plain-text layout, one row per line, ignoring blank lines."""
    with open(path) as f:
        return [line.strip() for line in f if line.strip()]
