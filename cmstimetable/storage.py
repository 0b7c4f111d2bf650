"""
Local cache for the raw timetable document.

This module manages the file:

    data/raw/timetable.json

The cached file is exactly what the service returned, so it can be
normalized again later (for example with a different period table)
without logging in again.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


def _default_timetable_path() -> Path:
    """
    Return the default path of timetable.json inside the package.

    A function instead of a constant so tests can pass their own path.
    """
    base_dir = Path(__file__).resolve().parent
    return base_dir / "data" / "raw" / "timetable.json"


def load_raw_timetable(path: str | Path | None = None) -> Any | None:
    """
    Load the cached timetable document.

    Returns None if the file does not exist or cannot be read as JSON.
    """
    timetable_path = Path(path) if path is not None else _default_timetable_path()

    if not timetable_path.exists():
        return None

    try:
        return json.loads(timetable_path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError, UnicodeDecodeError):
        logger.warning("Ignoring unreadable timetable cache %s", timetable_path, exc_info=True)
        return None


def save_raw_timetable(data: Any, path: str | Path | None = None) -> Path:
    """
    Save the timetable document, creating parent directories if needed.
    Returns the path written.
    """
    timetable_path = Path(path) if path is not None else _default_timetable_path()
    timetable_path.parent.mkdir(parents=True, exist_ok=True)

    timetable_path.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")
    logger.debug("Wrote %s", timetable_path)
    return timetable_path
