"""Locate ``markfile.toml``.

``MARKFILE_CONFIG`` names the file outright. Otherwise the nearest
``markfile.toml`` in the start directory or one of its parents applies.
"""

from __future__ import annotations

import os
from pathlib import Path

CONFIG_FILENAME = "markfile.toml"
CONFIG_ENV_VAR = "MARKFILE_CONFIG"


def find_config(start: Path | None = None) -> Path | None:
    """Return the config file governing *start* (default: cwd), or None.

    A ``MARKFILE_CONFIG`` pointing at a missing file yields None rather
    than falling back to the directory search.
    """
    explicit = os.environ.get(CONFIG_ENV_VAR)
    if explicit:
        path = Path(explicit)
        return path if path.is_file() else None

    origin = (start or Path.cwd()).resolve()
    for directory in (origin, *origin.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None
