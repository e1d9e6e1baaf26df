"""Front-matter location and the save-time date rewrite.

The block is found with a two-phase scan over ``\\n``-normalized text:
the text must open with a ``---`` line, and the block ends at the next
newline-terminated line that is exactly ``---``. Parsing and serializing the YAML between
them is the job of :mod:`markfile.infrastructure.yaml_codec`; this module
only decides where the block is and what the mapping should become.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import UTC, date, datetime, timedelta, tzinfo
from typing import Any

logger = logging.getLogger(__name__)

DELIMITER = "---"

# Keys every rewritten block carries, in this order, ahead of any other keys.
PROJECTED_KEYS: tuple[str, ...] = ("title", "date", "updated", "tags", "categories")

DEFAULT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


@dataclass(frozen=True)
class FrontMatterSpan:
    """A located front-matter block.

    Attributes:
        yaml_text: Raw YAML between the delimiter lines.
        body: Everything after the closing delimiter line, verbatim.
    """

    yaml_text: str
    body: str

    def splice(self, yaml_text: str) -> str:
        """Rebuild the document with *yaml_text* in place of the original block."""
        if yaml_text and not yaml_text.endswith("\n"):
            yaml_text += "\n"
        return f"{DELIMITER}\n{yaml_text}{DELIMITER}\n{self.body}"


def locate_front_matter(text: str) -> FrontMatterSpan | None:
    """Find the front-matter block at the start of *text*.

    Returns None when the first line is not ``---`` or when no closing
    ``---`` line follows it. A closing ``---`` without a line break after
    it (end of text) does not count.
    """
    opening = f"{DELIMITER}\n"
    if not text.startswith(opening):
        return None

    start = len(opening)
    pos = start
    while True:
        end = text.find("\n", pos)
        if end == -1:
            return None
        if text[pos:end] == DELIMITER:
            return FrontMatterSpan(yaml_text=text[start:pos], body=text[end + 1 :])
        pos = end + 1


def _as_instant(value: Any, tz: tzinfo | None = None) -> datetime | None:
    """Interpret a front-matter ``date`` value as an aware datetime.

    YAML timestamps without an offset are UTC. Quoted strings without an
    offset are wall-clock time in *tz* (host local zone when None), which
    is how the rewritten ``date`` reads back on the next save.
    """
    if isinstance(value, datetime):
        instant = value
    elif isinstance(value, date):
        instant = datetime(value.year, value.month, value.day)
    elif isinstance(value, str) and value.strip():
        text = value.strip()
        try:
            instant = datetime.fromisoformat(text)
        except ValueError:
            return None
        # Date-only strings stay UTC, like date-only YAML timestamps.
        if instant.tzinfo is None and len(text) > len("YYYY-MM-DD"):
            return instant.replace(tzinfo=tz) if tz is not None else instant.astimezone()
    else:
        return None

    if instant.tzinfo is None:
        # ruamel's TimeStamp subclass; rebuild as a plain datetime.
        instant = datetime(
            instant.year,
            instant.month,
            instant.day,
            instant.hour,
            instant.minute,
            instant.second,
            instant.microsecond,
            tzinfo=UTC,
        )
    return instant


def format_timestamp(
    value: datetime,
    *,
    tz: tzinfo | None = None,
    fmt: str = DEFAULT_DATE_FORMAT,
) -> str:
    """Render *value* in *tz* (host local zone when None)."""
    return value.astimezone(tz).strftime(fmt)


def rewrite_front_matter(
    data: Mapping[str, Any],
    *,
    now: datetime,
    shift_hours: int = 8,
    tz: tzinfo | None = None,
    fmt: str = DEFAULT_DATE_FORMAT,
) -> dict[str, Any]:
    """Return the mapping a save writes back for front matter *data*.

    - ``date`` is shifted back by *shift_hours* and reformatted.
    - ``updated`` is set to *now*.
    - The five projected keys come first (missing ones as ``""``),
      followed by the remaining keys in their original order.
    """
    rewritten: dict[str, Any] = {key: "" for key in PROJECTED_KEYS}
    rewritten.update(data)

    if "date" in data:
        instant = _as_instant(data["date"], tz)
        if instant is None:
            logger.warning("Leaving unparseable front-matter date as-is: %r", data["date"])
        else:
            shifted = instant - timedelta(hours=shift_hours)
            rewritten["date"] = format_timestamp(shifted, tz=tz, fmt=fmt)

    rewritten["updated"] = format_timestamp(now, tz=tz, fmt=fmt)
    return rewritten
