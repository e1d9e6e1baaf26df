"""Line-ending detection and conversion.

Document text held in memory always uses ``\n``. The on-disk style is
detected once at load time and re-applied transiently at save time.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from enum import StrEnum

logger = logging.getLogger(__name__)

# Any line break the pipeline understands. A lone ``\r`` is content, not a break.
LINE_ENDING_RE = re.compile(r"\r\n|\n")
LF_LINE_ENDING_RE = re.compile(r"(?<!\r)\n")
CRLF_LINE_ENDING_RE = re.compile(r"\r\n")


class LineEndingStyle(StrEnum):
    """On-disk line terminator."""

    LF = "lf"
    CRLF = "crlf"


_SEQUENCES: dict[str, str] = {
    LineEndingStyle.LF: "\n",
    LineEndingStyle.CRLF: "\r\n",
}


@dataclass(frozen=True)
class LineEndingFlags:
    """Which terminators occur in a text."""

    has_lf: bool
    has_crlf: bool

    @property
    def is_mixed(self) -> bool:
        return self.has_lf and self.has_crlf

    @property
    def is_unknown(self) -> bool:
        return not self.has_lf and not self.has_crlf


def detect(text: str) -> LineEndingFlags:
    """Report whether *text* contains bare ``\\n`` and/or ``\\r\\n`` breaks."""
    return LineEndingFlags(
        has_lf=LF_LINE_ENDING_RE.search(text) is not None,
        has_crlf=CRLF_LINE_ENDING_RE.search(text) is not None,
    )


def resolve_style(
    has_lf: bool,
    has_crlf: bool,
    preferred: LineEndingStyle | str,
) -> LineEndingStyle:
    """Pick the style a file uses, or *preferred* when mixed or absent."""
    if has_lf and not has_crlf:
        return LineEndingStyle.LF
    if has_crlf and not has_lf:
        return LineEndingStyle.CRLF
    return LineEndingStyle(preferred)


def line_ending_sequence(style: LineEndingStyle | str) -> str:
    """Return the terminator characters for *style*.

    Unknown names fall back to ``\\n`` after logging an error.
    """
    sequence = _SEQUENCES.get(str(style))
    if sequence is None:
        logger.error(
            'Invalid end of line character: expected "lf" or "crlf" but got "%s".',
            style,
        )
        return "\n"
    return sequence


def convert(text: str, target: LineEndingStyle | str) -> str:
    """Replace every ``\\r\\n`` or bare ``\\n`` in *text* with *target*'s sequence."""
    return LINE_ENDING_RE.sub(line_ending_sequence(target), text)
