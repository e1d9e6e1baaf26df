"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, markfile.toml only contains
overrides. The loader and saver receive a :class:`DocumentConfig` at
construction; nothing here is process-wide state.
"""

from __future__ import annotations

from datetime import tzinfo
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import BaseModel, field_validator

from markfile.domain.document import TrailingNewlinePolicy
from markfile.domain.frontmatter import DEFAULT_DATE_FORMAT
from markfile.domain.line_endings import LineEndingStyle


class DocumentConfig(BaseModel):
    """[document] section."""

    model_config = {"frozen": True}

    preferred_eol: LineEndingStyle = LineEndingStyle.LF
    auto_guess_encoding: bool = True
    trim_trailing_newline: TrailingNewlinePolicy = TrailingNewlinePolicy.USE_DEFAULT
    default_encoding: str = "utf-8"
    default_extension: str = ".md"
    date_shift_hours: int = 8
    date_format: str = DEFAULT_DATE_FORMAT
    timezone: str | None = None

    @field_validator("default_extension")
    @classmethod
    def _leading_dot(cls, value: str) -> str:
        if value and not value.startswith("."):
            return f".{value}"
        return value

    @field_validator("timezone")
    @classmethod
    def _known_zone(cls, value: str | None) -> str | None:
        if value is not None:
            try:
                ZoneInfo(value)
            except (ZoneInfoNotFoundError, ValueError) as exc:
                msg = f"Unknown timezone: {value!r}"
                raise ValueError(msg) from exc
        return value

    @property
    def tzinfo(self) -> tzinfo | None:
        """Zone for rendering timestamps; None means the host's local zone."""
        return ZoneInfo(self.timezone) if self.timezone else None

