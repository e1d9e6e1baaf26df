"""Document descriptor and the options that travel from load to save.

A :class:`MarkdownDocument` owns the live text, which the editor may
change freely. Everything learned about the file at load time lives in a
frozen :class:`SaveOptions`, so a save can read it but never rewrite it.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path

from pydantic import BaseModel

from markfile.domain.line_endings import LineEndingStyle


class EncodingInfo(BaseModel):
    """Character encoding reported by the encoding oracle."""

    model_config = {"frozen": True}

    encoding: str
    is_bom: bool = False


class TrailingNewlinePolicy(StrEnum):
    """How the end of the file is treated on save.

    ``USE_DEFAULT`` is the single "not yet classified" value. The loader
    replaces it with one of the other three; it never survives a load.
    """

    DISABLED = "disabled"
    ENSURE_SINGLE = "ensure_single"
    TRIM_ALL = "trim_all"
    USE_DEFAULT = "use_default"

    @property
    def is_resolved(self) -> bool:
        return self is not TrailingNewlinePolicy.USE_DEFAULT


class SaveOptions(BaseModel):
    """Per-document settings captured at load time and consumed on save."""

    model_config = {"frozen": True}

    encoding: EncodingInfo
    line_ending: LineEndingStyle = LineEndingStyle.LF
    adjust_line_ending_on_save: bool = False
    trim_trailing_newline: TrailingNewlinePolicy = TrailingNewlinePolicy.USE_DEFAULT


@dataclass
class MarkdownDocument:
    """An open Markdown file.

    Attributes:
        markdown: Live text, ``\\n``-terminated lines only.
        pathname: Path the document was loaded from.
        filename: Basename of *pathname*.
        options: Provenance from load time, passed back to the saver.
        is_mixed_line_endings: Whether the file mixed ``\\n`` and ``\\r\\n``.
    """

    markdown: str
    pathname: Path
    filename: str
    options: SaveOptions
    is_mixed_line_endings: bool = False

    @property
    def encoding(self) -> EncodingInfo:
        return self.options.encoding

    @property
    def line_ending(self) -> LineEndingStyle:
        return self.options.line_ending

    @property
    def adjust_line_ending_on_save(self) -> bool:
        return self.options.adjust_line_ending_on_save

    @property
    def trim_trailing_newline(self) -> TrailingNewlinePolicy:
        return self.options.trim_trailing_newline

    def summary(self) -> dict[str, object]:
        """Descriptor fields as plain values, without the text itself."""
        return {
            "pathname": str(self.pathname),
            "filename": self.filename,
            "encoding": self.encoding.encoding,
            "is_bom": self.encoding.is_bom,
            "line_ending": str(self.line_ending),
            "is_mixed_line_endings": self.is_mixed_line_endings,
            "adjust_line_ending_on_save": self.adjust_line_ending_on_save,
            "trim_trailing_newline": str(self.trim_trailing_newline),
            "length": len(self.markdown),
        }


def classify_trailing_newline(text: str) -> TrailingNewlinePolicy:
    """Derive the trailing-newline policy from ``\\n``-normalized *text*.

    Total over its input: empty text is ``TRIM_ALL``.
    """
    if text.endswith("\n\n"):
        return TrailingNewlinePolicy.DISABLED
    if text.endswith("\n"):
        return TrailingNewlinePolicy.ENSURE_SINGLE
    return TrailingNewlinePolicy.TRIM_ALL


def apply_trailing_newline(text: str, policy: TrailingNewlinePolicy) -> str:
    """Enforce *policy* on the end of *text*."""
    if policy is TrailingNewlinePolicy.ENSURE_SINGLE:
        return text.rstrip("\n") + "\n"
    if policy is TrailingNewlinePolicy.TRIM_ALL:
        return text.rstrip("\n")
    return text
