"""MarkdownDocumentLoader — bytes on disk to an in-memory document.

Pipeline: READ → GUESS ENCODING → DECODE → DETECT EOL → NORMALIZE → CLASSIFY
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from markfile.config.models import DocumentConfig
from markfile.domain.document import (
    MarkdownDocument,
    SaveOptions,
    TrailingNewlinePolicy,
    classify_trailing_newline,
)
from markfile.domain.line_endings import LineEndingStyle, convert, detect, resolve_style
from markfile.errors import InvalidOptionError, PathError, UnsupportedEncodingError
from markfile.infrastructure.encoding import decode_bytes, encoding_exists, guess_encoding
from markfile.infrastructure.filesystem import StrPath, read_raw_bytes

logger = logging.getLogger(__name__)


class MarkdownDocumentLoader:
    """Reads Markdown files into :class:`MarkdownDocument` descriptors.

    Per-call arguments left as None fall back to the
    :class:`DocumentConfig` given at construction.
    """

    def __init__(self, config: DocumentConfig | None = None) -> None:
        self._config = config or DocumentConfig()

    def load(
        self,
        pathname: StrPath,
        *,
        preferred_eol: LineEndingStyle | str | None = None,
        auto_guess_encoding: bool | None = None,
        trim_trailing_newline: TrailingNewlinePolicy | str | None = None,
    ) -> MarkdownDocument:
        """Load the file at *pathname*.

        Raises:
            PathError: *pathname* is empty.
            InvalidOptionError: *preferred_eol* or *trim_trailing_newline* is unknown.
            IoError: The file cannot be read.
            UnsupportedEncodingError: The guessed encoding has no codec.
        """
        cfg = self._config
        if not os.fspath(pathname):
            raise PathError("Cannot load file without path.")

        try:
            preferred = LineEndingStyle(preferred_eol or cfg.preferred_eol)
            hint = TrailingNewlinePolicy(trim_trailing_newline or cfg.trim_trailing_newline)
        except ValueError as exc:
            raise InvalidOptionError(str(exc)) from exc
        auto_guess = cfg.auto_guess_encoding if auto_guess_encoding is None else auto_guess_encoding

        buffer = read_raw_bytes(pathname)
        encoding = guess_encoding(buffer, auto_guess, default=cfg.default_encoding)
        if not encoding_exists(encoding.encoding):
            raise UnsupportedEncodingError(encoding.encoding)
        markdown = decode_bytes(buffer, encoding)
        del buffer

        flags = detect(markdown)
        line_ending = resolve_style(flags.has_lf, flags.has_crlf, preferred)
        adjust = flags.is_mixed or flags.is_unknown or line_ending is not LineEndingStyle.LF
        if adjust:
            markdown = convert(markdown, LineEndingStyle.LF)

        if not hint.is_resolved:
            hint = classify_trailing_newline(markdown)

        path = Path(pathname)
        logger.debug(
            "Loaded %s: encoding=%s bom=%s eol=%s mixed=%s trailing=%s",
            path,
            encoding.encoding,
            encoding.is_bom,
            line_ending,
            flags.is_mixed,
            hint,
        )
        return MarkdownDocument(
            markdown=markdown,
            pathname=path,
            filename=path.name,
            options=SaveOptions(
                encoding=encoding,
                line_ending=line_ending,
                adjust_line_ending_on_save=adjust,
                trim_trailing_newline=hint,
            ),
            is_mixed_line_endings=flags.is_mixed,
        )
