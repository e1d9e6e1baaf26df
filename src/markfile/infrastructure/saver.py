"""MarkdownDocumentSaver — in-memory text back to bytes on disk.

Pipeline: FRONT MATTER → EOL → ENCODE → WRITE

The caller's :class:`SaveOptions` are read, never modified.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable
from datetime import UTC, datetime
from pathlib import Path

from markfile.config.models import DocumentConfig
from markfile.domain.document import SaveOptions
from markfile.domain.frontmatter import locate_front_matter, rewrite_front_matter
from markfile.domain.line_endings import convert
from markfile.errors import PathError
from markfile.infrastructure.encoding import encode_text
from markfile.infrastructure.filesystem import StrPath, write_file
from markfile.infrastructure.yaml_codec import parse_yaml, serialize_yaml

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def _utc_now() -> datetime:
    return datetime.now(UTC)


class MarkdownDocumentSaver:
    """Writes document text using the options captured when it was loaded."""

    def __init__(self, config: DocumentConfig | None = None, *, clock: Clock | None = None) -> None:
        self._config = config or DocumentConfig()
        self._clock = clock or _utc_now

    def save(self, pathname: StrPath | None, markdown: str, options: SaveOptions) -> Path:
        """Write *markdown* to *pathname* and return the path written.

        Raises:
            PathError: *pathname* is empty.
            MalformedFrontMatterError: The front-matter YAML does not parse.
            IoError: The file cannot be written.
        """
        raw = os.fspath(pathname) if pathname is not None else ""
        if not raw:
            raise PathError("Cannot save file without path.")

        extension = os.path.splitext(raw)[1] or self._config.default_extension
        data = self.render(markdown, options)
        written = write_file(raw, data, extension)
        logger.debug("Saved %s (%d bytes)", written, len(data))
        return written

    def render(self, markdown: str, options: SaveOptions) -> bytes:
        """Produce the bytes :meth:`save` would write, without touching disk."""
        content = self.rewrite_front_matter(markdown)
        if options.adjust_line_ending_on_save:
            content = convert(content, options.line_ending)
        return encode_text(content, options.encoding)

    def rewrite_front_matter(self, markdown: str) -> str:
        """Refresh ``date``/``updated`` in a leading front-matter block.

        Text without a front-matter block is returned unchanged.
        """
        span = locate_front_matter(markdown)
        if span is None:
            return markdown

        cfg = self._config
        data = parse_yaml(span.yaml_text)
        rewritten = rewrite_front_matter(
            data,
            now=self._clock(),
            shift_hours=cfg.date_shift_hours,
            tz=cfg.tzinfo,
            fmt=cfg.date_format,
        )
        return span.splice(serialize_yaml(rewritten))
