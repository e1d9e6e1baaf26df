"""DocumentService — load, save, resave and resolve Markdown documents.

Wraps :class:`MarkdownDocumentLoader` and :class:`MarkdownDocumentSaver`
for interactive callers: paths go through the resolver first, the
trailing-newline policy is enforced before handing text to the saver,
and every pipeline failure comes back as a failed :class:`ServiceResult`.
"""

from __future__ import annotations

from typing import Any

from markfile.config.models import DocumentConfig
from markfile.domain.document import MarkdownDocument, apply_trailing_newline
from markfile.errors import MarkfileError, PathError
from markfile.infrastructure.filesystem import (
    StrPath,
    normalize_and_resolve_path,
    normalize_markdown_path,
)
from markfile.infrastructure.loader import MarkdownDocumentLoader
from markfile.infrastructure.saver import Clock, MarkdownDocumentSaver
from markfile.services.result import ServiceError, ServiceResult
from markfile.services.telemetry import trace_span, traced


class DocumentService:
    """Document operations for the CLI and other front ends."""

    def __init__(self, config: DocumentConfig | None = None, *, clock: Clock | None = None) -> None:
        self._config = config or DocumentConfig()
        self._loader = MarkdownDocumentLoader(self._config)
        self._saver = MarkdownDocumentSaver(self._config, clock=clock)

    @property
    def config(self) -> DocumentConfig:
        return self._config

    # ------------------------------------------------------------------
    # Programmatic API (raises MarkfileError)
    # ------------------------------------------------------------------

    def open_document(self, pathname: StrPath, **overrides: Any) -> MarkdownDocument:
        """Resolve *pathname* and load it.

        *overrides* are forwarded to :meth:`MarkdownDocumentLoader.load`.
        """
        resolved = normalize_and_resolve_path(pathname)
        if resolved is None:
            msg = f'Cannot resolve "{pathname}".'
            raise PathError(msg)
        return self._loader.load(resolved, **overrides)

    def write_document(self, document: MarkdownDocument, pathname: StrPath | None = None) -> str:
        """Save *document* to *pathname* (default: where it was loaded from)."""
        target = document.pathname if pathname is None else pathname
        text = apply_trailing_newline(document.markdown, document.trim_trailing_newline)
        written = self._saver.save(target, text, document.options)
        return str(written)

    # ------------------------------------------------------------------
    # Result API
    # ------------------------------------------------------------------

    @traced
    def load(self, pathname: StrPath, **overrides: Any) -> ServiceResult:
        """Load a document and report its descriptor."""
        op = "load"
        try:
            document = self.open_document(pathname, **overrides)
        except MarkfileError as exc:
            return ServiceResult.failure(op, exc)

        return ServiceResult(
            ok=True,
            op=op,
            data=document.summary(),
            warnings=_load_warnings(document),
        )

    @traced
    def save(self, document: MarkdownDocument, pathname: StrPath | None = None) -> ServiceResult:
        """Save an open document."""
        op = "save"
        try:
            written = self.write_document(document, pathname)
        except MarkfileError as exc:
            return ServiceResult.failure(op, exc)
        return ServiceResult(ok=True, op=op, data={"path": written})

    @traced
    def resave(
        self,
        pathname: StrPath,
        *,
        output: StrPath | None = None,
        **overrides: Any,
    ) -> ServiceResult:
        """Load a document and write it straight back (or to *output*).

        Front-matter dates are refreshed and the trailing-newline policy is
        applied; everything else keeps its on-disk shape.
        """
        op = "resave"
        try:
            with trace_span("load"):
                document = self.open_document(pathname, **overrides)
            with trace_span("save"):
                written = self.write_document(document, output)
        except MarkfileError as exc:
            return ServiceResult.failure(op, exc)

        data = document.summary()
        data["path"] = written
        return ServiceResult(ok=True, op=op, data=data, warnings=_load_warnings(document))

    @traced
    def resolve(self, pathname: StrPath) -> ServiceResult:
        """Resolve a Markdown file or directory path."""
        op = "resolve"
        resolved = normalize_markdown_path(pathname)
        if resolved is None:
            return ServiceResult(
                ok=False,
                op=op,
                error=ServiceError(
                    code=PathError.code,
                    message=f'"{pathname}" is not a resolvable Markdown file or directory.',
                ),
            )
        return ServiceResult(
            ok=True,
            op=op,
            data={"path": str(resolved.path), "is_dir": resolved.is_dir},
        )


def _load_warnings(document: MarkdownDocument) -> list[str]:
    warnings: list[str] = []
    if document.is_mixed_line_endings:
        warnings.append(
            f"Mixed line endings in {document.filename}; "
            f"they will be saved as {document.line_ending}"
        )
    return warnings
