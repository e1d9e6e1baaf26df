"""Tests for DocumentService."""

from __future__ import annotations

import codecs
from collections.abc import Callable
from datetime import datetime
from pathlib import Path

import pytest

from markfile.config.models import DocumentConfig
from markfile.domain.document import TrailingNewlinePolicy
from markfile.errors import PathError
from markfile.services.document import DocumentService


@pytest.fixture
def service(utc_config: DocumentConfig, fixed_clock: Callable[[], datetime]) -> DocumentService:
    return DocumentService(utc_config, clock=fixed_clock)


class TestOpenDocument:
    def test_absolute_path(
        self,
        service: DocumentService,
        md_file: Callable[..., Path],
        tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        md_file(b"x\n", name="rel.md")
        monkeypatch.chdir(tmp_path)
        doc = service.open_document("rel.md")
        assert doc.pathname.is_absolute()
        assert doc.filename == "rel.md"

    def test_follows_symlink(
        self, service: DocumentService, md_file: Callable[..., Path], tmp_path: Path
    ) -> None:
        target = md_file(b"linked\n", name="target.md")
        link = tmp_path / "link.md"
        link.symlink_to(target)
        doc = service.open_document(link)
        assert doc.filename == "target.md"
        assert doc.markdown == "linked\n"

    def test_dangling_symlink(self, service: DocumentService, tmp_path: Path) -> None:
        link = tmp_path / "dangling.md"
        link.symlink_to(tmp_path / "gone.md")
        with pytest.raises(PathError, match="Cannot resolve"):
            service.open_document(link)

    def test_overrides_forwarded(
        self, service: DocumentService, md_file: Callable[..., Path]
    ) -> None:
        doc = service.open_document(md_file(b""), preferred_eol="crlf")
        assert doc.line_ending == "crlf"


class TestLoad:
    def test_summary(self, service: DocumentService, md_file: Callable[..., Path]) -> None:
        path = md_file(b"a\r\nb\r\n")
        result = service.load(path)
        assert result.ok
        assert result.op == "load"
        assert result.data["filename"] == "doc.md"
        assert result.data["pathname"] == str(path)
        assert result.data["encoding"] == "utf-8"
        assert result.data["line_ending"] == "crlf"
        assert result.data["adjust_line_ending_on_save"] is True
        assert result.data["trim_trailing_newline"] == "ensure_single"
        assert result.data["length"] == 4
        assert result.warnings == []

    def test_mixed_line_endings_warning(
        self, service: DocumentService, md_file: Callable[..., Path]
    ) -> None:
        result = service.load(md_file(b"a\nb\r\nc\n"))
        assert result.ok
        assert result.data["is_mixed_line_endings"] is True
        assert result.warnings == ["Mixed line endings in doc.md; they will be saved as lf"]

    def test_missing_file(self, service: DocumentService, tmp_path: Path) -> None:
        result = service.load(tmp_path / "missing.md")
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "IO_ERROR"

    def test_empty_path(self, service: DocumentService) -> None:
        result = service.load("")
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "PATH_ERROR"

    def test_unknown_option(self, service: DocumentService, md_file: Callable[..., Path]) -> None:
        result = service.load(md_file(b"x\n"), preferred_eol="cr")
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "INVALID_OPTION"

    def test_unsupported_encoding(
        self,
        service: DocumentService,
        md_file: Callable[..., Path],
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        monkeypatch.setattr(
            "chardet.detect", lambda data: {"encoding": "X-Klingon", "confidence": 1.0}
        )
        result = service.load(md_file("ünïcödé".encode("utf-8")))
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "UNSUPPORTED_ENCODING"
        assert result.error.detail == {"encoding": "x-klingon"}


class TestSave:
    def test_writes_back_to_origin(
        self, service: DocumentService, md_file: Callable[..., Path]
    ) -> None:
        path = md_file(b"a\r\nb\r\n")
        doc = service.open_document(path)
        doc.markdown = "changed\n"
        result = service.save(doc)
        assert result.ok
        assert result.data == {"path": str(path)}
        assert path.read_bytes() == b"changed\r\n"

    def test_ensure_single_applied(
        self, service: DocumentService, md_file: Callable[..., Path]
    ) -> None:
        path = md_file(b"a\n")
        doc = service.open_document(path)
        doc.markdown = "a\n\n\n"
        service.save(doc)
        assert path.read_bytes() == b"a\n"

    def test_trim_all_applied(self, service: DocumentService, md_file: Callable[..., Path]) -> None:
        path = md_file(b"a")
        doc = service.open_document(path)
        doc.markdown = "a\n\n"
        service.save(doc)
        assert path.read_bytes() == b"a"

    def test_disabled_leaves_text(
        self, service: DocumentService, md_file: Callable[..., Path]
    ) -> None:
        path = md_file(b"a\n")
        doc = service.open_document(path, trim_trailing_newline=TrailingNewlinePolicy.DISABLED)
        doc.markdown = "a\n\n\n"
        service.save(doc)
        assert path.read_bytes() == b"a\n\n\n"

    def test_save_as_keeps_source(
        self, service: DocumentService, md_file: Callable[..., Path], tmp_path: Path
    ) -> None:
        path = md_file(b"a\n")
        doc = service.open_document(path)
        result = service.save(doc, tmp_path / "copy")
        assert result.ok
        assert result.data["path"] == str(tmp_path / "copy.md")
        assert (tmp_path / "copy.md").read_bytes() == b"a\n"

    def test_malformed_front_matter(
        self, service: DocumentService, md_file: Callable[..., Path]
    ) -> None:
        raw = b"---\ntitle: [oops\n---\nbody\n"
        path = md_file(raw)
        result = service.save(service.open_document(path))
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "MALFORMED_FRONT_MATTER"
        assert path.read_bytes() == raw


class TestResave:
    def test_preserves_encoding_and_eol(
        self, service: DocumentService, md_file: Callable[..., Path]
    ) -> None:
        raw = codecs.BOM_UTF8 + b"# Title\r\n\r\nText\r\n"
        path = md_file(raw)
        result = service.resave(path)
        assert result.ok
        assert result.data["path"] == str(path)
        assert result.data["is_bom"] is True
        assert path.read_bytes() == raw

    def test_refreshes_front_matter(
        self, service: DocumentService, md_file: Callable[..., Path]
    ) -> None:
        path = md_file(b"---\ntitle: A\ndate: 2023-01-01T00:00:00Z\n---\nbody\n")
        assert service.resave(path).ok
        text = path.read_text(encoding="utf-8")
        assert "2022-12-31 16:00:00" in text
        assert "2024-05-06 07:08:09" in text
        assert text.endswith("---\nbody\n")

    def test_output_path(
        self, service: DocumentService, md_file: Callable[..., Path], tmp_path: Path
    ) -> None:
        path = md_file(b"a\r\n")
        out = tmp_path / "out" / "copy.md"
        result = service.resave(path, output=out)
        assert result.ok
        assert result.data["pathname"] == str(path)
        assert result.data["path"] == str(out)
        assert out.read_bytes() == b"a\r\n"

    def test_mixed_normalized_on_disk(
        self, service: DocumentService, md_file: Callable[..., Path]
    ) -> None:
        path = md_file(b"a\nb\r\nc\n")
        result = service.resave(path)
        assert result.ok
        assert len(result.warnings) == 1
        assert path.read_bytes() == b"a\nb\nc\n"

    def test_missing_source(self, service: DocumentService, tmp_path: Path) -> None:
        result = service.resave(tmp_path / "missing.md")
        assert not result.ok
        assert result.op == "resave"
        assert result.error is not None
        assert result.error.code == "IO_ERROR"


class TestResolve:
    def test_markdown_file(self, service: DocumentService, md_file: Callable[..., Path]) -> None:
        path = md_file(b"x")
        result = service.resolve(path)
        assert result.ok
        assert result.data == {"path": str(path), "is_dir": False}

    def test_directory(self, service: DocumentService, tmp_path: Path) -> None:
        result = service.resolve(tmp_path)
        assert result.ok
        assert result.data["is_dir"] is True

    def test_non_markdown_file(self, service: DocumentService, md_file: Callable[..., Path]) -> None:
        result = service.resolve(md_file(b"x", name="image.png"))
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "PATH_ERROR"

    def test_missing(self, service: DocumentService, tmp_path: Path) -> None:
        assert not service.resolve(tmp_path / "nope.md").ok
