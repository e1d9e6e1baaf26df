"""Tests for MarkdownDocumentLoader."""

import codecs
from collections.abc import Callable
from pathlib import Path

import pytest

from markfile.config.models import DocumentConfig
from markfile.domain.document import EncodingInfo, TrailingNewlinePolicy
from markfile.domain.line_endings import LineEndingStyle
from markfile.errors import (
    InvalidOptionError,
    IoError,
    MarkfileError,
    PathError,
    UnsupportedEncodingError,
)
from markfile.infrastructure.loader import MarkdownDocumentLoader

WriteFile = Callable[..., Path]


@pytest.fixture
def loader() -> MarkdownDocumentLoader:
    return MarkdownDocumentLoader()


class TestLineEndings:
    def test_lf_file(self, loader: MarkdownDocumentLoader, md_file: WriteFile) -> None:
        doc = loader.load(md_file(b"a\nb\n"))
        assert doc.markdown == "a\nb\n"
        assert doc.line_ending is LineEndingStyle.LF
        assert doc.adjust_line_ending_on_save is False
        assert doc.is_mixed_line_endings is False

    def test_crlf_file_normalized(self, loader: MarkdownDocumentLoader, md_file: WriteFile) -> None:
        doc = loader.load(md_file(b"a\r\nb\r\n"))
        assert doc.markdown == "a\nb\n"
        assert doc.line_ending is LineEndingStyle.CRLF
        assert doc.adjust_line_ending_on_save is True

    def test_mixed_file(self, loader: MarkdownDocumentLoader, md_file: WriteFile) -> None:
        doc = loader.load(md_file(b"a\r\nb\nc"), preferred_eol="crlf")
        assert doc.markdown == "a\nb\nc"
        assert "\r" not in doc.markdown
        assert doc.is_mixed_line_endings is True
        assert doc.line_ending is LineEndingStyle.CRLF
        assert doc.adjust_line_ending_on_save is True

    def test_mixed_with_lf_preference_still_adjusts(
        self, loader: MarkdownDocumentLoader, md_file: WriteFile
    ) -> None:
        doc = loader.load(md_file(b"a\r\nb\n"), preferred_eol="lf")
        assert doc.line_ending is LineEndingStyle.LF
        assert doc.adjust_line_ending_on_save is True

    def test_single_line_uses_preferred(
        self, loader: MarkdownDocumentLoader, md_file: WriteFile
    ) -> None:
        doc = loader.load(md_file(b"one line"), preferred_eol="crlf")
        assert doc.line_ending is LineEndingStyle.CRLF
        assert doc.adjust_line_ending_on_save is True

    def test_preferred_from_config(self, md_file: WriteFile) -> None:
        loader = MarkdownDocumentLoader(DocumentConfig(preferred_eol="crlf"))
        assert loader.load(md_file(b"")).line_ending is LineEndingStyle.CRLF


class TestEmptyFile:
    def test_zero_bytes(self, loader: MarkdownDocumentLoader, md_file: WriteFile) -> None:
        doc = loader.load(md_file(b""), preferred_eol="lf")
        assert doc.markdown == ""
        assert doc.line_ending is LineEndingStyle.LF
        assert doc.adjust_line_ending_on_save is True
        assert doc.trim_trailing_newline is TrailingNewlinePolicy.TRIM_ALL
        assert doc.encoding == EncodingInfo(encoding="utf-8", is_bom=False)


class TestTrailingNewline:
    @pytest.mark.parametrize(
        ("data", "expected"),
        [
            (b"x", TrailingNewlinePolicy.TRIM_ALL),
            (b"x\n", TrailingNewlinePolicy.ENSURE_SINGLE),
            (b"x\r\n", TrailingNewlinePolicy.ENSURE_SINGLE),
            (b"x\n\n", TrailingNewlinePolicy.DISABLED),
            (b"x\r\n\r\n", TrailingNewlinePolicy.DISABLED),
        ],
    )
    def test_classified(
        self,
        loader: MarkdownDocumentLoader,
        md_file: WriteFile,
        data: bytes,
        expected: TrailingNewlinePolicy,
    ) -> None:
        assert loader.load(md_file(data)).trim_trailing_newline is expected

    def test_explicit_hint_passes_through(
        self, loader: MarkdownDocumentLoader, md_file: WriteFile
    ) -> None:
        doc = loader.load(md_file(b"x\n\n"), trim_trailing_newline="trim_all")
        assert doc.trim_trailing_newline is TrailingNewlinePolicy.TRIM_ALL

    def test_hint_from_config(self, md_file: WriteFile) -> None:
        config = DocumentConfig(trim_trailing_newline="disabled")
        doc = MarkdownDocumentLoader(config).load(md_file(b"x"))
        assert doc.trim_trailing_newline is TrailingNewlinePolicy.DISABLED


class TestEncoding:
    def test_utf8_bom(self, loader: MarkdownDocumentLoader, md_file: WriteFile) -> None:
        doc = loader.load(md_file(codecs.BOM_UTF8 + b"# Hi\n"))
        assert doc.markdown == "# Hi\n"
        assert doc.encoding == EncodingInfo(encoding="utf-8", is_bom=True)

    def test_utf16_crlf(self, loader: MarkdownDocumentLoader, md_file: WriteFile) -> None:
        data = codecs.BOM_UTF16_LE + "ä\r\nb\r\n".encode("utf-16le")
        doc = loader.load(md_file(data))
        assert doc.markdown == "ä\nb\n"
        assert doc.encoding.encoding == "utf-16le"
        assert doc.line_ending is LineEndingStyle.CRLF

    def test_no_guess_uses_config_default(self, md_file: WriteFile) -> None:
        loader = MarkdownDocumentLoader(DocumentConfig(default_encoding="latin-1"))
        doc = loader.load(md_file("café\n".encode("latin-1")), auto_guess_encoding=False)
        assert doc.markdown == "café\n"
        assert doc.encoding.encoding == "latin-1"

    def test_unsupported_encoding(
        self,
        loader: MarkdownDocumentLoader,
        md_file: WriteFile,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        monkeypatch.setattr(
            "markfile.infrastructure.encoding.chardet.detect",
            lambda data: {"encoding": "X-Klingon", "confidence": 0.99},
        )
        path = md_file(b"\xa4\xa5\xa6 some text\n")
        with pytest.raises(MarkfileError) as excinfo:
            loader.load(path)
        assert type(excinfo.value) is UnsupportedEncodingError
        assert excinfo.value.encoding == "x-klingon"
        assert "x-klingon" in str(excinfo.value)


class TestDescriptor:
    def test_path_and_filename(self, loader: MarkdownDocumentLoader, md_file: WriteFile) -> None:
        path = md_file(b"x", name="sub/note.md")
        doc = loader.load(path)
        assert doc.pathname == path
        assert doc.filename == "note.md"


class TestFailures:
    def test_missing_file(self, loader: MarkdownDocumentLoader, tmp_path: Path) -> None:
        with pytest.raises(IoError):
            loader.load(tmp_path / "missing.md")

    def test_empty_path(self, loader: MarkdownDocumentLoader) -> None:
        with pytest.raises(PathError):
            loader.load("")

    @pytest.mark.parametrize(
        "overrides",
        [{"preferred_eol": "cr"}, {"trim_trailing_newline": "sometimes"}],
    )
    def test_unknown_option(
        self, loader: MarkdownDocumentLoader, md_file: WriteFile, overrides: dict[str, str]
    ) -> None:
        with pytest.raises(InvalidOptionError, match="is not a valid"):
            loader.load(md_file(b"x\n"), **overrides)
