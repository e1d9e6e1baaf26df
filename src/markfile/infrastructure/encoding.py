"""Encoding oracle and the codec backend used to decode and encode documents.

Byte-order marks are sniffed first; without one, chardet guesses when
auto-detection is enabled, and the configured default applies otherwise.
Oracle names are always concrete codec names (``utf-16le``, never
``utf-16``) so that a byte-order mark is written exactly once on save.
"""

from __future__ import annotations

import codecs
import logging

import chardet

from markfile.domain.document import EncodingInfo

logger = logging.getLogger(__name__)

DEFAULT_ENCODING = "utf-8"

# Longest marks first: the UTF-32-LE mark begins with the UTF-16-LE one.
_BYTE_ORDER_MARKS: tuple[tuple[bytes, str], ...] = (
    (codecs.BOM_UTF32_LE, "utf-32le"),
    (codecs.BOM_UTF32_BE, "utf-32be"),
    (codecs.BOM_UTF8, "utf-8"),
    (codecs.BOM_UTF16_LE, "utf-16le"),
    (codecs.BOM_UTF16_BE, "utf-16be"),
)

# Codecs that read and write their own byte-order mark.
_SELF_MARKING_CODECS = frozenset({"utf-8-sig", "utf-16", "utf-32"})

_BOM_CHAR = "\ufeff"


def _sniff_bom(data: bytes) -> str | None:
    for mark, name in _BYTE_ORDER_MARKS:
        if data.startswith(mark):
            return name
    return None


def guess_encoding(
    data: bytes,
    auto_guess: bool = True,
    *,
    default: str = DEFAULT_ENCODING,
) -> EncodingInfo:
    """Best-guess encoding for *data*.

    Args:
        data: Raw file contents.
        auto_guess: Run statistical detection when no byte-order mark is found.
        default: Encoding used when nothing better is known.
    """
    bom_encoding = _sniff_bom(data)
    if bom_encoding is not None:
        return EncodingInfo(encoding=bom_encoding, is_bom=True)

    if auto_guess and data:
        detected = chardet.detect(data)
        name = (detected.get("encoding") or "").lower()
        logger.debug(
            "chardet guessed %r (confidence %s)", name or None, detected.get("confidence")
        )
        # ASCII is a subset of the default; keep the default so later edits fit.
        if name and name != "ascii":
            return EncodingInfo(encoding=name, is_bom=False)

    return EncodingInfo(encoding=default, is_bom=False)


def encoding_exists(name: str) -> bool:
    """Whether the codec backend can handle *name*."""
    try:
        codecs.lookup(name)
    except LookupError:
        return False
    return True


def _codec_name(name: str) -> str:
    return codecs.lookup(name).name


def decode_bytes(data: bytes, encoding: EncodingInfo) -> str:
    """Decode *data*, dropping a leading byte-order mark.

    Undecodable bytes become U+FFFD rather than failing the load.
    """
    text = data.decode(encoding.encoding, errors="replace")
    if text.startswith(_BOM_CHAR):
        text = text[1:]
    return text


def encode_text(text: str, encoding: EncodingInfo) -> bytes:
    """Encode *text*, prefixing a byte-order mark when ``encoding.is_bom`` is set.

    Characters the target encoding cannot represent become ``?``.
    """
    if encoding.is_bom and _codec_name(encoding.encoding) not in _SELF_MARKING_CODECS:
        text = _BOM_CHAR + text
    return text.encode(encoding.encoding, errors="replace")
