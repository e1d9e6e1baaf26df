"""Error taxonomy for the document load/save pipeline.

Every error carries a stable ``code`` so the service layer can surface it
as a :class:`~markfile.services.result.ServiceError` without losing the
kind. None of these are retried by the pipeline.
"""

from __future__ import annotations


class MarkfileError(Exception):
    """Base class for all pipeline failures."""

    code: str = "MARKFILE_ERROR"


class PathError(MarkfileError):
    """Empty or unresolvable path."""

    code = "PATH_ERROR"


class IoError(MarkfileError):
    """Read or write failure at the filesystem boundary."""

    code = "IO_ERROR"


class UnsupportedEncodingError(MarkfileError):
    """The encoding oracle returned a name the codec backend cannot handle."""

    code = "UNSUPPORTED_ENCODING"

    def __init__(self, encoding: str) -> None:
        super().__init__(f'"{encoding}" encoding is not supported.')
        self.encoding = encoding


class MalformedFrontMatterError(MarkfileError):
    """Front-matter delimiters are present but the YAML between them is invalid."""

    code = "MALFORMED_FRONT_MATTER"


class InvalidOptionError(MarkfileError):
    """A load option names a line ending or trailing-newline policy that does not exist."""

    code = "INVALID_OPTION"
