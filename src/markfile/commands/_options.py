"""Load options shared by the commands that open a document."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, TypeVar

import click

_F = TypeVar("_F", bound=Callable[..., Any])

# CLI spelling -> TrailingNewlinePolicy value.
TRAILING_NEWLINE_CHOICES: dict[str, str] = {
    "auto": "use_default",
    "disabled": "disabled",
    "single": "ensure_single",
    "trim": "trim_all",
}


def load_options(func: _F) -> _F:
    """Attach ``--eol`` and ``--no-guess-encoding`` to a command."""
    func = click.option(
        "--no-guess-encoding",
        is_flag=True,
        help="Skip statistical encoding detection (BOM sniffing still applies).",
    )(func)
    func = click.option(
        "--eol",
        type=click.Choice(["lf", "crlf"]),
        default=None,
        help="Line ending assumed when the file has none or mixes styles.",
    )(func)
    return func


def build_overrides(
    eol: str | None,
    no_guess_encoding: bool,
    trailing_newline: str | None = None,
) -> dict[str, Any]:
    """Turn CLI option values into loader keyword overrides."""
    overrides: dict[str, Any] = {}
    if eol is not None:
        overrides["preferred_eol"] = eol
    if no_guess_encoding:
        overrides["auto_guess_encoding"] = False
    if trailing_newline is not None:
        overrides["trim_trailing_newline"] = TRAILING_NEWLINE_CHOICES[trailing_newline]
    return overrides
