"""Command: load a Markdown file and write it back."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from markfile.commands._base import MarkfileCommand
from markfile.commands._options import TRAILING_NEWLINE_CHOICES, build_overrides, load_options

if TYPE_CHECKING:
    from markfile.commands._context import AppContext


@click.command(
    cls=MarkfileCommand,
    examples="""\
  markfile resave post.md
  markfile resave post.md -o build/post.md
  markfile resave post.md --trailing-newline single""",
)
@click.argument("path", type=click.Path(dir_okay=False))
@click.option("-o", "--output", default=None, help="Write here instead of overwriting PATH.")
@click.option(
    "--trailing-newline",
    type=click.Choice(list(TRAILING_NEWLINE_CHOICES)),
    default=None,
    help="Override the detected trailing-newline policy.",
)
@load_options
@click.pass_obj
def resave(
    app: AppContext,
    path: str,
    output: str | None,
    trailing_newline: str | None,
    eol: str | None,
    no_guess_encoding: bool,
) -> None:
    """Re-save PATH, refreshing front-matter dates and keeping its byte layout."""
    overrides = build_overrides(eol, no_guess_encoding, trailing_newline)
    app.emit(app.service.resave(path, output=output, **overrides))
