"""Command: report how a Markdown file is encoded and terminated."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from markfile.commands._base import MarkfileCommand
from markfile.commands._options import build_overrides, load_options

if TYPE_CHECKING:
    from markfile.commands._context import AppContext


@click.command(
    "inspect",
    cls=MarkfileCommand,
    examples="""\
  markfile inspect README.md
  markfile inspect notes/todo.md --eol crlf
  markfile --json inspect legacy.md --no-guess-encoding""",
)
@click.argument("path", type=click.Path(dir_okay=False))
@load_options
@click.pass_obj
def inspect_cmd(app: AppContext, path: str, eol: str | None, no_guess_encoding: bool) -> None:
    """Show encoding, line endings and trailing-newline policy of PATH."""
    app.emit(app.service.load(path, **build_overrides(eol, no_guess_encoding)))
