"""Command: resolve a Markdown file or directory path."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from markfile.commands._base import MarkfileCommand

if TYPE_CHECKING:
    from markfile.commands._context import AppContext


@click.command(
    cls=MarkfileCommand,
    examples="""\
  markfile resolve notes/
  markfile resolve link-to-post.md""",
)
@click.argument("path")
@click.pass_obj
def resolve(app: AppContext, path: str) -> None:
    """Print the absolute, symlink-resolved location of PATH."""
    app.emit(app.service.resolve(path))
