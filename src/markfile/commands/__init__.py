"""Subcommand modules for markfile.

Provides register_commands() which uses deferred imports to keep
``markfile --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all standalone commands on the root CLI group."""
    from markfile.commands.inspect_cmd import inspect_cmd
    from markfile.commands.resave import resave
    from markfile.commands.resolve import resolve

    cli.add_command(inspect_cmd)
    cli.add_command(resave)
    cli.add_command(resolve)
