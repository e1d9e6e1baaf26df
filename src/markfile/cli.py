"""The ``markfile`` entry point: global flags, settings, and subcommands."""

from __future__ import annotations

import click

from markfile import __version__
from markfile.commands import register_commands
from markfile.commands._base import MarkfileGroup
from markfile.commands._context import AppContext
from markfile.config.settings import MarkfileSettings


@click.group(
    cls=MarkfileGroup,
    invoke_without_command=True,
    examples="""\
  markfile inspect README.md
  markfile --json resave post.md
  markfile -v --log-json resave post.md
  markfile -c ci/markfile.toml resave post.md""",
)
@click.version_option(__version__, prog_name="markfile")
@click.option(
    "-c",
    "--config",
    "config_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Read settings from this TOML file instead of searching for markfile.toml.",
)
@click.option("--json", "json_output", is_flag=True, help="Print results as JSON.")
@click.option("-q", "--quiet", is_flag=True, help="Print only the outcome line.")
@click.option("-v", "--verbose", is_flag=True, help="Debug logs and per-stage timings.")
@click.option("--log-json", is_flag=True, help="Write logs to stderr as JSON lines.")
@click.pass_context
def cli(ctx: click.Context, config_path: str | None, **flags: bool) -> None:
    """markfile: load and save Markdown without disturbing untouched bytes.

    Encoding, BOM and line endings are written back as they were read.
    Front-matter dates are refreshed on every save.
    """
    ctx.obj = AppContext(MarkfileSettings.from_cli(config_path=config_path, **flags))
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
