"""Rich/JSON output helpers.

The CLI renders ServiceResult for humans (Rich output, colors) or
machines (--json). The formatter layer adapts ServiceResult to the
requested output mode.
"""

from __future__ import annotations

import json as _json
from dataclasses import dataclass
from typing import TYPE_CHECKING

from rich.markup import escape
from rich.table import Table

from markfile.output.console import create_console, get_output

if TYPE_CHECKING:
    from markfile.services.result import ServiceResult


_PATH_KEYS = frozenset({"path", "pathname"})


@dataclass(frozen=True)
class OutputSettings:
    """Output switches taken from the global CLI flags."""

    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    no_color: bool = False


def format_result(result: ServiceResult, *, settings: OutputSettings | None = None) -> str:
    """Format a ServiceResult for display."""
    settings = settings or OutputSettings()
    if settings.json_output:
        return result.model_dump_json(indent=2)

    console = create_console(no_color=settings.no_color)
    if not result.ok:
        message = result.error.message if result.error else "Unknown error"
        code = f" [{result.error.code}]" if result.error else ""
        console.print(
            f"[mf.error]ERROR[/mf.error]: [mf.op]{result.op}[/mf.op]{escape(code)} - "
            f"{escape(message)}"
        )
        return get_output(console).rstrip("\n")

    console.print(f"[mf.ok]OK[/mf.ok]: [mf.op]{result.op}[/mf.op]")
    if result.data and not settings.quiet:
        table = Table(show_header=False, box=None, padding=(0, 1, 0, 2))
        table.add_column(style="mf.key")
        table.add_column()
        for key, value in result.data.items():
            if isinstance(value, (dict, list)):
                value = _json.dumps(value, separators=(",", ":"))
            cell = escape(str(value))
            if key in _PATH_KEYS:
                cell = f"[mf.path]{cell}[/mf.path]"
            table.add_row(key, cell)
        console.print(table)
    if settings.verbose and result.meta:
        console.print(escape(_json.dumps(result.meta, indent=2)), style="mf.key")
    return get_output(console).rstrip("\n")
