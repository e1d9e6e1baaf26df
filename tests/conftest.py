"""Shared pytest fixtures and test helpers for markfile tests."""

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime
from pathlib import Path

import pytest
from click.testing import CliRunner

from markfile.config.models import DocumentConfig

FIXED_NOW = datetime(2024, 5, 6, 7, 8, 9, tzinfo=UTC)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def utc_config() -> DocumentConfig:
    """Document config rendering timestamps in UTC, independent of the host zone."""
    return DocumentConfig(timezone="UTC")


@pytest.fixture
def fixed_clock() -> Callable[[], datetime]:
    """Clock frozen at :data:`FIXED_NOW`."""
    return lambda: FIXED_NOW


@pytest.fixture
def md_file(tmp_path: Path) -> Callable[..., Path]:
    """Factory writing raw bytes to a Markdown file under ``tmp_path``."""

    def _write(data: bytes, name: str = "doc.md") -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)
        return path

    return _write


@pytest.fixture
def _isolated_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Run in an empty directory with no config discovery leaking in.

    Use via ``@pytest.mark.usefixtures("_isolated_cwd")`` on command test classes.
    """
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("MARKFILE_CONFIG", raising=False)
