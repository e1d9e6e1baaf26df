"""markfile — Markdown document I/O that preserves on-disk bytes."""

__version__ = "0.1.0"
