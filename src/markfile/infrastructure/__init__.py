"""Filesystem and codec adapters plus the load/save pipeline."""
