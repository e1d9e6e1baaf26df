"""Pure document logic with no I/O."""
