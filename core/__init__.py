"""Pure quarterly simulation core (no I/O)."""
