"""cimerge CLI commands."""
