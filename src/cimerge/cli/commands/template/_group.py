"""Template CLI group definition."""

from __future__ import annotations

import click


@click.group()
def template() -> None:
    """Inspect and validate workflow templates."""
