"""Shared Rich Console instance for cimerge CLI output."""

from __future__ import annotations

from rich.console import Console

__all__ = ["console"]

console = Console()
