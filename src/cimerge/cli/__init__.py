"""CLI utilities for cimerge.

Context management, output formatting, and request building shared by the
click commands.
"""

from __future__ import annotations

from cimerge.cli.context import CLIContext, ExitCode
from cimerge.cli.output import OutputFormat

__all__ = [
    "CLIContext",
    "ExitCode",
    "OutputFormat",
]
