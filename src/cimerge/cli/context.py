"""CLI context and exit codes for cimerge."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from pathlib import Path

from cimerge.config import CimergeConfig

__all__ = [
    "ExitCode",
    "CLIContext",
]


class ExitCode(IntEnum):
    """Standard exit codes for the cimerge CLI.

    - 0 for success
    - 1 for failure (invalid input, unresolvable template)
    - 130 for keyboard interrupt (128 + SIGINT=2)
    """

    SUCCESS = 0
    FAILURE = 1
    INTERRUPTED = 130


@dataclass(frozen=True, slots=True)
class CLIContext:
    """Global options and configuration shared by every subcommand.

    Attributes:
        config: Loaded cimerge configuration.
        config_path: Path to config file (if specified via --config).
        verbosity: Verbosity level (0=config default, 1=INFO, 2+=DEBUG).
        quiet: Suppress non-essential output.
    """

    config: CimergeConfig
    config_path: Path | None = None
    verbosity: int = 0
    quiet: bool = False
