"""Built-in workflow templates shipped with cimerge.

Each ``*.yaml`` file in this package is a reusable workflow (or a native
template) that discovery registers at the BUILTIN precedence level.
"""

from __future__ import annotations

from importlib.resources import files
from pathlib import Path

__all__ = ["BUILTIN_TEMPLATES", "get_builtin_path"]

BUILTIN_TEMPLATES = frozenset(
    {
        "python-ci",  # lint, type check, test matrix
        "python-publish",  # build and publish distributions
        "docs",  # static site build and deploy
        "security-scan",  # dependency audit and static analysis
    }
)


def get_builtin_path() -> Path:
    """Return the directory holding the packaged template files."""
    return Path(str(files("cimerge.library")))
