"""Template CLI commands package."""

from __future__ import annotations

# isort: off
# Import the group first so subcommand modules can attach to it.
from cimerge.cli.commands.template._group import template

# Import every subcommand module to register commands on the group.
from cimerge.cli.commands.template import list_cmd as _list_cmd  # noqa: F401
from cimerge.cli.commands.template import search as _search  # noqa: F401
from cimerge.cli.commands.template import show as _show  # noqa: F401
from cimerge.cli.commands.template import validate as _validate  # noqa: F401

# isort: on

__all__ = ["template"]
