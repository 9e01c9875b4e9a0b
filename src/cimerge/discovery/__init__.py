"""Template discovery.

Templates are discovered from three locations with precedence
PROJECT > USER > BUILTIN:

- ``.cimerge/templates/`` in the current project
- ``~/.config/cimerge/templates/``
- templates packaged in ``cimerge.library``
"""

from __future__ import annotations

from cimerge.discovery.locator import TemplateLocator
from cimerge.discovery.models import (
    DiscoveredTemplate,
    DiscoveryResult,
    SkippedTemplate,
    TemplateSource,
)
from cimerge.discovery.registry import (
    TemplateDiscovery,
    create_discovery,
    find_template,
)

__all__ = [
    "DiscoveredTemplate",
    "DiscoveryResult",
    "SkippedTemplate",
    "TemplateDiscovery",
    "TemplateLocator",
    "TemplateSource",
    "create_discovery",
    "find_template",
]
