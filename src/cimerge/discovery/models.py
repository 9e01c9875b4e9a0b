"""Data models for template discovery.

All models are frozen dataclasses with slots.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from cimerge.templates.schema import WorkflowTemplate

__all__ = [
    "TemplateSource",
    "PRECEDENCE_ORDER",
    "DiscoveredTemplate",
    "SkippedTemplate",
    "DiscoveryResult",
]


class TemplateSource(str, Enum):
    """Origin location of a template definition.

    Values:
        BUILTIN: Packaged with cimerge
        USER: ~/.config/cimerge/templates/
        PROJECT: .cimerge/templates/

    Precedence Order: PROJECT > USER > BUILTIN (higher overrides lower)
    """

    BUILTIN = "builtin"
    USER = "user"
    PROJECT = "project"


#: Highest precedence first.
PRECEDENCE_ORDER = (TemplateSource.PROJECT, TemplateSource.USER, TemplateSource.BUILTIN)


@dataclass(frozen=True, slots=True)
class DiscoveredTemplate:
    """A parsed template with source information.

    Attributes:
        template: The parsed WorkflowTemplate.
        file_path: Absolute path to the source file.
        source: Origin location.
        overrides: (source, path) pairs of same-named templates from lower
            precedence levels that this one shadows.
    """

    template: WorkflowTemplate
    file_path: Path
    source: TemplateSource
    overrides: tuple[tuple[TemplateSource, Path], ...] = ()

    @property
    def name(self) -> str:
        return self.template.name

    @property
    def qualified_name(self) -> str:
        """Source-qualified name, e.g. ``builtin:python-ci``."""
        return f"{self.source.value}:{self.template.name}"


@dataclass(frozen=True, slots=True)
class SkippedTemplate:
    """A template file skipped because it failed to parse.

    Attributes:
        file_path: Path to the skipped file.
        error_message: Human-readable error description.
        line_number: Line where the error occurred, if known.
    """

    file_path: Path
    error_message: str
    line_number: int | None = None


@dataclass(frozen=True, slots=True)
class DiscoveryResult:
    """Aggregated result of template discovery.

    Attributes:
        templates: Discovered templates, highest precedence wins, sorted by name.
        skipped: Files that failed to parse.
        locations_scanned: Directories that were scanned.
    """

    templates: tuple[DiscoveredTemplate, ...]
    skipped: tuple[SkippedTemplate, ...] = ()
    locations_scanned: tuple[Path, ...] = ()

    @property
    def template_names(self) -> tuple[str, ...]:
        return tuple(sorted(t.name for t in self.templates))

    def get_template(self, name: str) -> DiscoveredTemplate | None:
        """Look up a template by name, returning the highest-precedence one."""
        for discovered in self.templates:
            if discovered.name == name:
                return discovered
        return None

    def filter_by_source(
        self, source: TemplateSource | str
    ) -> tuple[DiscoveredTemplate, ...]:
        source = TemplateSource(source)
        return tuple(t for t in self.templates if t.source is source)

    def search(self, query: str) -> tuple[DiscoveredTemplate, ...]:
        """Case-insensitive substring search over names and descriptions."""
        query_lower = query.lower()
        return tuple(
            t
            for t in self.templates
            if query_lower in t.name.lower()
            or query_lower in t.template.description.lower()
        )
