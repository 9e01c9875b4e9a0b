"""Template discovery across builtin, user and project locations."""

from __future__ import annotations

from pathlib import Path

from cimerge.config import TemplatesConfig
from cimerge.discovery.locator import TemplateLocator
from cimerge.discovery.models import (
    PRECEDENCE_ORDER,
    DiscoveredTemplate,
    DiscoveryResult,
    SkippedTemplate,
    TemplateSource,
)
from cimerge.exceptions import (
    TemplateConflictError,
    TemplateNotFoundError,
    TemplateParseError,
)
from cimerge.library import get_builtin_path
from cimerge.logging import get_logger
from cimerge.templates.parser import load_template
from cimerge.templates.schema import WorkflowTemplate

__all__ = [
    "TemplateDiscovery",
    "create_discovery",
    "find_template",
]

logger = get_logger(__name__)


class TemplateDiscovery:
    """Scans template locations and applies precedence rules.

    Precedence order: PROJECT > USER > BUILTIN. When a name is defined at
    several levels the highest wins and the others are recorded as
    overrides. Two definitions of one name at the same level are an error.
    """

    def __init__(
        self,
        project_dir: Path | None = None,
        user_dir: Path | None = None,
        include_builtin: bool = True,
        locator: TemplateLocator | None = None,
    ) -> None:
        self.project_dir = project_dir or Path.cwd() / ".cimerge" / "templates"
        self.user_dir = user_dir or Path.home() / ".config" / "cimerge" / "templates"
        self.include_builtin = include_builtin
        self._locator = locator or TemplateLocator()

    def locations(self) -> list[tuple[Path, TemplateSource]]:
        """Directories to scan, lowest precedence first.

        User and project directories are skipped silently when absent.
        """
        locations: list[tuple[Path, TemplateSource]] = []
        if self.include_builtin:
            locations.append((get_builtin_path(), TemplateSource.BUILTIN))
        if self.user_dir.is_dir():
            locations.append((self.user_dir, TemplateSource.USER))
        if self.project_dir.is_dir():
            locations.append((self.project_dir, TemplateSource.PROJECT))
        return locations

    def discover(self) -> DiscoveryResult:
        """Discover templates from all configured locations.

        Returns:
            DiscoveryResult with precedence applied.

        Raises:
            TemplateConflictError: If one name is defined twice at the same level.
        """
        found: dict[str, dict[TemplateSource, list[tuple[Path, WorkflowTemplate]]]] = {}
        skipped: list[SkippedTemplate] = []
        scanned: list[Path] = []

        for directory, source in self.locations():
            scanned.append(directory)
            for path in self._locator.scan(directory):
                try:
                    template = load_template(path)
                except TemplateParseError as e:
                    logger.warning(
                        "template_skipped", path=str(path), error=e.message
                    )
                    skipped.append(
                        SkippedTemplate(
                            file_path=path,
                            error_message=e.message,
                            line_number=e.line_number,
                        )
                    )
                    continue
                by_source = found.setdefault(template.name, {})
                by_source.setdefault(source, []).append((path.resolve(), template))

        templates = [
            self._apply_precedence(name, by_source)
            for name, by_source in sorted(found.items())
        ]
        logger.debug(
            "templates_discovered", count=len(templates), skipped=len(skipped)
        )
        return DiscoveryResult(
            templates=tuple(templates),
            skipped=tuple(skipped),
            locations_scanned=tuple(scanned),
        )

    @staticmethod
    def _apply_precedence(
        name: str,
        by_source: dict[TemplateSource, list[tuple[Path, WorkflowTemplate]]],
    ) -> DiscoveredTemplate:
        for source, entries in by_source.items():
            if len(entries) > 1:
                raise TemplateConflictError(
                    name=name,
                    source=source.value,
                    conflicting_paths=tuple(path for path, _ in entries),
                )

        ordered = [
            (source, *by_source[source][0])
            for source in PRECEDENCE_ORDER
            if source in by_source
        ]
        source, path, template = ordered[0]
        return DiscoveredTemplate(
            template=template,
            file_path=path,
            source=source,
            overrides=tuple((src, p) for src, p, _ in ordered[1:]),
        )


def create_discovery(config: TemplatesConfig | None = None) -> TemplateDiscovery:
    """Create a discovery service from the ``templates`` config section."""
    config = config or TemplatesConfig()
    return TemplateDiscovery(
        project_dir=config.project_dir,
        user_dir=config.user_dir,
        include_builtin=config.include_builtin,
    )


def find_template(
    name_or_file: str,
    result: DiscoveryResult,
) -> tuple[WorkflowTemplate, Path]:
    """Load a template from a file path, or look it up by name.

    An existing path takes priority over a discovered name.

    Raises:
        TemplateParseError: If the file cannot be parsed.
        TemplateNotFoundError: If no template with that name was discovered.
    """
    path = Path(name_or_file)
    if path.is_file():
        return load_template(path), path

    discovered = result.get_template(name_or_file)
    if discovered is None:
        raise TemplateNotFoundError(name_or_file, available=result.template_names)
    return discovered.template, discovered.file_path
