"""Template file locator.

Finds template YAML files in a directory without parsing them; the loader
handles validation separately.
"""

from __future__ import annotations

from pathlib import Path

from cimerge.logging import get_logger

__all__ = ["TemplateLocator", "TEMPLATE_SUFFIXES"]

logger = get_logger(__name__)

TEMPLATE_SUFFIXES = (".yaml", ".yml")


class TemplateLocator:
    """Locator for template YAML files in a single directory.

    The scan is non-recursive. Missing or unreadable directories yield an
    empty list and a warning rather than an error.
    """

    def scan(self, directory: Path) -> list[Path]:
        """Find all template files in ``directory``.

        Args:
            directory: Directory to scan.

        Returns:
            Sorted paths of ``*.yaml`` and ``*.yml`` files.
        """
        if not directory.exists():
            logger.warning("template_directory_missing", directory=str(directory))
            return []

        if not directory.is_dir():
            logger.warning("template_path_not_directory", directory=str(directory))
            return []

        try:
            template_files = sorted(
                path
                for path in directory.iterdir()
                if path.suffix in TEMPLATE_SUFFIXES and path.is_file()
            )
        except OSError as e:
            logger.warning(
                "template_directory_unreadable", directory=str(directory), error=str(e)
            )
            return []

        logger.debug(
            "template_directory_scanned",
            directory=str(directory),
            count=len(template_files),
        )
        return template_files
