from __future__ import annotations

from pathlib import Path

from cimerge.exceptions.base import CimergeError


class TemplateError(CimergeError):
    """Base exception for template-related errors.

    Attributes:
        message: Human-readable error message.
        template_name: Name of the template (if known).
    """

    def __init__(self, message: str, template_name: str | None = None) -> None:
        """Initialize the TemplateError.

        Args:
            message: Human-readable error message.
            template_name: Optional name of the template.
        """
        self.template_name = template_name
        super().__init__(message)


class TemplateDefinitionError(TemplateError):
    """Raised when a template declaration is internally inconsistent.

    Examples: a default that does not match the declared type, a choice
    parameter without options, or two parameters sharing a name.
    """


class TemplateParseError(TemplateError):
    """Raised when a template file cannot be parsed.

    Attributes:
        file_path: Path to the file being parsed.
        line_number: Line number where the parse error occurred (if known).
        parse_error: The underlying error from YAML or Pydantic.
    """

    def __init__(
        self,
        message: str,
        file_path: str | None = None,
        line_number: int | None = None,
        parse_error: Exception | None = None,
    ) -> None:
        """Initialize the TemplateParseError.

        Args:
            message: Human-readable error message.
            file_path: Path to the file being parsed.
            line_number: Line number where the parse error occurred.
            parse_error: The underlying parse error.
        """
        self.file_path = file_path
        self.line_number = line_number
        self.parse_error = parse_error
        super().__init__(message)


class TemplateNotFoundError(TemplateError):
    """Raised when a template name cannot be found by discovery.

    Attributes:
        available: Names of templates that were discovered.
    """

    def __init__(self, name: str, available: tuple[str, ...] = ()) -> None:
        """Initialize the TemplateNotFoundError.

        Args:
            name: The template name that was requested.
            available: Names that are available instead.
        """
        self.available = available
        super().__init__(f"Template '{name}' not found", template_name=name)


class TemplateConflictError(TemplateError):
    """Raised when two templates share a name at the same precedence level.

    Attributes:
        source: The precedence level where the conflict occurred.
        conflicting_paths: Paths of the conflicting files.
    """

    def __init__(
        self,
        name: str,
        source: str,
        conflicting_paths: tuple[Path, ...],
    ) -> None:
        """Initialize the TemplateConflictError.

        Args:
            name: The conflicting template name.
            source: The precedence level where conflict occurred.
            conflicting_paths: Paths of the conflicting files.
        """
        self.source = source
        self.conflicting_paths = conflicting_paths
        paths_str = ", ".join(str(p) for p in conflicting_paths)
        super().__init__(
            f"Multiple templates named '{name}' at {source} level: {paths_str}",
            template_name=name,
        )


class PresetNotFoundError(CimergeError):
    """Raised when an unknown preset name is requested.

    Attributes:
        name: The requested preset name.
        available: Names of the presets that exist.
    """

    def __init__(self, name: str, available: tuple[str, ...] = ()) -> None:
        """Initialize the PresetNotFoundError.

        Args:
            name: The requested preset name.
            available: Names of the presets that exist.
        """
        self.name = name
        self.available = available
        super().__init__(f"Preset '{name}' not found")
