from __future__ import annotations

from typing import Any

from cimerge.exceptions.base import CimergeError


class ConfigError(CimergeError):
    """Exception for configuration loading, parsing, and validation errors.

    Raised when ``cimerge.yaml`` cannot be parsed, when a Pydantic validation
    error occurs, or when a ``CIMERGE_*`` environment variable holds an
    invalid value.

    Attributes:
        message: Human-readable error message describing the configuration issue.
        field: Optional dotted field name that caused the error.
        value: Optional value that failed validation (for debugging).

    Examples:
        ```python
        raise ConfigError(
            "Invalid configuration value",
            field="output.format",
            value="xml",
        )
        ```
    """

    def __init__(
        self,
        message: str,
        field: str | None = None,
        value: Any = None,
    ) -> None:
        """Initialize the ConfigError.

        Args:
            message: Human-readable error message.
            field: Optional field name that caused the error.
            value: Optional value that failed validation.
        """
        self.field = field
        self.value = value
        super().__init__(message)
