from __future__ import annotations

from typing import Any

from cimerge.exceptions.base import CimergeError


class ResolutionError(CimergeError):
    """Base exception for failures while resolving a template invocation.

    Every resolution error is fatal to the single ``resolve()`` call that
    raised it. No partial configuration is produced.

    Attributes:
        message: Human-readable error message.
        template_name: Name of the template being resolved.
        parameter: Name of the offending parameter (if known).
    """

    def __init__(
        self,
        message: str,
        template_name: str | None = None,
        parameter: str | None = None,
    ) -> None:
        """Initialize the ResolutionError.

        Args:
            message: Human-readable error message.
            template_name: Name of the template being resolved.
            parameter: Name of the offending parameter.
        """
        self.template_name = template_name
        self.parameter = parameter
        super().__init__(message)


class UnknownParameterError(ResolutionError):
    """Raised when a request names a parameter the template does not declare.

    Attributes:
        parameter: First unknown name, in request order.
        unknown: Every unknown name in the request, in request order.
        declared: Parameter names the template does declare (sorted).
    """

    def __init__(
        self,
        template_name: str,
        unknown: tuple[str, ...],
        declared: tuple[str, ...] = (),
    ) -> None:
        """Initialize the UnknownParameterError.

        Args:
            template_name: Name of the template being resolved.
            unknown: Unknown parameter names in request order (non-empty).
            declared: Names declared by the template.
        """
        self.unknown = unknown
        self.declared = declared
        names = ", ".join(f"'{name}'" for name in unknown)
        super().__init__(
            f"Unknown parameter {names} for template '{template_name}'",
            template_name=template_name,
            parameter=unknown[0],
        )


class MissingRequiredParameterError(ResolutionError):
    """Raised when a required parameter has neither a value nor a default."""

    def __init__(self, template_name: str, parameter: str) -> None:
        """Initialize the MissingRequiredParameterError.

        Args:
            template_name: Name of the template being resolved.
            parameter: The required parameter that was not supplied.
        """
        super().__init__(
            f"Missing required parameter '{parameter}' "
            f"for template '{template_name}'",
            template_name=template_name,
            parameter=parameter,
        )


class TypeMismatchError(ResolutionError):
    """Raised when a supplied value does not conform to the declared type.

    Attributes:
        expected: Declared parameter type (e.g. "boolean").
        actual: Python type name of the supplied value.
        value: The offending value.
    """

    def __init__(
        self,
        template_name: str,
        parameter: str,
        expected: str,
        value: Any,
        detail: str | None = None,
    ) -> None:
        """Initialize the TypeMismatchError.

        Args:
            template_name: Name of the template being resolved.
            parameter: The parameter whose value is invalid.
            expected: Declared parameter type.
            value: The offending value.
            detail: Optional extra explanation appended to the message.
        """
        self.expected = expected
        self.actual = type(value).__name__
        self.value = value
        message = (
            f"Parameter '{parameter}' of template '{template_name}' expects "
            f"{expected}, got {self.actual} ({value!r})"
        )
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message, template_name=template_name, parameter=parameter)
