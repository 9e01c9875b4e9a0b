"""cimerge exception hierarchy.

All exceptions can be imported from this package:
    from cimerge.exceptions import CimergeError, UnknownParameterError
"""

from __future__ import annotations

# Base exception
from cimerge.exceptions.base import CimergeError

# Configuration exceptions
from cimerge.exceptions.config import ConfigError

# Resolution exceptions
from cimerge.exceptions.resolution import (
    MissingRequiredParameterError,
    ResolutionError,
    TypeMismatchError,
    UnknownParameterError,
)

# Template exceptions
from cimerge.exceptions.template import (
    PresetNotFoundError,
    TemplateConflictError,
    TemplateDefinitionError,
    TemplateError,
    TemplateNotFoundError,
    TemplateParseError,
)

__all__ = [
    # Base
    "CimergeError",
    # Config
    "ConfigError",
    # Resolution
    "MissingRequiredParameterError",
    "ResolutionError",
    "TypeMismatchError",
    "UnknownParameterError",
    # Template
    "PresetNotFoundError",
    "TemplateConflictError",
    "TemplateDefinitionError",
    "TemplateError",
    "TemplateNotFoundError",
    "TemplateParseError",
]
