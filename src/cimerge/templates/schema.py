"""Pydantic schema models for workflow templates.

This module defines the typed description of a reusable CI workflow:
- ParameterType: Supported input types
- ParameterSpec: One configurable input with its default
- WorkflowTemplate: A named collection of ParameterSpecs

Templates are immutable once built. Inconsistent declarations (a default
that does not match the declared type, a choice without options, duplicate
names) raise TemplateDefinitionError at construction.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from enum import Enum
from types import MappingProxyType
from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
    model_validator,
)

from cimerge.exceptions import TemplateDefinitionError

__all__ = [
    "ParameterType",
    "ParameterSpec",
    "WorkflowTemplate",
    "conforms",
    "empty_value",
]


class ParameterType(str, Enum):
    """Supported parameter types.

    CHOICE is an enumerated string: the value must be one of ``options``.
    """

    BOOLEAN = "boolean"
    STRING = "string"
    CHOICE = "choice"
    NUMBER = "number"


def conforms(param_type: ParameterType, value: Any, options: tuple[str, ...]) -> bool:
    """Return True if ``value`` is a valid value for ``param_type``.

    ``bool`` is a subclass of ``int`` in Python, so it is excluded from
    NUMBER explicitly.
    """
    if param_type is ParameterType.BOOLEAN:
        return isinstance(value, bool)
    if param_type is ParameterType.STRING:
        return isinstance(value, str)
    if param_type is ParameterType.CHOICE:
        return isinstance(value, str) and value in options
    if param_type is ParameterType.NUMBER:
        return isinstance(value, int | float) and not isinstance(value, bool)
    return False


def empty_value(param_type: ParameterType, options: tuple[str, ...]) -> Any:
    """Value used for an optional parameter that has no default."""
    if param_type is ParameterType.BOOLEAN:
        return False
    if param_type is ParameterType.NUMBER:
        return 0
    if param_type is ParameterType.CHOICE:
        return options[0]
    return ""


class ParameterSpec(BaseModel):
    """Declaration of a single template input.

    Validation Rules:
        - ``options`` is only allowed (and then required) for CHOICE
        - options must be unique strings
        - a non-None default must conform to the declared type
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = Field(..., min_length=1)
    type: ParameterType
    default: Any = None
    required: bool = False
    description: str = ""
    options: tuple[str, ...] = ()

    @model_validator(mode="after")
    def validate_declaration(self) -> ParameterSpec:
        if not self.name.strip():
            raise ValueError("Parameter name cannot be empty or whitespace")
        if self.type is ParameterType.CHOICE:
            if not self.options:
                raise ValueError(
                    f"Choice parameter '{self.name}' must declare at least one option"
                )
            if len(set(self.options)) != len(self.options):
                raise ValueError(f"Choice parameter '{self.name}' repeats an option")
        elif self.options:
            raise ValueError(
                f"Parameter '{self.name}' of type {self.type.value} cannot "
                "declare options"
            )
        if self.default is not None and not conforms(
            self.type, self.default, self.options
        ):
            raise ValueError(
                f"Default {self.default!r} of parameter '{self.name}' is not a "
                f"valid {self.type.value}"
            )
        return self

    @property
    def has_default(self) -> bool:
        return self.default is not None

    @property
    def effective_default(self) -> Any:
        """Value this parameter takes when the caller does not supply one.

        Returns None for a required parameter without a default, since
        such a parameter cannot be resolved without a value.
        """
        if self.default is not None:
            return self.default
        if self.required:
            return None
        return empty_value(self.type, self.options)


class WorkflowTemplate(BaseModel):
    """A named reusable workflow and its declared parameters.

    Parameter order carries no meaning; lookups go through ``parameters``
    keyed by name. ``parameters`` is a read-only mapping.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = Field(..., min_length=1)
    description: str = ""
    parameters: Mapping[str, ParameterSpec] = Field(
        default_factory=dict, validate_default=True
    )

    @field_validator("parameters", mode="after")
    @classmethod
    def freeze_parameters(
        cls, v: Mapping[str, ParameterSpec]
    ) -> Mapping[str, ParameterSpec]:
        return MappingProxyType(dict(v))

    @model_validator(mode="after")
    def validate_parameter_keys(self) -> WorkflowTemplate:
        for key, spec in self.parameters.items():
            if key != spec.name:
                raise ValueError(
                    f"Parameter key '{key}' does not match declared name '{spec.name}'"
                )
        return self

    @classmethod
    def build(
        cls,
        name: str,
        parameters: Iterable[ParameterSpec | Mapping[str, Any]],
        description: str = "",
    ) -> WorkflowTemplate:
        """Build a template from a sequence of parameter declarations.

        Args:
            name: Template name.
            parameters: ParameterSpec instances or mappings accepted by it.
            description: Optional human-readable description.

        Returns:
            The validated WorkflowTemplate.

        Raises:
            TemplateDefinitionError: If a declaration is invalid or two
                parameters share a name.
        """
        specs: dict[str, ParameterSpec] = {}
        for entry in parameters:
            try:
                spec = (
                    entry
                    if isinstance(entry, ParameterSpec)
                    else ParameterSpec.model_validate(dict(entry))
                )
            except ValidationError as e:
                raise TemplateDefinitionError(
                    f"Invalid parameter in template '{name}': "
                    f"{_first_error_message(e)}",
                    template_name=name,
                ) from e
            if spec.name in specs:
                raise TemplateDefinitionError(
                    f"Duplicate parameter name '{spec.name}' in template '{name}'",
                    template_name=name,
                )
            specs[spec.name] = spec
        try:
            return cls(name=name, description=description, parameters=specs)
        except ValidationError as e:
            raise TemplateDefinitionError(
                f"Invalid template '{name}': {_first_error_message(e)}",
                template_name=name,
            ) from e

    def iter_parameters(self) -> Iterator[ParameterSpec]:
        """Iterate parameter specs in sorted name order."""
        return iter(self.parameters[name] for name in self.parameter_names)

    def __contains__(self, name: object) -> bool:
        return name in self.parameters

    @property
    def parameter_names(self) -> tuple[str, ...]:
        return tuple(sorted(self.parameters))

    @property
    def required_names(self) -> tuple[str, ...]:
        return tuple(spec.name for spec in self.iter_parameters() if spec.required)

    def get(self, name: str) -> ParameterSpec | None:
        return self.parameters.get(name)

    def defaults(self) -> dict[str, Any]:
        """Effective default for every parameter that can resolve without input."""
        return {
            spec.name: spec.effective_default
            for spec in self.iter_parameters()
            if spec.effective_default is not None
        }


def _first_error_message(error: ValidationError) -> str:
    first = error.errors()[0]
    message = str(first["msg"])
    # Pydantic prefixes errors raised in validators with "Value error, "
    return message.removeprefix("Value error, ")
