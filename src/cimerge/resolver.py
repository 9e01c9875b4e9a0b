"""Configuration resolution for workflow templates.

``resolve()`` merges a caller's overrides with the defaults declared by a
WorkflowTemplate and returns the effective parameter set. It is a pure
function: the same template and request always produce an equal result,
and no I/O happens here.

Example:
    ```python
    template = WorkflowTemplate.build(
        "python-ci",
        [
            {"name": "package-name", "type": "string", "required": True},
            {"name": "run-lint", "type": "boolean", "default": True},
        ],
    )
    resolved = resolve(template, {"package-name": "foo"})
    assert resolved.to_dict() == {"package-name": "foo", "run-lint": True}
    ```
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from cimerge.exceptions import (
    MissingRequiredParameterError,
    TypeMismatchError,
    UnknownParameterError,
)
from cimerge.templates.schema import ParameterType, WorkflowTemplate, conforms

__all__ = [
    "ResolvedConfiguration",
    "resolve",
    "resolve_many",
]


@dataclass(frozen=True, slots=True, eq=False)
class ResolvedConfiguration(Mapping[str, Any]):
    """Effective parameters of one template invocation.

    Behaves as a read-only mapping over every declared parameter and
    compares equal to any mapping with the same items, like a dict.

    Attributes:
        template_name: Name of the template that was resolved.
        effective_values: Read-only mapping of parameter name to effective value.
        supplied: Names whose value came from the caller.
    """

    template_name: str
    effective_values: Mapping[str, Any]
    supplied: frozenset[str] = field(default_factory=frozenset)

    __hash__ = None  # type: ignore[assignment]

    def __getitem__(self, key: str) -> Any:
        return self.effective_values[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self.effective_values)

    def __len__(self) -> int:
        return len(self.effective_values)

    @property
    def defaulted(self) -> frozenset[str]:
        """Names whose value came from the template declaration."""
        return frozenset(self.effective_values) - self.supplied

    def to_dict(self) -> dict[str, Any]:
        return dict(self.effective_values)


def _check_value(
    template_name: str,
    name: str,
    spec_type: ParameterType,
    options: tuple[str, ...],
    value: Any,
) -> None:
    if conforms(spec_type, value, options):
        return
    detail = None
    if spec_type is ParameterType.CHOICE and isinstance(value, str):
        detail = f"must be one of {', '.join(options)}"
    raise TypeMismatchError(
        template_name=template_name,
        parameter=name,
        expected=spec_type.value,
        value=value,
        detail=detail,
    )


def resolve(
    template: WorkflowTemplate,
    request: Mapping[str, Any] | None = None,
) -> ResolvedConfiguration:
    """Resolve a request against a template.

    For every declared parameter the request value is used when present
    (``None`` counts as absent), otherwise the declared default. Optional
    parameters without a default take the empty value of their type.
    String values are never interpreted, so JSON-encoded lists and
    boolean-like strings pass through unchanged.

    Args:
        template: The template whose parameters are being resolved.
        request: Caller overrides keyed by parameter name.

    Returns:
        ResolvedConfiguration covering every declared parameter.

    Raises:
        UnknownParameterError: If the request names an undeclared parameter.
        MissingRequiredParameterError: If a required parameter has neither
            a supplied value nor a default.
        TypeMismatchError: If a supplied value does not match its type.
    """
    request = request or {}

    unknown = tuple(key for key in request if key not in template.parameters)
    if unknown:
        raise UnknownParameterError(
            template_name=template.name,
            unknown=unknown,
            declared=template.parameter_names,
        )

    values: dict[str, Any] = {}
    supplied: set[str] = set()
    for spec in template.iter_parameters():
        value = request.get(spec.name)
        if value is not None:
            _check_value(template.name, spec.name, spec.type, spec.options, value)
            values[spec.name] = value
            supplied.add(spec.name)
            continue

        default = spec.effective_default
        if default is None:
            raise MissingRequiredParameterError(template.name, spec.name)
        values[spec.name] = default

    return ResolvedConfiguration(
        template_name=template.name,
        effective_values=MappingProxyType(values),
        supplied=frozenset(supplied),
    )


def resolve_many(
    template: WorkflowTemplate,
    requests: Iterable[Mapping[str, Any]],
) -> list[ResolvedConfiguration]:
    """Resolve each request independently against the same template.

    Stops at the first failing request and propagates its error.
    """
    return [resolve(template, request) for request in requests]
