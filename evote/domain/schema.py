"""Declarative form schemas built from field specs and shared constraints."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple

from .validators import Constraint, is_blank

FormValues = Dict[str, str]
ValidationResult = Dict[str, str]


@dataclass(frozen=True)
class FieldSpec:
    """Immutable description of one form field.

    Attributes:
        name: Wire/form key, unique within a schema.
        label: Human label used by the presentation layer.
        constraints: Rules evaluated in order; the first failure wins.
        required: Whether a blank value is rejected before constraints run.
        numeric: Whether the transformer sends the value as an ``int``.
        default: Value used on mount and after a successful submission.
        required_message: Message for blank input. Falls back to the first
            constraint's message so a blank CNIC reads like any other bad CNIC.
    """

    name: str
    label: str
    constraints: Tuple[Constraint, ...] = ()
    required: bool = True
    numeric: bool = False
    default: str = ""
    required_message: Optional[str] = None

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not self.name.strip():
            raise ValueError("FieldSpec.name must be a non-empty string.")
        object.__setattr__(self, "constraints", tuple(self.constraints))

    def blank_message(self) -> str:
        if self.required_message:
            return self.required_message
        if self.constraints:
            return self.constraints[0].message
        return f"{self.label or self.name} is required."


def validate_field(spec: FieldSpec, raw: Any) -> Optional[str]:
    """Validate one raw value against ``spec``.

    Returns:
        ``None`` when the value is valid, otherwise the failure message.
    """
    if is_blank(raw):
        if spec.required:
            return spec.blank_message()
        return None
    for constraint in spec.constraints:
        message = constraint(raw)
        if message:
            return message
    return None


def is_valid(result: Mapping[str, str]) -> bool:
    """A validation result is valid when it carries no field errors."""
    return not result


@dataclass(frozen=True)
class FormSchema:
    """Ordered, immutable set of field specs with whole-form validation."""

    name: str
    fields: Tuple[FieldSpec, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        specs = tuple(self.fields)
        seen = set()
        for spec in specs:
            if spec.name in seen:
                raise ValueError(f"Duplicate field '{spec.name}' in schema '{self.name}'.")
            seen.add(spec.name)
        object.__setattr__(self, "fields", specs)

    @property
    def field_names(self) -> Tuple[str, ...]:
        return tuple(spec.name for spec in self.fields)

    @property
    def numeric_fields(self) -> Tuple[str, ...]:
        return tuple(spec.name for spec in self.fields if spec.numeric)

    def get(self, name: str) -> FieldSpec:
        for spec in self.fields:
            if spec.name == name:
                return spec
        raise KeyError(f"Unknown field '{name}' for schema '{self.name}'.")

    def defaults(self) -> FormValues:
        """Return a fresh FormValues mapping filled with field defaults."""
        return {spec.name: spec.default for spec in self.fields}

    def validate_all(self, values: Mapping[str, Any]) -> ValidationResult:
        """Validate every field independently and collect all failures.

        Missing keys are validated as empty input. Keys not declared by the
        schema are ignored.
        """
        values = values or {}
        errors: ValidationResult = {}
        for spec in self.fields:
            message = validate_field(spec, values.get(spec.name, ""))
            if message:
                errors[spec.name] = message
        return errors

    def is_valid(self, result: Mapping[str, str]) -> bool:
        return is_valid(result)


def build_schema(name: str, specs: Iterable[FieldSpec]) -> FormSchema:
    return FormSchema(name=name, fields=tuple(specs))


__all__ = [
    "FieldSpec",
    "FormSchema",
    "FormValues",
    "ValidationResult",
    "build_schema",
    "is_valid",
    "validate_field",
]
