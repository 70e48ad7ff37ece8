"""Domain-level error types for schema validation and payload building.

These errors never carry transport details. Remote failures live in
``evote.adapters.api_errors`` and are converted to an ``Outcome`` before they
reach view models.
"""

from __future__ import annotations

from typing import Any, Dict, Mapping


class ValidationError(ValueError):
    """Raised when form values are used before passing schema validation."""

    def __init__(self, field_errors: Mapping[str, str]) -> None:
        self.field_errors: Dict[str, str] = dict(field_errors)
        names = ", ".join(self.field_errors) or "<none>"
        super().__init__(f"Form values failed validation: {names}")


class TransformError(RuntimeError):
    """Validated input could not be coerced to its wire type.

    Signals a mismatch between a field's validator and its declared wire type.
    """

    def __init__(self, field: str, value: Any) -> None:
        self.field = field
        self.value = value
        super().__init__(f"Cannot coerce field '{field}' value {value!r} to int")


__all__ = ["TransformError", "ValidationError"]
