"""Turn validated form values into the wire payload."""

from __future__ import annotations

from types import MappingProxyType
from typing import Any, Mapping, Union

from .errors import TransformError, ValidationError
from .schema import FormSchema
from .validators import as_text

WireValue = Union[str, int]
TransformedPayload = Mapping[str, WireValue]


def _coerce_int(field: str, raw: Any) -> int:
    text = as_text(raw)
    if text is None:
        raise TransformError(field, raw)
    stripped = text.strip()
    if not stripped.isascii() or not stripped.isdigit():
        raise TransformError(field, raw)
    return int(stripped)


def to_payload(values: Mapping[str, Any], schema: FormSchema) -> TransformedPayload:
    """Build the read-only wire payload for ``values``.

    Args:
        values: Raw FormValues from the view model.
        schema: Schema the values belong to.

    Returns:
        Read-only mapping with numeric fields coerced to ``int`` and all other
        fields passed through as strings, in schema order.

    Raises:
        ValidationError: If ``values`` do not pass ``schema.validate_all``.
        TransformError: If a numeric field passed validation but still cannot
            be parsed.
    """
    errors = schema.validate_all(values)
    if errors:
        raise ValidationError(errors)

    payload = {}
    for spec in schema.fields:
        raw = values.get(spec.name, spec.default)
        if spec.numeric:
            payload[spec.name] = _coerce_int(spec.name, raw)
        else:
            payload[spec.name] = "" if raw is None else str(raw)
    return MappingProxyType(payload)


def redact(payload: Mapping[str, Any]) -> dict:
    """Copy of ``payload`` safe for log output."""
    return {key: ("***" if key == "password" else value) for key, value in payload.items()}


__all__ = ["TransformedPayload", "WireValue", "redact", "to_payload"]
