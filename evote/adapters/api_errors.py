from __future__ import annotations

from typing import Any, Dict, Iterable, Optional


class ApiError(RuntimeError):
    """Base class for REST adapter failures."""

    def __init__(
        self,
        message: str,
        *,
        status: Optional[int] = None,
        payload: Any = None,
        context: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.status = status
        self.payload = payload
        self.context = context


class TransportError(ApiError):
    """No response reached the client (timeout, refused connection, DNS...)."""

    def __init__(
        self,
        message: str,
        *,
        context: Optional[str] = None,
    ) -> None:
        super().__init__(message, context=context)


class ServiceError(ApiError):
    """Auth service answered with a non-2xx status."""

    def __init__(
        self,
        message: str,
        *,
        status: int,
        payload: Any = None,
        context: Optional[str] = None,
    ) -> None:
        super().__init__(
            message,
            status=status,
            payload=payload,
            context=context,
        )

    @property
    def is_client_error(self) -> bool:
        return 400 <= (self.status or 0) < 500


class ConflictError(ServiceError):
    """HTTP 409: the identity is already registered."""


def parse_error_payload(resp: Any) -> Any:
    """Best-effort extraction of error payload without raising."""
    try:
        return resp.json()
    except Exception:
        snippet = getattr(resp, "text", "")
        if not snippet:
            return None
        return snippet[:400]


def build_error_message(ctx: str, status: int, payload: Any) -> str:
    detail = first_string(payload)
    if detail:
        return f"{ctx}: {detail} (HTTP {status})"
    return f"{ctx}: HTTP {status}"


def first_string(
    payload: Any,
    keys: Iterable[str] = ("message", "error", "detail", "title"),
) -> Optional[str]:
    """Return the first non-empty message found under ``keys``.

    Dict values that are lists or nested dicts are searched recursively with
    the same key order.
    """
    keys = tuple(keys)
    if isinstance(payload, str):
        text = payload.strip()
        return text or None
    if isinstance(payload, dict):
        for key in keys:
            value = payload.get(key)
            if isinstance(value, str) and value.strip():
                return value.strip()
            if isinstance(value, (list, dict)):
                candidate = first_string(value, keys)
                if candidate:
                    return candidate
    if isinstance(payload, list):
        for item in payload:
            candidate = first_string(item, keys)
            if candidate:
                return candidate
    return None


def extract_field_errors(payload: Any) -> Dict[str, str]:
    """Pull per-field messages from a structured 4xx body.

    Accepted shapes:
        ``{"errors": {"email": "taken"}}``, ``{"fieldErrors": {...}}`` and
        ``{"errors": [{"field": "email", "message": "taken"}, ...]}`` where
        ``path`` may replace ``field`` and may be a list (``["email"]``).
    """
    if not isinstance(payload, dict):
        return {}
    for key in ("errors", "fieldErrors", "field_errors"):
        raw = payload.get(key)
        if isinstance(raw, dict):
            return _field_errors_from_mapping(raw)
        if isinstance(raw, list):
            return _field_errors_from_list(raw)
    return {}


def _field_errors_from_mapping(raw: Dict[Any, Any]) -> Dict[str, str]:
    errors: Dict[str, str] = {}
    for name, value in raw.items():
        text = stringify(value[0] if isinstance(value, list) and value else value)
        if text and isinstance(name, str) and name:
            errors[name] = text
    return errors


def _field_errors_from_list(raw: list) -> Dict[str, str]:
    errors: Dict[str, str] = {}
    for item in raw:
        if not isinstance(item, dict):
            continue
        name = item.get("field") or item.get("path") or item.get("param")
        if isinstance(name, list):
            name = ".".join(str(part) for part in name)
        text = stringify(item.get("message") or item.get("msg"))
        if isinstance(name, str) and name and text and name not in errors:
            errors[name] = text
    return errors


def stringify(data: Any, *, limit: int = 200) -> Optional[str]:
    if data is None:
        return None
    if isinstance(data, str):
        cleaned = data.strip()
        return cleaned[:limit] if cleaned else None
    if isinstance(data, list):
        parts = []
        for item in data:
            text = stringify(item, limit=limit)
            if text:
                parts.append(text)
            if len(parts) >= 3:
                break
        if not parts:
            return None
        joined = "; ".join(parts)
        return joined[:limit]
    if isinstance(data, dict):
        pairs = []
        for key, value in list(data.items())[:4]:
            value_text = stringify(value, limit=limit)
            if value_text:
                pairs.append(f"{key}={value_text}")
        if not pairs:
            return None
        joined = ", ".join(pairs)
        return joined[:limit]
    text = str(data).strip()
    return text[:limit] if text else None
