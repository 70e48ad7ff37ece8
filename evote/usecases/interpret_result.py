"""Translate raw auth-service results into caller-facing outcomes."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from evote.adapters.api_errors import (
    ApiError,
    ConflictError,
    ServiceError,
    TransportError,
    extract_field_errors,
    first_string,
)
from evote.domain.forms import FormDefinition
from evote.domain.submission import ErrorKind, Outcome, RemoteResponse

_log = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResultInterpreter:
    """Map a response or exception from ``AuthPort.post`` to an ``Outcome``.

    The mapping is total: every input yields exactly one outcome with a
    non-empty message, falling back to ``definition.failure_message``.
    """

    definition: FormDefinition

    def __call__(self, raw: Any) -> Outcome:
        try:
            return self._interpret(raw)
        except Exception:  # pragma: no cover - interpretation must never escape
            _log.exception("%s: could not interpret result %r", self.definition.name, raw)
            return Outcome.failure(self.definition.failure_message, ErrorKind.UNEXPECTED_RESPONSE)

    def _interpret(self, raw: Any) -> Outcome:
        if isinstance(raw, RemoteResponse):
            if raw.ok:
                return self._success(raw.payload)
            return self._from_status(raw.status, raw.payload)
        if isinstance(raw, ConflictError):
            return Outcome.conflict(self.definition.conflict_message)
        if isinstance(raw, ServiceError):
            return self._from_status(raw.status or 0, raw.payload)
        if isinstance(raw, TransportError):
            _log.warning("%s: transport failure: %s", self.definition.name, raw)
            return Outcome.failure(self.definition.failure_message, ErrorKind.TRANSPORT_ERROR)
        if isinstance(raw, ApiError):
            return Outcome.failure(
                self._server_message(raw.payload) or self.definition.failure_message,
                ErrorKind.SERVICE_ERROR,
            )
        if isinstance(raw, BaseException):
            _log.error("%s: unexpected error during submission: %r", self.definition.name, raw)
        else:
            _log.error("%s: unexpected result shape: %r", self.definition.name, type(raw).__name__)
        return Outcome.failure(self.definition.failure_message, ErrorKind.UNEXPECTED_RESPONSE)

    def _success(self, payload: Any) -> Outcome:
        token_field = self.definition.token_field
        if not token_field:
            # Any 2xx completes a form that expects no token; the body is informational.
            data = payload if isinstance(payload, Mapping) else {}
            return Outcome.success(data, self.definition.success_message)
        if not isinstance(payload, Mapping):
            _log.error("%s: success response without a JSON object body", self.definition.name)
            return Outcome.failure(self.definition.failure_message, ErrorKind.UNEXPECTED_RESPONSE)
        token = payload.get(token_field)
        if not isinstance(token, str) or not token.strip():
            _log.error("%s: success response is missing '%s'", self.definition.name, token_field)
            return Outcome.failure(self.definition.failure_message, ErrorKind.UNEXPECTED_RESPONSE)
        return Outcome.success(payload, self.definition.success_message)

    def _from_status(self, status: int, payload: Any) -> Outcome:
        if status == 409:
            return Outcome.conflict(self.definition.conflict_message)
        message = self._server_message(payload) or self.definition.failure_message
        if 400 <= status < 500:
            field_errors = extract_field_errors(payload)
            if field_errors:
                return Outcome.validation_rejected(field_errors, message)
        return Outcome.failure(message, ErrorKind.SERVICE_ERROR)

    def _server_message(self, payload: Any) -> Optional[str]:
        # Plain-text bodies (proxy/HTML error pages) are not shown to users.
        if not isinstance(payload, Mapping):
            return None
        return first_string(dict(payload), self.definition.message_keys)


def interpret_result(definition: FormDefinition, raw: Any) -> Outcome:
    return ResultInterpreter(definition)(raw)


__all__ = ["ResultInterpreter", "interpret_result"]
