"""Submission lifecycle states and caller-facing outcomes."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Mapping, Optional


class SubmissionStatus(str, Enum):
    IDLE = "idle"
    PENDING = "pending"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class OutcomeKind(str, Enum):
    SUCCESS = "success"
    VALIDATION_REJECTED = "validation_rejected"
    CONFLICT = "conflict"
    FAILURE = "failure"


class ErrorKind:
    """Error classifications carried by a failed submission state."""

    VALIDATION_REJECTED = "VALIDATION_REJECTED"
    CONFLICT = "CONFLICT"
    SERVICE_ERROR = "SERVICE_ERROR"
    TRANSPORT_ERROR = "TRANSPORT_ERROR"
    UNEXPECTED_RESPONSE = "UNEXPECTED_RESPONSE"


@dataclass(frozen=True)
class Outcome:
    """Terminal classification of one submission attempt."""

    kind: OutcomeKind
    data: Optional[Mapping[str, Any]] = None
    field_errors: Mapping[str, str] = field(default_factory=dict)
    message: str = ""
    error_kind: Optional[str] = None
    """Finer failure classification, one of :class:`ErrorKind`."""

    @classmethod
    def success(cls, data: Mapping[str, Any], message: str = "") -> "Outcome":
        return cls(kind=OutcomeKind.SUCCESS, data=dict(data), message=message)

    @classmethod
    def validation_rejected(cls, field_errors: Mapping[str, str], message: str) -> "Outcome":
        return cls(
            kind=OutcomeKind.VALIDATION_REJECTED,
            field_errors=dict(field_errors),
            message=message,
            error_kind=ErrorKind.VALIDATION_REJECTED,
        )

    @classmethod
    def conflict(cls, message: str) -> "Outcome":
        return cls(kind=OutcomeKind.CONFLICT, message=message, error_kind=ErrorKind.CONFLICT)

    @classmethod
    def failure(cls, message: str, error_kind: str = ErrorKind.SERVICE_ERROR) -> "Outcome":
        return cls(kind=OutcomeKind.FAILURE, message=message, error_kind=error_kind)

    @property
    def is_success(self) -> bool:
        return self.kind is OutcomeKind.SUCCESS


@dataclass(frozen=True)
class SubmissionState:
    """Snapshot of the single-flight submission slot.

    ``attempt`` counts accepted submissions; every new attempt replaces the
    previous state wholesale.
    """

    status: SubmissionStatus = SubmissionStatus.IDLE
    attempt: int = 0
    payload: Optional[Mapping[str, Any]] = None
    error_kind: Optional[str] = None
    message: str = ""

    @classmethod
    def idle(cls) -> "SubmissionState":
        return cls()

    @classmethod
    def pending(cls, attempt: int) -> "SubmissionState":
        return cls(status=SubmissionStatus.PENDING, attempt=attempt)

    @classmethod
    def succeeded(cls, attempt: int, payload: Mapping[str, Any]) -> "SubmissionState":
        return cls(status=SubmissionStatus.SUCCEEDED, attempt=attempt, payload=dict(payload))

    @classmethod
    def failed(cls, attempt: int, error_kind: str, message: str) -> "SubmissionState":
        return cls(
            status=SubmissionStatus.FAILED,
            attempt=attempt,
            error_kind=error_kind,
            message=message,
        )

    @property
    def is_pending(self) -> bool:
        return self.status is SubmissionStatus.PENDING

    @property
    def is_terminal(self) -> bool:
        return self.status in (SubmissionStatus.SUCCEEDED, SubmissionStatus.FAILED)


@dataclass(frozen=True)
class RemoteResponse:
    """Raw HTTP result handed from adapters to the result interpreter."""

    status: int
    payload: Any = None

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300


def state_from_outcome(attempt: int, outcome: Outcome) -> SubmissionState:
    """Terminal state for ``attempt`` given its interpreted outcome."""
    if outcome.is_success:
        return SubmissionState.succeeded(attempt, outcome.data or {})
    kind = outcome.error_kind or ErrorKind.SERVICE_ERROR
    return SubmissionState.failed(attempt, kind, outcome.message)


FieldErrors = Dict[str, str]

__all__ = [
    "ErrorKind",
    "FieldErrors",
    "Outcome",
    "OutcomeKind",
    "RemoteResponse",
    "SubmissionState",
    "SubmissionStatus",
    "state_from_outcome",
]
