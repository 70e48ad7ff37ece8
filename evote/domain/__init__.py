"""Domain package exports for schemas, payloads and submission types."""

from .errors import TransformError, ValidationError
from .forms import LOGIN_FORM, LOGIN_SCHEMA, SIGNUP_FORM, SIGNUP_SCHEMA, FormDefinition
from .payload import TransformedPayload, to_payload
from .schema import FieldSpec, FormSchema, FormValues, ValidationResult, is_valid, validate_field
from .submission import (
    ErrorKind,
    Outcome,
    OutcomeKind,
    RemoteResponse,
    SubmissionState,
    SubmissionStatus,
)

__all__ = [
    "ErrorKind",
    "FieldSpec",
    "FormDefinition",
    "FormSchema",
    "FormValues",
    "LOGIN_FORM",
    "LOGIN_SCHEMA",
    "Outcome",
    "OutcomeKind",
    "RemoteResponse",
    "SIGNUP_FORM",
    "SIGNUP_SCHEMA",
    "SubmissionState",
    "SubmissionStatus",
    "TransformError",
    "TransformedPayload",
    "ValidationError",
    "ValidationResult",
    "is_valid",
    "to_payload",
    "validate_field",
]
