from __future__ import annotations

import pytest

from evote.adapters.api_errors import ApiError, ConflictError, ServiceError, TransportError
from evote.domain.forms import LOGIN_FORM, SIGNUP_FORM
from evote.domain.submission import ErrorKind, OutcomeKind, RemoteResponse
from evote.usecases.interpret_result import ResultInterpreter, interpret_result


def test_login_success_with_token() -> None:
    outcome = interpret_result(LOGIN_FORM, RemoteResponse(200, {"token": "T1"}))

    assert outcome.kind is OutcomeKind.SUCCESS
    assert outcome.data == {"token": "T1"}
    assert outcome.message == "Login Successful."


def test_login_success_without_token_is_failure() -> None:
    outcome = interpret_result(LOGIN_FORM, RemoteResponse(200, {"ok": True}))

    assert outcome.kind is OutcomeKind.FAILURE
    assert outcome.error_kind == ErrorKind.UNEXPECTED_RESPONSE
    assert outcome.message == "Login failed! Try again."


def test_signup_success_acknowledgement() -> None:
    outcome = interpret_result(SIGNUP_FORM, RemoteResponse(201, {"message": "User created"}))

    assert outcome.is_success
    assert outcome.message == "User successfully signed up!"


@pytest.mark.parametrize("payload", [None, "OK", ["token"]])
def test_signup_any_2xx_body_is_success(payload) -> None:
    outcome = interpret_result(SIGNUP_FORM, RemoteResponse(201, payload))

    assert outcome.kind is OutcomeKind.SUCCESS
    assert outcome.data == {}
    assert outcome.message == "User successfully signed up!"


@pytest.mark.parametrize("payload", [None, "OK", ["token"]])
def test_login_without_object_body_is_failure(payload) -> None:
    outcome = interpret_result(LOGIN_FORM, RemoteResponse(200, payload))

    assert outcome.kind is OutcomeKind.FAILURE
    assert outcome.error_kind == ErrorKind.UNEXPECTED_RESPONSE
    assert outcome.message == "Login failed! Try again."


def test_conflict_is_distinct_from_generic_failure() -> None:
    interpret = ResultInterpreter(SIGNUP_FORM)
    conflict = interpret(
        ConflictError("ctx", status=409, payload={"error": "User already exists"})
    )
    failure = interpret(ServiceError("ctx", status=500, payload=None))

    assert conflict.kind is OutcomeKind.CONFLICT
    assert conflict.message == "User already exists!"
    assert failure.kind is OutcomeKind.FAILURE
    assert failure.message == "Can't Signup, try again!"
    assert conflict.message != failure.message


def test_non_ok_remote_response_409_maps_to_conflict() -> None:
    outcome = interpret_result(SIGNUP_FORM, RemoteResponse(409, None))
    assert outcome.kind is OutcomeKind.CONFLICT


def test_login_failure_uses_server_message() -> None:
    outcome = interpret_result(
        LOGIN_FORM, ServiceError("ctx", status=401, payload={"message": "Invalid CNIC or password"})
    )

    assert outcome.kind is OutcomeKind.FAILURE
    assert outcome.message == "Invalid CNIC or password"
    assert outcome.error_kind == ErrorKind.SERVICE_ERROR


def test_signup_failure_prefers_error_field() -> None:
    outcome = interpret_result(
        SIGNUP_FORM,
        ServiceError("ctx", status=400, payload={"message": "generic", "error": "Email taken"}),
    )
    assert outcome.message == "Email taken"


def test_structured_field_errors_become_validation_rejected() -> None:
    outcome = interpret_result(
        SIGNUP_FORM,
        ServiceError(
            "ctx",
            status=422,
            payload={"error": "Invalid input", "errors": {"email": "Email already used"}},
        ),
    )

    assert outcome.kind is OutcomeKind.VALIDATION_REJECTED
    assert outcome.field_errors == {"email": "Email already used"}
    assert outcome.message == "Invalid input"


def test_field_errors_on_5xx_are_not_validation() -> None:
    outcome = interpret_result(
        SIGNUP_FORM, ServiceError("ctx", status=503, payload={"errors": {"email": "x"}})
    )
    assert outcome.kind is OutcomeKind.FAILURE


def test_html_error_body_falls_back_to_generic_message() -> None:
    outcome = interpret_result(LOGIN_FORM, ServiceError("ctx", status=502, payload="<html>"))
    assert outcome.message == "Login failed! Try again."


def test_transport_error_is_generic_failure() -> None:
    outcome = interpret_result(LOGIN_FORM, TransportError("Timeout contacting svc"))

    assert outcome.kind is OutcomeKind.FAILURE
    assert outcome.error_kind == ErrorKind.TRANSPORT_ERROR
    assert outcome.message == "Login failed! Try again."


@pytest.mark.parametrize("raw", [None, 42, RuntimeError("boom"), ApiError("x"), object()])
def test_mapping_is_total(raw) -> None:
    outcome = interpret_result(LOGIN_FORM, raw)
    assert outcome.kind is OutcomeKind.FAILURE
    assert outcome.message
