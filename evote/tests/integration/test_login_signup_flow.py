"""End-to-end scenarios through controller, viewmodels, use cases and adapters."""

from __future__ import annotations

from evote.adapters.api_errors import ServiceError
from evote.adapters.auth_mock import AuthMock
from evote.adapters.token_store import TokenStoreMemory
from evote.app.controller import AppController
from evote.app.settings import AppSettings
from evote.domain.submission import OutcomeKind, RemoteResponse, SubmissionStatus
from evote.tests.helpers import FakeAuthPort, InlineExecutor, VALID_SIGNUP


def _controller(port) -> AppController:
    return AppController(
        AppSettings(),
        auth_port=port,
        token_store=TokenStoreMemory(),
        executor=InlineExecutor(),
    )


def _fill(vm, values) -> None:
    for name, value in values.items():
        vm.set_field(name, value)


def test_login_success_stores_token_and_resets_form() -> None:
    port = FakeAuthPort(RemoteResponse(200, {"token": "T1"}))
    controller = _controller(port)
    vm = controller.login_vm
    _fill(vm, {"cnicNumber": "123456789012", "password": "ab"})

    vm.submit()

    assert vm.outcome.kind is OutcomeKind.SUCCESS
    assert controller.session_token() == "T1"
    assert vm.values == {"cnicNumber": "", "password": ""}
    assert vm.state.status is SubmissionStatus.SUCCEEDED
    assert vm.banner == "Login Successful."


def test_login_with_short_cnic_fails_before_network() -> None:
    port = FakeAuthPort()
    controller = _controller(port)
    vm = controller.login_vm
    _fill(vm, {"cnicNumber": "12345", "password": "ab"})

    attempt = vm.submit()

    assert attempt.blocked_by_validation
    assert vm.field_view("cnicNumber").error == "CNIC number must be exactly 12 digits."
    assert port.calls == []
    assert controller.session_token() is None


def test_signup_conflict_message_differs_from_server_failure() -> None:
    mock = AuthMock()
    controller = _controller(mock)
    vm = controller.signup_vm

    _fill(vm, VALID_SIGNUP)
    vm.submit()
    assert vm.outcome.kind is OutcomeKind.SUCCESS
    assert vm.banner == "User successfully signed up!"
    assert mock.users["987654321098"]["age"] == 79

    _fill(vm, VALID_SIGNUP)
    vm.submit()
    conflict_banner = vm.banner
    assert vm.outcome.kind is OutcomeKind.CONFLICT
    assert conflict_banner == "User already exists!"

    failing = _controller(FakeAuthPort(ServiceError("ctx", status=500, payload=None)))
    other_vm = failing.signup_vm
    _fill(other_vm, VALID_SIGNUP)
    other_vm.submit()
    assert other_vm.outcome.kind is OutcomeKind.FAILURE
    assert other_vm.banner == "Can't Signup, try again!"
    assert other_vm.banner != conflict_banner


def test_signup_then_login_against_mock_service() -> None:
    controller = _controller(AuthMock())
    signup = controller.signup_vm
    _fill(signup, VALID_SIGNUP)
    signup.submit()

    login = controller.login_vm
    _fill(login, {"cnicNumber": VALID_SIGNUP["cnicNumber"], "password": "wrong-one"})
    login.submit()
    assert login.outcome.kind is OutcomeKind.FAILURE
    assert login.banner == "Invalid CNIC or password"

    _fill(login, {"cnicNumber": VALID_SIGNUP["cnicNumber"], "password": VALID_SIGNUP["password"]})
    login.submit()
    assert login.outcome.kind is OutcomeKind.SUCCESS
    assert controller.session_token()


def test_signup_never_writes_token_store() -> None:
    controller = _controller(FakeAuthPort(RemoteResponse(201, {"token": "not-a-session"})))
    vm = controller.signup_vm
    _fill(vm, VALID_SIGNUP)

    vm.submit()

    assert vm.outcome.kind is OutcomeKind.SUCCESS
    assert controller.session_token() is None
