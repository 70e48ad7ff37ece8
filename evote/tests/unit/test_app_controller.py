from __future__ import annotations

from evote.adapters.auth_mock import AuthMock
from evote.adapters.auth_rest import AuthRestAdapter
from evote.adapters.token_store import TokenStoreLocal, TokenStoreMemory
from evote.app.controller import AppController
from evote.app.settings import AppSettings


def test_builds_rest_adapter_from_settings() -> None:
    controller = AppController(AppSettings(api_base_url="http://vote.local", request_timeout_s=4))

    port = controller.auth_port

    assert isinstance(port, AuthRestAdapter)
    assert port.base_url == "http://vote.local"
    assert port.cfg.request_timeout_s == 4
    assert isinstance(controller.token_store, TokenStoreMemory)


def test_mock_and_file_token_store_selection(tmp_path) -> None:
    settings = AppSettings(use_mock=True, token_path=str(tmp_path / "token.json"))
    controller = AppController(settings)

    assert isinstance(controller.auth_port, AuthMock)
    assert isinstance(controller.token_store, TokenStoreLocal)


def test_viewmodels_are_cached_until_reset() -> None:
    controller = AppController(AppSettings(use_mock=True))
    login = controller.login_vm

    assert controller.login_vm is login
    assert controller.uc_login is not None
    assert controller.uc_login.token_store is controller.token_store

    controller.reset()

    assert controller.uc_login is None
    assert controller.login_vm is not login
    controller.shutdown()


def test_signup_workflow_has_no_token_store() -> None:
    controller = AppController(AppSettings(use_mock=True))
    controller.signup_vm

    assert controller.uc_signup.token_store is None
    controller.shutdown()


def test_session_token_survives_corrupt_token_file(tmp_path) -> None:
    path = tmp_path / "token.json"
    path.write_text("not json", encoding="utf-8")
    controller = AppController(AppSettings(use_mock=True, token_path=str(path)))

    assert controller.session_token() is None
