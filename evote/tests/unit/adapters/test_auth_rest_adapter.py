from __future__ import annotations

import json
from typing import Any, Dict, List, Optional, Sequence

import pytest
from requests import exceptions as req_exc

from evote.adapters.api_errors import ConflictError, ServiceError, TransportError
from evote.adapters.auth_rest import AuthRestAdapter
from evote.adapters.http_client import HttpConfig, JsonSession
from evote.domain.submission import RemoteResponse


class _ResponseStub:
    def __init__(self, payload: Any, status_code: int = 200, *, text: Optional[str] = None) -> None:
        self._payload = payload
        self.status_code = status_code
        self.text = str(payload) if text is None else text

    def json(self) -> Any:
        if isinstance(self._payload, Exception):
            raise self._payload
        return self._payload


class _JsonSessionStub:
    def __init__(self, responses: Sequence[_ResponseStub]) -> None:
        self._responses = list(responses)
        self.calls: List[Dict[str, Any]] = []

    def post(self, url: str, *, json_body: Any = None, timeout: Any = None) -> _ResponseStub:
        self.calls.append({"url": url, "json_body": json_body})
        return self._responses.pop(0)

    def close(self) -> None:
        pass


class _RequestsSessionStub:
    def __init__(self, exc: Optional[Exception] = None, response: Any = None) -> None:
        self.exc = exc
        self.response = response
        self.calls: List[Dict[str, Any]] = []

    def post(self, url: str, **kwargs: Any) -> Any:
        self.calls.append({"url": url, **kwargs})
        if self.exc is not None:
            raise self.exc
        return self.response


def test_login_posts_to_user_login_and_returns_body() -> None:
    stub = _JsonSessionStub([_ResponseStub({"token": "T1"})])
    adapter = AuthRestAdapter("http://localhost:3001/", session=stub)  # type: ignore[arg-type]

    result = adapter.post("/user/login", {"cnicNumber": "123456789012", "password": "ab"})

    assert result == RemoteResponse(status=200, payload={"token": "T1"})
    assert stub.calls[0]["url"] == "http://localhost:3001/user/login"
    assert stub.calls[0]["json_body"] == {"cnicNumber": "123456789012", "password": "ab"}


def test_conflict_status_raises_conflict_error() -> None:
    stub = _JsonSessionStub([_ResponseStub({"error": "User already exists"}, status_code=409)])
    adapter = AuthRestAdapter("http://svc", session=stub)  # type: ignore[arg-type]

    with pytest.raises(ConflictError) as excinfo:
        adapter.post("user/signup", {"cnicNumber": 1})

    assert excinfo.value.status == 409
    assert excinfo.value.payload == {"error": "User already exists"}
    assert stub.calls[0]["url"] == "http://svc/user/signup"


def test_server_error_keeps_text_payload() -> None:
    response = _ResponseStub(ValueError("no json"), status_code=500, text="<html>boom</html>")
    adapter = AuthRestAdapter("http://svc", session=_JsonSessionStub([response]))  # type: ignore[arg-type]

    with pytest.raises(ServiceError) as excinfo:
        adapter.post("/user/login", {})

    assert not isinstance(excinfo.value, ConflictError)
    assert excinfo.value.status == 500
    assert excinfo.value.payload == "<html>boom</html>"


def test_success_with_unparseable_body_yields_none_payload() -> None:
    response = _ResponseStub(ValueError("no json"), status_code=200, text="OK")
    adapter = AuthRestAdapter("http://svc", session=_JsonSessionStub([response]))  # type: ignore[arg-type]

    assert adapter.post("/user/login", {}) == RemoteResponse(status=200, payload=None)


def test_adapter_requires_base_url() -> None:
    with pytest.raises(ValueError):
        AuthRestAdapter("  ")


def test_json_session_sends_serialized_body_without_retry() -> None:
    session = JsonSession(HttpConfig(request_timeout_s=3))
    stub = _RequestsSessionStub(response=_ResponseStub({}))
    session.session = stub  # type: ignore[assignment]

    session.post("http://svc/user/login", json_body={"a": 1})

    assert len(stub.calls) == 1
    call = stub.calls[0]
    assert json.loads(call["data"]) == {"a": 1}
    assert call["headers"]["Content-Type"] == "application/json"
    assert call["timeout"] == 3


@pytest.mark.parametrize(
    "exc",
    [req_exc.Timeout("slow"), req_exc.ConnectionError("refused"), req_exc.RequestException("bad")],
)
def test_json_session_translates_transport_failures(exc: Exception) -> None:
    session = JsonSession()
    stub = _RequestsSessionStub(exc=exc)
    session.session = stub  # type: ignore[assignment]

    with pytest.raises(TransportError) as excinfo:
        session.post("http://svc/user/login", json_body={})

    assert len(stub.calls) == 1
    assert stub.calls[0]["timeout"] is None
    assert excinfo.value.context == "POST http://svc/user/login"
