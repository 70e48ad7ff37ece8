from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Tuple
from uuid import uuid4

from evote.domain.ports import AuthPort
from evote.domain.submission import RemoteResponse

from .api_errors import ConflictError, ServiceError

DEMO_CNIC = "111122223333"
DEMO_PASSWORD = "demo1234"


@dataclass
class AuthMock(AuthPort):
    """Offline substitute for ``AuthRestAdapter`` backed by an in-memory user table."""

    users: Dict[str, Dict[str, Any]] = field(default_factory=dict)
    calls: List[Tuple[str, Dict[str, Any]]] = field(default_factory=list)

    def __post_init__(self) -> None:
        self._lock = threading.Lock()
        self._routes = {
            "/user/login": self._login,
            "/user/signup": self._signup,
        }

    # ---------- AuthPort ----------

    def post(self, path: str, payload: Mapping[str, Any]) -> RemoteResponse:
        body = dict(payload or {})
        with self._lock:
            self.calls.append((path, body))
            handler = self._routes.get(path)
            if handler is None:
                raise ServiceError(
                    f"POST {path}: Not found (HTTP 404)",
                    status=404,
                    payload={"message": "Not found"},
                    context=f"POST {path}",
                )
            return handler(body)

    # ---------- Handlers ----------

    def _login(self, body: Dict[str, Any]) -> RemoteResponse:
        cnic = str(body.get("cnicNumber") or "")
        user = self.users.get(cnic)
        if user is None or user.get("password") != body.get("password"):
            raise ServiceError(
                "POST /user/login: Invalid CNIC or password (HTTP 401)",
                status=401,
                payload={"message": "Invalid CNIC or password"},
                context="POST /user/login",
            )
        token = uuid4().hex
        user["token"] = token
        return RemoteResponse(status=200, payload={"token": token})

    def _signup(self, body: Dict[str, Any]) -> RemoteResponse:
        cnic = str(body.get("cnicNumber") or "")
        if not cnic:
            raise ServiceError(
                "POST /user/signup: cnicNumber missing (HTTP 400)",
                status=400,
                payload={"errors": {"cnicNumber": "cnicNumber is required"}},
                context="POST /user/signup",
            )
        if cnic in self.users:
            raise ConflictError(
                "POST /user/signup: User already exists (HTTP 409)",
                status=409,
                payload={"error": "User already exists"},
                context="POST /user/signup",
            )
        self.users[cnic] = dict(body)
        return RemoteResponse(
            status=201,
            payload={"message": "User created", "user": {"cnicNumber": body.get("cnicNumber")}},
        )

    # ---------- Helpers ----------

    @classmethod
    def with_demo_user(cls) -> "AuthMock":
        """Mock preloaded with one account (``DEMO_CNIC`` / ``DEMO_PASSWORD``)."""
        mock = cls()
        mock.add_user(DEMO_CNIC, DEMO_PASSWORD, name="Demo Voter")
        return mock

    def add_user(self, cnic: str, password: str, **extra: Any) -> None:
        with self._lock:
            self.users[str(cnic)] = {"cnicNumber": str(cnic), "password": password, **extra}

    def posts_to(self, path: str) -> int:
        return sum(1 for called, _ in self.calls if called == path)


__all__ = ["AuthMock", "DEMO_CNIC", "DEMO_PASSWORD"]
