from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol

from .submission import RemoteResponse

TOKEN_KEY = "token"


# ---- Error model ----
class UseCaseError(Exception):
    """Base class for use case level errors (user-presentable)."""

    def __init__(self, code: str, message: str):
        super().__init__(message)
        self.code = code
        self.message = message


# ---- Ports (Hexagonal boundaries) ----
class AuthPort(Protocol):
    """Remote authentication service (login/signup endpoints).

    Returns the raw response for 2xx replies. Non-2xx replies and transport
    failures raise ``evote.adapters.api_errors`` exceptions.
    """

    def post(self, path: str, payload: Mapping[str, Any]) -> RemoteResponse: ...


class TokenStorePort(Protocol):
    """Key-value persistence for the session token."""

    def get(self, key: str) -> Optional[str]: ...
    def set(self, key: str, value: str) -> None: ...
