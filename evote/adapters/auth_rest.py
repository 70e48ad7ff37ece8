from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

import requests

from evote.domain.ports import AuthPort
from evote.domain.submission import RemoteResponse

from .api_errors import (
    ConflictError,
    ServiceError,
    build_error_message,
    parse_error_payload,
)
from .http_client import HttpConfig, JsonSession


class AuthRestAdapter(AuthPort):
    """REST adapter for the voting service's ``/user/*`` endpoints."""

    def __init__(
        self,
        base_url: str,
        *,
        request_timeout_s: Optional[float] = None,
        session: Optional[JsonSession] = None,
    ) -> None:
        if not base_url or not str(base_url).strip():
            raise ValueError("AuthRestAdapter requires a base URL")
        self.base_url = str(base_url).strip()
        self.cfg = HttpConfig(request_timeout_s=request_timeout_s)
        self.session = session or JsonSession(self.cfg)
        self._log = logging.getLogger(__name__)

    def post(self, path: str, payload: Mapping[str, Any]) -> RemoteResponse:
        url = self._make_url(path)
        ctx = f"POST {path}"
        self._log.debug("%s -> %s", ctx, url)
        resp = self.session.post(url, json_body=payload)
        self._ensure_ok(resp, ctx)
        return RemoteResponse(status=resp.status_code, payload=self._json_or_none(resp))

    def close(self) -> None:
        self.session.close()

    def _make_url(self, path: str) -> str:
        base = self.base_url
        if base.endswith("/"):
            base = base[:-1]
        if not path.startswith("/"):
            path = f"/{path}"
        return f"{base}{path}"

    @staticmethod
    def _ensure_ok(resp: requests.Response, ctx: str) -> None:
        if 200 <= resp.status_code < 300:
            return
        status = resp.status_code
        payload = parse_error_payload(resp)
        message = build_error_message(ctx, status, payload)
        if status == 409:
            raise ConflictError(message, status=status, payload=payload, context=ctx)
        raise ServiceError(message, status=status, payload=payload, context=ctx)

    @staticmethod
    def _json_or_none(resp: requests.Response) -> Any:
        # An unparseable 2xx body is classified by the result interpreter.
        try:
            return resp.json()
        except Exception:
            return None


__all__ = ["AuthRestAdapter"]
