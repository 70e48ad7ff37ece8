"""Runtime settings for the e-voting client.

Values come from defaults, an optional mapping (for example a saved JSON
file) and ``EVOTE_*`` environment variables, in that order of precedence.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Any, Dict, Mapping, Optional

from ..utils.logging import env_debug_enabled

DEFAULT_API_BASE_URL = "http://localhost:3001"

_ENV_BASE_URL = "EVOTE_API_BASE_URL"
_ENV_TIMEOUT = "EVOTE_REQUEST_TIMEOUT_S"
_ENV_TOKEN_PATH = "EVOTE_TOKEN_PATH"


def _as_timeout(value: Any) -> Optional[float]:
    """Convert mixed values to a positive timeout; blank/zero means none."""
    if value is None:
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    try:
        seconds = float(value)
    except (TypeError, ValueError):
        raise ValueError(f"Invalid request timeout: {value!r}")
    return seconds if seconds > 0 else None


@dataclass(frozen=True)
class AppSettings:
    """Typed runtime settings.

    Attributes:
        api_base_url: Base URL of the voting service.
        request_timeout_s: Per-request timeout. ``None`` leaves requests
            unbounded, which is the default behaviour of the submission core.
        token_path: JSON file for the session token; ``None`` keeps the token
            in memory for the process lifetime.
        use_mock: Route requests to the in-memory ``AuthMock``.
        debug_logging: Whether DEBUG logging is on.
    """

    api_base_url: str = DEFAULT_API_BASE_URL
    request_timeout_s: Optional[float] = None
    token_path: Optional[str] = None
    use_mock: bool = False
    debug_logging: bool = False

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "AppSettings":
        if not isinstance(payload, Mapping):
            raise ValueError("Settings payload must be a mapping.")
        base_url = str(payload.get("api_base_url") or DEFAULT_API_BASE_URL).strip()
        token_path = payload.get("token_path") or None
        return cls(
            api_base_url=base_url or DEFAULT_API_BASE_URL,
            request_timeout_s=_as_timeout(payload.get("request_timeout_s")),
            token_path=str(token_path) if token_path else None,
            use_mock=bool(payload.get("use_mock", False)),
            debug_logging=bool(payload.get("debug_logging", False)),
        )

    @classmethod
    def from_env(
        cls,
        base: Optional["AppSettings"] = None,
        environ: Optional[Mapping[str, str]] = None,
    ) -> "AppSettings":
        env = os.environ if environ is None else environ
        settings = base or cls()
        changes: Dict[str, Any] = {}
        if env.get(_ENV_BASE_URL, "").strip():
            changes["api_base_url"] = env[_ENV_BASE_URL].strip()
        if _ENV_TIMEOUT in env:
            changes["request_timeout_s"] = _as_timeout(env[_ENV_TIMEOUT])
        if env.get(_ENV_TOKEN_PATH, "").strip():
            changes["token_path"] = env[_ENV_TOKEN_PATH].strip()
        if env_debug_enabled(env):
            changes["debug_logging"] = True
        return replace(settings, **changes)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "api_base_url": self.api_base_url,
            "request_timeout_s": self.request_timeout_s,
            "token_path": self.token_path,
            "use_mock": self.use_mock,
            "debug_logging": self.debug_logging,
        }


__all__ = ["AppSettings", "DEFAULT_API_BASE_URL"]
