"""Shared HTTP transport for the auth REST adapter.

This module provides a thin wrapper around ``requests.Session`` so the adapter
shares header construction and transport error translation in one place.

Dependencies:
    - ``requests`` for network I/O.
    - ``evote.adapters.api_errors.TransportError`` for typed transport failures.

Call context:
    - Constructed by ``evote/adapters/auth_rest.py``.
    - Used only inside adapter methods; use cases interact through ports.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

import requests
from requests import exceptions as req_exc

from evote.adapters.api_errors import TransportError


@dataclass
class HttpConfig:
    """Transport configuration for adapter HTTP calls.

    Attributes:
        request_timeout_s: Timeout in seconds for one request. ``None`` waits
            for the service indefinitely; the submission core imposes no
            timeout of its own.
    """
    request_timeout_s: Optional[float] = None


class JsonSession:
    """``requests`` wrapper that sends JSON and never retries.

    Callers decide how to map non-2xx responses into adapter errors.
    """

    def __init__(self, cfg: Optional[HttpConfig] = None) -> None:
        """Create a session.

        Args:
            cfg: Shared timeout settings.

        Side Effects:
            Creates a persistent ``requests.Session`` object.
        """
        self.session = requests.Session()
        self.cfg = cfg or HttpConfig()

    def _headers(self, json_body: bool = False) -> Dict[str, str]:
        headers = {"Accept": "application/json"}
        if json_body:
            headers["Content-Type"] = "application/json"
        return headers

    def post(
        self,
        url: str,
        *,
        json_body: Optional[Mapping[str, Any]] = None,
        timeout: Optional[float] = None,
    ) -> requests.Response:
        """Send one JSON POST request.

        Args:
            url: Absolute endpoint URL.
            json_body: Optional payload object serialized to JSON text.
            timeout: Optional timeout override in seconds.

        Returns:
            ``requests.Response`` for any HTTP status.

        Raises:
            TransportError: If no response was received.
        """
        context = f"POST {url}"
        data = None if json_body is None else json.dumps(dict(json_body))
        try:
            return self.session.post(
                url,
                data=data,
                headers=self._headers(json_body=json_body is not None),
                timeout=timeout if timeout is not None else self.cfg.request_timeout_s,
            )
        except req_exc.Timeout as exc:
            raise TransportError(f"Timeout contacting {url}", context=context) from exc
        except req_exc.ConnectionError as exc:
            raise TransportError(f"Cannot connect to {url}", context=context) from exc
        except req_exc.RequestException as exc:
            raise TransportError(str(exc) or f"Request to {url} failed", context=context) from exc

    def close(self) -> None:
        self.session.close()


__all__ = ["HttpConfig", "JsonSession"]
