from __future__ import annotations

import threading
from concurrent.futures import Executor, Future
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple

from evote.domain.submission import RemoteResponse


class InlineExecutor(Executor):
    """Runs submitted work on the caller's thread (deterministic tests)."""

    def submit(self, fn: Callable[..., Any], /, *args: Any, **kwargs: Any) -> Future:
        future: Future = Future()
        try:
            future.set_result(fn(*args, **kwargs))
        except BaseException as exc:  # pragma: no cover - surfaced via future
            future.set_exception(exc)
        return future


class FakeAuthPort:
    """Scripted AuthPort: returns or raises the queued results in order."""

    def __init__(self, *results: Any) -> None:
        self._results: List[Any] = list(results)
        self.calls: List[Tuple[str, Dict[str, Any]]] = []

    def post(self, path: str, payload: Mapping[str, Any]) -> RemoteResponse:
        self.calls.append((path, dict(payload)))
        if not self._results:
            raise RuntimeError("No scripted result configured")
        result = self._results.pop(0)
        if isinstance(result, BaseException):
            raise result
        return result


class BlockingAuthPort:
    """AuthPort that holds every call until ``release`` is invoked."""

    def __init__(self, result: Any) -> None:
        self.result = result
        self.entered = threading.Event()
        self._gate = threading.Event()
        self._lock = threading.Lock()
        self.calls: List[Tuple[str, Dict[str, Any]]] = []

    def post(self, path: str, payload: Mapping[str, Any]) -> Any:
        with self._lock:
            self.calls.append((path, dict(payload)))
        self.entered.set()
        if not self._gate.wait(timeout=5):
            raise RuntimeError("BlockingAuthPort was never released")
        if isinstance(self.result, BaseException):
            raise self.result
        return self.result

    def release(self) -> None:
        self._gate.set()


class RecordingTokenStore:
    def __init__(self) -> None:
        self.data: Dict[str, str] = {}
        self.writes: List[Tuple[str, str]] = []

    def get(self, key: str) -> Optional[str]:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.writes.append((key, value))
        self.data[key] = value


VALID_LOGIN = {"cnicNumber": "123456789012", "password": "ab"}

VALID_SIGNUP = {
    "name": "Masab Bin Zia",
    "age": "79",
    "cnicNumber": "987654321098",
    "password": "secret123",
    "mobile": "9876543210",
    "email": "randomemail123@gmail.com",
    "address": "456 Random Street, SomeCity, SomeCountry",
}


__all__ = [
    "BlockingAuthPort",
    "FakeAuthPort",
    "InlineExecutor",
    "RecordingTokenStore",
    "VALID_LOGIN",
    "VALID_SIGNUP",
]
