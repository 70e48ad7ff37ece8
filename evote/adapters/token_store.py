from __future__ import annotations

import json
import logging
import os
import tempfile
import threading
from typing import Dict, Optional

from evote.domain.ports import TokenStorePort

_log = logging.getLogger(__name__)


class TokenStoreMemory(TokenStorePort):
    """Process-lifetime key-value store for the session token."""

    def __init__(self) -> None:
        self._data: Dict[str, str] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[str]:
        with self._lock:
            return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        with self._lock:
            self._data[key] = value


class TokenStoreLocal(TokenStorePort):
    """JSON file store so a token survives between CLI invocations."""

    def __init__(self, path: str) -> None:
        self.path = path
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[str]:
        with self._lock:
            value = self._load().get(key)
        return value if isinstance(value, str) else None

    def set(self, key: str, value: str) -> None:
        with self._lock:
            data = self._load()
            data[key] = value
            folder = os.path.dirname(self.path)
            if folder:
                os.makedirs(folder, exist_ok=True)
            # Temp file in the same folder, then an atomic swap.
            fd, tmp_path = tempfile.mkstemp(prefix=".token-", suffix=".json", dir=folder or ".")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(data, f, ensure_ascii=False, indent=2)
                os.replace(tmp_path, self.path)
            except BaseException:
                if os.path.exists(tmp_path):
                    os.unlink(tmp_path)
                raise

    def _load(self) -> Dict[str, str]:
        if not os.path.exists(self.path):
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            _log.warning("Ignoring unreadable token file %s: %s", self.path, exc)
            return {}
        return data if isinstance(data, dict) else {}


__all__ = ["TokenStoreLocal", "TokenStoreMemory"]
