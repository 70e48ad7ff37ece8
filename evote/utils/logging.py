"""Root logger setup for the evote CLI.

The caller picks a default level. ``EVOTE_LOG_LEVEL`` (a level name or number)
or a truthy ``EVOTE_DEBUG`` overrides it. urllib3 and requests are capped at
INFO unless ``EVOTE_DEBUG_HTTP`` is set, since they log every connection.
"""

from __future__ import annotations

import logging
import os
from typing import Mapping, Optional

LOG_FORMAT = "%(asctime)s %(levelname)-7s [%(threadName)s] %(name)s: %(message)s"
_HTTP_LOGGERS = ("urllib3", "requests")
_TRUTHY = frozenset({"1", "true", "yes", "on"})


def _flag(env: Mapping[str, str], name: str) -> bool:
    return env.get(name, "").strip().lower() in _TRUTHY


def env_log_level(environ: Optional[Mapping[str, str]] = None) -> Optional[int]:
    """Level forced by the environment, or ``None`` when nothing is set.

    Unknown level names are ignored rather than rejected.
    """
    env = os.environ if environ is None else environ
    raw = env.get("EVOTE_LOG_LEVEL", "").strip()
    if raw.isdigit():
        return int(raw)
    if raw:
        level = logging.getLevelName(raw.upper())
        if isinstance(level, int):
            return level
    if _flag(env, "EVOTE_DEBUG"):
        return logging.DEBUG
    return None


def env_debug_enabled(environ: Optional[Mapping[str, str]] = None) -> bool:
    level = env_log_level(environ)
    return level is not None and level <= logging.DEBUG


def configure_root(
    default_level: int = logging.INFO,
    environ: Optional[Mapping[str, str]] = None,
) -> int:
    """Install a stderr handler (once) and set levels; returns the root level."""
    env = os.environ if environ is None else environ
    level = env_log_level(env)
    if level is None:
        level = default_level

    root = logging.getLogger()
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%H:%M:%S"))
        root.addHandler(handler)
    root.setLevel(level)

    http_level = level if _flag(env, "EVOTE_DEBUG_HTTP") else max(level, logging.INFO)
    for name in _HTTP_LOGGERS:
        logging.getLogger(name).setLevel(http_level)
    return level


__all__ = ["configure_root", "env_debug_enabled", "env_log_level"]
