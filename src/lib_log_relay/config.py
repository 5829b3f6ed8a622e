"""Environment-driven configuration helpers.

Purpose
-------
Resolve runtime defaults from environment variables and optionally load them
from the nearest ``.env`` file via :mod:`dotenv`.

Contents
--------
* :data:`DOTENV_ENV_VAR` - toggle enabling ``.env`` loading for the CLI.
* :func:`enable_dotenv` / :func:`should_use_dotenv` - ``.env`` handling.
* :func:`env_level`, :func:`env_queue_enabled`, :func:`env_node` - typed
  accessors used by :func:`lib_log_relay.init`.

Environment variables
---------------------
``LOG_RELAY_LEVEL``
    Default threshold for adapters without a persisted ``level``.
``LOG_RELAY_QUEUE_ENABLED``
    ``0``/``1`` override for the ``queue_enabled`` argument of ``init``.
``LOG_RELAY_NODE``
    Name of the local execution node (defaults to the hostname).
"""

from __future__ import annotations

import os
import socket
from pathlib import Path

from dotenv import find_dotenv, load_dotenv

from .domain.levels import LogLevel

DOTENV_ENV_VAR = "LIB_LOG_RELAY_USE_DOTENV"
LEVEL_ENV_VAR = "LOG_RELAY_LEVEL"
QUEUE_ENV_VAR = "LOG_RELAY_QUEUE_ENABLED"
NODE_ENV_VAR = "LOG_RELAY_NODE"

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off"}

_DOTENV_LOADED: Path | None = None


def parse_bool(value: str | None) -> bool | None:
    """Interpret common boolean spellings; ``None`` when unset or unknown.

    Examples
    --------
    >>> parse_bool('Yes'), parse_bool('0'), parse_bool('maybe')
    (True, False, None)
    """

    if value is None:
        return None
    normalized = value.strip().lower()
    if normalized in _TRUTHY:
        return True
    if normalized in _FALSY:
        return False
    return None


def should_use_dotenv(*, explicit: bool | None = None, env_value: str | None = None) -> bool:
    """Decide whether ``.env`` loading is active; an explicit flag wins."""

    if explicit is not None:
        return explicit
    return bool(parse_bool(env_value))


def enable_dotenv(*, search_from: Path | None = None) -> Path | None:
    """Load the nearest ``.env`` file without overriding existing variables.

    Returns the resolved path of the loaded file or ``None`` when no file was
    found. Repeated calls reuse the first result.
    """

    global _DOTENV_LOADED
    if _DOTENV_LOADED is not None:
        return _DOTENV_LOADED
    candidate = _find_nearest(search_from)
    if candidate is None:
        return None
    load_dotenv(candidate, override=False)
    _DOTENV_LOADED = candidate.resolve()
    return _DOTENV_LOADED


def _find_nearest(start: Path | None) -> Path | None:
    if start is None:
        found = find_dotenv(usecwd=True)
        return Path(found) if found else None
    for directory in (start, *start.parents):
        candidate = directory / ".env"
        if candidate.is_file():
            return candidate
    return None


def _reset_dotenv_state_for_testing() -> None:
    global _DOTENV_LOADED
    _DOTENV_LOADED = None


def env_level() -> LogLevel | None:
    """Return the default level from ``LOG_RELAY_LEVEL`` when set."""

    raw = os.getenv(LEVEL_ENV_VAR)
    if raw is None or not raw.strip():
        return None
    return LogLevel.from_name(raw)


def env_queue_enabled(default: bool) -> bool:
    """Return the ``LOG_RELAY_QUEUE_ENABLED`` override or ``default``."""

    parsed = parse_bool(os.getenv(QUEUE_ENV_VAR))
    return default if parsed is None else parsed


def env_node() -> str:
    """Return the local node name (``LOG_RELAY_NODE`` or the hostname)."""

    raw = os.getenv(NODE_ENV_VAR)
    if raw and raw.strip():
        return raw.strip()
    return socket.gethostname()


__all__ = [
    "DOTENV_ENV_VAR",
    "LEVEL_ENV_VAR",
    "NODE_ENV_VAR",
    "QUEUE_ENV_VAR",
    "enable_dotenv",
    "env_level",
    "env_node",
    "env_queue_enabled",
    "parse_bool",
    "should_use_dotenv",
]
