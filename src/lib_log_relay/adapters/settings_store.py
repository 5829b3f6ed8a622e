"""In-memory implementation of :class:`SettingsStorePort`.

Settings are stored as plain option mappings keyed by adapter name. One
process-wide instance (:data:`DEFAULT_STORE`) backs every adapter unless the
host injects its own store, so settings outlive an adapter shutdown.
"""

from __future__ import annotations

from threading import RLock
from typing import Any, Callable

from lib_log_relay.application.ports.settings_store import SettingsStorePort


class InMemorySettingsStore(SettingsStorePort):
    """Dictionary-backed settings store with atomic per-call updates.

    Examples
    --------
    >>> store = InMemorySettingsStore()
    >>> store.get('relay')
    {}
    >>> store.update('relay', lambda previous: {**previous, 'level': 'info'})
    {'level': 'info'}
    >>> store.get('relay')
    {'level': 'info'}
    """

    def __init__(self) -> None:
        self._settings: dict[str, dict[str, Any]] = {}
        self._lock = RLock()

    def get(self, name: str) -> dict[str, Any]:
        with self._lock:
            return _copy(self._settings.get(name, {}))

    def put(self, name: str, settings: dict[str, Any]) -> None:
        with self._lock:
            self._settings[name] = _copy(settings)

    def update(self, name: str, fn: Callable[[dict[str, Any]], dict[str, Any]]) -> dict[str, Any]:
        """Apply ``fn`` to the current settings under the store lock.

        When ``fn`` raises, the stored settings stay unchanged.
        """
        with self._lock:
            updated = _copy(fn(_copy(self._settings.get(name, {}))))
            self._settings[name] = updated
            return _copy(updated)

    def delete(self, name: str) -> None:
        with self._lock:
            self._settings.pop(name, None)

    def names(self) -> list[str]:
        """Return the adapter names with persisted settings."""
        with self._lock:
            return sorted(self._settings)

    def clear(self) -> None:
        with self._lock:
            self._settings.clear()


def _copy(settings: dict[str, Any]) -> dict[str, Any]:
    return {key: dict(value) if isinstance(value, dict) else value for key, value in settings.items()}


DEFAULT_STORE = InMemorySettingsStore()


__all__ = ["DEFAULT_STORE", "InMemorySettingsStore"]
