"""Port for the process-wide store of persisted adapter settings."""

from __future__ import annotations

from typing import Any, Callable, Protocol, runtime_checkable


@runtime_checkable
class SettingsStorePort(Protocol):
    """Key/value store of option mappings keyed by adapter name."""

    def get(self, name: str) -> dict[str, Any]:
        """Return a copy of the settings for ``name`` (empty when unknown)."""

    def put(self, name: str, settings: dict[str, Any]) -> None:
        """Replace the settings stored for ``name``."""

    def update(self, name: str, fn: Callable[[dict[str, Any]], dict[str, Any]]) -> dict[str, Any]:
        """Atomically replace the settings for ``name`` with ``fn(previous)``."""

    def delete(self, name: str) -> None:
        """Forget the settings stored for ``name``."""


__all__ = ["SettingsStorePort"]
