"""Configuration store operation: merge, persist and snapshot adapter options.

Purpose
-------
Apply caller overrides on top of the settings persisted for an adapter name
and produce the :class:`AdapterConfig` the pipeline reads from then on.

System Role
-----------
Invoked once during :func:`lib_log_relay.init` (with no overrides) and for
every :func:`lib_log_relay.reconfigure` call. Persisted settings survive an
adapter shutdown so a restarted adapter with the same name picks them up.
"""

from __future__ import annotations

from typing import Any, Mapping

from lib_log_relay.application.ports.settings_store import SettingsStorePort
from lib_log_relay.domain import AdapterConfig, LogLevel


def configure(
    name: str,
    overrides: Mapping[str, Any],
    store: SettingsStorePort,
    *,
    default_level: LogLevel = LogLevel.DEBUG,
) -> AdapterConfig:
    """Merge ``overrides`` into the persisted settings for ``name``.

    The read-modify-write runs inside :meth:`SettingsStorePort.update`, so
    concurrent calls for the same name never interleave. The snapshot is
    built before the store commits; invalid options raise
    :class:`ValueError` and leave the persisted settings untouched.

    Examples
    --------
    >>> from lib_log_relay.adapters.settings_store import InMemorySettingsStore
    >>> store = InMemorySettingsStore()
    >>> configure('relay', {'level': 'error'}, store).level
    <LogLevel.ERROR: 40>
    >>> cfg = configure('relay', {'metadata': {'app': 'demo'}, 'name': 'other'}, store)
    >>> cfg.name, cfg.level, dict(cfg.metadata)
    ('relay', <LogLevel.ERROR: 40>, {'app': 'demo'})
    """

    built: list[AdapterConfig] = []

    def merge(previous: dict[str, Any]) -> dict[str, Any]:
        applied = {**previous, **_detached(overrides)}
        applied["name"] = name
        built.append(AdapterConfig.from_options(name, applied, default_level=default_level))
        return applied

    store.update(name, merge)
    return built[-1]


def _detached(overrides: Mapping[str, Any]) -> dict[str, Any]:
    # Persisted settings must not alias caller-owned mappings.
    return {key: dict(value) if key == "metadata" and isinstance(value, Mapping) else value for key, value in overrides.items()}


__all__ = ["configure"]
