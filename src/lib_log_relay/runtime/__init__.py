"""Runtime façade managing named relay adapters.

Purpose
-------
Expose the lifecycle and delivery entry points host code uses (``init``,
``reconfigure``, ``shutdown``, ``emit``, ``flush``) instead of wiring the
inner layers by hand.

Contents
--------
* ``init`` / ``reconfigure`` / ``shutdown`` / ``shutdown_all`` - lifecycle.
* ``emit`` / ``flush`` - event delivery and the flush signal.
* ``handler`` - stdlib :class:`logging.Handler` bound to an adapter.
* ``inspect_adapter`` - read-only snapshot of a live adapter.

System Role
-----------
Composition root: picks the settings store, registry, node name and queue
for each adapter, honouring environment overrides from
:mod:`lib_log_relay.config`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Mapping

from lib_log_relay import config as relay_config
from lib_log_relay.adapters import DEFAULT_REGISTRY, DEFAULT_STORE, QueueAdapter, RelayHandler
from lib_log_relay.application.ports import RegistryPort, SettingsStorePort
from lib_log_relay.application.use_cases import AdmissionResult
from lib_log_relay.application.use_cases.admit_event import DiagnosticHook
from lib_log_relay.domain import AdapterConfig, Destination, LogEvent, LogLevel

from ._adapter import RelayAdapter
from ._state import adapter_names, current_adapter, is_initialised, lookup_adapter, register_adapter, remove_adapter

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AdapterSnapshot:
    """Immutable view over one live adapter."""

    name: str
    level: LogLevel
    destination: Destination | None
    metadata: Mapping[str, Any]
    formatter_present: bool
    node: str
    queue_present: bool


def init(
    name: str,
    *,
    registry: RegistryPort | None = None,
    store: SettingsStorePort | None = None,
    node: str | None = None,
    queue_enabled: bool = True,
    queue_maxsize: int = 2048,
    queue_full_policy: str = "block",
    queue_put_timeout: float | None = 1.0,
    queue_stop_timeout: float | None = 5.0,
    diagnostic_hook: DiagnosticHook = None,
) -> AdapterConfig:
    """Start the adapter ``name`` and return its initial configuration.

    Why
    ---
    Hosts call ``init`` once per adapter during startup. Persisted settings
    for ``name`` (from an earlier run in the same process) are picked up, so
    a restarted adapter resumes with its last configuration.

    Inputs
    ------
    name:
        Adapter identifier; immutable for the adapter's lifetime.
    registry, store:
        Name registry and settings store; default to the process-wide
        instances.
    node:
        Local node name used by the origin filter; defaults to
        ``LOG_RELAY_NODE`` or the hostname.
    queue_*:
        Worker queue options. ``LOG_RELAY_QUEUE_ENABLED`` overrides
        ``queue_enabled``.
    diagnostic_hook:
        Optional callback receiving ``(name, payload)`` for drops.

    Side Effects
    ------------
    Raises :class:`RuntimeError` if ``name`` is already live. Spawns a worker
    thread when the queue is enabled.
    """

    if is_initialised(name):
        raise RuntimeError(
            f"lib_log_relay.init({name!r}) cannot be called twice without shutdown(); call lib_log_relay.shutdown() first",
        )

    default_level = relay_config.env_level() or LogLevel.DEBUG
    queue: QueueAdapter | None = None
    if relay_config.env_queue_enabled(queue_enabled):
        queue = QueueAdapter(
            maxsize=queue_maxsize,
            drop_policy=queue_full_policy,
            timeout=queue_put_timeout,
            stop_timeout=queue_stop_timeout,
            diagnostic=diagnostic_hook,
            name=f"lib_log_relay-{name}",
        )
    adapter = RelayAdapter(
        name,
        store=store if store is not None else DEFAULT_STORE,
        registry=registry if registry is not None else DEFAULT_REGISTRY,
        node=node if node is not None else relay_config.env_node(),
        default_level=default_level,
        queue=queue,
        diagnostic=diagnostic_hook,
    )
    try:
        register_adapter(adapter)
    except RuntimeError:
        adapter.stop(drain=False)
        raise
    logger.debug("Relay %s started (queue=%s)", name, queue is not None)
    return adapter.config


def reconfigure(name: str, overrides: Mapping[str, Any] | None = None, /, **options: Any) -> AdapterConfig:
    """Merge options into the configuration of ``name``.

    Options may be passed as a mapping, as keyword arguments, or both
    (keywords win). ``name`` is never overridden.

    Examples
    --------
    >>> init('doc-relay', queue_enabled=False, node='local')
    AdapterConfig(name='doc-relay', ...)
    >>> reconfigure('doc-relay', level='error').level
    <LogLevel.ERROR: 40>
    >>> shutdown('doc-relay')
    """

    merged = {**dict(overrides or {}), **options}
    return current_adapter(name).reconfigure(merged)


def emit(name: str, event: LogEvent) -> bool:
    """Deliver ``event`` to the adapter ``name`` (the host ``onEvent`` call)."""

    return current_adapter(name).emit(event)


def flush(name: str, *, wait: bool = True, timeout: float | None = None) -> AdmissionResult | None:
    """Send the flush signal behind every pending event of ``name``."""

    return current_adapter(name).flush(wait=wait, timeout=timeout)


def current_config(name: str) -> AdapterConfig:
    """Return the configuration snapshot the next event will be checked against."""

    return current_adapter(name).config


def inspect_adapter(name: str) -> AdapterSnapshot:
    """Return a read-only snapshot of the adapter ``name``."""

    adapter = current_adapter(name)
    cfg = adapter.config
    return AdapterSnapshot(
        name=cfg.name,
        level=cfg.level,
        destination=cfg.destination,
        metadata=MappingProxyType(dict(cfg.metadata)),
        formatter_present=cfg.formatter is not None,
        node=adapter.node,
        queue_present=adapter.queue is not None,
    )


def handler(name: str, *, level: int | str = logging.NOTSET) -> RelayHandler:
    """Return a :class:`logging.Handler` feeding records into adapter ``name``.

    The adapter is looked up on every record, so the handler survives an
    adapter restart under the same name; records arriving while the adapter
    is down are dropped.
    """

    def forward(event: LogEvent) -> bool:
        if not is_initialised(name):
            return False
        return emit(name, event)

    def flush_adapter() -> None:
        if is_initialised(name):
            flush(name, wait=False)

    return RelayHandler(forward, flush=flush_adapter, level=level)


def shutdown(name: str, *, drain: bool = True, timeout: float | None = None) -> None:
    """Stop the adapter ``name``.

    Pending events are admitted first when ``drain`` is ``True``. Persisted
    settings are kept; the destination is not notified. When the worker does
    not finish in time the adapter stays registered and :class:`RuntimeError`
    is raised, so ``shutdown`` can be retried.
    """

    adapter = lookup_adapter(name)
    adapter.stop(drain=drain, timeout=timeout)
    remove_adapter(adapter)
    logger.debug("Relay %s stopped", name)


def shutdown_all(*, drain: bool = True) -> None:
    """Stop every live adapter."""

    for name in adapter_names():
        try:
            shutdown(name, drain=drain)
        except RuntimeError as exc:
            logger.error("Relay %s failed to shut down cleanly", name, exc_info=exc)


__all__ = [
    "AdapterSnapshot",
    "RelayAdapter",
    "current_config",
    "emit",
    "flush",
    "handler",
    "init",
    "inspect_adapter",
    "is_initialised",
    "reconfigure",
    "shutdown",
    "shutdown_all",
]
