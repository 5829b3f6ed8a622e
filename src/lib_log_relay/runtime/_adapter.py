"""Relay adapter actor: one serialised processing loop per adapter name.

Purpose
-------
Hold the live :class:`AdapterConfig` of one named adapter and process events,
flush requests and reconfiguration commands strictly one at a time, so a
reconfigure is linearised with respect to event admission.

Contents
--------
* :class:`RelayAdapter` - the actor.
* ``_Reconfigure`` / ``_Flush`` - work items carrying a result future.

System Role
-----------
Built by :func:`lib_log_relay.init`; runs either on a :class:`QueueAdapter`
worker thread (default) or inline under a lock on the caller's thread.
"""

from __future__ import annotations

import logging
import threading
from concurrent.futures import Future
from dataclasses import dataclass, field
from typing import Any, Mapping

from lib_log_relay.adapters.queue import QueueAdapter
from lib_log_relay.application.ports import RegistryPort, SettingsStorePort
from lib_log_relay.application.use_cases import (
    AdmissionResult,
    admit_event,
    build_diagnostic_emitter,
    configure,
    flush_destination,
)
from lib_log_relay.application.use_cases.admit_event import DiagnosticHook
from lib_log_relay.domain import AdapterConfig, LogEvent, LogLevel

logger = logging.getLogger(__name__)


@dataclass(eq=False)
class _Reconfigure:
    overrides: Mapping[str, Any]
    future: Future = field(default_factory=Future)


@dataclass(eq=False)
class _Flush:
    future: Future = field(default_factory=Future)


class RelayAdapter:
    """Forward admitted log events of one adapter name to its destination."""

    def __init__(
        self,
        name: str,
        *,
        store: SettingsStorePort,
        registry: RegistryPort,
        node: str,
        default_level: LogLevel = LogLevel.DEBUG,
        queue: QueueAdapter | None = None,
        diagnostic: DiagnosticHook = None,
    ) -> None:
        self._name = name
        self._store = store
        self._registry = registry
        self._node = node
        self._default_level = default_level
        self._emit = build_diagnostic_emitter(diagnostic)
        self._lock = threading.RLock()
        self._config = configure(name, {}, store, default_level=default_level)
        self._queue = queue
        if queue is not None:
            queue.set_worker(self._handle)
            queue.set_on_drop(self.reject)
            queue.start()

    @property
    def name(self) -> str:
        return self._name

    @property
    def node(self) -> str:
        return self._node

    @property
    def config(self) -> AdapterConfig:
        """Return the current configuration snapshot."""
        return self._config

    @property
    def queue(self) -> QueueAdapter | None:
        return self._queue

    def emit(self, event: LogEvent) -> bool:
        """Hand ``event`` to the processing loop.

        Returns ``False`` only when the queue rejected the event.
        """
        if self._queue is None:
            with self._lock:
                self._handle(event)
            return True
        if not self._queue.running:
            return False
        return self._queue.put(event)

    def reconfigure(self, overrides: Mapping[str, Any]) -> AdapterConfig:
        """Merge ``overrides`` into the configuration and return the new snapshot.

        Blocks until every event queued before the call has been admitted
        under the previous configuration.
        """
        if self._queue is None or self._queue.on_worker_thread:
            with self._lock:
                return self._apply(overrides)
        self._ensure_running()
        command = _Reconfigure(dict(overrides))
        self._queue.put(command)
        return command.future.result()

    def flush(self, *, wait: bool = True, timeout: float | None = None) -> AdmissionResult | None:
        """Queue a flush marker behind all pending events.

        With ``wait`` the call returns the flush outcome once processed;
        otherwise it returns ``None`` immediately.
        """
        if self._queue is None or self._queue.on_worker_thread:
            with self._lock:
                return self._flush()
        self._ensure_running()
        command = _Flush()
        self._queue.put(command)
        if not wait:
            return None
        return command.future.result(timeout=timeout)

    def stop(self, *, drain: bool = True, timeout: float | None = None) -> None:
        """Stop the worker; the destination itself is left untouched."""
        if self._queue is not None:
            self._queue.stop(drain=drain, timeout=timeout)

    def reject(self, item: Any) -> None:
        """Drop callback for the queue: fail pending command futures."""
        if isinstance(item, (_Reconfigure, _Flush)):
            if not item.future.done():
                item.future.set_exception(RuntimeError(f"relay {self._name!r} dropped the request; queue full or stopped"))
            return
        level = getattr(item, "level", None)
        self._emit("queue_full", {"adapter": self._name, "level": getattr(level, "name", None)})

    def _ensure_running(self) -> None:
        if self._queue is not None and not self._queue.running:
            raise RuntimeError(f"relay {self._name!r} is not running")

    def _handle(self, item: Any) -> None:
        if isinstance(item, LogEvent):
            admit_event(item, self._config, registry=self._registry, local_node=self._node, emit=self._emit)
        elif isinstance(item, _Reconfigure):
            try:
                item.future.set_result(self._apply(item.overrides))
            except Exception as exc:  # noqa: BLE001
                item.future.set_exception(exc)
        elif isinstance(item, _Flush):
            item.future.set_result(self._flush())
        else:
            logger.warning("Relay %s ignored unexpected work item %r", self._name, item)

    def _apply(self, overrides: Mapping[str, Any]) -> AdapterConfig:
        self._config = configure(self._name, overrides, self._store, default_level=self._default_level)
        logger.debug("Relay %s reconfigured: level=%s destination=%r", self._name, self._config.level.name, self._config.destination)
        return self._config

    def _flush(self) -> AdmissionResult:
        return flush_destination(self._config, registry=self._registry, emit=self._emit)


__all__ = ["RelayAdapter"]
