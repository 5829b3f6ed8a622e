"""Use case deciding whether a single log event reaches the destination.

Purpose
-------
Run the ordered admission checks (origin, destination presence, level,
liveness), merge metadata, format the message and dispatch it. Also hosts the
flush handler, which shares the liveness rules.

Contents
--------
* :func:`build_diagnostic_emitter` - guarded wrapper around the diagnostic hook.
* :func:`admit_event` - the admission pipeline.
* :func:`flush_destination` - sends the bare flush marker.

System Role
-----------
Application-layer policy invoked by :class:`lib_log_relay.runtime.RelayAdapter`
on its worker. Every failure degrades to "not forwarded"; nothing in here
raises past the function boundary.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from lib_log_relay.application.ports.receiver import ReceiverPort, RegistryPort
from lib_log_relay.domain import FLUSH, AdapterConfig, ForwardedMessage, LogEvent, should_log

from .format_message import format_message
from .liveness import resolve

logger = logging.getLogger(__name__)

AdmissionResult = dict[str, Any]
DiagnosticHook = Callable[[str, dict[str, Any]], None] | None
Emitter = Callable[[str, dict[str, Any]], None]

DROP_REASONS: tuple[str, ...] = (
    "remote_origin",
    "no_destination",
    "below_threshold",
    "destination_down",
    "format_error",
    "send_failed",
)
"""Stable drop-reason labels reported through the diagnostic hook."""


def build_diagnostic_emitter(diagnostic: DiagnosticHook) -> Emitter:
    """Return an emitter that never lets a failing hook escape."""

    def emit(name: str, payload: dict[str, Any]) -> None:
        if diagnostic is None:
            return
        try:
            diagnostic(name, payload)
        except Exception as exc:  # noqa: BLE001
            logger.error("Diagnostic hook raised while reporting %s", name, exc_info=exc)

    return emit


def _noop(name: str, payload: dict[str, Any]) -> None:
    return None


def admit_event(
    event: LogEvent,
    config: AdapterConfig,
    *,
    registry: RegistryPort,
    local_node: str,
    emit: Emitter = _noop,
) -> AdmissionResult:
    """Forward ``event`` to ``config.destination`` when every check passes.

    Examples
    --------
    >>> from datetime import datetime, timezone
    >>> from lib_log_relay.domain import DirectHandle, LogLevel
    >>> class Inbox:
    ...     def __init__(self):
    ...         self.messages = []
    ...     def is_alive(self):
    ...         return True
    ...     def send(self, message):
    ...         self.messages.append(message)
    >>> class NoNames:
    ...     def whereis(self, name):
    ...         return None
    >>> inbox = Inbox()
    >>> cfg = AdapterConfig(name='relay', level=LogLevel.WARNING, destination=DirectHandle(inbox))
    >>> ts = datetime(2025, 9, 30, 12, 0, tzinfo=timezone.utc)
    >>> admit_event(LogEvent(LogLevel.DEBUG, 'x', ts), cfg, registry=NoNames(), local_node='n1')
    {'ok': False, 'reason': 'below_threshold'}
    >>> admit_event(LogEvent(LogLevel.ERROR, 'y', ts), cfg, registry=NoNames(), local_node='n1')
    {'ok': True}
    >>> inbox.messages[0].message
    'y'
    """

    if not event.is_local_to(local_node):
        return _drop(emit, config, event, "remote_origin")
    if config.destination is None:
        return _drop(emit, config, event, "no_destination")
    if not should_log(event.level, config.level):
        return _drop(emit, config, event, "below_threshold")
    receiver = resolve(config.destination, registry)
    if receiver is None:
        return _drop(emit, config, event, "destination_down")

    metadata = _merge_metadata(event, config)
    outcome = format_message(config.formatter, event.level, event.message, event.timestamp, metadata)
    if not outcome.ok:
        return _drop(emit, config, event, "format_error", error=repr(outcome.error))

    message = ForwardedMessage(event.level, outcome.message, event.timestamp, metadata)
    if not _send(receiver, message):
        return _drop(emit, config, event, "send_failed")
    return {"ok": True}


def flush_destination(
    config: AdapterConfig,
    *,
    registry: RegistryPort,
    emit: Emitter = _noop,
) -> AdmissionResult:
    """Send :data:`FLUSH` to the destination when it is alive; otherwise no-op."""

    receiver = resolve(config.destination, registry)
    if receiver is None:
        emit("flush_skipped", {"adapter": config.name})
        return {"ok": False, "reason": "destination_down"}
    if not _send(receiver, FLUSH):
        emit("flush_skipped", {"adapter": config.name})
        return {"ok": False, "reason": "send_failed"}
    return {"ok": True}


def _merge_metadata(event: LogEvent, config: AdapterConfig) -> dict[str, Any]:
    # Adapter metadata wins over per-event keys on collision.
    return {**event.metadata, **config.metadata}


def _send(receiver: ReceiverPort, message: Any) -> bool:
    try:
        receiver.send(message)
    except Exception as exc:  # noqa: BLE001
        logger.debug("Receiver %r rejected message; dropping", receiver, exc_info=exc)
        return False
    return True


def _drop(
    emit: Emitter,
    config: AdapterConfig,
    event: LogEvent,
    reason: str,
    **details: Any,
) -> AdmissionResult:
    emit(
        "event_dropped",
        {"adapter": config.name, "level": event.level.name, "reason": reason, **details},
    )
    return {"ok": False, "reason": reason}


__all__ = [
    "AdmissionResult",
    "DROP_REASONS",
    "DiagnosticHook",
    "admit_event",
    "build_diagnostic_emitter",
    "flush_destination",
]
