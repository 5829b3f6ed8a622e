"""Public package surface of the log relay.

Host code starts a named adapter with :func:`init`, points it at a receiver
with :func:`reconfigure` and delivers events through :func:`emit` or a
stdlib :func:`handler`. Receivers get :class:`ForwardedMessage` tuples and
the :data:`FLUSH` marker.
"""

from __future__ import annotations

from .adapters import InMemorySettingsStore, Mailbox, ProcessRegistry, RichConsoleReceiver
from .domain import (
    FLUSH,
    AdapterConfig,
    DirectHandle,
    FormatError,
    ForwardedMessage,
    LogEvent,
    LogLevel,
    RegisteredName,
)
from .runtime import (
    AdapterSnapshot,
    current_config,
    emit,
    flush,
    handler,
    init,
    inspect_adapter,
    is_initialised,
    reconfigure,
    shutdown,
    shutdown_all,
)

__all__ = [
    "AdapterConfig",
    "AdapterSnapshot",
    "DirectHandle",
    "FLUSH",
    "FormatError",
    "ForwardedMessage",
    "InMemorySettingsStore",
    "LogEvent",
    "LogLevel",
    "Mailbox",
    "ProcessRegistry",
    "RegisteredName",
    "RichConsoleReceiver",
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
