"""Concrete adapters implementing the application ports."""

from __future__ import annotations

from .console import RichConsoleReceiver
from .logging_handler import RelayHandler
from .queue import QueueAdapter
from .registry import DEFAULT_REGISTRY, Mailbox, ProcessRegistry
from .settings_store import DEFAULT_STORE, InMemorySettingsStore

__all__ = [
    "DEFAULT_REGISTRY",
    "DEFAULT_STORE",
    "InMemorySettingsStore",
    "Mailbox",
    "ProcessRegistry",
    "QueueAdapter",
    "RelayHandler",
    "RichConsoleReceiver",
]
