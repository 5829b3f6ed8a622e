"""Protocols separating the use cases from concrete adapters."""

from __future__ import annotations

from .queue import QueuePort
from .receiver import ReceiverPort, RegistryPort
from .settings_store import SettingsStorePort

__all__ = ["QueuePort", "ReceiverPort", "RegistryPort", "SettingsStorePort"]
