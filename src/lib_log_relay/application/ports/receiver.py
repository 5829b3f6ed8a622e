"""Ports describing destination receivers and their name registry.

Purpose
-------
Define the narrow contracts the admission pipeline relies on to check
liveness and deliver messages, without knowing whether a receiver is a
mailbox, a console renderer or a test double.

Contents
--------
* :class:`ReceiverPort` - something that accepts forwarded messages.
* :class:`RegistryPort` - resolves registered names to receivers.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class ReceiverPort(Protocol):
    """Consumer of forwarded messages and flush markers."""

    def is_alive(self) -> bool:
        """Return ``True`` while the receiver accepts messages."""

    def send(self, message: Any) -> None:
        """Deliver ``message`` without waiting for it to be handled."""


@runtime_checkable
class RegistryPort(Protocol):
    """Name service for receivers."""

    def whereis(self, name: str) -> ReceiverPort | None:
        """Return the receiver bound to ``name`` or ``None``."""


__all__ = ["ReceiverPort", "RegistryPort"]
