"""Receiver registry and queue-backed mailbox receivers.

Purpose
-------
Provide the in-process stand-ins for addressable consumers: a
:class:`Mailbox` that buffers forwarded messages until the owner reads them,
and a :class:`ProcessRegistry` binding symbolic names to receivers.

Contents
--------
* :class:`Mailbox` - :class:`ReceiverPort` backed by :class:`queue.Queue`.
* :class:`ProcessRegistry` - thread-safe name table (:class:`RegistryPort`).
* :data:`DEFAULT_REGISTRY` - process-wide registry used when none is injected.
"""

from __future__ import annotations

import queue
import threading
from typing import Any

from lib_log_relay.application.ports.receiver import ReceiverPort, RegistryPort


class Mailbox(ReceiverPort):
    """Unbounded message queue owned by a consumer.

    A mailbox is alive until :meth:`close` is called. Sending to a closed
    mailbox raises :class:`RuntimeError`.

    Examples
    --------
    >>> box = Mailbox('collector')
    >>> box.send('hello')
    >>> box.receive(timeout=0.1)
    'hello'
    >>> box.close()
    >>> box.is_alive()
    False
    """

    def __init__(self, label: str | None = None) -> None:
        self.label = label
        self._queue: queue.Queue[Any] = queue.Queue()
        self._closed = threading.Event()

    def __repr__(self) -> str:
        state = "closed" if self._closed.is_set() else "open"
        return f"Mailbox({self.label!r}, {state})"

    def is_alive(self) -> bool:
        return not self._closed.is_set()

    def send(self, message: Any) -> None:
        if self._closed.is_set():
            raise RuntimeError(f"mailbox {self.label!r} is closed")
        self._queue.put_nowait(message)

    def receive(self, timeout: float | None = None) -> Any:
        """Return the next message, waiting up to ``timeout`` seconds.

        Raises :class:`queue.Empty` when nothing arrives in time.
        """
        return self._queue.get(timeout=timeout)

    def drain(self) -> list[Any]:
        """Return every message currently queued without waiting."""
        messages: list[Any] = []
        while True:
            try:
                messages.append(self._queue.get_nowait())
            except queue.Empty:
                return messages

    def close(self) -> None:
        """Stop accepting messages; already queued messages stay readable."""
        self._closed.set()


class ProcessRegistry(RegistryPort):
    """Map symbolic names to receivers.

    Examples
    --------
    >>> registry = ProcessRegistry()
    >>> box = Mailbox()
    >>> registry.register('collector', box)
    >>> registry.whereis('collector') is box
    True
    >>> registry.unregister('collector')
    >>> registry.whereis('collector') is None
    True
    """

    def __init__(self) -> None:
        self._names: dict[str, ReceiverPort] = {}
        self._lock = threading.Lock()

    def register(self, name: str, receiver: ReceiverPort) -> None:
        """Bind ``name`` to ``receiver``; a name held by a live receiver is refused."""
        with self._lock:
            current = self._names.get(name)
            if current is not None and current is not receiver and _alive(current):
                raise ValueError(f"name {name!r} is already registered")
            self._names[name] = receiver

    def unregister(self, name: str) -> None:
        with self._lock:
            self._names.pop(name, None)

    def whereis(self, name: str) -> ReceiverPort | None:
        """Return the live receiver bound to ``name``; dead bindings are pruned."""
        with self._lock:
            receiver = self._names.get(name)
            if receiver is None:
                return None
            if not _alive(receiver):
                del self._names[name]
                return None
            return receiver

    def registered(self) -> list[str]:
        with self._lock:
            return sorted(self._names)


def _alive(receiver: ReceiverPort) -> bool:
    try:
        return bool(receiver.is_alive())
    except Exception:  # noqa: BLE001
        return False


DEFAULT_REGISTRY = ProcessRegistry()


__all__ = ["DEFAULT_REGISTRY", "Mailbox", "ProcessRegistry"]
