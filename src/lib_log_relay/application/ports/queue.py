"""Port describing the work queue that serialises adapter input."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class QueuePort(Protocol):
    """Bridge between producer threads and the single adapter worker."""

    def start(self) -> None:
        """Start the queue worker."""

    def stop(self, *, drain: bool = True) -> None:
        """Stop the queue worker, optionally draining queued items."""

    def put(self, item: Any) -> bool:
        """Enqueue ``item`` for processing on the worker thread."""


__all__ = ["QueuePort"]
