"""Thread-based queue adapter serialising work for one relay instance.

Purpose
-------
Give every adapter instance a single consumer thread so events, flush
requests and reconfiguration commands are handled strictly one at a time in
arrival order.

Contents
--------
* :class:`QueueAdapter` - background worker implementation of :class:`QueuePort`.

System Role
-----------
Owned by :class:`lib_log_relay.runtime.RelayAdapter`; producers (logging
handlers on arbitrary threads) only ever enqueue.
"""

from __future__ import annotations

import logging
import queue
import threading
import time
from collections.abc import Callable
from typing import Any

from lib_log_relay.application.ports.queue import QueuePort

LOGGER = logging.getLogger(__name__)

_STOP = object()


class QueueAdapter(QueuePort):
    """Process work items on a background thread.

    Examples
    --------
    >>> processed = []
    >>> adapter = QueueAdapter(worker=processed.append)
    >>> adapter.start()
    >>> adapter.put('first')
    True
    >>> adapter.stop(drain=True)
    >>> processed
    ['first']
    """

    def __init__(
        self,
        *,
        worker: Callable[[Any], None] | None = None,
        maxsize: int = 2048,
        drop_policy: str = "block",
        on_drop: Callable[[Any], None] | None = None,
        timeout: float | None = 1.0,
        stop_timeout: float | None = 5.0,
        diagnostic: Callable[[str, dict[str, Any]], None] | None = None,
        name: str = "lib_log_relay-queue",
    ) -> None:
        """Create the queue with an optional initial worker and capacity.

        Parameters
        ----------
        worker:
            Callable invoked for each item on the worker thread.
        maxsize:
            Maximum number of queued items before backpressure or drops apply.
        drop_policy:
            ``"block"`` (producers wait up to ``timeout``) or ``"drop"`` (new
            items are rejected immediately when the queue is full).
        on_drop:
            Optional callback invoked with every rejected item.
        timeout:
            Producer wait for the blocking policy; ``None`` blocks forever.
        stop_timeout:
            Default drain deadline applied by :meth:`stop`.
        diagnostic:
            Optional hook receiving ``(name, payload)`` for worker failures.
        """
        policy = drop_policy.lower()
        if policy not in {"block", "drop"}:
            raise ValueError("drop_policy must be 'block' or 'drop'")
        self._worker = worker
        self._queue: queue.Queue[Any] = queue.Queue(maxsize=maxsize)
        self._thread: threading.Thread | None = None
        self._thread_name = name
        self._stop_event = threading.Event()
        self._lifecycle_lock = threading.Lock()
        self._drain_event = threading.Event()
        self._drain_event.set()
        self._drop_policy = policy
        self._on_drop = on_drop
        self._timeout = timeout
        self._stop_timeout = stop_timeout
        self._diagnostic = diagnostic
        self._worker_failed = False

    def start(self) -> None:
        """Start the background worker thread if it is not already running."""
        if self._thread is not None and self._thread.is_alive():
            return
        with self._lifecycle_lock:
            self._stop_event.clear()
        self._worker_failed = False
        self._thread = threading.Thread(target=self._run, name=self._thread_name, daemon=True)
        self._thread.start()

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive() and not self._stop_event.is_set()

    @property
    def on_worker_thread(self) -> bool:
        """Return ``True`` when called from the worker thread itself."""
        return self._thread is not None and threading.current_thread() is self._thread

    def stop(self, *, drain: bool = True, timeout: float | None = None) -> None:
        """Stop the worker thread, optionally draining queued items.

        Parameters
        ----------
        drain:
            When ``True`` queued items are processed before the worker exits;
            otherwise they are handed to the drop callback.
        timeout:
            Per-call override for the drain deadline; ``None`` falls back to
            ``stop_timeout``.

        Raises
        ------
        RuntimeError
            When the worker does not finish within the deadline.
        """
        thread = self._thread
        if thread is None:
            return
        effective_timeout = timeout if timeout is not None else self._stop_timeout
        deadline = time.monotonic() + effective_timeout if effective_timeout is not None else None

        with self._lifecycle_lock:
            self._stop_event.set()
        if not drain:
            self._drain_pending_items()
        self._enqueue_stop_signal(deadline)

        thread.join(_remaining(deadline))
        if thread.is_alive():
            LOGGER.error("Queue worker %s failed to stop within %s seconds", self._thread_name, effective_timeout)
            self._emit_diagnostic("queue_shutdown_timeout", {"timeout": effective_timeout, "drain": drain})
            raise RuntimeError("Queue worker failed to stop within the allotted timeout")
        self._thread = None
        # Items that raced in behind the stop marker are never processed.
        self._drain_pending_items()

    def put(self, item: Any) -> bool:
        """Enqueue ``item``.

        Returns ``True`` when the item was accepted, ``False`` when the queue
        was full or is stopping and the item went to the drop callback."""
        with self._lifecycle_lock:
            if self._stop_event.is_set():
                accepted = False
            elif self._drop_policy == "drop":
                try:
                    self._queue.put(item, block=False)
                    accepted = True
                except queue.Full:
                    accepted = False
            else:
                try:
                    self._queue.put(item, timeout=self._timeout)
                    accepted = True
                except queue.Full:
                    accepted = False
            if accepted:
                self._drain_event.clear()
        if not accepted:
            self._handle_drop(item)
        return accepted

    def set_worker(self, worker: Callable[[Any], None]) -> None:
        """Swap the worker callable used to process items."""
        self._worker = worker

    def set_on_drop(self, on_drop: Callable[[Any], None] | None) -> None:
        """Swap the callback receiving rejected items."""
        self._on_drop = on_drop

    def wait_until_idle(self, timeout: float | None = None) -> bool:
        """Block until all queued items are processed or ``timeout`` elapses."""

        if self._queue.unfinished_tasks == 0:
            return True
        return self._drain_event.wait(timeout)

    @property
    def worker_failed(self) -> bool:
        """Return ``True`` once the worker callable raised (cleared by :meth:`start`)."""

        return self._worker_failed

    def _run(self) -> None:
        while True:
            item = self._queue.get()
            try:
                if item is _STOP:
                    break
                if self._worker is not None:
                    try:
                        self._worker(item)
                    except Exception as exc:  # noqa: BLE001
                        self._worker_failed = True
                        LOGGER.error("Queue worker raised an exception; continuing", exc_info=exc)
                        self._emit_diagnostic("queue_worker_error", {"item": type(item).__name__, "exception": repr(exc)})
            finally:
                self._queue.task_done()
                if self._queue.unfinished_tasks == 0:
                    self._drain_event.set()

    def _handle_drop(self, item: Any) -> None:
        if self._on_drop is None:
            return
        try:
            self._on_drop(item)
        except Exception as exc:  # noqa: BLE001
            LOGGER.error("Queue drop handler raised an exception; continuing", exc_info=exc)

    def _emit_diagnostic(self, name: str, payload: dict[str, Any]) -> None:
        if self._diagnostic is None:
            return
        try:
            self._diagnostic(name, payload)
        except Exception as diagnostic_exc:  # noqa: BLE001
            LOGGER.error("Queue diagnostic hook raised while reporting %s", name, exc_info=diagnostic_exc)

    def _drain_pending_items(self) -> None:
        while True:
            try:
                dropped = self._queue.get_nowait()
            except queue.Empty:
                break
            else:
                if dropped is not _STOP:
                    self._handle_drop(dropped)
                self._queue.task_done()
        self._drain_event.set()

    def _enqueue_stop_signal(self, deadline: float | None) -> None:
        """Place the stop marker, dropping queued items until it fits."""

        while True:
            try:
                self._queue.put(_STOP, timeout=_remaining(deadline))
                self._drain_event.clear()
                return
            except queue.Full:
                try:
                    dropped = self._queue.get_nowait()
                except queue.Empty:
                    continue
                else:
                    if dropped is not _STOP:
                        self._handle_drop(dropped)
                    self._queue.task_done()


def _remaining(deadline: float | None) -> float | None:
    if deadline is None:
        return None
    return max(0.0, deadline - time.monotonic())


__all__ = ["QueueAdapter"]
