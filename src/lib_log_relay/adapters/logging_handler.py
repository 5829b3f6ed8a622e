"""Bridge from the stdlib :mod:`logging` facility into a relay adapter.

Purpose
-------
Let host applications keep using ``logging.getLogger(...)`` while records are
handed to a relay adapter as :class:`LogEvent` objects.

Contents
--------
* :class:`RelayHandler` - :class:`logging.Handler` converting records.
* :func:`record_to_event` - the conversion used by the handler.

System Role
-----------
Plays the host facility role: it assigns level and timestamp, delivers
events in record order and forwards ``flush()`` calls.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Callable

from lib_log_relay.domain import LogEvent, LogLevel

_RESERVED_ATTRS = frozenset(
    logging.LogRecord("", logging.INFO, "", 0, "", None, None).__dict__.keys()
) | {"message", "asctime", "node", "taskName"}

_INTERNAL_LOGGER_PREFIX = "lib_log_relay"


def record_to_event(record: logging.LogRecord, *, formatter: logging.Formatter | None = None) -> LogEvent:
    """Convert ``record`` into a :class:`LogEvent`.

    Metadata carries the logger coordinates plus any ``extra=`` fields. A
    ``node`` extra marks the event as produced on another node.

    Examples
    --------
    >>> record = logging.LogRecord('app', logging.WARNING, __file__, 10, 'disk at %d%%', (91,), None)
    >>> event = record_to_event(record)
    >>> event.level, event.message, event.metadata['logger']
    (<LogLevel.WARNING: 30>, 'disk at 91%', 'app')
    """

    metadata: dict[str, Any] = {
        "logger": record.name,
        "module": record.module,
        "function": record.funcName,
        "line": record.lineno,
        "process": record.process,
        "thread": record.threadName,
    }
    for key, value in record.__dict__.items():
        if key not in _RESERVED_ATTRS and not key.startswith("_"):
            metadata[key] = value
    if record.exc_info:
        metadata["exc_info"] = (formatter or logging.Formatter()).formatException(record.exc_info)

    node = getattr(record, "node", None)
    return LogEvent(
        level=LogLevel.from_python_level(record.levelno),
        message=record.getMessage(),
        timestamp=datetime.fromtimestamp(record.created, tz=timezone.utc),
        metadata=metadata,
        node=str(node) if node is not None else None,
    )


class RelayHandler(logging.Handler):
    """Forward stdlib log records to a relay adapter.

    Records emitted by this package's own loggers are ignored so relay
    diagnostics cannot feed back into the relay.
    """

    def __init__(
        self,
        emit: Callable[[LogEvent], bool],
        *,
        flush: Callable[[], None] | None = None,
        level: int | str = logging.NOTSET,
    ) -> None:
        super().__init__(level=level)
        self._emit = emit
        self._flush = flush

    def emit(self, record: logging.LogRecord) -> None:
        if record.name == _INTERNAL_LOGGER_PREFIX or record.name.startswith(_INTERNAL_LOGGER_PREFIX + "."):
            return
        try:
            event = record_to_event(record, formatter=self.formatter)
            self._emit(event)
        except Exception:  # noqa: BLE001
            self.handleError(record)

    def flush(self) -> None:
        if self._flush is None:
            return
        try:
            self._flush()
        except RuntimeError:
            # Adapter already shut down.
            pass


__all__ = ["RelayHandler", "record_to_event"]
