"""Domain event describing a log message handed over by the host facility.

Purpose
-------
Provide an immutable representation of log events travelling through the
admission pipeline.

Contents
--------
* :class:`LogEvent` dataclass.
* Utility function ``_ensure_aware`` for timestamp validation.

System Role
-----------
Sits in the domain layer so the host bridge, the pipeline and the tests all
manipulate the same pure data object.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Any

from .levels import LogLevel


def _ensure_aware(ts: datetime) -> datetime:
    """Validate that ``ts`` is timezone-aware and normalise to UTC."""
    if ts.tzinfo is None or ts.tzinfo.utcoffset(ts) is None:
        raise ValueError("timestamp must be timezone-aware")
    return ts.astimezone(timezone.utc)


@dataclass(slots=True, frozen=True)
class LogEvent:
    """Immutable log event delivered by the host logging facility.

    Attributes
    ----------
    level:
        :class:`LogLevel` severity assigned by the host.
    message:
        Arbitrary payload; usually the rendered message string.
    timestamp:
        Time of the event in timezone-aware UTC.
    metadata:
        Shallow copy of the per-event key/value pairs.
    node:
        Name of the execution node that produced the event. ``None`` marks a
        local event; any other value is compared against the adapter's node.
    """

    level: LogLevel
    message: Any
    timestamp: datetime
    metadata: dict[str, Any] = field(default_factory=dict)
    node: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "timestamp", _ensure_aware(self.timestamp))
        object.__setattr__(self, "metadata", dict(self.metadata))

    def is_local_to(self, node: str) -> bool:
        """Return ``True`` when the event originates from ``node``.

        Examples
        --------
        >>> ts = datetime(2025, 9, 30, 12, 0, tzinfo=timezone.utc)
        >>> LogEvent(LogLevel.INFO, 'msg', ts).is_local_to('a')
        True
        >>> LogEvent(LogLevel.INFO, 'msg', ts, node='b').is_local_to('a')
        False
        """

        return self.node is None or self.node == node

    def replace(self, **changes: Any) -> "LogEvent":
        """Return a copied event with ``changes`` applied."""

        return replace(self, **changes)


__all__ = ["LogEvent"]
