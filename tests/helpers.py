"""Builders shared across the test-suite."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from lib_log_relay.domain import LogEvent, LogLevel


def make_event(level: LogLevel, message: Any = "msg", *, minute: int = 0, **kwargs: Any) -> LogEvent:
    return LogEvent(
        level=level,
        message=message,
        timestamp=datetime(2025, 9, 30, 12, minute, tzinfo=timezone.utc),
        **kwargs,
    )


class RecordingReceiver:
    """Receiver double remembering every delivered message."""

    def __init__(self, *, alive: bool = True) -> None:
        self.alive = alive
        self.messages: list[Any] = []

    def is_alive(self) -> bool:
        return self.alive

    def send(self, message: Any) -> None:
        self.messages.append(message)


class NoRegistry:
    """Registry double without any bindings."""

    def whereis(self, name: str) -> None:
        return None


def bracket(level: LogLevel, message: Any, timestamp: datetime, metadata: dict[str, Any]) -> str:
    """Formatter used where a ``module:function`` reference is needed."""

    return f"[{level.severity}] {message}"
