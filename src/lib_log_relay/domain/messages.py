"""Messages delivered to the destination receiver."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any, NamedTuple

from .levels import LogLevel


class ForwardedMessage(NamedTuple):
    """One admitted event as seen by the receiver."""

    level: LogLevel
    message: Any
    timestamp: datetime
    metadata: dict[str, Any]


class Signal(Enum):
    """Bare markers without payload."""

    FLUSH = "flush"


#: Sent on explicit flush requests; all previously admitted events precede it.
FLUSH = Signal.FLUSH


__all__ = ["FLUSH", "ForwardedMessage", "Signal"]
