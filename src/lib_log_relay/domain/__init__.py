"""Domain entities and value objects used by the relay."""

from __future__ import annotations

from .destination import Destination, DirectHandle, RegisteredName, coerce_destination
from .errors import FormatError
from .events import LogEvent
from .levels import LevelOrder, LogLevel, coerce_level, compare_levels, should_log
from .messages import FLUSH, ForwardedMessage, Signal
from .settings import RECOGNISED_OPTIONS, AdapterConfig, FormatterSpec

__all__ = [
    "AdapterConfig",
    "Destination",
    "DirectHandle",
    "FLUSH",
    "FormatError",
    "FormatterSpec",
    "ForwardedMessage",
    "LevelOrder",
    "LogEvent",
    "LogLevel",
    "RECOGNISED_OPTIONS",
    "RegisteredName",
    "Signal",
    "coerce_destination",
    "coerce_level",
    "compare_levels",
    "should_log",
]
