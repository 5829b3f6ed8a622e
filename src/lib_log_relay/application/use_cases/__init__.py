"""Use cases orchestrating configuration and event admission."""

from __future__ import annotations

from .admit_event import AdmissionResult, admit_event, build_diagnostic_emitter, flush_destination
from .configure import configure
from .format_message import FormatResult, format_message, resolve_formatter
from .liveness import is_alive, resolve

__all__ = [
    "AdmissionResult",
    "FormatResult",
    "admit_event",
    "build_diagnostic_emitter",
    "configure",
    "flush_destination",
    "format_message",
    "is_alive",
    "resolve",
    "resolve_formatter",
]
