"""Rich-powered receiver printing forwarded messages to a console.

Purpose
-------
Offer a ready-made destination for interactive use: every forwarded message
is rendered as one styled line, flush markers as a dim rule.

Contents
--------
* :data:`_STYLE_MAP` - default level-to-style mapping.
* :class:`RichConsoleReceiver` - :class:`ReceiverPort` backed by :class:`rich.console.Console`.
"""

from __future__ import annotations

import threading
from typing import Any, Mapping, MutableMapping

from rich.console import Console

from lib_log_relay.application.ports.receiver import ReceiverPort
from lib_log_relay.domain import ForwardedMessage, LogLevel, Signal


#: Default Rich styles keyed by :class:`LogLevel` severity.
_STYLE_MAP: Mapping[LogLevel, str] = {
    LogLevel.DEBUG: "dim",
    LogLevel.INFO: "cyan",
    LogLevel.WARNING: "yellow",
    LogLevel.ERROR: "red",
    LogLevel.CRITICAL: "bold red",
}


class RichConsoleReceiver(ReceiverPort):
    """Render forwarded messages using Rich with optional style overrides."""

    def __init__(
        self,
        *,
        console: Console | None = None,
        force_color: bool = False,
        no_color: bool = False,
        styles: MutableMapping[LogLevel | str, str] | None = None,
    ) -> None:
        """Configure the receiver with colour and style overrides."""
        self._console = console if console is not None else Console(force_terminal=force_color, no_color=no_color)
        self._no_color = no_color
        merged = dict(_STYLE_MAP)
        for key, value in (styles or {}).items():
            level = LogLevel.from_name(key) if isinstance(key, str) else key
            merged[level] = value
        self._style_map = merged
        self._closed = threading.Event()
        self.received = 0
        self.flushes = 0

    def is_alive(self) -> bool:
        return not self._closed.is_set()

    def close(self) -> None:
        self._closed.set()

    def send(self, message: Any) -> None:
        """Print ``message``.

        Examples
        --------
        >>> from datetime import datetime, timezone
        >>> from io import StringIO
        >>> console = Console(file=StringIO(), record=True)
        >>> receiver = RichConsoleReceiver(console=console)
        >>> ts = datetime(2025, 9, 30, 12, 0, tzinfo=timezone.utc)
        >>> receiver.send(ForwardedMessage(LogLevel.INFO, 'msg', ts, {'app': 'demo'}))
        >>> 'msg app=demo' in console.export_text()
        True
        """
        if self._closed.is_set():
            raise RuntimeError("console receiver is closed")
        if message is Signal.FLUSH:
            self.flushes += 1
            self._console.rule("flush", style="dim")
            return
        if isinstance(message, ForwardedMessage):
            style = "" if self._no_color else self._style_map.get(message.level, "")
            self._console.print(self._format_line(message), style=style, highlight=False, markup=False)
        else:
            self._console.print(repr(message), highlight=False, markup=False)
        self.received += 1

    @staticmethod
    def _format_line(message: ForwardedMessage) -> str:
        """Return a human-friendly console line for ``message``."""
        fields = " ".join(f"{key}={value}" for key, value in sorted(message.metadata.items(), key=lambda item: str(item[0])))
        suffix = f" {fields}" if fields else ""
        return f"{message.timestamp.isoformat()} {message.level.severity.upper():>8} {message.message}{suffix}"


__all__ = ["RichConsoleReceiver"]
