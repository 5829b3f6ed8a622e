"""Formatter invocation with failure isolation.

Purpose
-------
Apply the optional user supplied formatter to an admitted event while making
sure a broken formatter can only ever drop that event.

Contents
--------
* :class:`FormatResult` - outcome carrying either the new message or a
  :class:`FormatError`.
* :func:`resolve_formatter` - turn a formatter reference into a callable.
* :func:`format_message` - the invoker used by the admission pipeline.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from importlib import import_module
from typing import Any, Callable, Mapping

from lib_log_relay.domain import FormatError, FormatterSpec, LogLevel

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FormatResult:
    """Outcome of :func:`format_message`."""

    ok: bool
    message: Any = None
    error: FormatError | None = None


def resolve_formatter(formatter: FormatterSpec) -> Callable[..., Any]:
    """Return the callable described by ``formatter``.

    Accepts a callable, a ``(module, function)`` pair or a
    ``"module:function"`` string.

    Examples
    --------
    >>> resolve_formatter(('json', 'dumps')).__name__
    'dumps'
    >>> resolve_formatter('os.path:join').__name__
    'join'
    """

    if callable(formatter):
        return formatter
    if isinstance(formatter, str):
        module_name, sep, attr = formatter.partition(":")
        if not sep:
            raise TypeError(f"formatter string must look like 'module:function', got {formatter!r}")
    elif isinstance(formatter, (tuple, list)) and len(formatter) == 2:
        module_name, attr = formatter
    else:
        raise TypeError(f"unsupported formatter {formatter!r}")
    target = getattr(import_module(module_name), attr)
    if not callable(target):
        raise TypeError(f"{module_name}.{attr} is not callable")
    return target


def format_message(
    formatter: FormatterSpec | None,
    level: LogLevel,
    message: Any,
    timestamp: datetime,
    metadata: Mapping[str, Any],
) -> FormatResult:
    """Format ``message`` with ``formatter``; never raises.

    Examples
    --------
    >>> from datetime import timezone
    >>> ts = datetime(2025, 9, 30, 12, 0, tzinfo=timezone.utc)
    >>> format_message(None, LogLevel.INFO, 'msg', ts, {}).message
    'msg'
    >>> format_message(lambda lvl, msg, ts, meta: msg.upper(), LogLevel.INFO, 'msg', ts, {}).message
    'MSG'
    >>> format_message(lambda msg: msg, LogLevel.INFO, 'msg', ts, {}).ok
    False
    """

    if formatter is None:
        return FormatResult(ok=True, message=message)
    try:
        fn = resolve_formatter(formatter)
        formatted = fn(level, message, timestamp, metadata)
    except Exception as exc:  # noqa: BLE001
        error = FormatError(formatter, repr(exc))
        error.__cause__ = exc
        logger.debug("Formatter %r failed; dropping event", formatter, exc_info=exc)
        return FormatResult(ok=False, error=error)
    return FormatResult(ok=True, message=formatted)


__all__ = ["FormatResult", "format_message", "resolve_formatter"]
