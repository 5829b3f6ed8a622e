"""Domain errors raised inside the relay."""

from __future__ import annotations


class FormatError(Exception):
    """A user supplied formatter could not be resolved or raised while running.

    The underlying exception is chained as ``__cause__``.
    """

    def __init__(self, formatter: object, reason: str) -> None:
        super().__init__(f"formatter {formatter!r} failed: {reason}")
        self.formatter = formatter
        self.reason = reason


__all__ = ["FormatError"]
