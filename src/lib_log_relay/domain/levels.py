"""Severity levels and the comparator used for threshold filtering.

Purpose
-------
Offer a domain-specific representation of log severities with a total order
so the admission pipeline can decide whether an event clears the configured
threshold.

Contents
--------
* :class:`LogLevel` enum with conversion helpers.
* :class:`LevelOrder` result of :func:`compare_levels`.
* :func:`compare_levels` and :func:`should_log` pure helpers.

System Role
-----------
Used by the configuration layer to coerce user supplied thresholds and by the
admission pipeline for the level check.
"""

from __future__ import annotations

import logging
from enum import Enum


class LogLevel(Enum):
    """Enumerated logging levels, least to most severe."""

    DEBUG = 10
    INFO = 20
    WARNING = 30
    ERROR = 40
    CRITICAL = 50

    @property
    def severity(self) -> str:
        """Return the lowercase severity name for structured payloads."""

        return self.name.lower()

    def to_python_level(self) -> int:
        """Return the :mod:`logging` constant matching this level."""

        return getattr(logging, self.name)

    @classmethod
    def from_name(cls, name: str) -> "LogLevel":
        normalized = name.strip().upper()
        if normalized == "WARN":
            normalized = "WARNING"
        try:
            return cls[normalized]
        except KeyError as exc:
            raise ValueError(f"Unknown log level: {name!r}") from exc

    @classmethod
    def from_numeric(cls, level: int) -> "LogLevel":
        """Return the :class:`LogLevel` corresponding to ``level``."""
        try:
            return cls(level)
        except ValueError as exc:
            raise ValueError(f"Unsupported log level numeric: {level}") from exc

    @classmethod
    def from_python_level(cls, level: int) -> "LogLevel":
        """Translate a stdlib logging level integer into :class:`LogLevel`.

        Custom stdlib levels snap down to the nearest standard level so a
        record at ``25`` is treated as ``INFO``; anything below ``DEBUG`` is
        treated as ``DEBUG``.

        Examples
        --------
        >>> LogLevel.from_python_level(logging.ERROR)
        <LogLevel.ERROR: 40>
        >>> LogLevel.from_python_level(25)
        <LogLevel.INFO: 20>
        >>> LogLevel.from_python_level(5)
        <LogLevel.DEBUG: 10>
        """
        candidates = [member for member in cls if member.value <= level]
        if not candidates:
            return cls.DEBUG
        return max(candidates, key=lambda member: member.value)


class LevelOrder(Enum):
    """Outcome of comparing two severities."""

    LT = "lt"
    EQ = "eq"
    GT = "gt"


def compare_levels(left: LogLevel, right: LogLevel) -> LevelOrder:
    """Compare ``left`` against ``right`` by severity.

    Examples
    --------
    >>> compare_levels(LogLevel.DEBUG, LogLevel.ERROR)
    <LevelOrder.LT: 'lt'>
    >>> compare_levels(LogLevel.ERROR, LogLevel.ERROR)
    <LevelOrder.EQ: 'eq'>
    """

    if left.value < right.value:
        return LevelOrder.LT
    if left.value > right.value:
        return LevelOrder.GT
    return LevelOrder.EQ


def should_log(event_level: LogLevel, threshold: LogLevel) -> bool:
    """Return ``True`` unless ``event_level`` is strictly below ``threshold``."""

    return compare_levels(event_level, threshold) is not LevelOrder.LT


def coerce_level(level: str | int | LogLevel) -> LogLevel:
    """Normalise user input (name, stdlib number or enum) into :class:`LogLevel`."""

    if isinstance(level, LogLevel):
        return level
    if isinstance(level, bool):
        raise ValueError(f"Unsupported log level value: {level!r}")
    if isinstance(level, int):
        return LogLevel.from_numeric(level)
    if isinstance(level, str):
        return LogLevel.from_name(level)
    raise ValueError(f"Unsupported log level value: {level!r}")


__all__ = ["LevelOrder", "LogLevel", "coerce_level", "compare_levels", "should_log"]
