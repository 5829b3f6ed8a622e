"""Destination references pointing at the receiver of forwarded events.

A destination is either a direct handle on a receiver object or a symbolic
name that must be resolved through a registry at check time.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union


@dataclass(frozen=True)
class DirectHandle:
    """Reference to a concrete receiver object."""

    receiver: Any

    def __repr__(self) -> str:
        return f"DirectHandle({self.receiver!r})"


@dataclass(frozen=True)
class RegisteredName:
    """Reference to a receiver through its registered name."""

    name: str

    def __post_init__(self) -> None:
        if not self.name or not self.name.strip():
            raise ValueError("registered destination name must not be empty")


Destination = Union[DirectHandle, RegisteredName]


def coerce_destination(value: Any) -> Destination | None:
    """Turn a user supplied option value into a :data:`Destination`.

    Strings are registered names, ``None`` disables forwarding and any other
    object is taken as a direct receiver handle.

    Examples
    --------
    >>> coerce_destination('collector')
    RegisteredName(name='collector')
    >>> coerce_destination(None) is None
    True
    """

    if value is None:
        return None
    if isinstance(value, (DirectHandle, RegisteredName)):
        return value
    if isinstance(value, str):
        return RegisteredName(value)
    return DirectHandle(value)


__all__ = ["Destination", "DirectHandle", "RegisteredName", "coerce_destination"]
