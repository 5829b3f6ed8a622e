"""Immutable per-adapter configuration snapshot.

Purpose
-------
Describe the state governing the admission pipeline of one named adapter:
threshold, destination, extra metadata and optional formatter.

Contents
--------
* :data:`RECOGNISED_OPTIONS` - option keys accepted from callers.
* :class:`AdapterConfig` - frozen snapshot built from merged options.

System Role
-----------
Built by the configuration use case from persisted settings merged with
caller overrides. Pipeline reads only ever see a complete snapshot because
reconfiguration swaps the whole object.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Callable, Mapping, Union

from .destination import Destination, coerce_destination
from .levels import LogLevel, coerce_level

FormatterSpec = Union[Callable[..., Any], tuple[str, str], str]
"""Callable, ``(module, function)`` pair, or ``"module:function"`` string."""

RECOGNISED_OPTIONS: frozenset[str] = frozenset({"level", "destination", "metadata", "formatter"})


@dataclass(frozen=True)
class AdapterConfig:
    """Configuration snapshot of one adapter instance.

    Attributes
    ----------
    name:
        Adapter identifier; fixed for the lifetime of the instance.
    level:
        Minimum severity forwarded to the destination.
    destination:
        Receiver reference or ``None`` when forwarding is disabled.
    metadata:
        Extra key/value pairs merged into every forwarded event.
    formatter:
        Optional transformation applied to the message before sending.
    """

    name: str
    level: LogLevel = LogLevel.DEBUG
    destination: Destination | None = None
    metadata: Mapping[str, Any] = field(default_factory=dict)
    formatter: FormatterSpec | None = None

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("adapter name must not be empty")
        object.__setattr__(self, "metadata", MappingProxyType(dict(self.metadata)))

    @classmethod
    def from_options(
        cls,
        name: str,
        options: Mapping[str, Any],
        *,
        default_level: LogLevel = LogLevel.DEBUG,
    ) -> "AdapterConfig":
        """Build a snapshot from a merged option mapping.

        ``name`` inside ``options`` is ignored; unknown keys raise
        :class:`ValueError`.

        Examples
        --------
        >>> cfg = AdapterConfig.from_options('relay', {'level': 'warning', 'destination': 'sink'})
        >>> cfg.level, cfg.destination
        (<LogLevel.WARNING: 30>, RegisteredName(name='sink'))
        >>> AdapterConfig.from_options('relay', {'colour': 'red'})
        Traceback (most recent call last):
        ...
        ValueError: Unknown adapter option(s): colour
        """

        unknown = sorted(key for key in options if key not in RECOGNISED_OPTIONS and key != "name")
        if unknown:
            raise ValueError(f"Unknown adapter option(s): {', '.join(unknown)}")

        level = options.get("level")
        metadata = options.get("metadata")
        if metadata is None:
            metadata = {}
        elif not isinstance(metadata, Mapping):
            raise ValueError(f"metadata must be a mapping, got {type(metadata).__name__}")

        return cls(
            name=name,
            level=default_level if level is None else coerce_level(level),
            destination=coerce_destination(options.get("destination")),
            metadata=metadata,
            formatter=options.get("formatter"),
        )

    def to_options(self) -> dict[str, Any]:
        """Return the snapshot as a plain option mapping (including ``name``)."""

        return {
            "name": self.name,
            "level": self.level,
            "destination": self.destination,
            "metadata": dict(self.metadata),
            "formatter": self.formatter,
        }


__all__ = ["AdapterConfig", "FormatterSpec", "RECOGNISED_OPTIONS"]
