"""Process-wide table of live relay adapters keyed by name."""

from __future__ import annotations

from threading import RLock

from ._adapter import RelayAdapter

_ADAPTERS: dict[str, RelayAdapter] = {}
_STATE_LOCK = RLock()


def register_adapter(adapter: RelayAdapter) -> None:
    """Install ``adapter`` under its name; a second live adapter is refused."""

    with _STATE_LOCK:
        if adapter.name in _ADAPTERS:
            raise RuntimeError(
                f"lib_log_relay.init({adapter.name!r}) cannot be called twice without shutdown(); call lib_log_relay.shutdown() first",
            )
        _ADAPTERS[adapter.name] = adapter


def lookup_adapter(name: str) -> RelayAdapter:
    """Return the adapter registered as ``name`` for shutdown."""

    with _STATE_LOCK:
        try:
            return _ADAPTERS[name]
        except KeyError:
            raise RuntimeError(f"lib_log_relay adapter {name!r} is not initialised") from None


def remove_adapter(adapter: RelayAdapter) -> None:
    """Detach ``adapter`` unless its name was already taken over."""

    with _STATE_LOCK:
        if _ADAPTERS.get(adapter.name) is adapter:
            del _ADAPTERS[adapter.name]


def current_adapter(name: str) -> RelayAdapter:
    """Return the live adapter or raise when uninitialised."""

    with _STATE_LOCK:
        adapter = _ADAPTERS.get(name)
    if adapter is None:
        raise RuntimeError(f"lib_log_relay.init({name!r}) must be called before using this adapter")
    return adapter


def is_initialised(name: str) -> bool:
    """Return ``True`` when an adapter named ``name`` is live."""

    with _STATE_LOCK:
        return name in _ADAPTERS


def adapter_names() -> list[str]:
    with _STATE_LOCK:
        return sorted(_ADAPTERS)


__all__ = [
    "adapter_names",
    "current_adapter",
    "is_initialised",
    "lookup_adapter",
    "register_adapter",
    "remove_adapter",
]
