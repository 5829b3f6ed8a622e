"""Liveness checks for destination references."""

from __future__ import annotations

import logging

from lib_log_relay.application.ports.receiver import ReceiverPort, RegistryPort
from lib_log_relay.domain import Destination, DirectHandle, RegisteredName

logger = logging.getLogger(__name__)


def resolve(destination: Destination | None, registry: RegistryPort) -> ReceiverPort | None:
    """Return the live receiver behind ``destination`` or ``None``.

    Registered names are looked up in ``registry`` on every call, so a name
    rebound to a new receiver is picked up without reconfiguration. Stale or
    broken receivers count as dead instead of raising.
    """

    if destination is None:
        return None
    try:
        if isinstance(destination, DirectHandle):
            receiver = destination.receiver
        elif isinstance(destination, RegisteredName):
            receiver = registry.whereis(destination.name)
            if receiver is None:
                return None
        else:
            return None
        return receiver if receiver.is_alive() else None
    except Exception as exc:  # noqa: BLE001
        logger.debug("Liveness probe for %r raised; treating as dead", destination, exc_info=exc)
        return None


def is_alive(destination: Destination | None, registry: RegistryPort) -> bool:
    """Return ``True`` when ``destination`` currently resolves to a live receiver."""

    return resolve(destination, registry) is not None


__all__ = ["is_alive", "resolve"]
