from __future__ import annotations

import io
from collections.abc import Iterator
from datetime import datetime, timezone

import pytest
from rich.console import Console

from lib_log_relay.adapters import DEFAULT_STORE, Mailbox, ProcessRegistry
from lib_log_relay.runtime import shutdown_all


@pytest.fixture(autouse=True)
def _isolate_runtime(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Start every test without live adapters, persisted settings or env overrides."""

    for var in ("LOG_RELAY_LEVEL", "LOG_RELAY_QUEUE_ENABLED", "LOG_RELAY_NODE", "LIB_LOG_RELAY_USE_DOTENV"):
        monkeypatch.delenv(var, raising=False)
    shutdown_all(drain=False)
    DEFAULT_STORE.clear()
    yield
    shutdown_all(drain=False)
    DEFAULT_STORE.clear()


@pytest.fixture
def registry() -> ProcessRegistry:
    return ProcessRegistry()


@pytest.fixture
def mailbox() -> Mailbox:
    return Mailbox("collector")


@pytest.fixture
def timestamp() -> datetime:
    return datetime(2025, 9, 30, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def record_console() -> Console:
    """Rich console capturing output in memory for assertions."""

    return Console(file=io.StringIO(), record=True, width=160, color_system=None)
