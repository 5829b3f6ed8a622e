from __future__ import annotations

from typing import Any

import pytest

from lib_log_relay.adapters.registry import Mailbox, ProcessRegistry
from lib_log_relay.application.use_cases.admit_event import (
    DROP_REASONS,
    admit_event,
    build_diagnostic_emitter,
    flush_destination,
)
from lib_log_relay.domain import (
    FLUSH,
    AdapterConfig,
    DirectHandle,
    ForwardedMessage,
    LogLevel,
    RegisteredName,
)
from tests.helpers import NoRegistry, RecordingReceiver, make_event
from tests.os_markers import OS_AGNOSTIC

pytestmark = [OS_AGNOSTIC]

NODE = "node-a"


def _config(receiver: Any = None, **options: Any) -> AdapterConfig:
    if receiver is not None:
        options.setdefault("destination", DirectHandle(receiver))
    return AdapterConfig.from_options("relay", options)


class _Diagnostics:
    def __init__(self) -> None:
        self.calls: list[tuple[str, dict[str, Any]]] = []

    def __call__(self, name: str, payload: dict[str, Any]) -> None:
        self.calls.append((name, payload))

    @property
    def reasons(self) -> list[str]:
        return [payload["reason"] for name, payload in self.calls if name == "event_dropped"]


@pytest.mark.parametrize("level", list(LogLevel))
def test_absent_destination_forwards_nothing(level: LogLevel) -> None:
    result = admit_event(make_event(level), _config(), registry=NoRegistry(), local_node=NODE)
    assert result == {"ok": False, "reason": "no_destination"}


@pytest.mark.parametrize("alive", [True, False])
def test_below_threshold_is_dropped_regardless_of_liveness(alive: bool) -> None:
    receiver = RecordingReceiver(alive=alive)
    cfg = _config(receiver, level="error")
    for level in (LogLevel.DEBUG, LogLevel.INFO, LogLevel.WARNING):
        result = admit_event(make_event(level), cfg, registry=NoRegistry(), local_node=NODE)
        assert result["reason"] == "below_threshold"
    assert receiver.messages == []


def test_admitted_event_is_forwarded_exactly() -> None:
    receiver = RecordingReceiver()
    event = make_event(LogLevel.ERROR, "boom", metadata={"request": "r-1"})

    result = admit_event(event, _config(receiver, level="warning"), registry=NoRegistry(), local_node=NODE)

    assert result == {"ok": True}
    assert receiver.messages == [ForwardedMessage(LogLevel.ERROR, "boom", event.timestamp, {"request": "r-1"})]
    assert receiver.messages[0] == (LogLevel.ERROR, "boom", event.timestamp, {"request": "r-1"})


def test_dead_destination_drops_silently() -> None:
    receiver = RecordingReceiver(alive=False)
    result = admit_event(make_event(LogLevel.ERROR), _config(receiver), registry=NoRegistry(), local_node=NODE)
    assert result == {"ok": False, "reason": "destination_down"}
    assert receiver.messages == []


def test_remote_origin_is_dropped_before_anything_else() -> None:
    receiver = RecordingReceiver()
    event = make_event(LogLevel.CRITICAL, node="node-b")
    result = admit_event(event, _config(receiver), registry=NoRegistry(), local_node=NODE)
    assert result["reason"] == "remote_origin"
    assert receiver.messages == []


def test_event_tagged_with_local_node_is_forwarded() -> None:
    receiver = RecordingReceiver()
    event = make_event(LogLevel.INFO, node=NODE)
    assert admit_event(event, _config(receiver), registry=NoRegistry(), local_node=NODE)["ok"]


def test_registered_name_is_resolved_at_admission_time() -> None:
    registry = ProcessRegistry()
    cfg = _config(destination=RegisteredName("collector"))

    assert admit_event(make_event(LogLevel.INFO), cfg, registry=registry, local_node=NODE)["reason"] == "destination_down"

    box = Mailbox()
    registry.register("collector", box)
    assert admit_event(make_event(LogLevel.INFO, "late"), cfg, registry=registry, local_node=NODE)["ok"]
    assert box.receive(timeout=1).message == "late"


def test_adapter_metadata_wins_on_key_collision() -> None:
    receiver = RecordingReceiver()
    cfg = _config(receiver, metadata={"app": "relay", "env": "prod"})
    event = make_event(LogLevel.INFO, metadata={"app": "event", "request": "r-1"})

    admit_event(event, cfg, registry=NoRegistry(), local_node=NODE)

    assert receiver.messages[0].metadata == {"app": "relay", "env": "prod", "request": "r-1"}


def test_formatter_sees_merged_metadata_and_replaces_message() -> None:
    receiver = RecordingReceiver()
    seen: list[dict[str, Any]] = []

    def formatter(level: LogLevel, message: Any, timestamp: Any, metadata: dict[str, Any]) -> str:
        seen.append(dict(metadata))
        return f"{level.severity}: {message}"

    cfg = _config(receiver, metadata={"app": "relay"}, formatter=formatter)
    admit_event(make_event(LogLevel.WARNING, "disk full", metadata={"host": "h1"}), cfg, registry=NoRegistry(), local_node=NODE)

    assert seen == [{"host": "h1", "app": "relay"}]
    assert receiver.messages[0].message == "warning: disk full"


def test_failing_formatter_forwards_nothing() -> None:
    receiver = RecordingReceiver()
    cfg = _config(receiver, formatter=lambda *args: 1 / 0)
    for _ in range(10):
        result = admit_event(make_event(LogLevel.ERROR), cfg, registry=NoRegistry(), local_node=NODE)
        assert result["reason"] == "format_error"
    assert receiver.messages == []


def test_send_failure_is_swallowed() -> None:
    box = Mailbox()
    cfg = _config(box)

    class _DiesOnSend(Mailbox):
        def send(self, message: Any) -> None:
            raise RuntimeError("gone")

    result = admit_event(make_event(LogLevel.ERROR), _config(_DiesOnSend()), registry=NoRegistry(), local_node=NODE)
    assert result == {"ok": False, "reason": "send_failed"}
    assert admit_event(make_event(LogLevel.ERROR), cfg, registry=NoRegistry(), local_node=NODE)["ok"]


def test_drop_reasons_are_reported_to_diagnostics() -> None:
    diagnostics = _Diagnostics()
    emit = build_diagnostic_emitter(diagnostics)
    receiver = RecordingReceiver()

    admit_event(make_event(LogLevel.INFO, node="elsewhere"), _config(receiver), registry=NoRegistry(), local_node=NODE, emit=emit)
    admit_event(make_event(LogLevel.INFO), _config(), registry=NoRegistry(), local_node=NODE, emit=emit)
    admit_event(make_event(LogLevel.DEBUG), _config(receiver, level="info"), registry=NoRegistry(), local_node=NODE, emit=emit)
    admit_event(make_event(LogLevel.INFO), _config(RecordingReceiver(alive=False)), registry=NoRegistry(), local_node=NODE, emit=emit)
    admit_event(make_event(LogLevel.INFO), _config(receiver, formatter="nope"), registry=NoRegistry(), local_node=NODE, emit=emit)

    assert diagnostics.reasons == ["remote_origin", "no_destination", "below_threshold", "destination_down", "format_error"]
    assert set(diagnostics.reasons) <= set(DROP_REASONS)


def test_failing_diagnostic_hook_does_not_escape() -> None:
    def broken(name: str, payload: dict[str, Any]) -> None:
        raise ValueError("hook broke")

    emit = build_diagnostic_emitter(broken)
    result = admit_event(make_event(LogLevel.INFO), _config(), registry=NoRegistry(), local_node=NODE, emit=emit)
    assert result["reason"] == "no_destination"


def test_flush_with_live_destination_sends_one_marker() -> None:
    receiver = RecordingReceiver()
    assert flush_destination(_config(receiver), registry=NoRegistry()) == {"ok": True}
    assert receiver.messages == [FLUSH]


@pytest.mark.parametrize("receiver", [None, RecordingReceiver(alive=False)], ids=["absent", "dead"])
def test_flush_without_live_destination_is_a_noop(receiver: RecordingReceiver | None) -> None:
    result = flush_destination(_config(receiver), registry=NoRegistry())
    assert result["ok"] is False
    if receiver is not None:
        assert receiver.messages == []


def test_flush_ignores_threshold() -> None:
    receiver = RecordingReceiver()
    flush_destination(_config(receiver, level="critical"), registry=NoRegistry())
    assert receiver.messages == [FLUSH]


def test_warning_threshold_scenario() -> None:
    receiver = RecordingReceiver()
    cfg = _config(receiver, level="warning")

    admit_event(make_event(LogLevel.DEBUG, "x", minute=1), cfg, registry=NoRegistry(), local_node=NODE)
    assert receiver.messages == []

    second = make_event(LogLevel.ERROR, "y", minute=2)
    admit_event(second, cfg, registry=NoRegistry(), local_node=NODE)
    assert receiver.messages == [(LogLevel.ERROR, "y", second.timestamp, {})]
