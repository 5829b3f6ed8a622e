from __future__ import annotations

import pytest

from lib_log_relay.domain.destination import DirectHandle, RegisteredName, coerce_destination
from lib_log_relay.domain.levels import LogLevel
from lib_log_relay.domain.settings import AdapterConfig
from tests.os_markers import OS_AGNOSTIC

pytestmark = [OS_AGNOSTIC]


def test_defaults_disable_forwarding() -> None:
    cfg = AdapterConfig.from_options("relay", {})
    assert cfg.name == "relay"
    assert cfg.level is LogLevel.DEBUG
    assert cfg.destination is None
    assert dict(cfg.metadata) == {}
    assert cfg.formatter is None


def test_default_level_can_be_supplied() -> None:
    cfg = AdapterConfig.from_options("relay", {}, default_level=LogLevel.ERROR)
    assert cfg.level is LogLevel.ERROR


def test_name_inside_options_is_ignored() -> None:
    cfg = AdapterConfig.from_options("relay", {"name": "intruder"})
    assert cfg.name == "relay"


def test_unknown_options_are_rejected() -> None:
    with pytest.raises(ValueError, match="Unknown adapter option"):
        AdapterConfig.from_options("relay", {"pid": object()})


def test_metadata_must_be_a_mapping() -> None:
    with pytest.raises(ValueError, match="metadata must be a mapping"):
        AdapterConfig.from_options("relay", {"metadata": [("a", 1)]})


def test_metadata_snapshot_is_read_only() -> None:
    source = {"app": "demo"}
    cfg = AdapterConfig.from_options("relay", {"metadata": source})
    source["app"] = "changed"
    assert cfg.metadata["app"] == "demo"
    with pytest.raises(TypeError):
        cfg.metadata["app"] = "x"  # type: ignore[index]


def test_empty_name_is_rejected() -> None:
    with pytest.raises(ValueError):
        AdapterConfig(name="")


def test_to_options_round_trips_through_from_options() -> None:
    cfg = AdapterConfig.from_options("relay", {"level": "info", "destination": "sink", "metadata": {"a": 1}})
    rebuilt = AdapterConfig.from_options("relay", cfg.to_options())
    assert rebuilt == cfg


def test_destination_coercion() -> None:
    receiver = object()
    assert coerce_destination("collector") == RegisteredName("collector")
    assert coerce_destination(receiver) == DirectHandle(receiver)
    assert coerce_destination(None) is None
    handle = DirectHandle(receiver)
    assert coerce_destination(handle) is handle


def test_registered_name_must_not_be_blank() -> None:
    with pytest.raises(ValueError):
        RegisteredName("  ")
