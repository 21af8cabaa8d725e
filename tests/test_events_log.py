"""
Test Suite for the Engine Event Log

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

import dataclasses

import pytest

from engine.enums import EventKind
from engine.events.log import Event, EventLog


def test_event_log_basic():
    elog = EventLog(max_events=10)
    assert elog.snapshot() == []
    assert elog.last_timestamp is None
    e1 = Event.create(EventKind.change, "pkg", {"name": "openssl"}, timestamp=100.0)
    e2 = Event.create(EventKind.anomaly, "ssl", None, timestamp=200.0)
    elog.append(e1)
    elog.append(e2)
    assert elog.snapshot() == [e1, e2]
    assert elog.last_timestamp == 200.0
    assert len(elog) == 2
    elog.clear()
    assert elog.snapshot() == []


def test_event_log_evicts_oldest():
    elog = EventLog(max_events=3)
    events = [Event.create(EventKind.metric, f"s{i}", None, timestamp=float(i)) for i in range(5)]
    for e in events:
        elog.append(e)
    assert elog.snapshot() == events[2:]
    assert elog.max_events == 3


def test_event_log_rejects_zero_capacity():
    with pytest.raises(ValueError):
        EventLog(max_events=0)


def test_event_is_immutable_and_payload_is_copied():
    payload = {"package": "openssl"}
    event = Event.create(EventKind.change, "pkg", payload, timestamp=1.0)
    payload["package"] = "changed"
    assert event.data["package"] == "openssl"
    with pytest.raises(TypeError):
        event.data["package"] = "x"
    with pytest.raises(dataclasses.FrozenInstanceError):
        event.source = "other"


def test_nested_payload_is_detached_from_caller():
    payload = {"pkg": {"version": "1.0"}, "files": ["a.so"]}
    event = Event.create(EventKind.change, "package-manager", payload, timestamp=1.0)
    payload["pkg"]["version"] = "2.0"
    payload["files"].append("b.so")
    assert event.data["pkg"]["version"] == "1.0"
    assert event.data["files"] == ["a.so"]

    exported = event.to_dict()
    exported["data"]["pkg"]["version"] = "3.0"
    assert event.data["pkg"]["version"] == "1.0"


def test_event_ids_are_unique_and_to_dict():
    a = Event.create(EventKind.change, "pkg", None, timestamp=1.0)
    b = Event.create(EventKind.change, "pkg", None, timestamp=1.0)
    assert a.id != b.id
    assert a.to_dict() == {
        "id": a.id,
        "kind": "change",
        "timestamp": 1.0,
        "source": "pkg",
        "data": {},
    }
