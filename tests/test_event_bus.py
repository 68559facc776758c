from __future__ import annotations

import logging

from vnscript.engine.event_bus import EventBus


def test_subscribe_emit_unsubscribe():
    bus = EventBus()
    got = []
    unsub = bus.subscribe("engine.bg", got.append)
    bus.emit("engine.bg", path="a.png")
    unsub()
    bus.emit("engine.bg", path="b.png")
    assert got == [{"path": "a.png"}]
    assert bus.emit_count("engine.bg") == 2


def test_failing_listener_is_logged(caplog):
    bus = EventBus()
    got = []

    def boom(_):
        raise RuntimeError("listener bug")

    bus.subscribe("engine.jump", boom)
    bus.subscribe("engine.jump", got.append)
    with caplog.at_level(logging.ERROR):
        bus.emit("engine.jump", path="x.vn")
    assert got == [{"path": "x.vn"}]
    assert "listener for engine.jump failed" in caplog.text
