from __future__ import annotations

from caravan import SignalBus


def test_publish_is_queued_until_flush() -> None:
    bus = SignalBus()
    seen = []
    bus.subscribe("produced", lambda name, data: seen.append((name, data)))
    bus.publish("produced", building="q")
    assert seen == []
    assert bus.pending() == 1
    bus.flush()
    assert seen == [("produced", {"building": "q"})]
    assert bus.pending() == 0


def test_delivery_order_and_fanout() -> None:
    bus = SignalBus()
    seen = []
    bus.subscribe("a", lambda name, data: seen.append(("first", name)))
    bus.subscribe("a", lambda name, data: seen.append(("second", name)))
    bus.subscribe("b", lambda name, data: seen.append(("b", name)))
    bus.publish("b")
    bus.publish("a")
    bus.flush()
    assert seen == [("b", "b"), ("first", "a"), ("second", "a")]


def test_unsubscribe() -> None:
    bus = SignalBus()
    seen = []

    def handler(name, data):
        seen.append(name)

    bus.subscribe("x", handler)
    bus.unsubscribe("x", handler)
    bus.unsubscribe("x", handler)
    bus.unsubscribe("never", handler)
    bus.publish("x")
    bus.flush()
    assert seen == []


def test_drain_then_deliver() -> None:
    bus = SignalBus()
    seen = []
    bus.subscribe("x", lambda name, data: seen.append(data["n"]))
    bus.publish("x", n=1)
    queued = bus.drain()
    bus.publish("x", n=2)
    bus.deliver(queued)
    assert seen == [1]
    assert bus.pending() == 1


def test_signals_published_during_delivery_wait() -> None:
    bus = SignalBus()
    seen = []
    bus.subscribe("x", lambda name, data: bus.publish("y"))
    bus.subscribe("y", lambda name, data: seen.append(name))
    bus.publish("x")
    bus.flush()
    assert seen == []
    bus.flush()
    assert seen == ["y"]


def test_clear() -> None:
    bus = SignalBus()
    bus.publish("x")
    bus.clear()
    assert bus.pending() == 0
