from ejectwheel.core.announcer import LiveRegion, eliminated_message
from ejectwheel.core.events import Event, EventBus, EventType, key_event, tick_event


def test_subscribe_and_unsubscribe():
    bus = EventBus()
    received = []
    unsubscribe = bus.subscribe(EventType.SPIN_STARTED, received.append)

    bus.emit(Event(EventType.SPIN_STARTED, data={"index": 1}))
    bus.emit(Event(EventType.WIDGET_CLOSED))
    unsubscribe()
    unsubscribe()
    bus.emit(Event(EventType.SPIN_STARTED))

    assert [e.data for e in received] == [{"index": 1}]


def test_event_helpers():
    key = key_event("Enter")
    tick = tick_event(0.016, 3)

    assert key.type == EventType.KEY_PRESS
    assert key.data == {"key": "Enter"}
    assert key.source == "keyboard"
    assert tick.data == {"delta": 0.016, "frame": 3}


def test_failing_handler_does_not_stop_others():
    bus = EventBus()
    received = []

    def broken(event):
        raise RuntimeError("boom")

    bus.subscribe(EventType.TICK, broken)
    bus.subscribe(EventType.TICK, received.append)
    bus.emit(tick_event(0.016, 0))

    assert len(received) == 1


def test_handler_may_unsubscribe_itself():
    bus = EventBus()
    received = []

    def once(event):
        received.append(event)
        unsubscribe()

    unsubscribe = bus.subscribe(EventType.TICK, once)
    bus.emit(tick_event(0.016, 0))
    bus.emit(tick_event(0.016, 1))

    assert len(received) == 1


def test_history_is_bounded():
    bus = EventBus(history_limit=3)
    for frame in range(5):
        bus.emit(tick_event(0.016, frame))

    frames = [e.data["frame"] for e in bus.get_history(limit=10)]
    assert frames == [2, 3, 4]
    assert len(bus.get_history(EventType.TICK, limit=2)) == 2
    assert bus.get_history(EventType.KEY_PRESS) == []

    bus.clear_history()
    assert bus.get_history() == []


def test_live_region_announces_to_listeners_and_bus():
    bus = EventBus()
    region = LiveRegion(bus)
    heard = []

    def broken(message):
        raise RuntimeError("screen reader went away")

    region.on_announce(broken)
    unsubscribe = region.on_announce(heard.append)

    region.announce(eliminated_message("Cyan"))
    unsubscribe()
    region.announce("again")

    assert heard == ["Cyan has been eliminated"]
    assert region.message == "again"
    assert region.role == "status"
    assert region.politeness == "polite"

    event = bus.get_history(EventType.ANNOUNCEMENT)[0]
    assert event.data == {"message": "Cyan has been eliminated", "politeness": "polite"}

    region.clear()
    assert region.message == ""


def test_live_region_without_bus():
    region = LiveRegion()
    region.announce("hello")
    assert region.message == "hello"
