import logging

import pytest

pygame = pytest.importorskip("pygame")

from ejectwheel.core.events import EventType, key_event, tick_event  # noqa: E402
from ejectwheel.core.state import SequenceState  # noqa: E402
from ejectwheel.simulator.window import SimulatorWindow, widget_key  # noqa: E402


@pytest.fixture
def window(settings, bus):
    w = SimulatorWindow(settings=settings, event_bus=bus)
    yield w
    logging.getLogger().removeHandler(w.log_buffer)


def tick(window, seconds, step=0.1):
    for frame in range(round(seconds / step)):
        window.event_bus.emit(tick_event(step, frame))


def test_pygame_keys_map_to_widget_keys():
    assert widget_key(pygame.K_RETURN) == "Enter"
    assert widget_key(pygame.K_SPACE) == " "
    assert widget_key(pygame.K_ESCAPE) == "Escape"
    assert widget_key(pygame.K_a) is None


def test_full_round_removes_one_crewmate(window):
    window.event_bus.emit(key_event("o"))
    window.event_bus.emit(key_event("Enter"))
    assert window.wheel.state == SequenceState.SPINNING

    tick(window, 13.0)

    assert len(window.eliminated) == 1
    assert len(window.roster) == 9
    assert window.eliminated[0] not in window.roster
    assert window.wheel.members == tuple(window.roster)
    assert not window.wheel.is_open
    assert window.wheel.state == SequenceState.CLOSED


def test_animator_follows_spin_and_settles_back(window):
    window.event_bus.emit(key_event("o"))
    window.event_bus.emit(key_event("Enter"))
    target = window.wheel.view().rotation

    tick(window, 6.0)
    assert window.animator.angle == pytest.approx(target)

    tick(window, 7.0)
    assert window.animator.angle == pytest.approx(0.0)


def test_escape_closes_idle_wheel(window):
    window.event_bus.emit(key_event("o"))
    window.event_bus.emit(key_event("Escape"))

    assert not window.wheel.is_open
    assert window.eliminated == []


def test_restore_roster(window):
    window.roster.remove("Red")
    window.eliminated.append("Red")
    window.wheel.set_members(window.roster)

    window.event_bus.emit(key_event("r"))

    assert window.roster == list(window.settings.participants)
    assert window.eliminated == []
    assert len(window.wheel.members) == 10


def test_log_panel_captures_lifecycle(window, caplog):
    caplog.set_level(logging.INFO)
    window.event_bus.emit(key_event("l"))
    window.event_bus.emit(key_event("o"))
    window.event_bus.emit(key_event("Enter"))

    assert window._show_log
    assert any(line.startswith("I ") and "Spin started" in line for line in window.log_buffer.visible)


def test_log_buffer_keeps_recent_lines():
    from ejectwheel.simulator.window import LogBuffer

    buffer = LogBuffer(max_lines=3)
    for i in range(10):
        buffer.emit(logging.LogRecord("t", logging.WARNING, __file__, 1, f"line {i}", None, None))

    assert buffer.visible == ["W t: line 7", "W t: line 8", "W t: line 9"]


def test_quit_key_stops_loop_and_cleanup_destroys(window, bus):
    window._running = True
    window.event_bus.emit(key_event("q"))
    assert not window._running

    window.wheel.set_open(True)
    window._cleanup()
    assert window.wheel.sequencer.destroyed
    assert bus.get_history(EventType.SHUTDOWN)


@pytest.mark.asyncio
async def test_run_cleans_up_when_a_frame_raises(window, bus, monkeypatch):
    def broken_render():
        raise RuntimeError("render failed")

    monkeypatch.setattr(window, "_init_pygame", lambda: None)
    monkeypatch.setattr(window, "_handle_events", lambda: None)
    monkeypatch.setattr(window, "_render", broken_render)

    with pytest.raises(RuntimeError, match="render failed"):
        await window.run()

    assert window.wheel.sequencer.destroyed
    assert window.log_buffer not in logging.getLogger().handlers
    assert bus.get_history(EventType.SHUTDOWN)
