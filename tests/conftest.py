import itertools

import pytest

from ejectwheel.config.settings import Settings, TimingSettings, WheelSettings
from ejectwheel.core.events import EventBus
from ejectwheel.core.sequencer import Sequencer
from ejectwheel.core.timers import FrameScheduler


class HostRecorder:
    """Stands in for the host: records callbacks in the order they arrive."""

    def __init__(self):
        self.calls = []

    def on_eliminate(self, name):
        self.calls.append(("eliminate", name))

    def on_close(self):
        self.calls.append(("close",))

    @property
    def eliminated(self):
        return [c[1] for c in self.calls if c[0] == "eliminate"]

    @property
    def closes(self):
        return sum(1 for c in self.calls if c[0] == "close")


def sequence_source(*values):
    """Random source cycling through fixed draws."""
    it = itertools.cycle(values)
    return lambda: next(it)


@pytest.fixture
def scheduler():
    return FrameScheduler()


@pytest.fixture
def host():
    return HostRecorder()


@pytest.fixture
def bus():
    return EventBus()


@pytest.fixture
def make_sequencer(scheduler, host, bus):
    def factory(random_source=None, **wheel):
        return Sequencer(
            scheduler=scheduler,
            on_eliminate=host.on_eliminate,
            on_close=host.on_close,
            wheel=WheelSettings(**wheel),
            timing=TimingSettings(),
            random_source=random_source or sequence_source(0.5),
            event_bus=bus,
        )

    return factory


@pytest.fixture
def settings():
    return Settings(_env_file=None)
