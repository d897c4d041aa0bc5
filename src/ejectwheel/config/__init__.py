"""Configuration for the elimination wheel."""

from ejectwheel.config.settings import (
    Settings,
    WheelSettings,
    TimingSettings,
    SimulatorSettings,
    get_settings,
)

__all__ = ["Settings", "WheelSettings", "TimingSettings", "SimulatorSettings", "get_settings"]
