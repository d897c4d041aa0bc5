"""
Application settings using Pydantic.

Settings are loaded from environment variables with .env file support.
Nested groups use a double underscore, e.g. EJECTWHEEL_WHEEL__ROTATIONS=10.
"""

from functools import lru_cache
from typing import Literal

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class WheelSettings(BaseModel):
    """Spin shape."""

    rotations: int = Field(default=8, ge=1)
    spin_duration: float = Field(default=6.0, gt=0)  # seconds

    # Jitter on each side of the segment midpoint, as a fraction of one segment
    jitter_fraction: float = Field(default=0.1, ge=0.0, lt=0.5)


class TimingSettings(BaseModel):
    """Sequence timing in milliseconds."""

    spin_settle_ms: int = Field(default=200, ge=0)
    reveal_duration_ms: int = Field(default=6000, gt=0)
    typing_interval_ms: int = Field(default=100, gt=0)
    auto_close_delay_ms: int = Field(default=500, ge=0)


class SimulatorSettings(BaseModel):
    """Desktop host window."""

    width: int = 960
    height: int = 640
    fps: int = 60
    title: str = "EMERGENCY MEETING"


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_prefix="EJECTWHEEL_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
    )

    # Environment
    env: Literal["simulator", "headless"] = "simulator"
    debug: bool = False

    # Default roster for the simulator host
    participants: list[str] = Field(default=[
        "Red", "Blue", "Green", "Pink", "Orange", "Yellow",
        "Black", "White", "Purple", "Cyan",
    ])

    # Nested settings
    wheel: WheelSettings = Field(default_factory=WheelSettings)
    timing: TimingSettings = Field(default_factory=TimingSettings)
    simulator: SimulatorSettings = Field(default_factory=SimulatorSettings)

    @property
    def is_simulator(self) -> bool:
        """Check if running with the pygame window."""
        return self.env == "simulator"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
