import logging

import pytest

from ejectwheel.config.settings import Settings
from ejectwheel.main import run_headless, setup_logging

FAST_TIMING = {
    "spin_settle_ms": 0,
    "reveal_duration_ms": 1,
    "typing_interval_ms": 1,
    "auto_close_delay_ms": 0,
}


def fast_settings(participants):
    return Settings(
        _env_file=None,
        env="headless",
        participants=participants,
        wheel={"spin_duration": 0.01, "rotations": 1},
        timing=FAST_TIMING,
    )


@pytest.mark.asyncio
async def test_headless_run_leaves_one_standing():
    crew = ["Red", "Blue", "Green", "Pink"]
    order = await run_headless(fast_settings(crew))

    assert len(order) == 3
    assert len(set(order)) == 3
    assert set(order) < set(crew)


@pytest.mark.asyncio
async def test_headless_run_with_single_participant_does_nothing():
    assert await run_headless(fast_settings(["Solo"])) == []


def test_setup_logging_level(monkeypatch):
    calls = []
    monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.append(kwargs))

    setup_logging(debug=True)
    setup_logging()

    assert calls[0]["level"] == logging.DEBUG
    assert calls[1]["level"] == logging.INFO
