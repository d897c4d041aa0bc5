"""
Main entry point for the elimination wheel.

Runs the pygame simulator host, or a headless demo that spins the wheel
until one participant remains.
"""

import asyncio
import logging
import sys

from ejectwheel.config.settings import Settings, get_settings


def setup_logging(debug: bool = False) -> None:
    """Configure logging."""
    level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S"
    )


async def run_simulator(settings: Settings) -> None:
    """Run the pygame host."""
    from ejectwheel.simulator.window import SimulatorWindow

    window = SimulatorWindow(settings=settings)
    await window.run()


async def run_headless(settings: Settings) -> list[str]:
    """Eliminate participants one spin at a time on the asyncio loop.

    Returns:
        Names in the order they were eliminated
    """
    from ejectwheel.widget import SpinWheel

    logger = logging.getLogger(__name__)
    roster = list(settings.participants)
    order: list[str] = []
    closed = asyncio.Event()

    def on_eliminate(name: str) -> None:
        roster.remove(name)
        order.append(name)
        logger.info(f"Ejected {name}, {len(roster)} remaining")

    def on_close() -> None:
        wheel.set_open(False)
        closed.set()

    wheel = SpinWheel(members=roster, on_eliminate=on_eliminate, on_close=on_close, settings=settings)

    try:
        while len(roster) > 1:
            closed.clear()
            wheel.set_open(True)
            wheel.start()
            await closed.wait()
    finally:
        wheel.destroy()

    if roster:
        logger.info(f"Last one standing: {roster[0]}")
    return order


def main() -> None:
    """Main entry point."""
    from dotenv import load_dotenv

    # Load environment variables
    load_dotenv()

    settings = get_settings()
    setup_logging(settings.debug)

    logger = logging.getLogger(__name__)
    logger.info("Elimination wheel starting...")

    try:
        if settings.is_simulator:
            logger.info("Running in simulator mode")
            asyncio.run(run_simulator(settings))
        else:
            logger.info("Running headless")
            asyncio.run(run_headless(settings))

    except KeyboardInterrupt:
        logger.info("Interrupted by user")
    except Exception as e:
        logger.exception(f"Fatal error: {e}")
        sys.exit(1)

    logger.info("Elimination wheel stopped")


if __name__ == "__main__":
    main()
