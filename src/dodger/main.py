"""
Main entry point for Field Dodger.

Loads settings, wires the engine to its collaborators and runs the
desktop simulator.
"""

import asyncio
import logging
import sys

from dodger.config.settings import Settings, get_settings
from dodger.core.errors import ConfigurationError


def setup_logging(debug: bool = False) -> None:
    """Configure logging."""
    level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S"
    )


async def run_simulator(settings: Settings) -> None:
    """Run the pygame simulator."""
    from dodger.game.engine import GameEngine
    from dodger.input.tilt import TiltSmoother
    from dodger.simulator.window import SimulatorWindow, WindowConfig
    from dodger.storage.high_score import HighScoreStore

    engine = GameEngine(field=settings.playfield, game=settings.game)
    engine.start(settings.game.difficulty, settings.game.control_mode)

    high_scores = HighScoreStore(settings.high_score_path)
    high_scores.attach(engine.event_bus)

    window = SimulatorWindow(
        engine,
        config=WindowConfig(fps=settings.fps, scale=settings.window_scale),
        tilt=TiltSmoother(settings.game.tilt_window),
        high_scores=high_scores,
    )

    await window.run()


def main() -> None:
    """Main entry point."""
    from dotenv import load_dotenv

    # Load environment variables
    load_dotenv()

    settings = get_settings()
    setup_logging(settings.debug)

    logger = logging.getLogger(__name__)
    logger.info("Field Dodger starting...")

    try:
        asyncio.run(run_simulator(settings))
    except ConfigurationError as e:
        logger.error(f"Invalid configuration: {e}")
        sys.exit(2)
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
    except Exception as e:
        logger.exception(f"Fatal error: {e}")
        sys.exit(1)

    logger.info("Field Dodger stopped")


if __name__ == "__main__":
    main()
