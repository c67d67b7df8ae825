"""
Main entry point for ASTRO RUN.

Loads settings, restores the high score and opens the game window.
"""

import argparse
import asyncio
import logging
import random
import sys
from typing import Optional, Sequence

from astrorun.config.settings import Settings, get_settings
from astrorun.core.events import Event, EventBus, EventType
from astrorun.game.session import GameSession
from astrorun.storage.json_store import JsonFileStore

logger = logging.getLogger(__name__)


def setup_logging(debug: bool = False) -> None:
    """Configure logging."""
    level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S"
    )


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="astrorun", description="ASTRO RUN endless runner")
    parser.add_argument("--debug", action="store_true", help="verbose logging and debug overlay")
    parser.add_argument("--seed", type=int, default=None, help="seed for obstacle generation")
    parser.add_argument(
        "--reset-high-score", action="store_true", help="clear the stored high score before playing"
    )
    return parser.parse_args(argv)


def _log_session_event(event: Event) -> None:
    logger.debug(f"{event.type.name} {event.data}")


def build_session(settings: Settings, seed: Optional[int] = None, event_bus: Optional[EventBus] = None) -> GameSession:
    """Create a session wired to the configured high score file."""
    store = JsonFileStore(settings.storage.high_score_path)
    return GameSession(
        settings.game,
        store,
        high_score_key=settings.storage.high_score_key,
        rng=random.Random(seed),
        event_bus=event_bus,
    )


async def run_game(settings: Settings, seed: Optional[int] = None) -> None:
    """Run the desktop version."""
    from astrorun.simulator.window import GameWindow, WindowConfig

    event_bus = EventBus()
    for event_type in (EventType.PHASE_CHANGED, EventType.NEW_HIGH_SCORE, EventType.RUN_ENDED):
        event_bus.subscribe(event_type, _log_session_event)

    session = build_session(settings, seed, event_bus)
    config = WindowConfig(
        title=settings.display.title,
        fps=settings.display.fps,
        max_steps_per_frame=settings.display.max_steps_per_frame,
        resizable=settings.display.resizable,
        show_debug=settings.debug,
    )
    window = GameWindow(session, config=config, event_bus=event_bus)
    await window.run()


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    settings = get_settings()
    debug = args.debug or settings.debug
    if args.debug:
        settings = settings.model_copy(update={"debug": True})
    setup_logging(debug)

    if args.reset_high_score:
        store = JsonFileStore(settings.storage.high_score_path)
        try:
            store.set(settings.storage.high_score_key, 0)
            logger.info("High score cleared")
        except OSError as e:
            logger.error(f"Could not clear high score: {e}")

    try:
        asyncio.run(run_game(settings, args.seed))
    except KeyboardInterrupt:
        logger.info("Interrupted")
    return 0


if __name__ == "__main__":
    sys.exit(main())
