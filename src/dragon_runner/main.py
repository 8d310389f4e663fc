"""
Main entry point for Dragon Runner.

Loads settings, wires the high score file and event bus into the game,
and launches the pygame simulator window.
"""

import argparse
import asyncio
import logging
from pathlib import Path

from dotenv import load_dotenv

from dragon_runner.config.settings import Settings, get_settings
from dragon_runner.core.events import EventBus
from dragon_runner.game.runner import RunnerGame
from dragon_runner.persistence.high_score import JsonHighScoreStore

logger = logging.getLogger(__name__)


def setup_logging(debug: bool = False, log_file: Path | None = None) -> None:
    """Configure console logging, plus a file that is truncated each run."""
    level = logging.DEBUG if debug else logging.INFO
    formatter = logging.Formatter(
        "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S"
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, mode="w", encoding="utf-8")
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)
        logging.info(f"Logging to file: {log_file}")

    # Reduce per-frame noise
    logging.getLogger("dragon_runner.game.obstacles").setLevel(logging.INFO)
    logging.getLogger("dragon_runner.game.physics").setLevel(logging.INFO)


def build_game(settings: Settings, event_bus: EventBus) -> RunnerGame:
    """Create a game backed by the JSON high score file."""
    store = JsonHighScoreStore(settings.high_score_path)
    return RunnerGame(settings=settings, store=store, event_bus=event_bus)


async def run_simulator(settings: Settings) -> None:
    """Run the game in a desktop window."""
    from dragon_runner.simulator.window import SimulatorWindow, WindowConfig

    event_bus = EventBus()
    game = build_game(settings, event_bus)

    display = settings.display
    width, height = display.window_size
    config = WindowConfig(
        width=width,
        height=height,
        title=settings.window_title,
        fullscreen=settings.simulator_fullscreen,
        fps=display.fps,
        scale=display.scale,
    )
    window = SimulatorWindow(game=game, config=config, event_bus=event_bus)
    await window.run()


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Dragon Runner")
    parser.add_argument("--debug", action="store_true", help="Verbose logging")
    parser.add_argument("--fps", type=int, help="Target frame rate")
    parser.add_argument("--seed", type=int, help="Seed for obstacles and clouds")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    load_dotenv()
    args = parse_args(argv)

    settings = get_settings()
    updates: dict = {}
    if args.debug:
        updates["debug"] = True
    if args.seed is not None:
        updates["seed"] = args.seed
    if args.fps is not None:
        updates["display"] = settings.display.model_copy(update={"fps": args.fps})
    if updates:
        settings = settings.model_copy(update=updates)

    setup_logging(settings.debug, settings.log_file)

    try:
        asyncio.run(run_simulator(settings))
    except KeyboardInterrupt:
        logger.info("Interrupted")


if __name__ == "__main__":
    main()
