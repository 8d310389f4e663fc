"""
High score storage.

The game only needs two calls: load once at startup, save when a run beats
the record. Stores never raise for bad data; an unreadable record is 0.
"""

import json
import logging
from pathlib import Path
from typing import Any, Protocol

logger = logging.getLogger(__name__)

HIGH_SCORE_KEY = "dragonRunnerHighScore"


class HighScoreStore(Protocol):
    """Load/save contract used by the game."""

    def load_high_score(self) -> int:
        ...

    def save_high_score(self, value: int) -> None:
        ...


def coerce_high_score(raw: Any) -> int:
    """Turn a stored value into a non-negative int, or 0 if it is junk."""
    if isinstance(raw, bool):
        return 0
    if isinstance(raw, int):
        return max(0, raw)
    if isinstance(raw, float) and raw.is_integer():
        return max(0, int(raw))
    if isinstance(raw, str):
        try:
            return max(0, int(raw.strip()))
        except ValueError:
            return 0
    return 0


class MemoryHighScoreStore:
    """In-process store. Keeps every saved value for inspection."""

    def __init__(self, initial: int = 0) -> None:
        self._value = coerce_high_score(initial)
        self.saves: list[int] = []

    def load_high_score(self) -> int:
        return self._value

    def save_high_score(self, value: int) -> None:
        self._value = value
        self.saves.append(value)


class JsonHighScoreStore:
    """Keeps the record in a small JSON file: {"dragonRunnerHighScore": 42}."""

    def __init__(self, path: Path, key: str = HIGH_SCORE_KEY) -> None:
        self.path = Path(path)
        self.key = key

    def load_high_score(self) -> int:
        """Read the stored record. Missing or malformed files load as 0."""
        if not self.path.exists():
            return 0

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.error(f"Failed to load high score from {self.path}: {e}")
            return 0

        if not isinstance(data, dict):
            logger.warning(f"Ignoring malformed high score file: {self.path}")
            return 0

        value = coerce_high_score(data.get(self.key))
        logger.info(f"Loaded high score: {value}")
        return value

    def save_high_score(self, value: int) -> None:
        """Write the record. Failures are logged and otherwise ignored."""
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump({self.key: int(value)}, f, indent=2)
            logger.info(f"Saved high score: {value}")
        except OSError as e:
            logger.error(f"Failed to save high score: {e}")
