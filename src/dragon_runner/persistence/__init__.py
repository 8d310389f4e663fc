"""High score persistence."""

from .high_score import (
    HighScoreStore,
    JsonHighScoreStore,
    MemoryHighScoreStore,
    coerce_high_score,
)

__all__ = [
    "HighScoreStore",
    "JsonHighScoreStore",
    "MemoryHighScoreStore",
    "coerce_high_score",
]
