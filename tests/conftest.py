import pytest

from dragon_runner.config.settings import (
    DisplaySettings,
    ScenerySettings,
    Settings,
)
from dragon_runner.core.events import EventBus
from dragon_runner.game.entities import Ground, Player
from dragon_runner.game.runner import RunnerGame
from dragon_runner.persistence.high_score import MemoryHighScoreStore


@pytest.fixture
def settings(tmp_path):
    return Settings(_env_file=None, seed=1234, data_path=tmp_path)


@pytest.fixture
def store():
    return MemoryHighScoreStore()


@pytest.fixture
def bus():
    return EventBus()


@pytest.fixture
def game(settings, store):
    game = RunnerGame(settings=settings, store=store)
    game.initialize(800, 400)
    return game


@pytest.fixture
def wide_game(settings, store):
    """A field so wide that spawned obstacles never reach the player."""
    game = RunnerGame(settings=settings, store=store)
    game.initialize(100_000, 400)
    return game


@pytest.fixture
def ground():
    ground = Ground(height=60.0)
    ground.fit(400)
    return ground


@pytest.fixture
def player(ground):
    player = Player()
    player.rest_on(ground)
    return player


@pytest.fixture
def cloudless_settings(tmp_path):
    return Settings(
        _env_file=None,
        seed=1,
        data_path=tmp_path,
        scenery=ScenerySettings(cloud_count=0),
        display=DisplaySettings(field_width=800, field_height=400),
    )
