import dataclasses

import pytest

from dragon_runner.core.events import EventType, jump_event, restart_event, resize_event, tick_event
from dragon_runner.core.state import Phase
from dragon_runner.game.entities import Obstacle
from dragon_runner.game.runner import RunnerGame
from dragon_runner.persistence.high_score import MemoryHighScoreStore


def wall_in_front(game: RunnerGame) -> Obstacle:
    """An obstacle that will cover the player after this frame's scroll."""
    return Obstacle(
        x=game.player.x + game.session.game_speed,
        y=0,
        width=game.player.width,
        height=game.ground.y,
    )


def play_until_collision(game: RunnerGame, frames: int) -> None:
    """Start a run, survive frames - 1 frames, crash on frame `frames`."""
    game.request_jump()
    for _ in range(frames - 1):
        game.step()
    assert game.phase == Phase.PLAYING
    game.pipeline.add(wall_in_front(game))
    game.step()
    assert game.phase == Phase.GAME_OVER


def test_initial_state(game):
    assert game.phase == Phase.IDLE
    assert game.session.score == 0
    assert len(game.pipeline) == 0
    assert game.player.bottom == game.ground.y
    assert game.ground.y == 340
    assert len(game.scenery.clouds) == 5


def test_idle_steps_do_nothing(game):
    before = game.snapshot()
    for _ in range(50):
        game.step()
    assert game.snapshot() == before


def test_first_jump_starts_the_run(game):
    assert game.request_jump() is True

    assert game.phase == Phase.PLAYING
    assert game.player.velocity_y == -12
    assert game.player.jumping is True


def test_no_double_jump_while_playing(game):
    game.request_jump()
    game.step()

    assert game.request_jump() is False
    assert game.phase == Phase.PLAYING


def test_jump_again_after_landing(game):
    game.request_jump()
    for _ in range(60):
        game.step()
    assert game.player.jumping is False

    assert game.request_jump() is True


def test_score_counts_playing_frames(wide_game):
    wide_game.request_jump()
    for expected in range(1, 301):
        wide_game.step()
        assert wide_game.session.score == expected


def test_difficulty_after_500_frames(wide_game):
    wide_game.request_jump()
    for _ in range(500):
        wide_game.step()

    assert wide_game.phase == Phase.PLAYING
    assert wide_game.session.score == 500
    assert wide_game.session.game_speed == 5.5
    assert wide_game.session.obstacle_interval == 95


def test_player_never_sinks_below_ground(wide_game):
    floor = wide_game.ground.y - wide_game.player.height
    wide_game.request_jump()
    for _ in range(400):
        wide_game.request_jump()
        wide_game.step()
        assert wide_game.player.y <= floor + 1e-9
        if wide_game.player.y == floor:
            assert wide_game.player.jumping is False


def test_overlap_ends_the_run(game):
    game.request_jump()
    # After the first jump frame: y = 290 - 11.4, bottom = 328.6, right = 130
    game.pipeline.add(Obstacle(
        x=game.player.right - 1 + game.session.game_speed,
        y=328.6 - 1,
        width=20,
        height=12.4,
    ))

    game.step()

    assert game.phase == Phase.GAME_OVER
    assert game.session.score == 1


def test_graze_after_scroll_is_detected_same_frame(game):
    game.request_jump()
    # Clear of the player before the scroll, overlapping after it
    game.pipeline.add(Obstacle(
        x=game.player.right + 2,
        y=0,
        width=20,
        height=game.ground.y,
    ))

    game.step()

    assert game.phase == Phase.GAME_OVER


def test_edge_touch_does_not_end_the_run(game):
    game.request_jump()
    # After scrolling, left edge sits exactly on the player's right edge
    game.pipeline.add(Obstacle(
        x=game.player.right + game.session.game_speed,
        y=0,
        width=20,
        height=game.ground.y,
    ))

    game.step()

    assert game.phase == Phase.PLAYING


def test_spawn_on_interval_boundary(game):
    game.request_jump()
    game.pipeline.spawn_timer = game.session.obstacle_interval

    game.step()

    assert len(game.pipeline) == 1
    assert game.pipeline.spawn_timer == 0


def test_new_high_score_is_saved_once():
    store = MemoryHighScoreStore(10)
    game = RunnerGame(store=store, settings=_settings())
    game.initialize(800, 400)
    assert game.session.high_score == 10

    play_until_collision(game, 42)

    assert game.session.score == 42
    assert game.session.high_score == 42
    assert game.session.is_new_high_score is True
    assert store.saves == [42]


def test_lower_score_does_not_save():
    store = MemoryHighScoreStore(100)
    game = RunnerGame(store=store, settings=_settings())
    game.initialize(800, 400)

    play_until_collision(game, 20)

    assert game.session.high_score == 100
    assert game.session.is_new_high_score is False
    assert store.saves == []


def test_equal_score_is_not_a_new_high_score():
    store = MemoryHighScoreStore(20)
    game = RunnerGame(store=store, settings=_settings())
    game.initialize(800, 400)

    play_until_collision(game, 20)

    assert game.session.is_new_high_score is False
    assert store.saves == []


def test_game_over_freezes_the_session(game):
    play_until_collision(game, 15)
    before = game.snapshot()

    for _ in range(30):
        game.step()

    assert game.snapshot() == before


def test_jump_ignored_after_game_over(game):
    play_until_collision(game, 5)

    assert game.request_jump() is False
    assert game.phase == Phase.GAME_OVER


def test_restart_only_from_game_over(game):
    assert game.restart() is False
    game.request_jump()
    assert game.restart() is False
    assert game.phase == Phase.PLAYING


def _comparable(game: RunnerGame) -> dict:
    snap = dataclasses.asdict(game.snapshot())
    snap.pop("clouds")
    snap.pop("high_score")
    return snap


@pytest.mark.parametrize("frames", [1, 37, 650])
def test_restart_is_idempotent(frames, store, settings):
    fresh = RunnerGame(settings=settings, store=MemoryHighScoreStore())
    fresh.initialize(100_000, 400)
    game = RunnerGame(settings=settings, store=store)
    game.initialize(100_000, 400)

    play_until_collision(game, frames)
    assert game.restart() is True

    assert game.phase == Phase.IDLE
    assert _comparable(game) == _comparable(fresh)
    assert game.pipeline.spawn_timer == 0
    assert game.session.is_new_high_score is False
    assert len(game.scenery.clouds) == 5


def test_high_score_is_max_over_runs(game, store):
    best = 0
    for frames in (30, 20, 50, 49):
        play_until_collision(game, frames)
        best = max(best, frames)
        assert game.session.high_score == best
        game.restart()

    assert store.saves == [30, 50]


def test_high_score_survives_restart(game):
    play_until_collision(game, 25)
    game.restart()

    assert game.session.high_score == 25
    assert game.session.score == 0


def test_step_before_initialize_is_a_noop(settings):
    game = RunnerGame(settings=settings)
    game.step()
    assert game.request_jump() is False
    assert game.phase == Phase.IDLE
    assert game.session.score == 0


def test_stop_halts_future_steps(game):
    game.request_jump()
    game.step()
    game.stop()
    score = game.session.score

    for _ in range(10):
        game.step()

    assert game.is_running is False
    assert game.session.score == score
    assert game.request_jump() is False


def test_initialize_after_stop_starts_fresh(game):
    game.request_jump()
    for _ in range(10):
        game.step()
    game.stop()

    game.initialize()

    assert game.is_running is True
    assert game.phase == Phase.IDLE
    assert game.session.score == 0


class BrokenStore:
    def load_high_score(self) -> int:
        raise OSError("disk gone")

    def save_high_score(self, value: int) -> None:
        raise OSError("disk gone")


class JunkStore:
    def load_high_score(self):
        return "not a number"

    def save_high_score(self, value: int) -> None:
        pass


def test_broken_store_fails_soft(settings):
    game = RunnerGame(settings=settings, store=BrokenStore())
    game.initialize(800, 400)
    assert game.session.high_score == 0

    play_until_collision(game, 12)

    assert game.session.high_score == 12
    assert game.session.is_new_high_score is True


def test_junk_stored_value_loads_as_zero(settings):
    game = RunnerGame(settings=settings, store=JunkStore())
    game.initialize(800, 400)
    assert game.session.high_score == 0


def test_degenerate_viewport(settings):
    game = RunnerGame(settings=settings)
    game.initialize(0, 0)

    game.request_jump()
    for _ in range(300):
        game.step()

    assert game.phase == Phase.PLAYING
    assert game.session.score == 300


def test_resize_moves_the_floor(game):
    game.resize(1000, 600)

    assert game.field_width == 1000
    assert game.ground.y == 540
    assert game.player.bottom == 540


def test_resize_lands_an_airborne_player_above_the_new_floor(game):
    play_until_collision(game, 5)
    assert game.player.jumping

    game.resize(800, 200)

    assert game.ground.y == 140
    assert game.player.bottom <= game.ground.y
    assert not game.player.jumping
    assert game.phase == Phase.GAME_OVER


def test_resize_keeps_obstacles_on_the_floor(game):
    game.request_jump()
    game.pipeline.spawn_timer = game.session.obstacle_interval
    game.step()

    game.resize(800, 500)

    assert game.pipeline.obstacles[0].bottom == pytest.approx(game.ground.y)


def test_snapshot_is_read_only(game):
    snap = game.snapshot()
    with pytest.raises(dataclasses.FrozenInstanceError):
        snap.score = 99


def test_clouds_drift_while_playing(wide_game):
    before = [c.x for c in wide_game.scenery.clouds]
    wide_game.request_jump()
    wide_game.step()
    after = [c.x for c in wide_game.scenery.clouds]
    assert all(a < b for a, b in zip(after, before))


def test_same_seed_same_run(settings):
    runs = []
    for _ in range(2):
        game = RunnerGame(settings=settings)
        game.initialize(800, 400)
        game.request_jump()
        for _ in range(250):
            game.request_jump()
            game.step()
        runs.append(game.snapshot())
    assert runs[0] == runs[1]


# Event bus wiring

def test_bus_input_drives_the_game(game, bus):
    game.attach(bus)

    bus.emit(jump_event())
    assert game.phase == Phase.PLAYING

    bus.emit(tick_event(1 / 60, 0))
    assert game.session.score == 1

    bus.emit(resize_event(900, 500))
    assert game.ground.y == 440


def test_queued_restart_applies_on_process(game, bus):
    game.attach(bus)
    play_until_collision(game, 3)

    bus.queue_event(restart_event())
    assert game.phase == Phase.GAME_OVER
    bus.process_queue()
    assert game.phase == Phase.IDLE


def test_game_publishes_events(game, bus):
    game.attach(bus)
    seen = []
    bus.subscribe_all(lambda e: seen.append(e))

    play_until_collision(game, 7)

    types = [e.type for e in seen]
    assert EventType.PHASE_CHANGED in types
    assert EventType.COLLISION in types
    assert EventType.NEW_HIGH_SCORE in types

    changes = [e.data for e in seen if e.type == EventType.PHASE_CHANGED]
    assert changes[0]["from"] == Phase.IDLE and changes[0]["to"] == Phase.PLAYING
    assert changes[-1]["to"] == Phase.GAME_OVER


def test_difficulty_event(wide_game, bus):
    wide_game.attach(bus)
    wide_game.request_jump()
    for _ in range(500):
        wide_game.step()

    events = bus.get_history(EventType.DIFFICULTY_UP)
    assert len(events) == 1
    assert events[0].data["game_speed"] == 5.5


def test_detach_stops_routing(game, bus):
    game.attach(bus)
    game.detach()

    bus.emit(jump_event())

    assert game.phase == Phase.IDLE


def _settings():
    from dragon_runner.config.settings import Settings
    return Settings(_env_file=None, seed=5)
