"""Dragon Runner - jump the cacti, survive as long as you can.

RunnerGame ties the pieces together and is the only thing a host talks to:

    game = RunnerGame(settings, store=JsonHighScoreStore(path))
    game.initialize(800, 400)
    while running:
        game.step()            # once per display frame
        draw(game.snapshot())

Within a Playing frame the order is fixed: player physics, obstacle
spawn/scroll/cull, then score and collision. A collision ends the run on the
same frame it is detected.
"""

import logging
import random
from dataclasses import dataclass
from typing import Callable

from dragon_runner.config.settings import Settings, get_settings
from dragon_runner.core.events import Event, EventBus, EventType
from dragon_runner.core.state import Action, Phase, StateMachine, Trigger
from dragon_runner.game.entities import Ground, Player, SessionState
from dragon_runner.game.obstacles import ObstaclePipeline
from dragon_runner.game.physics import apply_jump, integrate
from dragon_runner.game.scenery import Scenery
from dragon_runner.game.scoring import ScoreKeeper
from dragon_runner.persistence.high_score import (
    HighScoreStore,
    MemoryHighScoreStore,
    coerce_high_score,
)

logger = logging.getLogger(__name__)

Rect = tuple[float, float, float, float]


@dataclass(frozen=True)
class GameSnapshot:
    """Read-only view of one frame for renderers and HUDs."""
    phase: Phase
    score: int
    high_score: int
    is_new_high_score: bool
    game_speed: float
    level: int
    field_width: float
    field_height: float
    ground_y: float
    ground_height: float
    player: Rect
    player_jumping: bool
    obstacles: tuple[Rect, ...]
    clouds: tuple[Rect, ...]


class RunnerGame:
    """Owns the session state and the phase, and runs one frame per step()."""

    def __init__(
        self,
        settings: Settings | None = None,
        store: HighScoreStore | None = None,
        event_bus: EventBus | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.store = store if store is not None else MemoryHighScoreStore()
        self.event_bus = event_bus
        self._rng = rng or random.Random(self.settings.seed)

        display = self.settings.display
        self.field_width = float(display.field_width)
        self.field_height = float(display.field_height)

        self.machine = StateMachine()
        self.machine.add_listener(self._on_phase_changed)

        self.session = SessionState()
        self.ground = Ground(height=display.ground_height)
        self.player = self._new_player()
        self.pipeline = ObstaclePipeline(self.settings.obstacles, self._rng)
        self.score_keeper = ScoreKeeper(self.settings.difficulty)
        self.scenery = Scenery(self.settings.scenery, self._rng)

        self._initialized = False
        self._running = False
        self._unsubscribers: list[Callable[[], None]] = []

        self._actions: dict[Action, Callable[[], bool]] = {
            Action.START_RUN: self._start_run,
            Action.JUMP: self._jump,
            Action.END_RUN: self._end_run,
            Action.RESET: self._reset_run,
            Action.IGNORE: lambda: False,
        }

    # Host API

    @property
    def phase(self) -> Phase:
        return self.machine.phase

    @property
    def is_running(self) -> bool:
        return self._running

    def initialize(self, width: float | None = None, height: float | None = None) -> None:
        """Load the high score and put the game in a fresh Idle state.

        Also the way back after stop(); a stopped game never resumes in place.
        """
        if width is not None:
            self.field_width = max(0.0, float(width))
        if height is not None:
            self.field_height = max(0.0, float(height))
        self.ground.fit(self.field_height)

        self.session = SessionState(high_score=self._load_high_score())
        self.machine.reset()
        self._reset_run()

        self._initialized = True
        self._running = True
        logger.info(
            f"Game initialized: field={self.field_width:.0f}x{self.field_height:.0f} "
            f"high_score={self.session.high_score}"
        )

    def step(self) -> None:
        """Advance the simulation by one frame. Only Playing frames do anything."""
        if not self._running:
            if not self._initialized:
                logger.warning("step() called before initialize()")
            return
        if self.machine.phase != Phase.PLAYING:
            return

        integrate(self.player, self.ground, self.settings.physics.timestep)
        self.pipeline.advance(self.session, self.field_width, self.ground)
        result = self.score_keeper.check_and_score(self.session, self.player, self.pipeline)
        self.scenery.update(self.field_width, self.field_height)

        if result.leveled_up:
            self._emit(EventType.DIFFICULTY_UP, {
                "level": self.session.level,
                "game_speed": self.session.game_speed,
                "obstacle_interval": self.session.obstacle_interval,
            })

        if result.collided:
            logger.debug(f"Collision at score {self.session.score}")
            self._emit(EventType.COLLISION, {"score": self.session.score})
            self._fire(Trigger.COLLISION)

    def request_jump(self) -> bool:
        """Jump input. Starts the run from Idle; ignored mid-air and after game over.

        Returns:
            True if the player actually jumped
        """
        if not self._running:
            return False
        return self._fire(Trigger.JUMP)

    def restart(self) -> bool:
        """Go from GameOver back to Idle. Ignored in any other phase."""
        if not self._running:
            return False
        return self._fire(Trigger.RESTART)

    def resize(self, width: float, height: float) -> None:
        """Fit the field to a new viewport and move the floor with it."""
        old_ground_y = self.ground.y
        self.field_width = max(0.0, float(width))
        self.field_height = max(0.0, float(height))
        self.ground.fit(self.field_height)

        self.pipeline.shift(self.ground.y - old_ground_y)
        # A rising floor can catch an airborne player too
        if not self.player.jumping or self.player.bottom > self.ground.y:
            self.player.rest_on(self.ground)

        logger.info(f"Field resized: {self.field_width:.0f}x{self.field_height:.0f}")

    def stop(self) -> None:
        """Halt the game. Later steps are no-ops until initialize() runs again."""
        if self._running:
            logger.info("Game stopped")
        self._running = False

    def snapshot(self) -> GameSnapshot:
        s = self.session
        return GameSnapshot(
            phase=self.machine.phase,
            score=s.score,
            high_score=s.high_score,
            is_new_high_score=s.is_new_high_score,
            game_speed=s.game_speed,
            level=s.level,
            field_width=self.field_width,
            field_height=self.field_height,
            ground_y=self.ground.y,
            ground_height=self.ground.height,
            player=self.player.as_rect(),
            player_jumping=self.player.jumping,
            obstacles=tuple(o.as_rect() for o in self.pipeline),
            clouds=tuple(c.as_rect() for c in self.scenery.clouds),
        )

    # Event bus wiring

    def attach(self, event_bus: EventBus) -> None:
        """Subscribe to input events on a bus and publish game events to it."""
        self.detach()
        self.event_bus = event_bus
        for event_type in (EventType.JUMP, EventType.RESTART, EventType.RESIZE,
                           EventType.TICK, EventType.SHUTDOWN):
            self._unsubscribers.append(event_bus.subscribe(event_type, self.handle_event))

    def detach(self) -> None:
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers = []

    def handle_event(self, event: Event) -> bool:
        """Route a host event to the matching call. Returns True if handled."""
        if event.type == EventType.JUMP:
            self.request_jump()
            return True
        if event.type == EventType.RESTART:
            self.restart()
            return True
        if event.type == EventType.TICK:
            self.step()
            return True
        if event.type == EventType.RESIZE:
            self.resize(event.data.get("width", self.field_width),
                        event.data.get("height", self.field_height))
            return True
        if event.type == EventType.SHUTDOWN:
            self.stop()
            return True
        return False

    # Transition actions

    def _fire(self, trigger: Trigger) -> bool:
        transition = self.machine.fire(trigger)
        if transition is None:
            return False
        return self._actions[transition.action]()

    def _start_run(self) -> bool:
        logger.info("Run started")
        return apply_jump(self.player)

    def _jump(self) -> bool:
        return apply_jump(self.player)

    def _end_run(self) -> bool:
        s = self.session
        if s.score > s.high_score:
            s.high_score = s.score
            s.is_new_high_score = True
            self._save_high_score(s.score)
            self._emit(EventType.NEW_HIGH_SCORE, {"high_score": s.high_score})
        else:
            s.is_new_high_score = False

        logger.info(f"Game over: score={s.score} high_score={s.high_score}")
        return True

    def _reset_run(self) -> bool:
        self.score_keeper.reset(self.session)
        self.session.is_new_high_score = False
        self.player = self._new_player()
        self.player.rest_on(self.ground)
        self.pipeline.clear()
        self.scenery.reset(self.field_width, self.field_height)
        return True

    # Helpers

    def _new_player(self) -> Player:
        physics = self.settings.physics
        return Player(
            x=physics.player_x,
            width=physics.player_width,
            height=physics.player_height,
            jump_power=physics.jump_power,
            gravity=physics.gravity,
        )

    def _load_high_score(self) -> int:
        try:
            return coerce_high_score(self.store.load_high_score())
        except Exception as e:
            logger.error(f"High score unavailable, starting from 0: {e}")
            return 0

    def _save_high_score(self, value: int) -> None:
        try:
            self.store.save_high_score(value)
        except Exception as e:
            logger.error(f"Failed to persist high score {value}: {e}")

    def _on_phase_changed(self, old_phase: Phase, new_phase: Phase) -> None:
        self._emit(EventType.PHASE_CHANGED, {
            "from": old_phase,
            "to": new_phase,
            "score": self.session.score,
        })

    def _emit(self, event_type: EventType, data: dict) -> None:
        if self.event_bus is not None:
            self.event_bus.emit(Event(event_type, data=data, source="runner"))
