"""
Phase state machine for a runner session.

Phases:
    IDLE: Player resting on the ground, waiting for the first jump
    PLAYING: Physics, spawning and scoring all active
    GAME_OVER: Run frozen with its final score until an explicit restart

Every legal move is listed in TRANSITIONS as
(trigger, current phase) -> (next phase, action). Anything else is rejected.
"""

from enum import Enum, auto
from dataclasses import dataclass
from typing import Callable
import logging

logger = logging.getLogger(__name__)


class Phase(Enum):
    """Lifecycle phases of a run."""
    IDLE = auto()
    PLAYING = auto()
    GAME_OVER = auto()


class Trigger(Enum):
    """Inputs that can move the machine."""
    JUMP = auto()
    COLLISION = auto()
    RESTART = auto()


class Action(Enum):
    """Side effect the game performs when a transition fires."""
    START_RUN = auto()   # Begin playing and perform the first jump
    JUMP = auto()        # Jump if grounded
    END_RUN = auto()     # Freeze and settle the high score
    RESET = auto()       # Back to the resting initial state
    IGNORE = auto()


@dataclass(frozen=True)
class StateTransition:
    """A fired transition."""
    trigger: Trigger
    from_phase: Phase
    to_phase: Phase
    action: Action

    @property
    def changes_phase(self) -> bool:
        return self.from_phase != self.to_phase


PhaseListener = Callable[[Phase, Phase], None]


class StateMachine:
    """
    Owns the current phase and applies the transition table.

    The machine only decides; the caller performs the returned action.
    Listeners are told about phase changes, not about self-loops.
    """

    TRANSITIONS: dict[tuple[Trigger, Phase], tuple[Phase, Action]] = {
        (Trigger.JUMP, Phase.IDLE): (Phase.PLAYING, Action.START_RUN),
        (Trigger.JUMP, Phase.PLAYING): (Phase.PLAYING, Action.JUMP),
        (Trigger.JUMP, Phase.GAME_OVER): (Phase.GAME_OVER, Action.IGNORE),
        (Trigger.COLLISION, Phase.PLAYING): (Phase.GAME_OVER, Action.END_RUN),
        (Trigger.RESTART, Phase.GAME_OVER): (Phase.IDLE, Action.RESET),
    }

    def __init__(self, initial_phase: Phase = Phase.IDLE) -> None:
        self._initial_phase = initial_phase
        self._phase = initial_phase
        self._listeners: list[PhaseListener] = []
        logger.debug(f"StateMachine initialized with phase: {initial_phase.name}")

    @property
    def phase(self) -> Phase:
        """Get current phase."""
        return self._phase

    def fire(self, trigger: Trigger) -> StateTransition | None:
        """
        Apply a trigger to the current phase.

        Args:
            trigger: Input to apply

        Returns:
            The fired transition, or None if the trigger is not valid here
        """
        entry = self.TRANSITIONS.get((trigger, self._phase))
        if entry is None:
            logger.debug(f"Rejected {trigger.name} in phase {self._phase.name}")
            return None

        to_phase, action = entry
        transition = StateTransition(trigger, self._phase, to_phase, action)
        self._phase = to_phase

        if transition.changes_phase:
            logger.info(
                f"Phase transition: {transition.from_phase.name} -> {to_phase.name}"
            )
            self._notify(transition.from_phase, to_phase)

        return transition

    def add_listener(self, callback: PhaseListener) -> None:
        """Add a phase change listener."""
        self._listeners.append(callback)

    def reset(self) -> None:
        """Force the machine back to its initial phase."""
        old_phase = self._phase
        self._phase = self._initial_phase
        if old_phase != self._phase:
            self._notify(old_phase, self._phase)
        logger.debug(f"StateMachine reset to {self._phase.name}")

    def _notify(self, old_phase: Phase, new_phase: Phase) -> None:
        for listener in self._listeners:
            try:
                listener(old_phase, new_phase)
            except Exception as e:
                logger.error(f"Error in phase listener: {e}")
