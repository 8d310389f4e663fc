"""Player vertical motion: jumps, gravity and ground contact."""

import logging

from dragon_runner.game.entities import Ground, Player

logger = logging.getLogger(__name__)


def apply_jump(player: Player) -> bool:
    """Launch the player if grounded. Returns False for a mid-air request."""
    if player.jumping:
        return False

    player.velocity_y = player.jump_power
    player.jumping = True
    logger.debug(f"Jump: vy={player.velocity_y}")
    return True


def integrate(player: Player, ground: Ground, dt: float = 1.0) -> bool:
    """Advance the player one Euler step and resolve ground contact.

    Args:
        player: Player to move
        ground: Floor to land on
        dt: Step length in frames

    Returns:
        True if the player is resting on the ground after the step
    """
    player.velocity_y += player.gravity * dt
    player.y += player.velocity_y * dt

    # Ground collision; this is the only place jumping is cleared
    floor = ground.y - player.height
    if player.y >= floor:
        if player.jumping:
            logger.debug("Landed")
        player.y = floor
        player.velocity_y = 0.0
        player.jumping = False
        return True

    return False
