"""Friction-based player physics.

The player is a point with a heading. Each tick the tile underfoot damps
its motion through two independent exponential decays: forward friction on
the whole velocity, sideways friction on the velocity component along the
ski axis. Gravity and steering are pushed in by the tick driver before the
integrator runs.

Vectors are pymunk.Vec2d; nothing here touches a pymunk.Space.
"""

import math
from dataclasses import dataclass, field

import pymunk

from .catalog import TileType


@dataclass
class Player:
    """Kinematic state of the skier, in grid units."""
    position: pymunk.Vec2d = field(default_factory=lambda: pymunk.Vec2d(0.0, 0.0))
    rotation: float = 0.0  # Radians
    velocity: pymunk.Vec2d = field(default_factory=lambda: pymunk.Vec2d(0.0, 0.0))
    angular_velocity: float = 0.0

    def reset(self, x: float, y: float) -> None:
        """Put the player at rest at (x, y), facing straight downhill."""
        self.position = pymunk.Vec2d(x, y)
        self.rotation = 0.0
        self.velocity = pymunk.Vec2d(0.0, 0.0)
        self.angular_velocity = 0.0

    @property
    def heading(self) -> pymunk.Vec2d:
        """Unit axis the sideways friction acts along."""
        return pymunk.Vec2d(-math.cos(self.rotation), math.sin(self.rotation))

    @property
    def speed(self) -> float:
        return self.velocity.length


def advance(player: Player, tile_type: TileType, dt: float) -> None:
    """Integrate one time step over the given tile, mutating the player.

    Args:
        player: Player state to update in place.
        tile_type: Ground the player is standing on.
        dt: Time step in seconds, >= 0.
    """
    norm_vector = player.heading
    sideways_velocity = norm_vector * player.velocity.dot(norm_vector)

    player.velocity -= player.velocity * tile_type.forward_friction * dt
    player.velocity -= sideways_velocity * tile_type.sideway_friction * dt
    player.angular_velocity -= player.angular_velocity * tile_type.sideway_friction / 2.0 * dt

    player.position += player.velocity * dt
    player.rotation += player.angular_velocity * dt


def steering_direction(left_held: bool, right_held: bool) -> int:
    """Map held keys to -1, 0 or +1. Opposite keys cancel."""
    direction = 0
    if right_held:
        direction += 1
    if left_held:
        direction -= 1
    return direction


def apply_steering(
    player: Player,
    steering: float,
    dt: float,
    max_turn_rate: float = 15.0,
    turn_damping: float = 0.2,
) -> None:
    """Inject steering torque.

    While turning the player slowly loses turning speed; reversing the
    direction turns faster because the damping term helps.
    """
    player.angular_velocity += (
        steering * max_turn_rate - player.angular_velocity * turn_damping
    ) * dt


def apply_downhill(player: Player, dt: float, acceleration: float = 1.5) -> None:
    """Constant downhill pull along +y."""
    player.velocity = pymunk.Vec2d(player.velocity.x, player.velocity.y + acceleration * dt)
