"""Configuration system for the skiing simulation.

Gameplay parameters of the terrain itself (friction, spawn weights, hitboxes)
live in the resource catalog. This module holds everything else:

- PhysicsConfig: how the driver pushes the player (gravity, steering)
- GenerationConfig: the clustering constants of the terrain generator
- ViewConfig: camera and screen mapping used by the renderer
- GameConfig: grid size, tick rate and the groups above
"""

from dataclasses import dataclass, field
from typing import Dict, Any


@dataclass
class PhysicsConfig:
    """Forces applied by the tick driver before the friction integrator runs."""

    downhill_acceleration: float = 1.5  # Cells/s^2 added to vy every tick
    max_turn_rate: float = 15.0  # Angular acceleration at full steering (rad/s^2)
    turn_damping: float = 0.2  # Pull of angular velocity back towards zero

    def __post_init__(self):
        if self.downhill_acceleration < 0:
            raise ValueError("downhill_acceleration must be >= 0")
        if self.max_turn_rate < 0:
            raise ValueError("max_turn_rate must be >= 0")

    def to_dict(self) -> Dict[str, float]:
        return {
            "downhill_acceleration": self.downhill_acceleration,
            "max_turn_rate": self.max_turn_rate,
            "turn_damping": self.turn_damping,
        }

    @classmethod
    def from_dict(cls, d: Dict[str, float]) -> "PhysicsConfig":
        return cls(
            downhill_acceleration=d.get("downhill_acceleration", 1.5),
            max_turn_rate=d.get("max_turn_rate", 15.0),
            turn_damping=d.get("turn_damping", 0.2),
        )


@dataclass
class GenerationConfig:
    """Neighborhood bias used by the terrain generator.

    Chances are "1 in N" draws, so halving N makes a type more likely and
    multiplying N makes it less likely.
    """

    tile_cluster_threshold: int = 4  # Matching neighbors before the multiplier kicks in
    tile_cluster_multiplier: float = 5.0
    object_radius: float = 3.0  # World units searched around an object anchor
    object_cluster_threshold: int = 2
    object_cluster_multiplier: float = 6.0

    # Accept on one candidate, place an independently re-rolled type
    reroll_placed_object: bool = True

    def __post_init__(self):
        if self.object_radius < 0:
            raise ValueError("object_radius must be >= 0")
        if self.tile_cluster_threshold < 1 or self.object_cluster_threshold < 1:
            raise ValueError("cluster thresholds must be >= 1")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "tile_cluster_threshold": self.tile_cluster_threshold,
            "tile_cluster_multiplier": self.tile_cluster_multiplier,
            "object_radius": self.object_radius,
            "object_cluster_threshold": self.object_cluster_threshold,
            "object_cluster_multiplier": self.object_cluster_multiplier,
            "reroll_placed_object": self.reroll_placed_object,
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "GenerationConfig":
        return cls(
            tile_cluster_threshold=d.get("tile_cluster_threshold", 4),
            tile_cluster_multiplier=d.get("tile_cluster_multiplier", 5.0),
            object_radius=d.get("object_radius", 3.0),
            object_cluster_threshold=d.get("object_cluster_threshold", 2),
            object_cluster_multiplier=d.get("object_cluster_multiplier", 6.0),
            reroll_placed_object=d.get("reroll_placed_object", True),
        )


@dataclass
class ViewConfig:
    """World-to-screen mapping and scroll trigger."""

    screen_width: int = 720
    screen_height: int = 720
    scale: float = 5.0  # Texture pixel scale
    cell_px: int = 16  # Texture pixels per grid cell
    camera_offset: float = 2.0  # Cells between the player and the bottom of the screen
    scroll_trigger: float = 6.0  # Player y that triggers a scroll

    def __post_init__(self):
        if self.scroll_trigger <= self.camera_offset:
            raise ValueError("scroll_trigger must be greater than camera_offset")

    @property
    def scroll_rows(self) -> int:
        """Rows scrolled each time the player passes the trigger."""
        return int(self.scroll_trigger - self.camera_offset)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "screen_width": self.screen_width,
            "screen_height": self.screen_height,
            "scale": self.scale,
            "cell_px": self.cell_px,
            "camera_offset": self.camera_offset,
            "scroll_trigger": self.scroll_trigger,
        }


@dataclass
class GameConfig:
    """Complete game configuration combining all parameter groups."""
    physics: PhysicsConfig = field(default_factory=PhysicsConfig)
    generation: GenerationConfig = field(default_factory=GenerationConfig)
    view: ViewConfig = field(default_factory=ViewConfig)

    grid_width: int = 7
    grid_height: int = 16
    fps: int = 60
    max_ticks_per_frame: int = 10  # Cap on catch-up ticks after a slow frame

    def __post_init__(self):
        if self.grid_width < 1 or self.grid_height < 2:
            raise ValueError(
                f"Grid must be at least 1x2, got {self.grid_width}x{self.grid_height}"
            )
        if self.fps <= 0:
            raise ValueError("fps must be positive")

    @property
    def dt(self) -> float:
        """Fixed simulation time step in seconds."""
        return 1.0 / self.fps

    def to_dict(self) -> Dict[str, Any]:
        """Convert to nested dictionary."""
        return {
            "physics": self.physics.to_dict(),
            "generation": self.generation.to_dict(),
            "view": self.view.to_dict(),
            "grid_width": self.grid_width,
            "grid_height": self.grid_height,
            "fps": self.fps,
        }


# Predefined configurations for play/demo
CONFIGS = {
    # Original feel
    "default": GameConfig(),

    # Slow slope, lazy turning - room to think
    "gentle": GameConfig(physics=PhysicsConfig(
        downhill_acceleration=0.8,
        max_turn_rate=10.0,
    )),

    # Fast slope, twitchy turning
    "steep": GameConfig(physics=PhysicsConfig(
        downhill_acceleration=3.0,
        max_turn_rate=20.0,
        turn_damping=0.4,
    )),

    # Wider course, same physics
    "wide": GameConfig(
        grid_width=11,
        view=ViewConfig(scale=4.0),
    ),
}
