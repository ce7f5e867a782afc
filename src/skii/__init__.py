"""skii: endless procedurally generated downhill skiing.

The player slides over a tile grid whose tiles set the friction underfoot,
steering between obstacles. The course is generated row by row ahead of the
player with a neighborhood-biased random generator, so terrain comes in
clumps instead of noise, and rows behind the player are discarded.
Playable with pygame or as a Gymnasium environment.
"""

from .config import PhysicsConfig, GenerationConfig, ViewConfig, GameConfig, CONFIGS
from .catalog import Catalog, TileType, ObjectType, PlayerType, TileId, ObjectId
from .physics import Player, advance, apply_steering, apply_downhill, steering_direction
from .generation import TerrainGenerator, PlacedObject, one_in
from .world import World
from .loader import load_catalog, ResourceError

__all__ = [
    "PhysicsConfig",
    "GenerationConfig",
    "ViewConfig",
    "GameConfig",
    "CONFIGS",
    "Catalog",
    "TileType",
    "ObjectType",
    "PlayerType",
    "TileId",
    "ObjectId",
    "Player",
    "advance",
    "apply_steering",
    "apply_downhill",
    "steering_direction",
    "TerrainGenerator",
    "PlacedObject",
    "one_in",
    "World",
    "load_catalog",
    "ResourceError",
]
