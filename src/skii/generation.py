"""Procedural terrain and obstacle generation.

Every type gets a base "1 in N" acceptance chance from its rarity, N being
the inverse of its distribution weight. The chance is then biased by what
is already around the cell being generated:

- tiles: one matching Moore neighbor halves N (clumps start easily), enough
  matching neighbors multiply it back up (clumps stop growing forever)
- objects: the same, counted over placed objects within a radius

This gives chunky, locally clustered terrain instead of uniform noise while
globally rare types stay rare. Randomness comes from an injected
random.Random so a seed reproduces a course exactly.
"""

import math
import random
from dataclasses import dataclass
from typing import Optional, TYPE_CHECKING

import pymunk

from .catalog import TileId, ObjectId
from .config import GenerationConfig

if TYPE_CHECKING:
    from .world import World


def one_in(rng: random.Random, n: float) -> bool:
    """Weighted coin that comes up true once in ``int(n)`` draws.

    Chances of one or less (including the fractional chances of very
    common types) always succeed.
    """
    n = int(n)
    return n <= 1 or rng.randrange(n) == 0


@dataclass
class PlacedObject:
    """An obstacle instance in world space."""
    object_id: ObjectId
    position: pymunk.Vec2d
    rotation: float = 0.0


class TerrainGenerator:
    """Generates rows of tiles and the obstacles anchored on them."""

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        config: Optional[GenerationConfig] = None,
    ):
        """
        Args:
            rng: Random source. A fresh unseeded one if None.
            config: Clustering constants. Uses defaults if None.
        """
        self.rng = rng or random.Random()
        self.config = config or GenerationConfig()

    def generate_clear(self, world: "World", width: int, height: int) -> None:
        """Fill the grid with the most common tile and remove all objects.

        This is the obstacle-free runway a run starts on.
        """
        world.tiles.clear()
        world.objects.clear()

        for _ in range(height):
            world.tiles.append([TileId(0)] * width)

    def generate_row(self, world: "World") -> None:
        """Append one new row at the far end of the grid."""
        rng = self.rng
        tile_types = world.catalog.tile_types
        count = len(tile_types)

        row = []
        y = world.height
        for x in range(world.width):
            # Fall back on the most common tile if nothing gets accepted
            chosen = TileId(0)

            for _ in range(count):
                candidate = rng.randrange(count)
                chance = 1.0 / tile_types[candidate].distribution

                similar = sum(1 for t in world.get_close_tiles(x, y) if t == candidate)
                if similar >= 1:
                    chance = math.ceil(chance / 2.0)
                if similar >= self.config.tile_cluster_threshold:
                    chance *= self.config.tile_cluster_multiplier

                if one_in(rng, chance):
                    chosen = TileId(candidate)
                    break

            row.append(chosen)

        world.tiles.append(row)

    def generate_objects(self, world: "World", row_y: int) -> None:
        """Maybe place one obstacle per column on the row at ``row_y``."""
        rng = self.rng
        config = self.config
        object_types = world.catalog.object_types
        count = len(object_types)

        for x in range(world.width):
            # Row coordinates are the cell's corner, +0.5 centers in the cell
            position = pymunk.Vec2d(x + 0.5, row_y + 0.5)

            for _ in range(count):
                candidate = rng.randrange(count)
                chance = 1.0 / object_types[candidate].distribution

                close = len(world.objects_in_radius(config.object_radius, position))
                if close >= 1:
                    chance = math.ceil(chance / 2.0)
                if close >= config.object_cluster_threshold:
                    chance *= config.object_cluster_multiplier

                if one_in(rng, chance):
                    if config.reroll_placed_object:
                        placed = rng.randrange(count)
                    else:
                        placed = candidate
                    world.objects.append(PlacedObject(ObjectId(placed), position))
                    break
