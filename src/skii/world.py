"""World state: scrolling tile grid, placed obstacles and the player.

Coordinates are in grid cells. x runs across the course, y runs downhill.
The grid is a window onto an endless course: when the player has gone far
enough the world is scrolled, shifting everything back by whole rows,
evicting the nearest rows and generating new ones at the far end.
"""

from typing import List, Optional

import pymunk

from .catalog import Catalog, TileId, TileType
from .config import PhysicsConfig
from .generation import TerrainGenerator, PlacedObject
from .physics import Player, advance, apply_downhill


# Moore neighborhood offsets
_DIRECTIONS = (
    (1, 0),
    (-1, 0),
    (0, 1),
    (0, -1),
    (1, 1),
    (-1, -1),
    (1, -1),
    (-1, 1),
)


class World:
    """Owns all per-tick simulation data.

    Construct once per process with a loaded catalog, then call reset()
    before each run.
    """

    def __init__(
        self,
        catalog: Catalog,
        generator: Optional[TerrainGenerator] = None,
        physics: Optional[PhysicsConfig] = None,
    ):
        """
        Args:
            catalog: Validated tile/object/player types.
            generator: Terrain generator. Unseeded default if None.
            physics: Downhill pull. Uses defaults if None.
        """
        self.catalog = catalog
        self.generator = generator or TerrainGenerator()
        self.physics = physics or PhysicsConfig()

        self.player = Player(velocity=pymunk.Vec2d(0.0, 1.0))
        self.player_type = catalog.player_type
        self.real_y = 0.0

        # Each row holds one TileId per column
        self.tiles: List[List[TileId]] = []
        self.objects: List[PlacedObject] = []

    @property
    def tile_types(self):
        return self.catalog.tile_types

    @property
    def object_types(self):
        return self.catalog.object_types

    @property
    def width(self) -> int:
        # Every row has the same length
        return len(self.tiles[0]) if self.tiles else 0

    @property
    def height(self) -> int:
        return len(self.tiles)

    @property
    def distance_traveled(self) -> float:
        """Total downhill distance, used as the score."""
        return self.real_y + self.player.position.y

    def reset(self, width: int, height: int) -> None:
        """Start a fresh run on a width x height grid."""
        if width < 1 or height < 1:
            raise ValueError(f"Grid must be at least 1x1, got {width}x{height}")

        self.player.reset(width / 2.0, 0.0)
        self.real_y = 0.0

        self.generator.generate_clear(self, width, height)

    def objects_in_radius(self, radius: float, point: pymunk.Vec2d) -> List[int]:
        """Indices of the objects whose center lies within radius of point."""
        return [
            i for i, obj in enumerate(self.objects)
            if (obj.position - point).length <= radius
        ]

    def get_close_tiles(self, x: int, y: int) -> List[TileId]:
        """Tiles in the Moore neighborhood of (x, y), clipped to the grid."""
        tiles = []
        width = self.width
        height = self.height
        for dx, dy in _DIRECTIONS:
            tile_x = x + dx
            tile_y = y + dy
            if 0 <= tile_x < width and 0 <= tile_y < height:
                tiles.append(self.tiles[tile_y][tile_x])
        return tiles

    def scroll(self, rows: int) -> None:
        """Shift the frame of reference downhill by whole rows."""
        if rows < 0:
            raise ValueError(f"Cannot scroll by a negative amount: {rows}")

        # Everything moves back so the scroll itself is invisible
        self.player.position = pymunk.Vec2d(
            self.player.position.x, self.player.position.y - rows
        )
        self.real_y += rows

        kept = []
        for obj in self.objects:
            obj.position = pymunk.Vec2d(obj.position.x, obj.position.y - rows)
            if obj.position.y >= 0.0:
                kept.append(obj)
        self.objects = kept

        height = self.height
        for i in range(rows):
            self.tiles.pop(0)
            self.generator.generate_row(self)
            self.generator.generate_objects(self, height - i)

    def tile_under_player(self) -> TileType:
        """Tile type of the cell just ahead of the player."""
        # int() truncates towards zero; clamping keeps the lookup inside the
        # grid on the tick the player leaves it
        x = min(max(int(self.player.position.x), 0), self.width - 1)
        y = min(max(int(self.player.position.y) + 1, 0), self.height - 1)
        return self.catalog.tile_type(self.tiles[y][x])

    def update(self, dt: float) -> bool:
        """Advance the player one tick.

        Returns:
            True if the player crashed this tick.
        """
        if dt < 0:
            raise ValueError(f"dt must be >= 0, got {dt}")

        tile_under = self.tile_under_player()

        apply_downhill(self.player, dt, self.physics.downhill_acceleration)
        advance(self.player, tile_under, dt)

        return self.collided()

    def collided(self) -> bool:
        """Whether the player left the course or is inside an obstacle."""
        position = self.player.position
        if not 0.0 <= position.x < self.width:
            return True

        for obj in self.objects:
            object_type = self.catalog.object_type(obj.object_id)
            half = object_type.hitbox / 2.0
            bounds = pymunk.BB(
                obj.position.x - half.x,
                obj.position.y - half.y,
                obj.position.x + half.x,
                obj.position.y + half.y,
            )
            if bounds.contains_vect(position):
                return True

        return False

