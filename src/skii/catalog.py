"""Terrain and obstacle catalog.

Tile and object types are immutable descriptions supplied once at startup by
the resource loader. The world refers to them by position in a rarity-sorted
sequence; those positions are exposed as TileId / ObjectId handles, and
lookups through the catalog are bounds-checked.
"""

import math
from dataclasses import dataclass
from typing import Any, NewType, Sequence, Tuple

import pymunk


TileId = NewType("TileId", int)
ObjectId = NewType("ObjectId", int)


@dataclass(frozen=True)
class TileType:
    """A kind of ground, e.g. snow or ice.

    Attributes:
        forward_friction: Decay rate of the whole velocity vector (1/s).
        sideway_friction: Decay rate of the velocity across the skis (1/s).
        distribution: Spawn weight, higher is more common.
        texture: Visual handle, never inspected by the simulation.
    """
    forward_friction: float
    sideway_friction: float
    distribution: float
    texture: Any = None
    name: str = ""


@dataclass(frozen=True)
class ObjectType:
    """A kind of obstacle, e.g. a rock or a tree.

    The hitbox is the full (width, height) of the box centered on the object.
    """
    distribution: float
    hitbox: pymunk.Vec2d
    texture: Any = None
    name: str = ""


@dataclass(frozen=True)
class PlayerType:
    """Appearance of the player. No gameplay parameters."""
    texture: Any = None


def rarity_key(distribution: float) -> int:
    """Sort key placing common types first (integer part of 1/distribution)."""
    return int(1.0 / distribution)


class Catalog:
    """Validated, rarity-sorted tile and object types."""

    def __init__(
        self,
        player_type: PlayerType,
        tile_types: Sequence[TileType],
        object_types: Sequence[ObjectType],
    ):
        if not tile_types:
            raise ValueError("Catalog needs at least one tile type")
        if not object_types:
            raise ValueError("Catalog needs at least one object type")
        for entry in list(tile_types) + list(object_types):
            # 1/distribution is the "1 in N" chance and must stay a finite number
            if not entry.distribution > 0 or not math.isfinite(1.0 / entry.distribution):
                raise ValueError(
                    f"distribution must be positive with a finite inverse, got {entry.distribution} for {entry.name or entry}"
                )
        for object_type in object_types:
            if object_type.hitbox.x < 0 or object_type.hitbox.y < 0:
                raise ValueError(f"hitbox must not be negative: {object_type.hitbox}")

        self.player_type = player_type
        # sorted() is stable: equally rare types keep loader order
        self.tile_types: Tuple[TileType, ...] = tuple(
            sorted(tile_types, key=lambda t: rarity_key(t.distribution))
        )
        self.object_types: Tuple[ObjectType, ...] = tuple(
            sorted(object_types, key=lambda o: rarity_key(o.distribution))
        )

    @property
    def tile_count(self) -> int:
        return len(self.tile_types)

    @property
    def object_count(self) -> int:
        return len(self.object_types)

    def tile_id(self, index: int) -> TileId:
        """Validate a raw index into a TileId."""
        if not 0 <= index < len(self.tile_types):
            raise IndexError(f"tile id {index} out of range 0..{len(self.tile_types) - 1}")
        return TileId(index)

    def object_id(self, index: int) -> ObjectId:
        """Validate a raw index into an ObjectId."""
        if not 0 <= index < len(self.object_types):
            raise IndexError(f"object id {index} out of range 0..{len(self.object_types) - 1}")
        return ObjectId(index)

    def tile_type(self, tile_id: TileId) -> TileType:
        return self.tile_types[self.tile_id(tile_id)]

    def object_type(self, object_id: ObjectId) -> ObjectType:
        return self.object_types[self.object_id(object_id)]

    def __repr__(self) -> str:
        return f"Catalog(tiles={len(self.tile_types)}, objects={len(self.object_types)})"
