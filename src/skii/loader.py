"""Resource loader: builds the Catalog from JSON descriptor files.

Layout of a resource directory:

    <resources>/config/*.json    one descriptor per tile/object/player type
    <resources>/textures/*.png   images referenced by the descriptors

Descriptor format:

    {"type": "tile", "properties": {"forward_friction": 0.1,
                                    "sideway_friction": 4.0,
                                    "distribution": 1.0,
                                    "texture": "snow.png",
                                    "color": [240, 244, 250]}}

Objects carry ``distribution`` and ``hitbox: {"width", "height"}``; the
player only needs a texture or a color. Any problem is a ResourceError: the
simulation is never started on a partial catalog.
"""

import json
from pathlib import Path
from typing import Any, Dict, Optional, Union

import pygame
import pymunk

from .catalog import Catalog, TileType, ObjectType, PlayerType


DEFAULT_RESOURCES = Path(__file__).parent / "resources"
DEFAULT_COLOR = (128, 128, 128)


class ResourceError(ValueError):
    """A descriptor or texture could not be loaded."""


def load_catalog(
    resource_dir: Optional[Union[str, Path]] = None,
    load_textures: bool = False,
) -> Catalog:
    """Load every descriptor under ``<resource_dir>/config``.

    Args:
        resource_dir: Resource root. The packaged defaults if None.
        load_textures: Load texture images with pygame. When False,
            visual handles are RGB colors.

    Returns:
        Validated, rarity-sorted Catalog.

    Raises:
        ResourceError: On any missing or malformed descriptor.
    """
    root = Path(resource_dir) if resource_dir is not None else DEFAULT_RESOURCES
    config_dir = root / "config"
    if not config_dir.is_dir():
        raise ResourceError(f"Resource config directory not found: {config_dir}")

    player = None
    tile_types = []
    object_types = []

    for path in sorted(config_dir.glob("*.json")):
        try:
            with open(path, encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ResourceError(f"{path.name}: invalid JSON ({e})") from e
        except (OSError, UnicodeDecodeError) as e:
            raise ResourceError(f"{path.name}: could not be read ({e})") from e

        if not isinstance(data, dict) or "type" not in data:
            raise ResourceError(f"{path.name}: type not specified")
        properties = data.get("properties", {})
        if not isinstance(properties, dict):
            raise ResourceError(f"{path.name}: properties must be an object")

        kind = data["type"]
        name = data.get("name", path.stem)
        if kind == "tile":
            tile_types.append(_load_tile(properties, root, name, path.name, load_textures))
        elif kind == "object":
            object_types.append(_load_object(properties, root, name, path.name, load_textures))
        elif kind == "player":
            player = PlayerType(texture=_load_visual(properties, root, path.name, load_textures))
        else:
            raise ResourceError(f"{path.name}: unknown object type {kind!r}")

    if player is None:
        raise ResourceError(f"A player asset could not be found in {config_dir}")
    if not tile_types:
        raise ResourceError(f"No tile assets found in {config_dir}")
    if not object_types:
        raise ResourceError(f"No object assets found in {config_dir}")

    try:
        return Catalog(player, tile_types, object_types)
    except ValueError as e:
        raise ResourceError(str(e)) from e


def _number(properties: Dict[str, Any], key: str, filename: str) -> float:
    value = properties.get(key)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ResourceError(f"{filename}: missing or non-numeric {key!r}")
    return float(value)


def _load_tile(
    properties: Dict[str, Any], root: Path, name: str, filename: str, load_textures: bool
) -> TileType:
    return TileType(
        forward_friction=_number(properties, "forward_friction", filename),
        sideway_friction=_number(properties, "sideway_friction", filename),
        distribution=_number(properties, "distribution", filename),
        texture=_load_visual(properties, root, filename, load_textures),
        name=name,
    )


def _load_object(
    properties: Dict[str, Any], root: Path, name: str, filename: str, load_textures: bool
) -> ObjectType:
    hitbox = properties.get("hitbox")
    if not isinstance(hitbox, dict):
        raise ResourceError(f"{filename}: missing 'hitbox'")

    return ObjectType(
        distribution=_number(properties, "distribution", filename),
        hitbox=pymunk.Vec2d(
            _number(hitbox, "width", filename),
            _number(hitbox, "height", filename),
        ),
        texture=_load_visual(properties, root, filename, load_textures),
        name=name,
    )


def _load_visual(
    properties: Dict[str, Any], root: Path, filename: str, load_textures: bool
) -> Any:
    """Texture surface when requested and available, otherwise a color."""
    texture = properties.get("texture")
    if texture is not None and not isinstance(texture, str):
        raise ResourceError(f"{filename}: texture must be a file name")
    if load_textures and texture:
        return load_texture(root / "textures" / texture)

    color = properties.get("color")
    if color is None:
        return DEFAULT_COLOR
    if (
        not isinstance(color, (list, tuple))
        or len(color) != 3
        or not all(isinstance(c, int) and not isinstance(c, bool) and 0 <= c <= 255 for c in color)
    ):
        raise ResourceError(f"{filename}: color must be an [r, g, b] list of ints 0-255")
    return tuple(color)


def load_texture(path: Path) -> pygame.Surface:
    """Load an image, raising ResourceError if it is missing or unreadable."""
    if not path.is_file():
        raise ResourceError(f"Error loading texture file: {path}")
    try:
        return pygame.image.load(str(path))
    except pygame.error as e:
        raise ResourceError(f"Error loading texture file {path}: {e}") from e
