"""Pygame rendering of a World.

Reads the world, never mutates it. Visual handles from the catalog are
either pygame Surfaces (textures) or RGB tuples, in which case flat shapes
are drawn instead.
"""

import math
from typing import Optional, Tuple

import pygame
import pymunk

from .config import ViewConfig
from .world import World


COLOR_BG = (255, 255, 255)
COLOR_TEXT = (0, 0, 0)

# Player box in cells when no texture is loaded (skis seen from above)
PLAYER_SIZE = (0.3, 0.8)


def world_to_screen(world: World, point: pymunk.Vec2d, view: ViewConfig) -> Tuple[float, float]:
    """Map a world point to screen pixels.

    The course is centered horizontally; vertically the camera follows the
    player, keeping it camera_offset cells above the bottom edge.
    """
    cell = view.scale * view.cell_px
    screen_x = (point.x - world.width / 2.0) * cell + view.screen_width / 2.0
    screen_y = (-point.y + world.player.position.y - view.camera_offset) * cell + view.screen_height
    return screen_x, screen_y


class WorldRenderer:
    """Draws tiles, obstacles, the player and the HUD onto a surface."""

    def __init__(self, view: Optional[ViewConfig] = None):
        self.view = view or ViewConfig()
        self._font: Optional[pygame.font.Font] = None
        self._scaled_cache = {}

    @property
    def cell_size(self) -> float:
        return self.view.scale * self.view.cell_px

    def draw(self, surface: pygame.Surface, world: World) -> None:
        """Draw the world, row-major tiles first, then objects, then player."""
        surface.fill(COLOR_BG)
        cell = int(math.ceil(self.cell_size))

        for y in range(world.height):
            for x in range(world.width):
                tile_type = world.catalog.tile_type(world.tiles[y][x])
                sx, sy = world_to_screen(world, pymunk.Vec2d(x, y), self.view)
                if isinstance(tile_type.texture, pygame.Surface):
                    surface.blit(self._scaled(tile_type.texture), (sx, sy))
                else:
                    pygame.draw.rect(surface, tile_type.texture, (int(sx), int(sy), cell, cell))

        for obj in world.objects:
            object_type = world.catalog.object_type(obj.object_id)
            self._draw_sprite(
                surface, world, object_type.texture, obj.position, obj.rotation,
                (object_type.hitbox.x, object_type.hitbox.y),
            )

        self._draw_sprite(
            surface, world, world.player_type.texture,
            world.player.position, world.player.rotation, PLAYER_SIZE,
        )

    def _scaled(self, texture: pygame.Surface) -> pygame.Surface:
        key = id(texture)
        if key not in self._scaled_cache:
            w, h = texture.get_size()
            self._scaled_cache[key] = pygame.transform.scale(
                texture, (int(w * self.view.scale), int(h * self.view.scale))
            )
        return self._scaled_cache[key]

    def _draw_sprite(
        self,
        surface: pygame.Surface,
        world: World,
        visual,
        position: pymunk.Vec2d,
        rotation: float,
        size_cells: Tuple[float, float],
    ) -> None:
        """Draw a sprite centered on position, rotated clockwise by rotation."""
        if isinstance(visual, pygame.Surface):
            image = self._scaled(visual)
        else:
            w = max(1, int(size_cells[0] * self.cell_size))
            h = max(1, int(size_cells[1] * self.cell_size))
            image = pygame.Surface((w, h), pygame.SRCALPHA)
            image.fill(visual)

        if rotation:
            image = pygame.transform.rotate(image, -math.degrees(rotation))

        center = world_to_screen(world, position, self.view)
        surface.blit(image, image.get_rect(center=(int(center[0]), int(center[1]))))

    # ------------------------------------------------------------------
    # HUD
    # ------------------------------------------------------------------

    def _get_font(self) -> pygame.font.Font:
        if self._font is None:
            if not pygame.font.get_init():
                pygame.font.init()
            self._font = pygame.font.Font(None, 24)
        return self._font

    def draw_text(self, surface: pygame.Surface, text: str, center: Tuple[float, float]) -> None:
        """Draw text centered on a screen point."""
        text_surface = self._get_font().render(text, True, COLOR_TEXT)
        surface.blit(text_surface, text_surface.get_rect(center=(int(center[0]), int(center[1]))))

    def draw_hud(self, surface: pygame.Surface, world: World, crashed: bool) -> None:
        cx = self.view.screen_width / 2.0
        cy = self.view.screen_height / 2.0
        distance = world.distance_traveled

        if not crashed:
            self.draw_text(surface, f"{distance:.1f} meters", (cx, 15))
            return

        self.draw_text(surface, f"You crashed after {distance:.2f} meters! How unfortunate!", (cx, cy))
        self.draw_text(surface, "ProTip: There is no need to hurry. Take it slowly.", (cx, cy + 30))
        self.draw_text(surface, "Press Enter to restart", (cx, cy + 60))
