"""Tests for world-to-screen mapping and headless drawing."""

import pygame
import pymunk
import pytest

from skii.config import ViewConfig
from skii.catalog import ObjectId, PlayerType
from skii.generation import PlacedObject
from skii.renderer import WorldRenderer, world_to_screen

from conftest import SNOW_COLOR, ROCK_COLOR, PLAYER_COLOR


@pytest.fixture
def surface():
    pygame.init()
    return pygame.Surface((720, 720))


class TestWorldToScreen:
    def test_player_is_centered_above_bottom(self, world):
        sx, sy = world_to_screen(world, world.player.position, ViewConfig())
        assert sx == pytest.approx(360.0)
        # camera_offset (2) cells of 80 px above the bottom edge
        assert sy == pytest.approx(560.0)

    def test_rows_downhill_are_drawn_higher(self, world):
        view = ViewConfig()
        _, near = world_to_screen(world, pymunk.Vec2d(0.0, 1.0), view)
        _, far = world_to_screen(world, pymunk.Vec2d(0.0, 2.0), view)
        assert far == pytest.approx(near - 80.0)

    def test_camera_follows_player(self, world):
        view = ViewConfig()
        point = pymunk.Vec2d(1.0, 5.0)
        _, before = world_to_screen(world, point, view)
        world.player.position = pymunk.Vec2d(3.5, 1.0)
        _, after = world_to_screen(world, point, view)
        assert after == pytest.approx(before + 80.0)

    def test_scale_changes_cell_size(self, world):
        view = ViewConfig(scale=2.0)
        x0, _ = world_to_screen(world, pymunk.Vec2d(0.0, 0.0), view)
        x1, _ = world_to_screen(world, pymunk.Vec2d(1.0, 0.0), view)
        assert x1 - x0 == pytest.approx(32.0)


class TestWorldRenderer:
    def test_cell_size(self):
        assert WorldRenderer().cell_size == 80.0

    def test_draws_player_on_top(self, surface, world):
        WorldRenderer().draw(surface, world)
        assert tuple(surface.get_at((360, 560)))[:3] == PLAYER_COLOR

    def test_draws_tiles(self, surface, world):
        WorldRenderer().draw(surface, world)
        # Tile (0, 5) covers x 80..160, y 160..240
        assert tuple(surface.get_at((100, 180)))[:3] == SNOW_COLOR

    def test_draws_objects(self, surface, world):
        world.objects.append(PlacedObject(ObjectId(0), pymunk.Vec2d(1.5, 3.5)))
        WorldRenderer().draw(surface, world)
        sx, sy = world_to_screen(world, pymunk.Vec2d(1.5, 3.5), ViewConfig())
        assert tuple(surface.get_at((int(sx), int(sy))))[:3] == ROCK_COLOR

    def test_draws_rotated_player(self, surface, world):
        world.player.rotation = 0.8
        WorldRenderer().draw(surface, world)
        assert tuple(surface.get_at((360, 560)))[:3] == PLAYER_COLOR

    def test_draws_textures(self, surface, world):
        texture = pygame.Surface((16, 16))
        texture.fill((10, 20, 30))
        world.player_type = PlayerType(texture=texture)
        renderer = WorldRenderer()
        renderer.draw(surface, world)
        assert tuple(surface.get_at((360, 560)))[:3] == (10, 20, 30)
        # Scaled copy is reused between frames
        renderer.draw(surface, world)
        assert len(renderer._scaled_cache) == 1

    def test_hud_while_alive_and_crashed(self, surface, world):
        renderer = WorldRenderer()
        renderer.draw_hud(surface, world, crashed=False)
        renderer.draw_hud(surface, world, crashed=True)
