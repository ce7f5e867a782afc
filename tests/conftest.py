"""Pytest configuration and shared fixtures."""

import os

# Ensure headless pygame for all tests
os.environ['SDL_VIDEODRIVER'] = 'dummy'

import random

import pymunk
import pytest

from skii.catalog import Catalog, TileType, ObjectType, PlayerType
from skii.config import GameConfig
from skii.generation import TerrainGenerator
from skii.world import World


SNOW_COLOR = (240, 244, 250)
ICE_COLOR = (180, 220, 245)
ROCK_COLOR = (110, 110, 120)
TREE_COLOR = (46, 125, 50)
PLAYER_COLOR = (200, 40, 40)


def make_catalog(rare_weight: float = 0.1) -> Catalog:
    """Snow (common) + ice (rare) tiles, rock + tree objects."""
    return Catalog(
        PlayerType(texture=PLAYER_COLOR),
        [
            TileType(0.02, 0.8, rare_weight, ICE_COLOR, name="ice"),
            TileType(0.1, 4.0, 1.0, SNOW_COLOR, name="snow"),
        ],
        [
            ObjectType(0.02, pymunk.Vec2d(0.5, 0.8), TREE_COLOR, name="tree"),
            ObjectType(0.05, pymunk.Vec2d(1.0, 1.0), ROCK_COLOR, name="rock"),
        ],
    )


class SequenceRng:
    """Stand-in random source returning scripted randrange values.

    Records every ``n`` passed to randrange; falls back to ``default`` once
    the script runs out.
    """

    def __init__(self, values=(), default=0):
        self.values = list(values)
        self.default = default
        self.calls = []

    def randrange(self, n):
        self.calls.append(n)
        if self.values:
            return self.values.pop(0)
        return self.default


@pytest.fixture
def catalog():
    """Two tiles, two objects; snow and rock sort first."""
    return make_catalog()


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def world(catalog, rng):
    """Freshly reset 7x16 world with a seeded generator."""
    w = World(catalog, TerrainGenerator(rng))
    w.reset(7, 16)
    return w


@pytest.fixture
def game_config():
    """Default game configuration."""
    return GameConfig()
