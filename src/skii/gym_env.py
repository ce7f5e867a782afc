"""Gymnasium environment wrapper for the skiing game.

Provides standard Gym API for RL training and scripted play.
Observations are structured arrays; RGB frames are available through
render() in "rgb_array" mode.
"""

import random
from typing import Optional, Dict, Any

import numpy as np
import gymnasium
from gymnasium import spaces

import pygame

from .catalog import Catalog
from .config import GameConfig
from .generation import TerrainGenerator
from .loader import load_catalog
from .physics import apply_steering
from .renderer import WorldRenderer
from .world import World


# Discrete actions -> steering direction
ACTION_STEERING = {0: -1, 1: 0, 2: 1}

STATE_SIZE = 9


class SkiEnv(gymnasium.Env):
    """Gymnasium wrapper for the skiing game.

    Observation space (Dict):
        'state': float32 array of shape (9,) containing:
            [0-1] player position (x, y), grid cells
            [2-3] player velocity (vx, vy)
            [4]   player rotation (rad)
            [5]   player angular velocity
            [6]   distance traveled
            [7-8] forward / sideways friction of the tile underfoot
        'tiles': int32 array (H, W) - tile ids of the visible grid
        'objects': uint8 array (H, W) - 1 where an obstacle center lies

    Action space: Discrete(3) - 0 steer left, 1 straight, 2 steer right.

    Reward: distance gained this step, plus crash_penalty on a crash.
    """

    metadata = {"render_modes": ["human", "rgb_array"], "render_fps": 60}

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        catalog: Optional[Catalog] = None,
        render_mode: Optional[str] = None,
        max_episode_steps: int = 3000,
        crash_penalty: float = -10.0,
    ):
        super().__init__()

        self.config = config or GameConfig()
        self.catalog = catalog or load_catalog()
        self.render_mode = render_mode
        self.max_episode_steps = max_episode_steps
        self.crash_penalty = crash_penalty

        height, width = self.config.grid_height, self.config.grid_width

        self.action_space = spaces.Discrete(3)
        self.observation_space = spaces.Dict({
            "state": spaces.Box(
                low=-np.inf, high=np.inf, shape=(STATE_SIZE,), dtype=np.float32,
            ),
            "tiles": spaces.Box(
                low=0, high=self.catalog.tile_count - 1,
                shape=(height, width), dtype=np.int32,
            ),
            "objects": spaces.Box(
                low=0, high=1, shape=(height, width), dtype=np.uint8,
            ),
        })

        self._generator = TerrainGenerator(random.Random(), self.config.generation)
        self._world = World(self.catalog, self._generator, self.config.physics)
        self._world.reset(width, height)

        self._crashed = False
        self._episode_steps = 0
        self._prev_distance = 0.0
        self._course_seed = 0

        self._renderer = WorldRenderer(self.config.view)
        self._surface = None
        self._display = None

    @property
    def world(self) -> World:
        return self._world

    def reset(self, *, seed=None, options=None):
        super().reset(seed=seed)

        # Course generation draws from its own stream, derived from np_random
        self._course_seed = int(self.np_random.integers(0, 2**31))
        self._generator.rng = random.Random(self._course_seed)
        self._world.reset(self.config.grid_width, self.config.grid_height)

        self._crashed = False
        self._episode_steps = 0
        self._prev_distance = self._world.distance_traveled

        return self._get_obs(), self._get_info()

    def step(self, action):
        if int(action) not in ACTION_STEERING:
            raise ValueError(f"Invalid action {action!r}, expected 0, 1 or 2")

        self._update(ACTION_STEERING[int(action)], self.config.dt)
        self._episode_steps += 1

        distance = self._world.distance_traveled
        reward = distance - self._prev_distance
        self._prev_distance = distance
        if self._crashed:
            reward += self.crash_penalty

        terminated = self._crashed
        truncated = self._episode_steps >= self.max_episode_steps

        if self.render_mode == "human":
            self.render()

        return self._get_obs(), float(reward), terminated, truncated, self._get_info()

    # ------------------------------------------------------------------
    # Game state update (mirrors engine.step)
    # ------------------------------------------------------------------

    def _update(self, steering: int, dt: float) -> None:
        physics = self.config.physics
        view = self.config.view
        player = self._world.player

        apply_steering(player, steering, dt, physics.max_turn_rate, physics.turn_damping)

        if player.position.y > view.scroll_trigger:
            self._world.scroll(view.scroll_rows)

        if not self._crashed:
            self._crashed = self._world.update(dt)

    # ------------------------------------------------------------------
    # Observations
    # ------------------------------------------------------------------

    def _get_obs(self) -> Dict[str, np.ndarray]:
        world = self._world
        player = world.player
        under = world.tile_under_player()

        state = np.array([
            player.position.x,
            player.position.y,
            player.velocity.x,
            player.velocity.y,
            player.rotation,
            player.angular_velocity,
            world.distance_traveled,
            under.forward_friction,
            under.sideway_friction,
        ], dtype=np.float32)

        tiles = np.array(world.tiles, dtype=np.int32)

        objects = np.zeros((world.height, world.width), dtype=np.uint8)
        for obj in world.objects:
            x, y = int(obj.position.x), int(obj.position.y)
            if 0 <= x < world.width and 0 <= y < world.height:
                objects[y, x] = 1

        return {"state": state, "tiles": tiles, "objects": objects}

    def _get_info(self) -> Dict[str, Any]:
        return {
            "distance": self._world.distance_traveled,
            "episode_steps": self._episode_steps,
            "crashed": self._crashed,
            "player_position": tuple(self._world.player.position),
            "course_seed": self._course_seed,
        }

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def _render_frame(self) -> np.ndarray:
        """Render current state to numpy array (H, W, 3) uint8."""
        if not pygame.get_init():
            pygame.init()
        view = self.config.view
        if self._surface is None:
            self._surface = pygame.Surface((view.screen_width, view.screen_height))

        self._renderer.draw(self._surface, self._world)

        # surfarray gives (W, H, 3); transpose to (H, W, 3)
        array = pygame.surfarray.array3d(self._surface)
        return np.transpose(array, (1, 0, 2)).astype(np.uint8)

    def render(self):
        if self.render_mode == "rgb_array":
            return self._render_frame()
        elif self.render_mode == "human":
            if self._display is None:
                if not pygame.get_init():
                    pygame.init()
                view = self.config.view
                self._display = pygame.display.set_mode((view.screen_width, view.screen_height))
                pygame.display.set_caption("SkiEnv")
            self._renderer.draw(self._display, self._world)
            self._renderer.draw_hud(self._display, self._world, self._crashed)
            pygame.display.flip()

    def close(self):
        if self._display is not None:
            pygame.display.quit()
            self._display = None
