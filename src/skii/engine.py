"""Core game engine with rendering and game loop.

Coordinates the world simulation, keyboard input and pygame rendering into
a playable game. Simulation runs at a fixed tick rate decoupled from the
rendering frame rate.
"""

import random
from typing import Optional, Dict, Any

import pygame

from .catalog import Catalog
from .config import GameConfig
from .generation import TerrainGenerator
from .loader import load_catalog
from .physics import apply_steering, steering_direction
from .renderer import WorldRenderer
from .world import World


LEFT_KEYS = (pygame.K_LEFT, pygame.K_a)
RIGHT_KEYS = (pygame.K_RIGHT, pygame.K_d)


class SkiEngine:
    """Main game engine coordinating all systems.

    Handles:
    - Fixed timestep simulation with a real-time accumulator
    - Steering from held keys, restart on Enter after a crash
    - Scrolling the world as the player advances
    - Pygame rendering
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        catalog: Optional[Catalog] = None,
        rng: Optional[random.Random] = None,
    ):
        """Initialize game engine.

        Args:
            config: Game configuration. Uses defaults if None.
            catalog: Tile/object catalog. Loads the packaged resources if None.
            rng: Random source for terrain generation. Unseeded if None.
        """
        self.config = config or GameConfig()
        view = self.config.view

        # Initialize pygame
        pygame.init()
        self.screen = pygame.display.set_mode((view.screen_width, view.screen_height))
        pygame.display.set_caption("Skii")
        self.clock = pygame.time.Clock()

        self.catalog = catalog or load_catalog()
        self.generator = TerrainGenerator(rng, self.config.generation)
        self.world = World(self.catalog, self.generator, self.config.physics)
        self.world.reset(self.config.grid_width, self.config.grid_height)

        self.renderer = WorldRenderer(view)

        self.running = False
        self.crashed = False
        self.episode_steps = 0

        # Input state
        self._keys_pressed: Dict[int, bool] = {}

        # Real time not yet consumed by simulation ticks
        self._accumulator = 0.0

    @property
    def steering(self) -> int:
        """Current steering direction from held keys."""
        left = any(self._keys_pressed.get(k) for k in LEFT_KEYS)
        right = any(self._keys_pressed.get(k) for k in RIGHT_KEYS)
        return steering_direction(left, right)

    def restart(self) -> None:
        """Start a new run on a grid of the current size."""
        self.crashed = False
        self.episode_steps = 0
        self._accumulator = 0.0
        self.world.reset(self.world.width, self.world.height)
        print(f"NEW RUN: {self.world.width}x{self.world.height} grid")

    def step(self, dt: float) -> bool:
        """Run one simulation tick.

        Args:
            dt: Time step in seconds.

        Returns:
            True if the run is over.
        """
        physics = self.config.physics
        view = self.config.view
        player = self.world.player

        apply_steering(player, self.steering, dt, physics.max_turn_rate, physics.turn_damping)

        # Generate a new portion of map
        if player.position.y > view.scroll_trigger:
            self.world.scroll(view.scroll_rows)

        if not self.crashed:
            self.crashed = self.world.update(dt)
            self.episode_steps += 1
            if self.crashed:
                print(f"CRASHED: {self.world.distance_traveled:.2f} meters "
                      f"after {self.episode_steps} ticks")

        return self.crashed

    def advance_time(self, elapsed: float) -> int:
        """Consume real elapsed time in fixed ticks.

        Args:
            elapsed: Seconds since the last call.

        Returns:
            Number of ticks run.
        """
        dt = self.config.dt
        self._accumulator += elapsed

        ticks = 0
        while self._accumulator >= dt and ticks < self.config.max_ticks_per_frame:
            self.step(dt)
            self._accumulator -= dt
            ticks += 1

        # Drop backlog the tick cap could not absorb
        if self._accumulator >= dt:
            self._accumulator %= dt

        return ticks

    def handle_events(self) -> None:
        """Process pygame events."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False
            elif event.type == pygame.KEYDOWN:
                self._keys_pressed[event.key] = True
                if event.key == pygame.K_ESCAPE:
                    self.running = False
                elif event.key == pygame.K_RETURN and self.crashed:
                    self.restart()
            elif event.type == pygame.KEYUP:
                self._keys_pressed[event.key] = False

    def render(self) -> None:
        """Render current game state."""
        self.renderer.draw(self.screen, self.world)
        self.renderer.draw_hud(self.screen, self.world, self.crashed)
        pygame.display.flip()

    def run(self) -> None:
        """Main game loop."""
        self.running = True
        print(f"NEW RUN: {self.world.width}x{self.world.height} grid")

        while self.running:
            self.handle_events()
            elapsed = self.clock.tick(self.config.fps) / 1000.0
            self.advance_time(elapsed)
            self.render()

        pygame.quit()

    def get_state(self) -> Dict[str, Any]:
        """Get current game state for observation/logging.

        Returns:
            Dictionary with player kinematics, distance and flags.
        """
        player = self.world.player
        return {
            "crashed": self.crashed,
            "episode_steps": self.episode_steps,
            "player_position": (player.position.x, player.position.y),
            "player_velocity": (player.velocity.x, player.velocity.y),
            "player_rotation": player.rotation,
            "distance": self.world.distance_traveled,
            "objects": len(self.world.objects),
        }
