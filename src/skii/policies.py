"""Scripted policies for automated play.

Each policy takes a SkiEnv observation and returns a discrete action
(0 steer left, 1 straight, 2 steer right).
"""

import math
from typing import Dict, Optional

import numpy as np


LEFT, STRAIGHT, RIGHT = 0, 1, 2


class BasePolicy:
    """Base class for scripted policies."""

    name: str = "base"

    def __call__(self, obs: Dict[str, np.ndarray]) -> int:
        return self.act(obs)

    def act(self, obs: Dict[str, np.ndarray]) -> int:
        raise NotImplementedError

    def reset(self):
        """Called at the start of each episode."""
        pass


class RandomPolicy(BasePolicy):
    """Uniform random steering each step."""

    name = "random"

    def __init__(self, rng: Optional[np.random.Generator] = None):
        self.rng = rng or np.random.default_rng()

    def act(self, obs):
        return int(self.rng.integers(0, 3))


class StraightPolicy(BasePolicy):
    """Never steers. Rides the fall line until something is in the way."""

    name = "straight"

    def act(self, obs):
        return STRAIGHT


class AvoidPolicy(BasePolicy):
    """Steers away from the nearest obstacle ahead, else back to center.

    Looks `lookahead` rows down the occupancy grid in the player's column
    and its neighbors, and keeps the heading near zero so it does not spin.
    """

    name = "avoid"

    def __init__(self, lookahead: int = 3, max_rotation: float = 0.6):
        self.lookahead = lookahead
        self.max_rotation = max_rotation

    def act(self, obs):
        state = obs["state"]
        occupancy = obs["objects"]
        height, width = occupancy.shape
        x, y = float(state[0]), float(state[1])
        rotation = float(state[4])

        # Heading correction wins over everything else
        if rotation > self.max_rotation:
            return LEFT
        if rotation < -self.max_rotation:
            return RIGHT

        col = int(x)
        row = int(max(y, 0.0))
        ahead = occupancy[row:min(row + self.lookahead + 1, height)]
        if ahead.size and col < width and ahead[:, col].any():
            left_free = col > 0 and not ahead[:, col - 1].any()
            right_free = col < width - 1 and not ahead[:, col + 1].any()
            if left_free and not right_free:
                return LEFT
            if right_free and not left_free:
                return RIGHT
            # Both or neither free: go towards the wider side
            return LEFT if x > width / 2.0 else RIGHT

        center = width / 2.0
        if x < center - 1.0 and rotation < math.pi / 8:
            return RIGHT
        if x > center + 1.0 and rotation > -math.pi / 8:
            return LEFT
        return STRAIGHT


POLICIES = {
    "random": RandomPolicy,
    "straight": StraightPolicy,
    "avoid": AvoidPolicy,
}
