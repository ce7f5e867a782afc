"""Tests for the Gymnasium environment wrapper."""

import numpy as np
import pymunk
import pytest

from skii.catalog import ObjectId
from skii.config import GameConfig
from skii.generation import PlacedObject
from skii.gym_env import SkiEnv
from skii.policies import STRAIGHT, LEFT, RIGHT


@pytest.fixture
def env(catalog):
    e = SkiEnv(catalog=catalog)
    yield e
    e.close()


class TestSpaces:
    def test_action_space(self, env):
        assert env.action_space.n == 3

    def test_observation_shapes(self, env):
        obs, info = env.reset(seed=0)
        assert obs["state"].shape == (9,)
        assert obs["state"].dtype == np.float32
        assert obs["tiles"].shape == (16, 7)
        assert obs["objects"].shape == (16, 7)
        assert env.observation_space.contains(obs)

    def test_grid_follows_config(self, catalog):
        env = SkiEnv(GameConfig(grid_width=5, grid_height=10), catalog=catalog)
        obs, _ = env.reset(seed=0)
        assert obs["tiles"].shape == (10, 5)


class TestReset:
    def test_starts_fresh(self, env):
        obs, info = env.reset(seed=1)
        assert obs["state"][0] == pytest.approx(3.5)
        assert obs["state"][1] == 0.0
        assert info["distance"] == 0.0
        assert info["episode_steps"] == 0
        assert not info["crashed"]
        assert obs["objects"].sum() == 0

    def test_same_seed_same_course(self, catalog):
        def rollout(seed):
            env = SkiEnv(catalog=catalog)
            obs, info = env.reset(seed=seed)
            env.world.player.position = pymunk.Vec2d(3.5, 6.5)
            for _ in range(5):
                obs, *_ = env.step(STRAIGHT)
            return info["course_seed"], obs["tiles"].copy()

        seed_a, tiles_a = rollout(42)
        seed_b, tiles_b = rollout(42)
        assert seed_a == seed_b
        np.testing.assert_array_equal(tiles_a, tiles_b)

    def test_different_seeds_different_courses(self, env):
        _, info_a = env.reset(seed=1)
        _, info_b = env.reset(seed=2)
        assert info_a["course_seed"] != info_b["course_seed"]


class TestStep:
    def test_reward_is_distance_gained(self, env):
        env.reset(seed=0)
        obs, reward, terminated, truncated, info = env.step(STRAIGHT)
        assert reward > 0.0
        assert reward == pytest.approx(info["distance"])
        assert not terminated
        assert not truncated
        assert info["episode_steps"] == 1

    @pytest.mark.parametrize("action,sign", [(LEFT, -1), (RIGHT, 1)])
    def test_steering_actions(self, env, action, sign):
        env.reset(seed=0)
        obs, *_ = env.step(action)
        assert np.sign(obs["state"][5]) == sign

    def test_invalid_action(self, env):
        env.reset(seed=0)
        with pytest.raises(ValueError):
            env.step(5)

    def test_crash_terminates_with_penalty(self, env):
        env.reset(seed=0)
        env.world.player.position = pymunk.Vec2d(-1.0, 0.0)
        _, reward, terminated, _, info = env.step(STRAIGHT)
        assert terminated
        assert info["crashed"]
        assert reward < -9.0

    def test_truncates_at_step_limit(self, catalog):
        env = SkiEnv(catalog=catalog, max_episode_steps=5)
        env.reset(seed=0)
        for _ in range(4):
            _, _, _, truncated, _ = env.step(STRAIGHT)
            assert not truncated
        _, _, terminated, truncated, _ = env.step(STRAIGHT)
        assert truncated
        assert not terminated

    def test_object_occupancy(self, env):
        env.reset(seed=0)
        env.world.objects.append(PlacedObject(ObjectId(0), pymunk.Vec2d(1.5, 4.5)))
        obs, *_ = env.step(STRAIGHT)
        assert obs["objects"][4, 1] == 1
        assert obs["objects"].sum() == 1

    def test_scrolls_during_episode(self, env):
        env.reset(seed=0)
        env.world.player.position = pymunk.Vec2d(3.5, 6.5)
        _, _, _, _, info = env.step(STRAIGHT)
        assert env.world.real_y == 4.0
        assert info["distance"] == pytest.approx(6.5, abs=0.01)


class TestRender:
    def test_rgb_array(self, catalog):
        env = SkiEnv(catalog=catalog, render_mode="rgb_array")
        env.reset(seed=0)
        frame = env.render()
        assert frame.shape == (720, 720, 3)
        assert frame.dtype == np.uint8
        env.close()

    def test_no_render_mode(self, env):
        env.reset(seed=0)
        assert env.render() is None
