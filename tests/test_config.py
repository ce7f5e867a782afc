"""Tests for the configuration system."""

import pytest

from skii.config import (
    PhysicsConfig, GenerationConfig, ViewConfig, GameConfig, CONFIGS,
)


class TestPhysicsConfig:
    def test_defaults(self):
        config = PhysicsConfig()
        assert config.downhill_acceleration == 1.5
        assert config.max_turn_rate == 15.0
        assert config.turn_damping == 0.2

    def test_dict_roundtrip(self):
        config = PhysicsConfig(downhill_acceleration=2.0, max_turn_rate=9.0, turn_damping=0.5)
        assert PhysicsConfig.from_dict(config.to_dict()) == config

    def test_from_dict_fills_missing(self):
        config = PhysicsConfig.from_dict({"max_turn_rate": 7.0})
        assert config.max_turn_rate == 7.0
        assert config.downhill_acceleration == 1.5

    def test_negative_acceleration_rejected(self):
        with pytest.raises(ValueError):
            PhysicsConfig(downhill_acceleration=-1.0)

    def test_negative_turn_rate_rejected(self):
        with pytest.raises(ValueError):
            PhysicsConfig(max_turn_rate=-1.0)


class TestGenerationConfig:
    def test_defaults(self):
        config = GenerationConfig()
        assert config.tile_cluster_threshold == 4
        assert config.tile_cluster_multiplier == 5.0
        assert config.object_radius == 3.0
        assert config.object_cluster_threshold == 2
        assert config.object_cluster_multiplier == 6.0
        assert config.reroll_placed_object is True

    def test_dict_roundtrip(self):
        config = GenerationConfig(object_radius=1.5, reroll_placed_object=False)
        assert GenerationConfig.from_dict(config.to_dict()) == config

    def test_negative_radius_rejected(self):
        with pytest.raises(ValueError):
            GenerationConfig(object_radius=-0.1)

    def test_zero_threshold_rejected(self):
        with pytest.raises(ValueError):
            GenerationConfig(tile_cluster_threshold=0)


class TestViewConfig:
    def test_default_scroll_rows(self):
        assert ViewConfig().scroll_rows == 4

    def test_trigger_must_exceed_offset(self):
        with pytest.raises(ValueError):
            ViewConfig(camera_offset=3.0, scroll_trigger=3.0)


class TestGameConfig:
    def test_defaults(self, game_config):
        assert game_config.grid_width == 7
        assert game_config.grid_height == 16
        assert game_config.fps == 60
        assert game_config.dt == pytest.approx(1 / 60)

    def test_to_dict_nests_groups(self, game_config):
        d = game_config.to_dict()
        assert d["physics"]["downhill_acceleration"] == 1.5
        assert d["generation"]["object_radius"] == 3.0
        assert d["view"]["scale"] == 5.0
        assert d["grid_width"] == 7

    @pytest.mark.parametrize("width,height", [(0, 16), (7, 1), (-3, 10)])
    def test_bad_grid_rejected(self, width, height):
        with pytest.raises(ValueError):
            GameConfig(grid_width=width, grid_height=height)

    def test_bad_fps_rejected(self):
        with pytest.raises(ValueError):
            GameConfig(fps=0)


class TestPresets:
    def test_default_preset_matches_defaults(self):
        assert CONFIGS["default"] == GameConfig()

    def test_all_presets_are_game_configs(self):
        for name, config in CONFIGS.items():
            assert isinstance(config, GameConfig), name

    def test_steep_is_faster_than_gentle(self):
        assert (CONFIGS["steep"].physics.downhill_acceleration
                > CONFIGS["gentle"].physics.downhill_acceleration)

    def test_wide_preset(self):
        assert CONFIGS["wide"].grid_width > CONFIGS["default"].grid_width
