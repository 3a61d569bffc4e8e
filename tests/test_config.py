"""
Unit tests for bee_colony/config.py

Tests default values, YAML loading and validation.
"""

import pytest

from bee_colony.config import (ConfigError, DistanceMetric, ForagerFallback,
                               SimulationConfig, config_from_dict, load_config,
                               validate_config)


class TestDefaults:
    """Tests for default configuration"""

    def test_default_is_valid(self):
        """Test the default configuration passes validation"""
        config = SimulationConfig()
        validate_config(config)
        assert config.bee_count == 50
        assert config.food.count == 10
        assert config.food.nectar_range == (50, 149)
        assert config.colony.scout_ratio == 0.2
        assert config.colony.forager_fallback == ForagerFallback.ONLOOKER
        assert config.movement.distance_metric == DistanceMetric.CHEBYSHEV
        assert config.movement.onlooker_jitter == 20.0

    def test_hive_defaults_to_centre(self):
        """Test the hive sits in the middle of the world unless placed"""
        config = SimulationConfig()
        assert config.world.hive_position() == (400.0, 300.0)


class TestValidation:
    """Tests for validate_config"""

    @pytest.mark.parametrize("section,key,value", [
        (None, 'bee_count', 0),
        (None, 'max_steps', -1),
        (None, 'tick_rate', 0.5),
        (None, 'tick_rate', 101),
        ('world', 'width', 0),
        ('world', 'height', -10),
        ('world', 'hive', (900, 10)),
        ('food', 'count', -1),
        ('food', 'nectar_min', -1),
        ('food', 'nectar_max', 10),
        ('colony', 'scout_ratio', 1.5),
        ('colony', 'forager_ratio', 0.9),
        ('movement', 'scout_step', 0),
        ('movement', 'discovery_radius', -1),
        ('movement', 'arrival_epsilon', 0),
        ('movement', 'onlooker_jitter', -0.1),
        (None, 'bee_count', 2.5),
        (None, 'bee_count', True),
        (None, 'max_steps', 10.0),
        ('food', 'count', 3.5),
        ('food', 'nectar_min', 1.5),
        ('food', 'nectar_max', '149'),
    ])
    def test_rejects_degenerate_values(self, section, key, value):
        """Test degenerate values raise a descriptive ConfigError"""
        config = SimulationConfig()
        target = config if section is None else getattr(config, section)
        setattr(target, key, value)
        with pytest.raises(ConfigError):
            validate_config(config)

    def test_zero_food_sources_allowed(self):
        """Test an empty meadow is a valid configuration"""
        config = SimulationConfig()
        config.food.count = 0
        validate_config(config)

    def test_config_error_is_value_error(self):
        """Test callers can catch ConfigError as ValueError"""
        assert issubclass(ConfigError, ValueError)


class TestLoading:
    """Tests for YAML loading"""

    def test_load_yaml(self, tmp_path):
        """Test a full YAML file is parsed into dataclasses"""
        path = tmp_path / "meadow.yaml"
        path.write_text(
            "world: {width: 300, height: 200, hive: [20, 30]}\n"
            "simulation: {max_steps: 50, bee_count: 8, tick_rate: 25, seed: 3}\n"
            "colony: {scout_ratio: 0.5, forager_fallback: reassign}\n"
            "food:\n"
            "  count: 2\n"
            "  nectar_min: 1\n"
            "  nectar_max: 4\n"
            "  sources:\n"
            "    - {x: 10, y: 12, nectar: 9}\n"
            "movement: {scout_step: 7, distance_metric: euclidean}\n"
            "export: {snapshot: false, gif: true}\n"
        )
        config = load_config(path)

        assert config.world.width == 300
        assert config.world.hive_position() == (20.0, 30.0)
        assert config.max_steps == 50
        assert config.bee_count == 8
        assert config.tick_rate == 25
        assert config.seed == 3
        assert config.colony.forager_fallback == ForagerFallback.REASSIGN
        assert config.food.sources[0].nectar == 9
        assert config.movement.scout_step == 7
        assert config.movement.forager_step == 3.0
        assert config.movement.distance_metric == DistanceMetric.EUCLIDEAN
        assert not config.snapshot_enabled
        assert config.gif_enabled

    def test_empty_mapping_gives_defaults(self):
        """Test missing sections fall back to defaults"""
        assert config_from_dict({}) == SimulationConfig()
        assert config_from_dict(None) == SimulationConfig()

    def test_unknown_enum(self):
        """Test unknown policy names are rejected"""
        with pytest.raises(ConfigError):
            config_from_dict({'colony': {'forager_fallback': 'hibernate'}})
        with pytest.raises(ConfigError):
            config_from_dict({'movement': {'distance_metric': 'manhattan'}})

    def test_invalid_values_rejected_on_load(self):
        """Test loading validates the result"""
        with pytest.raises(ConfigError):
            config_from_dict({'simulation': {'bee_count': 0}})

    def test_missing_file(self, tmp_path):
        """Test a missing file raises FileNotFoundError"""
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "absent.yaml")

    def test_empty_sections_use_defaults(self, tmp_path):
        """Test sections present but left empty fall back to defaults"""
        path = tmp_path / "sparse.yaml"
        path.write_text(
            "world: {width: 300, height: 200}\n"
            "food:\n"
            "  # nothing yet\n"
            "colony:\n"
            "movement:\n"
            "simulation:\n"
            "export:\n"
        )
        config = load_config(path)

        assert config.world.width == 300
        assert config.food.count == SimulationConfig().food.count
        assert config.bee_count == SimulationConfig().bee_count
        assert config.snapshot_enabled

    def test_null_sources(self):
        """Test an explicit null source list means no fixed sources"""
        config = config_from_dict({'food': {'count': 2, 'sources': None}})
        assert config.food.sources == []

    @pytest.mark.parametrize("raw", [
        {'food': [1, 2]},
        {'world': 'big'},
        ['not', 'a', 'mapping'],
    ])
    def test_non_mapping_rejected(self, raw):
        """Test malformed sections raise ConfigError instead of crashing"""
        with pytest.raises(ConfigError):
            config_from_dict(raw)
