"""
Unit tests for configuration loading and validation.
"""

import json

import pytest

from phasetube.config import ConfigError, SimulationConfig, clamp, load_config
from phasetube.logging_config import resolve_level
from phasetube.model.state import Parameters


class TestSimulationConfig:
    def test_defaults(self):
        cfg = SimulationConfig()
        assert cfg.dt == 0.02
        assert cfg.max_points == 8000
        assert cfg.steps_per_frame == 3
        assert cfg.tube_radius == 0.025
        assert cfg.tube_segments == 8

    def test_default_parameters(self):
        assert SimulationConfig().default_parameters() == Parameters()

    def test_to_dict_round_trip(self):
        cfg = SimulationConfig(epsilon=0.1, max_points=500)
        assert SimulationConfig.from_dict(cfg.to_dict()) == cfg

    @pytest.mark.parametrize("overrides", [
        {"epsilon": 0.5},
        {"a": 0.0},
        {"current": -0.1},
        {"dt": 0.0},
        {"max_points": 1},
        {"steps_per_frame": 0},
        {"tube_radius": -1.0},
        {"tube_segments": 2},
        {"steps_per_frame": 2.5},
        {"max_points": 100.0},
        {"tube_segments": True},
        {"dt": float("nan")},
        {"dt": float("inf")},
        {"b": float("nan")},
        {"tube_radius": float("nan")},
        {"epsilon": float("nan")},
        {"current": "0.5"},
    ])
    def test_invalid_values(self, overrides):
        with pytest.raises(ConfigError):
            SimulationConfig(**overrides)

    def test_integer_floats_are_accepted(self):
        cfg = SimulationConfig(dt=1, tube_radius=1)
        assert cfg.dt == 1

    def test_unknown_key(self):
        with pytest.raises(ConfigError, match="colour"):
            SimulationConfig.from_dict({"colour": "red"})


class TestLoadConfig:
    def test_none_returns_defaults(self):
        assert load_config(None) == SimulationConfig()

    def test_overrides(self, tmp_path):
        path = tmp_path / "session.json"
        path.write_text(json.dumps({"current": 1.0, "max_points": 200}))

        cfg = load_config(str(path))
        assert cfg.current == 1.0
        assert cfg.max_points == 200
        assert cfg.epsilon == 0.08

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError, match="not found"):
            load_config(str(tmp_path / "nope.json"))

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{current: ")
        with pytest.raises(ConfigError, match="Invalid JSON"):
            load_config(str(path))

    def test_not_an_object(self, tmp_path):
        path = tmp_path / "list.json"
        path.write_text("[1, 2, 3]")
        with pytest.raises(ConfigError, match="JSON object"):
            load_config(str(path))

    @pytest.mark.parametrize("text", [
        '{"steps_per_frame": 2.5}',
        '{"dt": NaN}',
        '{"max_points": true}',
    ])
    def test_bad_types_rejected_at_load(self, tmp_path, text):
        path = tmp_path / "typed.json"
        path.write_text(text)
        with pytest.raises(ConfigError):
            load_config(str(path))

    def test_out_of_range(self, tmp_path):
        path = tmp_path / "range.json"
        path.write_text(json.dumps({"epsilon": 3.0}))
        with pytest.raises(ConfigError, match="epsilon"):
            load_config(str(path))


def test_clamp():
    assert clamp(5.0, 0.0, 2.0) == 2.0
    assert clamp(-1.0, 0.0, 2.0) == 0.0
    assert clamp(1.5, 0.0, 2.0) == 1.5


@pytest.mark.parametrize("level,expected", [
    ("debug", 10),
    ("INFO", 20),
    (30, 30),
])
def test_resolve_level(level, expected):
    assert resolve_level(level) == expected


def test_resolve_unknown_level():
    with pytest.raises(ValueError):
        resolve_level("chatty")
