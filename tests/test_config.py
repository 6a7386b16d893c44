"""Tests for the simulation configuration dataclass."""

import json

import pytest

from snake_chain.config import SimulationConfig
from snake_chain.grid import Direction, GridCoordinate


class TestSimulationConfig:
    def test_defaults(self):
        cfg = SimulationConfig()
        assert cfg.initial_length == 1
        assert cfg.tick_period == 0.5
        assert cfg.cell_size == 15.0
        assert cfg.check_invariants is True
        assert cfg.start == GridCoordinate(0, 0)
        assert cfg.direction == Direction.DOWN

    def test_custom_values(self):
        cfg = SimulationConfig(
            initial_length=4, start_x=2, start_y=-3, initial_direction="Left",
        )
        assert cfg.start == GridCoordinate(2, -3)
        assert cfg.direction == Direction.LEFT

    @pytest.mark.parametrize(
        ("kwargs", "message"),
        [
            ({"initial_length": 0}, "initial_length"),
            ({"tick_period": 0}, "tick_period"),
            ({"frame_interval": -1}, "frame_interval"),
            ({"cell_size": 0}, "cell_size"),
            ({"initial_direction": "sideways"}, "Unknown direction"),
        ],
    )
    def test_validation(self, kwargs, message):
        with pytest.raises(ValueError, match=message):
            SimulationConfig(**kwargs)

    def test_to_dict_serializable(self):
        d = SimulationConfig().to_dict()
        assert d["initial_direction"] == "down"
        assert isinstance(json.dumps(d), str)

    def test_save_and_load(self, tmp_path):
        cfg = SimulationConfig(initial_length=5, tick_period=0.25)
        path = tmp_path / "nested" / "config.json"
        cfg.save(path)
        assert path.exists()
        assert SimulationConfig.load(path) == cfg
