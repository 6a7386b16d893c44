"""Simulation configuration."""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass
from pathlib import Path

from snake_chain.grid import Direction, GridCoordinate
from snake_chain.scheduler import DEFAULT_TICK_PERIOD

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SimulationConfig:
    """Tunable parameters for one snake simulation.

    Supports JSON serialization so headless runs can be reproduced.
    """

    # Chain
    initial_length: int = 1
    start_x: int = 0
    start_y: int = 0
    initial_direction: str = "down"

    # Timing
    tick_period: float = DEFAULT_TICK_PERIOD
    frame_interval: float = 1 / 60

    # Presentation
    cell_size: float = 15.0

    # Debugging
    check_invariants: bool = True

    def __post_init__(self) -> None:
        if self.initial_length < 1:
            raise ValueError("initial_length must be at least 1.")
        if self.tick_period <= 0:
            raise ValueError("tick_period must be positive.")
        if self.frame_interval <= 0:
            raise ValueError("frame_interval must be positive.")
        if self.cell_size <= 0:
            raise ValueError("cell_size must be positive.")
        Direction.from_name(self.initial_direction)

    @property
    def start(self) -> GridCoordinate:
        return GridCoordinate(self.start_x, self.start_y)

    @property
    def direction(self) -> Direction:
        return Direction.from_name(self.initial_direction)

    def to_dict(self) -> dict:
        """Serialize to a plain dict."""
        return asdict(self)

    def save(self, path: str | Path) -> None:
        """Write config to a JSON file."""
        p = Path(path)
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(json.dumps(self.to_dict(), indent=2))
        logger.info("Config saved to %s", p)

    @classmethod
    def load(cls, path: str | Path) -> SimulationConfig:
        """Load config from a JSON file."""
        raw = json.loads(Path(path).read_text())
        return cls(**raw)
