"""Snake Chain — segment-chain snake movement core."""

from snake_chain.chain import (
    ChainError,
    ChainInvariantError,
    ChainPreconditionError,
    Segment,
    SegmentChain,
)
from snake_chain.config import SimulationConfig
from snake_chain.controller import HeadController, KeyCommand, parse_key
from snake_chain.engine import Simulation, SimulationState, build_state, tick
from snake_chain.grid import Direction, GridCoordinate
from snake_chain.growth import GrowthQueue
from snake_chain.render import RenderSegment, project, to_screen
from snake_chain.scheduler import MovementScheduler, SchedulerState
from snake_chain.trail import SegmentTrail

__all__ = [
    "ChainError",
    "ChainInvariantError",
    "ChainPreconditionError",
    "Direction",
    "GridCoordinate",
    "GrowthQueue",
    "HeadController",
    "KeyCommand",
    "MovementScheduler",
    "RenderSegment",
    "SchedulerState",
    "Segment",
    "SegmentChain",
    "SegmentTrail",
    "Simulation",
    "SimulationConfig",
    "SimulationState",
    "build_state",
    "parse_key",
    "project",
    "tick",
    "to_screen",
]
