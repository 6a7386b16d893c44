"""Tick function and frame-driven simulation composing the snake components."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from snake_chain.chain import SegmentChain
from snake_chain.config import SimulationConfig
from snake_chain.controller import CommandKind, HeadController, parse_key
from snake_chain.grid import Direction
from snake_chain.growth import GrowthQueue
from snake_chain.render import RenderSegment, project, segment_color, to_screen
from snake_chain.scheduler import MovementScheduler

logger = logging.getLogger(__name__)


@dataclass
class SimulationState:
    """Everything the tick mutates, passed explicitly instead of held globally."""

    chain: SegmentChain
    growth: GrowthQueue = field(default_factory=GrowthQueue)
    controller: HeadController = field(default_factory=HeadController)
    scheduler: MovementScheduler = field(default_factory=MovementScheduler)
    tick: int = 0


def build_state(config: SimulationConfig) -> SimulationState:
    """Create the initial chain and its collaborators from *config*.

    Segments beyond the head are created through the growth path so they
    trail behind the head in its starting facing.
    """
    chain = SegmentChain()
    chain.create_head(config.start, config.direction)
    growth = GrowthQueue()
    if config.initial_length > 1:
        growth.enqueue_growth(config.initial_length - 1)
        growth.drain_and_apply(chain)
    return SimulationState(
        chain=chain,
        growth=growth,
        controller=HeadController(config.direction),
        scheduler=MovementScheduler(config.tick_period),
    )


def tick(state: SimulationState, check_invariants: bool = False) -> SimulationState:
    """Run one logic step: steer, propagate, then apply queued growth.

    Growth runs after propagation, so new segments extend the tail from
    its post-move cell.
    """
    direction = state.controller.take_pending_direction()
    state.chain.propagate(direction)
    state.growth.drain_and_apply(state.chain)
    if check_invariants:
        state.chain.check_invariants()
    state.tick += 1
    return state


class Simulation:
    """Single-snake, frame-driven simulation.

    Input arrives between frames via :meth:`press` (or the direct
    :meth:`set_direction` / :meth:`request_growth`). Each frame calls
    :meth:`advance` with the real elapsed time; the scheduler decides
    whether a logic tick fires.
    """

    def __init__(self, config: SimulationConfig | None = None) -> None:
        self.config = config or SimulationConfig()
        self.state = build_state(self.config)
        logger.debug(
            "Simulation created with %d segment(s) at (%d, %d).",
            len(self.state.chain), self.config.start_x, self.config.start_y,
        )

    @property
    def chain(self) -> SegmentChain:
        return self.state.chain

    @property
    def tick_count(self) -> int:
        return self.state.tick

    def press(self, key: str) -> bool:
        """Apply a key press. Returns False if the key is not bound."""
        command = parse_key(key)
        if command is None:
            return False
        if command.kind is CommandKind.GROW:
            self.request_growth()
        else:
            self.set_direction(command.direction)
        return True

    def set_direction(self, direction: Direction) -> None:
        self.state.controller.set_pending_direction(direction)

    def request_growth(self, count: int = 1) -> None:
        self.state.growth.enqueue_growth(count)

    def advance(self, delta: float) -> bool:
        """Feed one frame's elapsed time. Returns True if a tick fired."""
        return self.state.scheduler.advance(delta, self._run_tick)

    def step(self) -> dict:
        """Force a tick regardless of elapsed time and return the state."""
        self._run_tick()
        self.state.scheduler.reset()
        return self.get_state()

    def _run_tick(self) -> None:
        tick(self.state, check_invariants=self.config.check_invariants)
        logger.debug(
            "Tick %d: head at %s, length %d.",
            self.state.tick,
            self.chain.segment(self.chain.head).position,
            len(self.chain),
        )

    def render_view(self) -> list[RenderSegment]:
        """Head-to-tail render records for the current chain."""
        return project(self.chain)

    def get_state(self) -> dict:
        """Return the full, serializable simulation state."""
        view = self.render_view()
        screen = to_screen(view, self.config.cell_size)
        return {
            "tick": self.state.tick,
            "length": len(self.chain),
            "pending_direction": (
                self.state.controller.take_pending_direction().name.lower()
            ),
            "pending_growth": self.state.growth.pending,
            "accumulator": self.state.scheduler.accumulator,
            "segments": [
                {
                    **seg.to_dict(),
                    "screen": screen[i].tolist(),
                    "color": list(segment_color(seg)),
                }
                for i, seg in enumerate(view)
            ],
        }
