"""Fixed-timestep scheduling for the movement tick."""

from __future__ import annotations

import enum
from collections.abc import Callable

DEFAULT_TICK_PERIOD = 0.5  # seconds

_NS_PER_SECOND = 1_000_000_000
# Frame deltas such as 1/60 s are not exact in nanoseconds either; a period
# counts as reached once the elapsed time is within this slack of it.
_SLACK_NS = 1_000


def _to_ns(seconds: float) -> int:
    return round(seconds * _NS_PER_SECOND)


class SchedulerState(enum.Enum):
    """Whether enough time has accumulated to fire a tick."""

    IDLE = "idle"
    FIRE = "fire"


class MovementScheduler:
    """Accumulates frame time and fires at most one tick per frame.

    Time is kept in integer nanoseconds so that frames which sum to the
    period on paper (thirty 1/60 s frames for a 0.5 s period) fire on that
    frame and not one later. When the period is reached the tick body runs
    once and the accumulator drops back to zero. Any overshoot is discarded
    rather than carried into the next period, and large frame deltas never
    trigger catch-up ticks.
    """

    def __init__(self, period: float = DEFAULT_TICK_PERIOD) -> None:
        if period <= 0:
            raise ValueError("Tick period must be positive.")
        self.period = period
        self._period_ns = _to_ns(period)
        self._elapsed_ns = 0
        self.ticks_fired = 0

    @property
    def accumulator(self) -> float:
        """Elapsed time since the last tick, in seconds."""
        return self._elapsed_ns / _NS_PER_SECOND

    @accumulator.setter
    def accumulator(self, seconds: float) -> None:
        self._elapsed_ns = _to_ns(seconds)

    @property
    def state(self) -> SchedulerState:
        if self._elapsed_ns + _SLACK_NS >= self._period_ns:
            return SchedulerState.FIRE
        return SchedulerState.IDLE

    def advance(self, delta: float, on_tick: Callable[[], object]) -> bool:
        """Add *delta* seconds and run *on_tick* if the period has elapsed.

        Returns True when a tick fired during this call.
        """
        if delta < 0:
            raise ValueError("Frame delta must not be negative.")
        self._elapsed_ns += _to_ns(delta)
        if self.state is SchedulerState.IDLE:
            return False

        on_tick()
        self._elapsed_ns = 0
        self.ticks_fired += 1
        return True

    def reset(self) -> None:
        """Clear accumulated time without firing."""
        self._elapsed_ns = 0
