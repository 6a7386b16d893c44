"""Tests for the deque trail and its agreement with the segment chain."""

import numpy as np
import pytest

from snake_chain.chain import SegmentChain
from snake_chain.grid import Direction, GridCoordinate
from snake_chain.growth import GrowthQueue
from snake_chain.render import project
from snake_chain.trail import SegmentTrail


class TestTrailInit:
    def test_default(self):
        trail = SegmentTrail(GridCoordinate(0, 0))
        assert len(trail) == 1
        assert trail.head == GridCoordinate(0, 0)
        assert trail.tail == GridCoordinate(0, 0)

    def test_body_extends_behind_head(self):
        trail = SegmentTrail(GridCoordinate(5, 5), Direction.RIGHT, length=3)
        assert trail.positions() == [
            GridCoordinate(5, 5), GridCoordinate(4, 5), GridCoordinate(3, 5),
        ]

    def test_minimum_length(self):
        with pytest.raises(ValueError, match="at least 1"):
            SegmentTrail(GridCoordinate(0, 0), length=0)


class TestTrailMovement:
    def test_advance_without_growth(self):
        trail = SegmentTrail(GridCoordinate(0, 0), Direction.DOWN, length=3)
        trail.advance(Direction.DOWN)
        assert trail.positions() == [
            GridCoordinate(0, -1), GridCoordinate(0, 0), GridCoordinate(0, 1),
        ]

    def test_advance_with_growth(self):
        trail = SegmentTrail(GridCoordinate(0, 0))
        trail.advance(Direction.DOWN, grow=1)
        assert trail.positions() == [GridCoordinate(0, -1), GridCoordinate(0, 0)]

    def test_project_flags(self):
        trail = SegmentTrail(GridCoordinate(0, 0), length=3)
        flags = [(s.is_head, s.is_tail) for s in trail.project()]
        assert flags == [(True, False), (False, False), (False, True)]

    def test_single_cell_is_head_and_tail(self):
        (seg,) = SegmentTrail(GridCoordinate(0, 0)).project()
        assert seg.is_head and seg.is_tail


class TestTrailMatchesChain:
    @pytest.mark.parametrize("seed", [7, 11, 42])
    def test_same_projection_every_tick(self, seed):
        rng = np.random.default_rng(seed)
        directions = list(Direction)

        chain = SegmentChain()
        chain.create_head(GridCoordinate(0, 0))
        queue = GrowthQueue()
        trail = SegmentTrail(GridCoordinate(0, 0))

        for _ in range(100):
            direction = directions[int(rng.integers(len(directions)))]
            grow = int(rng.integers(0, 3))

            if grow:
                queue.enqueue_growth(grow)
            chain.propagate(direction)
            queue.drain_and_apply(chain)
            trail.advance(direction, grow=grow)

            assert project(chain) == trail.project()
