"""Tests for the render projection."""

import math

import numpy as np
import pytest

from snake_chain.chain import SegmentChain
from snake_chain.grid import Direction, GridCoordinate
from snake_chain.render import (
    BODY_COLOR,
    TAIL_COLOR,
    RenderSegment,
    project,
    rotation_for,
    segment_color,
    to_screen,
)


@pytest.fixture()
def chain():
    c = SegmentChain()
    head = c.create_head(GridCoordinate(2, 3), Direction.LEFT)
    c.append_to_tail(GridCoordinate(3, 3), Direction.LEFT, head)
    return c


class TestProject:
    def test_flags_and_order(self, chain):
        view = project(chain)
        assert view == [
            RenderSegment(GridCoordinate(2, 3), Direction.LEFT, True, False),
            RenderSegment(GridCoordinate(3, 3), Direction.LEFT, False, True),
        ]

    def test_to_dict(self, chain):
        assert project(chain)[0].to_dict() == {
            "position": [2, 3],
            "facing": "left",
            "is_head": True,
            "is_tail": False,
        }


class TestToScreen:
    def test_shape_and_scale(self, chain):
        out = to_screen(project(chain), cell_size=15.0)
        assert out.shape == (2, 3)
        np.testing.assert_allclose(out[:, :2], [[30.0, 45.0], [45.0, 45.0]])

    def test_rotations(self):
        assert rotation_for(Direction.DOWN) == 0.0
        assert rotation_for(Direction.UP) == pytest.approx(math.pi)
        assert rotation_for(Direction.LEFT) == pytest.approx(1.5 * math.pi)
        assert rotation_for(Direction.RIGHT) == pytest.approx(0.5 * math.pi)

    def test_rotation_column(self, chain):
        out = to_screen(project(chain))
        np.testing.assert_allclose(out[:, 2], [1.5 * math.pi] * 2)

    def test_empty(self):
        assert to_screen([]).shape == (0, 3)

    def test_invalid_cell_size(self, chain):
        with pytest.raises(ValueError, match="positive"):
            to_screen(project(chain), cell_size=0)


class TestColors:
    def test_tail_highlighted(self, chain):
        head, tail = project(chain)
        assert segment_color(head) == BODY_COLOR
        assert segment_color(tail) == TAIL_COLOR
