"""Render projection handed to an external renderer."""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

import numpy as np

from snake_chain.grid import Direction, GridCoordinate

DEFAULT_CELL_SIZE = 15.0

# Rotation about the screen z axis for a sprite that points down at rest.
_ROTATIONS: dict[Direction, float] = {
    Direction.DOWN: 0.0,
    Direction.UP: math.pi,
    Direction.LEFT: math.pi * 1.5,
    Direction.RIGHT: math.pi * 0.5,
}

BODY_COLOR = (0.0, 1.0, 0.0)
TAIL_COLOR = (1.0, 1.0, 0.0)


@dataclass(frozen=True)
class RenderSegment:
    """What a renderer needs to draw one segment."""

    position: GridCoordinate
    facing: Direction
    is_head: bool
    is_tail: bool

    def to_dict(self) -> dict:
        return {
            "position": self.position.to_list(),
            "facing": self.facing.name.lower(),
            "is_head": self.is_head,
            "is_tail": self.is_tail,
        }


def project(segments: Iterable) -> list[RenderSegment]:
    """Build render records from head-to-tail ordered segments.

    Accepts anything yielding objects with ``position``, ``direction``,
    ``is_head`` and ``is_tail`` attributes, such as a
    :class:`~snake_chain.chain.SegmentChain`.
    """
    return [
        RenderSegment(s.position, s.direction, s.is_head, s.is_tail)
        for s in segments
    ]


def rotation_for(direction: Direction) -> float:
    """Return the sprite rotation in radians for a facing."""
    return _ROTATIONS[direction]


def to_screen(
    segments: Sequence[RenderSegment],
    cell_size: float = DEFAULT_CELL_SIZE,
) -> np.ndarray:
    """Map segments to an ``(n, 3)`` array of ``(x, y, rotation)`` rows."""
    if cell_size <= 0:
        raise ValueError("cell_size must be positive.")
    out = np.zeros((len(segments), 3), dtype=np.float64)
    if not segments:
        return out
    out[:, 0] = [s.position.x for s in segments]
    out[:, 1] = [s.position.y for s in segments]
    out[:, :2] *= cell_size
    out[:, 2] = [_ROTATIONS[s.facing] for s in segments]
    return out


def segment_color(segment: RenderSegment) -> tuple[float, float, float]:
    """RGB colour for a segment; the tail is highlighted."""
    return TAIL_COLOR if segment.is_tail else BODY_COLOR
