"""Deque-backed snake body, an alternative to the linked segment chain."""

from __future__ import annotations

from collections import deque

from snake_chain.grid import Direction, GridCoordinate
from snake_chain.render import RenderSegment


class SegmentTrail:
    """A snake represented as an ordered deque of (position, facing) cells.

    The head is ``body[0]``; the tail is ``body[-1]``. Moving pushes a new
    head cell and pops the tail, which leaves every follower on the cell and
    facing of the one ahead of it, matching
    :meth:`~snake_chain.chain.SegmentChain.propagate`.
    """

    def __init__(
        self,
        start: GridCoordinate,
        direction: Direction = Direction.DOWN,
        length: int = 1,
    ) -> None:
        if length < 1:
            raise ValueError("Trail length must be at least 1.")
        self.body: deque[tuple[GridCoordinate, Direction]] = deque()
        self.body.append((start, direction))
        self.grow(length - 1)

    def __len__(self) -> int:
        return len(self.body)

    @property
    def head(self) -> GridCoordinate:
        """Return the head coordinate."""
        return self.body[0][0]

    @property
    def tail(self) -> GridCoordinate:
        return self.body[-1][0]

    def grow(self, segments: int = 1) -> None:
        """Append *segments* cells behind the current tail."""
        for _ in range(segments):
            pos, facing = self.body[-1]
            self.body.append((pos.behind(facing), facing))

    def advance(self, direction: Direction, grow: int = 0) -> None:
        """Move one step along *direction*, then grow by *grow* cells."""
        pos, _ = self.body[0]
        self.body.appendleft((pos.in_front(direction), direction))
        self.body.pop()
        self.grow(grow)

    def positions(self) -> list[GridCoordinate]:
        return [pos for pos, _ in self.body]

    def project(self) -> list[RenderSegment]:
        """Render records in head-to-tail order."""
        last = len(self.body) - 1
        return [
            RenderSegment(pos, facing, i == 0, i == last)
            for i, (pos, facing) in enumerate(self.body)
        ]
