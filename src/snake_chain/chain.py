"""Arena-backed segment chain and its per-tick propagation."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass

from snake_chain.grid import Direction, GridCoordinate

logger = logging.getLogger(__name__)


class ChainError(RuntimeError):
    """Base class for chain store failures. These are programming errors."""


class ChainPreconditionError(ChainError):
    """A caller violated an operation's precondition."""


class ChainInvariantError(ChainError):
    """The chain topology is corrupt (bad head/tail count, cycle, orphan)."""


@dataclass
class Segment:
    """One body unit. ``parent`` and ``child`` are arena indices, not owners."""

    handle: int
    position: GridCoordinate
    direction: Direction
    parent: int | None = None
    child: int | None = None

    @property
    def is_head(self) -> bool:
        return self.parent is None

    @property
    def is_tail(self) -> bool:
        return self.child is None

    def to_dict(self) -> dict:
        return {
            "handle": self.handle,
            "position": self.position.to_list(),
            "direction": self.direction.name.lower(),
            "parent": self.parent,
            "child": self.child,
        }


class SegmentChain:
    """Owns every segment of one snake in a dense list.

    Handles are list indices and stay stable for the lifetime of the chain
    since segments are never removed. The head is the only parentless
    segment and the tail the only childless one.
    """

    def __init__(self) -> None:
        self._segments: list[Segment] = []
        self._head: int | None = None

    def __len__(self) -> int:
        return len(self._segments)

    def __iter__(self) -> Iterator[Segment]:
        """Yield segments from head to tail."""
        if self._head is None:
            return
        handle: int | None = self._head
        seen = 0
        while handle is not None:
            seen += 1
            if seen > len(self._segments):
                raise ChainInvariantError("Cycle detected while walking the chain.")
            segment = self._segments[handle]
            yield segment
            handle = segment.child

    @property
    def head(self) -> int:
        """Handle of the head segment."""
        if self._head is None:
            raise ChainPreconditionError("Chain has not been created yet.")
        return self._head

    def segment(self, handle: int) -> Segment:
        """Return the segment stored under *handle*."""
        if not 0 <= handle < len(self._segments):
            raise ChainPreconditionError(f"Unknown segment handle {handle}.")
        return self._segments[handle]

    def create_head(
        self,
        position: GridCoordinate,
        direction: Direction = Direction.DOWN,
    ) -> int:
        """Start the chain with a single, unlinked head segment."""
        if self._segments:
            raise ChainPreconditionError("Chain already has a head.")
        self._segments.append(Segment(0, position, direction))
        self._head = 0
        return 0

    def propagate(self, head_direction: Direction) -> None:
        """Advance the head one cell and pull every follower along.

        All follower updates read a snapshot taken before any mutation, so
        each child lands on the cell and facing its parent held before this
        tick, regardless of the order segments are visited in.
        """
        head = self.segment(self.head)
        snapshot = [(s.position, s.direction) for s in self._segments]

        head.position = head.position.in_front(head_direction)
        head.direction = head_direction

        for handle, segment in enumerate(self._segments):
            if segment.child is None:
                continue
            child = self._segments[segment.child]
            child.position, child.direction = snapshot[handle]

    def append_to_tail(
        self,
        new_position: GridCoordinate,
        new_direction: Direction,
        parent: int,
    ) -> int:
        """Attach a new childless segment after *parent*, the current tail."""
        tail = self.find_tail()
        if parent != tail:
            raise ChainPreconditionError(
                f"Cannot append after segment {parent}; current tail is {tail}."
            )
        handle = len(self._segments)
        self._segments.append(
            Segment(handle, new_position, new_direction, parent=parent),
        )
        self._segments[parent].child = handle
        return handle

    def find_head(self) -> int:
        """Scan for the unique parentless segment."""
        return self._find_unique(lambda s: s.parent is None, "parentless")

    def find_tail(self) -> int:
        """Scan for the unique childless segment."""
        return self._find_unique(lambda s: s.child is None, "childless")

    def _find_unique(self, predicate, label: str) -> int:
        if not self._segments:
            raise ChainPreconditionError("Chain has not been created yet.")
        matches = [s.handle for s in self._segments if predicate(s)]
        if len(matches) != 1:
            raise ChainInvariantError(
                f"Expected exactly one {label} segment, found {len(matches)}."
            )
        return matches[0]

    def check_invariants(self) -> None:
        """Verify the topology, raising :class:`ChainInvariantError` if broken."""
        head = self.find_head()
        self.find_tail()
        if head != self._head:
            raise ChainInvariantError(
                f"Cached head {self._head} disagrees with scanned head {head}."
            )

        for segment in self._segments:
            if segment.child is not None:
                if self._segments[segment.child].parent != segment.handle:
                    raise ChainInvariantError(
                        f"Segment {segment.child} does not point back to "
                        f"parent {segment.handle}."
                    )
            if segment.parent is not None:
                if self._segments[segment.parent].child != segment.handle:
                    raise ChainInvariantError(
                        f"Segment {segment.parent} does not point to "
                        f"child {segment.handle}."
                    )

        visited = sum(1 for _ in self)
        if visited != len(self._segments):
            raise ChainInvariantError(
                f"Walk from head reached {visited} of "
                f"{len(self._segments)} segments."
            )

    def positions(self) -> list[GridCoordinate]:
        """Return segment positions in head-to-tail order."""
        return [s.position for s in self]

    def to_dict(self) -> dict:
        """Serialize the chain in head-to-tail order."""
        return {
            "length": len(self),
            "segments": [s.to_dict() for s in self],
        }
