"""Growth request buffering."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from snake_chain.chain import SegmentChain

logger = logging.getLogger(__name__)


class GrowthQueue:
    """Counts growth requests between ticks and applies them to a chain.

    Requests carry no payload, so the queue only tracks how many are
    outstanding.
    """

    def __init__(self) -> None:
        self._pending = 0

    @property
    def pending(self) -> int:
        """Number of requests waiting for the next drain."""
        return self._pending

    def enqueue_growth(self, count: int = 1) -> None:
        """Queue *count* growth requests."""
        if count < 1:
            raise ValueError("Growth count must be at least 1.")
        self._pending += count

    def drain_and_apply(self, chain: SegmentChain) -> list[int]:
        """Append one tail segment per queued request.

        Each new segment sits behind the tail it extends and shares its
        facing, so later requests in the same drain build on earlier ones.
        Returns the handles of the new segments in creation order.
        """
        added: list[int] = []
        while self._pending > 0:
            tail_handle = chain.find_tail()
            tail = chain.segment(tail_handle)
            added.append(
                chain.append_to_tail(
                    tail.position.behind(tail.direction),
                    tail.direction,
                    tail_handle,
                )
            )
            self._pending -= 1

        if added:
            logger.debug(
                "Grew chain by %d segment(s) to length %d.", len(added), len(chain),
            )
        return added
