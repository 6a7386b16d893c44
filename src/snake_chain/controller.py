"""Head steering and keyboard command decoding."""

from __future__ import annotations

import enum
from dataclasses import dataclass

from snake_chain.grid import Direction

GROW_KEY = "space"

KEY_DIRECTIONS: dict[str, Direction] = {
    "w": Direction.UP,
    "s": Direction.DOWN,
    "a": Direction.LEFT,
    "d": Direction.RIGHT,
}


class CommandKind(enum.Enum):
    """What a decoded key asks the simulation to do."""

    STEER = "steer"
    GROW = "grow"


@dataclass(frozen=True)
class KeyCommand:
    """A decoded key press."""

    kind: CommandKind
    direction: Direction | None = None


def parse_key(key: str) -> KeyCommand | None:
    """Decode a key name into a command, or ``None`` if it is unbound."""
    name = key if key == " " else key.strip().lower()
    if name in (GROW_KEY, " "):
        return KeyCommand(CommandKind.GROW)
    direction = KEY_DIRECTIONS.get(name)
    if direction is None:
        return None
    return KeyCommand(CommandKind.STEER, direction)


class HeadController:
    """Holds the direction the head will take on the next tick.

    Commands between ticks only overwrite the pending value; the last one
    wins. Reading it does not clear it, so the head keeps its course until
    steered again. Reversals are not filtered here.
    """

    def __init__(self, initial: Direction = Direction.DOWN) -> None:
        self._pending = initial

    def set_pending_direction(self, direction: Direction) -> None:
        self._pending = direction

    def take_pending_direction(self) -> Direction:
        return self._pending
