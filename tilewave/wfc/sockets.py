"""Directional sockets and the fixed four-direction convention.

A tile carries one socket value per edge. Two tiles may sit side by side when
the socket on the touching edge of one equals the socket on the opposite edge
of the other.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

from tilewave.types import SocketValue


class Direction(IntEnum):
    """Edge directions in clockwise order starting at the top."""

    UP = 0
    RIGHT = 1
    DOWN = 2
    LEFT = 3

    def opposite(self) -> Direction:
        return Direction((self + 2) % 4)


# Direction utilities
DIRECTIONS = tuple(Direction)
OPPOSITE_DIR = {d: d.opposite() for d in DIRECTIONS}
DIR_OFFSETS = {
    Direction.UP: (0, -1),
    Direction.RIGHT: (1, 0),
    Direction.DOWN: (0, 1),
    Direction.LEFT: (-1, 0),
}


@dataclass(frozen=True, slots=True)
class Socket:
    """The four connector values of a tile.

    Values may be of any equality-comparable type: ids, labels, booleans.
    """

    up: SocketValue
    right: SocketValue
    down: SocketValue
    left: SocketValue

    def as_tuple(self) -> tuple[SocketValue, SocketValue, SocketValue, SocketValue]:
        return (self.up, self.right, self.down, self.left)

    @classmethod
    def uniform(cls, value: SocketValue) -> Socket:
        """Socket with the same connector on every edge."""
        return cls(value, value, value, value)

    def __getitem__(self, direction: int) -> SocketValue:
        return self.as_tuple()[Direction(direction)]

    def __iter__(self):
        return iter(self.as_tuple())

    def __len__(self) -> int:
        return len(DIRECTIONS)

    def connects(self, other: Socket, direction: int) -> bool:
        """Whether `other` may sit next to this socket in `direction`."""
        return self[direction] == other[Direction(direction).opposite()]
