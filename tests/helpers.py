from __future__ import annotations

from collections.abc import Iterable, Sequence

from tilewave.util.rng import PseudoRandom
from tilewave.wfc.sockets import DIR_OFFSETS, DIRECTIONS, Socket
from tilewave.wfc.tiles import Tile, TileCatalog


class StubRandom(PseudoRandom):
    """PseudoRandom replacement that replays a fixed list of unit draws.

    Each draw returns the next value from `values` (cycling) scaled by `max`.
    """

    def __init__(self, values: Sequence[float] = (0.0,)) -> None:
        self.values = list(values)
        self.index = 0
        super().__init__(1)

    def next_float(self, max: float | None = None) -> float:
        value = self.values[self.index % len(self.values)]
        self.index += 1
        if max is None:
            return value
        return value * max


class UniformStream(StubRandom):
    """Evenly spaced draws (i + 0.5) / n for i in 0..n-1, repeated."""

    def __init__(self, n: int) -> None:
        super().__init__([(i + 0.5) / n for i in range(n)])


def mismatched_tiles() -> list[Tile[str]]:
    """Two tiles where "A" can never have a horizontal neighbor.

    Nothing has a left socket of 1 or a right socket of 2, so an "A" anywhere
    but a 1-wide grid empties its horizontal neighbors. "B" tiles freely.
    """
    return [
        Tile("A", Socket(0, 1, 0, 2)),
        Tile("B", Socket.uniform(3)),
    ]


def assert_grid_consistent(
    catalog: TileCatalog, rows: Iterable[Sequence[int]], wrap: bool = False
) -> None:
    """Every pair of touching tile indices must be allowed by the catalog."""
    grid = [list(row) for row in rows]
    height = len(grid)
    width = len(grid[0])
    for y in range(height):
        for x in range(width):
            for direction in DIRECTIONS:
                dx, dy = DIR_OFFSETS[direction]
                nx, ny = x + dx, y + dy
                if wrap:
                    nx, ny = nx % width, ny % height
                elif not (0 <= nx < width and 0 <= ny < height):
                    continue
                assert catalog.allows(grid[y][x], direction, grid[ny][nx]), (
                    f"Invalid adjacency at ({x},{y})->{direction.name}->({nx},{ny})"
                )
