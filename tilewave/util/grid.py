"""Fixed-size 2D container with optional toroidal wraparound.

Items live in a dense row-major list (`index = x + y * width`). Traversal
helpers always walk rows top to bottom and cells left to right; the engine
relies on that order when it hands out tie-breaking noise.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator
from typing import Generic, NamedTuple, TypeVar

from tilewave.types import CellIndex, DirectionIndex, GridCoord, GridPos
from tilewave.wfc.errors import ConfigurationError
from tilewave.wfc.sockets import DIR_OFFSETS, DIRECTIONS, OPPOSITE_DIR

V = TypeVar("V")
R = TypeVar("R")
A = TypeVar("A")


class Neighbor(NamedTuple):
    """An in-bounds (or wrapped) cell next to some other cell."""

    x: GridCoord
    y: GridCoord
    index: CellIndex
    direction: DirectionIndex  # From the origin cell towards this one
    opposite_direction: DirectionIndex  # From this one back to the origin


class Grid(Generic[V]):
    """Dense width x height grid of items.

    Out-of-bounds reads return None and out-of-bounds writes are ignored,
    unless `wrap` is set, in which case coordinates are taken modulo the
    grid dimensions.
    """

    def __init__(
        self,
        width: int,
        height: int,
        wrap: bool = False,
        fill: V | None = None,
    ) -> None:
        if width <= 0 or height <= 0:
            raise ConfigurationError(
                f"Grid dimensions must be positive, got {width}x{height}"
            )
        self.width = width
        self.height = height
        self.wrap = wrap
        self.items: list[V | None] = [fill] * (width * height)

    @classmethod
    def of(
        cls, width: int, height: int, items: Iterable[V], wrap: bool = False
    ) -> Grid[V]:
        """Build a grid from row-major items. Extra items are ignored."""
        grid: Grid[V] = cls(width, height, wrap)
        for index, value in enumerate(items):
            if index >= grid.size:
                break
            grid.items[index] = value
        return grid

    @property
    def size(self) -> int:
        return self.width * self.height

    def __len__(self) -> int:
        return self.size

    def __iter__(self) -> Iterator[V | None]:
        return iter(self.items)

    def __repr__(self) -> str:
        return f"Grid({self.width}x{self.height}, wrap={self.wrap})"

    # -------------------------------------------------------------------------
    # Addressing
    # -------------------------------------------------------------------------

    def in_bounds(self, x: GridCoord, y: GridCoord) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def _resolve(self, x: GridCoord, y: GridCoord) -> GridPos | None:
        """Map coordinates onto the grid, or None if they fall off it."""
        if self.wrap:
            return x % self.width, y % self.height
        if self.in_bounds(x, y):
            return x, y
        return None

    def index_of(self, x: GridCoord, y: GridCoord) -> CellIndex:
        return x + y * self.width

    def coordinates_of(self, index: CellIndex) -> GridPos:
        return index % self.width, index // self.width

    def get(self, x: GridCoord, y: GridCoord) -> V | None:
        pos = self._resolve(x, y)
        if pos is None:
            return None
        return self.items[self.index_of(*pos)]

    def set(self, x: GridCoord, y: GridCoord, value: V) -> None:
        pos = self._resolve(x, y)
        if pos is not None:
            self.items[self.index_of(*pos)] = value

    def delete(self, x: GridCoord, y: GridCoord) -> None:
        """Empty the slot at (x, y)."""
        pos = self._resolve(x, y)
        if pos is not None:
            self.items[self.index_of(*pos)] = None

    def get_adjacent(self, x: GridCoord, y: GridCoord) -> list[Neighbor]:
        """Neighbors of (x, y) in direction order (up, right, down, left).

        Directions that fall off a non-wrapping grid are left out, so edge
        cells get three neighbors and corner cells two.
        """
        adjacent: list[Neighbor] = []
        for direction in DIRECTIONS:
            dx, dy = DIR_OFFSETS[direction]
            pos = self._resolve(x + dx, y + dy)
            if pos is None:
                continue
            nx, ny = pos
            adjacent.append(
                Neighbor(
                    nx,
                    ny,
                    self.index_of(nx, ny),
                    int(direction),
                    int(OPPOSITE_DIR[direction]),
                )
            )
        return adjacent

    # -------------------------------------------------------------------------
    # Row-major traversal
    # -------------------------------------------------------------------------

    def positions(self) -> Iterator[GridPos]:
        for y in range(self.height):
            for x in range(self.width):
                yield x, y

    def for_each(self, fn: Callable[[V | None, GridCoord, GridCoord], object]) -> None:
        for index, value in enumerate(self.items):
            x, y = self.coordinates_of(index)
            fn(value, x, y)

    def map(self, fn: Callable[[V | None, GridCoord, GridCoord], R]) -> Grid[R]:
        """Return a new grid of the same shape holding `fn(value, x, y)`."""
        mapped = (
            fn(value, *self.coordinates_of(index))
            for index, value in enumerate(self.items)
        )
        return Grid.of(self.width, self.height, mapped, wrap=self.wrap)

    def map_self(self, fn: Callable[[V | None, GridCoord, GridCoord], V]) -> None:
        """Replace every item in place with `fn(value, x, y)`."""
        self.items = [
            fn(value, *self.coordinates_of(index))
            for index, value in enumerate(self.items)
        ]

    def reduce(
        self, fn: Callable[[A, V | None, GridCoord, GridCoord], A], initial: A
    ) -> A:
        accumulator = initial
        for index, value in enumerate(self.items):
            x, y = self.coordinates_of(index)
            accumulator = fn(accumulator, value, x, y)
        return accumulator

    def rows(self) -> list[list[V | None]]:
        return [
            self.items[y * self.width : (y + 1) * self.width]
            for y in range(self.height)
        ]
