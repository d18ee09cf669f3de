"""Tile definitions and the compiled tile catalog.

A `Tile` is what the caller supplies: an opaque payload, its four edge
sockets and a selection weight. A `TileCatalog` validates a list of tiles and
compiles, once, the adjacency relation the engine consults during
propagation.

Adjacency is stored two ways:

1. Per-tile index tuples (`Tile.valid_adjacent[direction]`), listing the
   catalog indices of every tile that may sit next to the tile in that
   direction, in catalog order.

2. A dense numpy boolean table `adjacency[direction, tile, candidate]`. Row
   `adjacency[d, i]` is a mask over the whole catalog, so narrowing a
   neighbor's options is a single lookup per option instead of a socket
   comparison.

Both are derived from the same O(T^2 * 4) socket comparison and are never
mutated afterwards, so a catalog can be shared read-only between engines.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass, field, replace
from typing import Generic, TypeVar

import numpy as np

from tilewave.types import DirectionIndex, SocketValue, TileIndex
from tilewave.wfc.errors import ConfigurationError
from tilewave.wfc.sockets import DIRECTIONS, Direction, Socket

T = TypeVar("T")


@dataclass(frozen=True)
class Tile(Generic[T]):
    """One concrete symbol with fixed edge sockets and a selection weight.

    Attributes:
        value: Caller payload. Never inspected by the engine.
        sockets: Edge connectors (up, right, down, left).
        weight: Relative likelihood of being picked (must be > 0).
        valid_adjacent: Filled in by `TileCatalog`. For each direction, the
            catalog indices of tiles allowed next to this one.
        entropy_contribution: Filled in by `TileCatalog`. This tile's share
            of a cell's entropy while it is still admissible.
    """

    value: T
    sockets: Socket
    weight: float = 1.0
    valid_adjacent: tuple[tuple[TileIndex, ...], ...] = field(
        default=(), compare=False, repr=False
    )
    entropy_contribution: float = field(default=0.0, compare=False, repr=False)

    @classmethod
    def of(
        cls,
        value: T,
        sockets: Socket | Sequence[SocketValue],
        weight: float = 1.0,
    ) -> Tile[T]:
        """Build a tile from a `Socket` or any 4-item (up, right, down, left)."""
        if not isinstance(sockets, Socket):
            sockets = _coerce_socket(sockets)
        return cls(value, sockets, weight)

    def can_neighbor(self, other: Tile[T], direction: DirectionIndex) -> bool:
        """Socket test: may `other` sit next to this tile in `direction`?"""
        return self.sockets.connects(other.sockets, direction)


def _coerce_socket(sockets: Sequence[SocketValue]) -> Socket:
    values = tuple(sockets)
    if len(values) != len(DIRECTIONS):
        raise ConfigurationError(
            f"A tile needs exactly {len(DIRECTIONS)} sockets, got {len(values)}"
        )
    return Socket(*values)


class TileCatalog(Generic[T]):
    """Immutable, validated list of tiles with precompiled adjacency.

    Raises:
        ConfigurationError: If the catalog is empty or a weight is not a
            finite positive number.
    """

    def __init__(self, tiles: Iterable[Tile[T]]) -> None:
        raw = list(tiles)
        if not raw:
            raise ConfigurationError("Tile catalog must contain at least one tile")

        for index, tile in enumerate(raw):
            if not isinstance(tile.sockets, Socket):
                raw[index] = tile = replace(tile, sockets=_coerce_socket(tile.sockets))
            if not math.isfinite(tile.weight) or tile.weight <= 0:
                raise ConfigurationError(
                    f"Tile {index} ({tile.value!r}) has weight {tile.weight}; "
                    "weights must be finite and > 0"
                )

        self.weights = np.array([tile.weight for tile in raw], dtype=np.float64)
        self.weights.setflags(write=False)
        self.total_weight = float(self.weights.sum())
        if not math.isfinite(self.total_weight):
            raise ConfigurationError(
                f"Tile weights sum to {self.total_weight}; the total must be finite"
            )

        # -p*log2(p) over the catalog-normalized weight keeps every
        # contribution non-negative whatever scale the weights use.
        probabilities = self.weights / self.total_weight
        self.entropy_contributions = -probabilities * np.log2(probabilities)
        self.entropy_contributions.setflags(write=False)
        self.total_entropy = float(self.entropy_contributions.sum())
        if not math.isfinite(self.total_entropy):
            raise ConfigurationError(
                f"Tile weights give a catalog entropy of {self.total_entropy}"
            )

        self.adjacency = self._compile_adjacency(raw)

        self._tiles: tuple[Tile[T], ...] = tuple(
            replace(
                tile,
                valid_adjacent=tuple(
                    tuple(int(j) for j in np.flatnonzero(self.adjacency[d, i]))
                    for d in DIRECTIONS
                ),
                entropy_contribution=float(self.entropy_contributions[i]),
            )
            for i, tile in enumerate(raw)
        )

    @staticmethod
    def _compile_adjacency(tiles: Sequence[Tile[T]]) -> np.ndarray:
        """Compare every ordered tile pair once per direction.

        Returns a read-only (4, T, T) boolean table where
        `table[d, i, j]` is True iff tile j may sit next to tile i in
        direction d.
        """
        count = len(tiles)
        table = np.zeros((len(DIRECTIONS), count, count), dtype=bool)

        for direction in DIRECTIONS:
            for i, tile in enumerate(tiles):
                for j, candidate in enumerate(tiles):
                    table[direction, i, j] = tile.can_neighbor(candidate, direction)

        table.setflags(write=False)
        return table

    def __len__(self) -> int:
        return len(self._tiles)

    def __getitem__(self, index: TileIndex) -> Tile[T]:
        return self._tiles[index]

    def __iter__(self) -> Iterator[Tile[T]]:
        return iter(self._tiles)

    @property
    def tiles(self) -> tuple[Tile[T], ...]:
        return self._tiles

    def allows(
        self, tile: TileIndex, direction: DirectionIndex, other: TileIndex
    ) -> bool:
        """Whether tile `other` may sit next to tile `tile` in `direction`."""
        return bool(self.adjacency[direction, tile, other])

    def has_pairs(self, direction: DirectionIndex) -> bool:
        """Whether any two tiles (possibly the same one) connect in `direction`."""
        return bool(self.adjacency[direction].any())

    def weight_of(self, options: Sequence[TileIndex]) -> float:
        return float(self.weights[list(options)].sum())

    def entropy_of(self, options: Sequence[TileIndex]) -> float:
        return float(self.entropy_contributions[list(options)].sum())

    def __repr__(self) -> str:
        return f"TileCatalog({len(self)} tiles, directions={[d.name for d in Direction]})"
