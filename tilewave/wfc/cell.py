"""Per-position superposition state.

A cell starts out admitting every tile in the catalog and only ever narrows,
until it either holds exactly one tile (collapsed) or nothing at all (a
contradiction the engine recovers from by rebuilding the grid).
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

import numpy as np

from tilewave.types import GridCoord, TileIndex
from tilewave.wfc.tiles import Tile, TileCatalog


@dataclass(slots=True)
class Cell:
    """Mutable superposition of tiles at one grid position.

    While uncollapsed, `entropy` and `weight_sum` are the sums of the
    catalog's per-tile values over `options` (plus the initial noise until
    the first reduction). Once collapsed, `options` is None, `tile` is set
    and `entropy` is infinite so the cell never wins the lowest-entropy scan.
    """

    x: GridCoord
    y: GridCoord
    options: tuple[TileIndex, ...] | None
    entropy: float
    weight_sum: float
    collapsed: bool = False
    tile: Tile[Any] | None = None
    tile_index: TileIndex | None = None

    @classmethod
    def superposed(
        cls, x: GridCoord, y: GridCoord, catalog: TileCatalog[Any], noise: float = 0.0
    ) -> Cell:
        """A cell admitting every tile, with `noise` added to its entropy."""
        return cls(
            x=x,
            y=y,
            options=tuple(range(len(catalog))),
            entropy=catalog.total_entropy + noise,
            weight_sum=catalog.total_weight,
        )

    @property
    def value(self) -> Any:
        """The payload of the resolved tile."""
        if self.tile is None:
            raise ValueError(f"Cell ({self.x}, {self.y}) has not collapsed yet")
        return self.tile.value

    @property
    def is_contradiction(self) -> bool:
        return not self.collapsed and not self.options

    def restrict(self, allowed: np.ndarray, catalog: TileCatalog[Any]) -> bool:
        """Drop every option not set in the boolean mask `allowed`.

        Recomputes the aggregates when the set shrinks. An empty result is
        stored as-is; the caller decides what a contradiction means.

        Returns:
            True if any option was removed.
        """
        if self.options is None:
            return False
        remaining = tuple(i for i in self.options if allowed[i])
        if len(remaining) == len(self.options):
            return False
        self.set_options(remaining, catalog)
        return True

    def set_options(
        self, options: Sequence[TileIndex], catalog: TileCatalog[Any]
    ) -> None:
        self.options = tuple(options)
        self.entropy = catalog.entropy_of(self.options)
        self.weight_sum = catalog.weight_of(self.options)

    def collapse_to(self, index: TileIndex, catalog: TileCatalog[Any]) -> None:
        """Resolve the cell to the tile at catalog `index`."""
        self.tile = catalog[index]
        self.tile_index = index
        self.options = None
        self.collapsed = True
        self.entropy = math.inf
        self.weight_sum = self.tile.weight

    def __repr__(self) -> str:
        if self.collapsed:
            return f"Cell(({self.x}, {self.y}), value={self.value!r})"
        return f"Cell(({self.x}, {self.y}), options={self.options}, entropy={self.entropy:.4f})"
