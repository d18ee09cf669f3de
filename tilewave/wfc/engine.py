"""Socket-based Wave Function Collapse engine.

The engine fills a width x height grid with tiles from a catalog so that every
pair of touching tiles agrees on the socket along their shared edge.

Usage:
    from tilewave import Socket, Tile, WaveFunctionCollapse

    tiles = [
        Tile("─", Socket(0, 1, 0, 1)),
        Tile("│", Socket(1, 0, 1, 0)),
        Tile(" ", Socket.uniform(0), weight=4.0),
    ]
    engine = WaveFunctionCollapse(16, 8, tiles, seed=1234)
    grid = engine.run()
    rows = engine.values()  # row-major payloads

The algorithm:
    1. Start with every cell admitting every tile. Each cell's entropy gets a
       tiny amount of seeded noise so no two cells tie exactly.
    2. Pick the uncollapsed cell with the lowest entropy.
    3. Collapse it to one of its admissible tiles, weighted by tile weight.
    4. Propagate: narrow the neighbors of every collapsed cell to tiles its
       sockets allow, collapsing neighbors left with a single option and
       re-examining their neighbors in turn (LIFO stack).
    5. Repeat until every cell is collapsed.

If propagation empties a cell, or two collapsed neighbors disagree on a
socket, the whole grid is thrown away and rebuilt from the catalog. There is
no backtracking. The same seed, catalog and dimensions always reproduce the
same grid and the same number of restarts. Restarts are bounded by
`max_restarts` and `time_budget` so hard catalogs fail loudly instead of
spinning forever.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Iterable
from typing import Any, Generic, TypeVar

from tilewave import config
from tilewave.types import GridCoord, GridPos, RandomSeed
from tilewave.util.grid import Grid
from tilewave.util.rng import PseudoRandom
from tilewave.wfc.cell import Cell
from tilewave.wfc.errors import (
    BudgetExceeded,
    ConfigurationError,
    GenerationFailed,
    Unsatisfiable,
    WFCContradiction,
)
from tilewave.wfc.sockets import Direction
from tilewave.wfc.tiles import Tile, TileCatalog

T = TypeVar("T")

logger = logging.getLogger(__name__)


class WaveFunctionCollapse(Generic[T]):
    """Collapse/propagate loop over a grid of `Cell`s with full-grid restarts.

    The engine owns its grid and its `PseudoRandom`. The tile catalog is
    read-only and may be shared between engines.
    """

    def __init__(
        self,
        width: int,
        height: int,
        tiles: TileCatalog[T] | Iterable[Tile[T]],
        seed: RandomSeed = None,
        *,
        wrap: bool = False,
        rng: PseudoRandom | None = None,
        max_restarts: int | None = config.MAX_RESTARTS,
        time_budget: float | None = config.TIME_BUDGET_SECONDS,
        on_restart: Callable[[WFCContradiction], None] | None = None,
    ):
        """Initialize the engine and build the first empty grid.

        Args:
            width: Grid width in cells.
            height: Grid height in cells.
            tiles: A compiled `TileCatalog` or any iterable of `Tile`s.
            seed: Initial PRNG seed. A falsy seed draws one from system
                entropy. None leaves a supplied `rng` untouched, or seeds a
                fresh `PseudoRandom` from `config.RANDOM_SEED`.
            wrap: Treat the grid as a torus when looking up neighbors.
            rng: Generator to use instead of a fresh `PseudoRandom`.
            max_restarts: Restarts allowed per `run()`. None = unbounded.
            time_budget: Seconds allowed per `run()`. None = unbounded.
            on_restart: Called with the contradiction before each restart.

        Raises:
            ConfigurationError: For an empty catalog, a non-positive weight,
                a zero-area grid or a negative budget.
        """
        if width <= 0 or height <= 0:
            raise ConfigurationError(
                f"Grid dimensions must be positive, got {width}x{height}"
            )
        if max_restarts is not None and max_restarts < 0:
            raise ConfigurationError(f"max_restarts must be >= 0, got {max_restarts}")
        if time_budget is not None and time_budget <= 0:
            raise ConfigurationError(f"time_budget must be > 0, got {time_budget}")

        self.width = width
        self.height = height
        self.wrap = wrap
        self.catalog: TileCatalog[T] = (
            tiles if isinstance(tiles, TileCatalog) else TileCatalog(tiles)
        )

        if rng is None:
            rng = PseudoRandom(config.RANDOM_SEED if seed is None else seed)
        elif seed is not None:
            rng.set_seed(seed)
        self.rng = rng
        # Starting point of the current stream, for replaying a run
        self.seed = rng.seed

        self.max_restarts = max_restarts
        self.time_budget = time_budget
        self.on_restart = on_restart

        self.restart_count = 0
        self._deadline: float | None = None
        self.grid: Grid[Cell] = self.generate_empty_grid()

    # -------------------------------------------------------------------------
    # Initialization
    # -------------------------------------------------------------------------

    def generate_empty_grid(self) -> Grid[Cell]:
        """Build a grid where every cell admits every tile.

        Noise is drawn in row-major order from the shared generator, so the
        grid depends only on the generator's state.
        """
        grid: Grid[Cell] = Grid(self.width, self.height, self.wrap)
        for x, y in grid.positions():
            noise = self.rng.next_float(config.ENTROPY_NOISE_EPSILON)
            grid.set(x, y, Cell.superposed(x, y, self.catalog, noise))
        return grid

    # -------------------------------------------------------------------------
    # Observation
    # -------------------------------------------------------------------------

    def get_lowest_entropy_coordinates(self) -> GridPos | None:
        """Coordinates of the least certain uncollapsed cell.

        The first strictly smaller entropy in row-major order wins. Returns
        None when no cell has a finite entropy, which includes a fully
        collapsed grid.
        """
        lowest = float("inf")
        coordinates: GridPos | None = None
        for cell in self.grid.items:
            if cell.entropy < lowest:
                lowest = cell.entropy
                coordinates = (cell.x, cell.y)
        return coordinates

    def collapse_coordinates(self, x: GridCoord, y: GridCoord) -> bool:
        """Collapse the cell at (x, y) by weighted choice, then propagate.

        Returns:
            False if propagation hit a contradiction and the grid was rebuilt.
        """
        cell = self.grid.get(x, y)
        if cell is None or cell.collapsed:
            return True
        if not cell.options:
            self._restart(WFCContradiction(f"No options left at ({x}, {y})", (x, y)))
            return False

        # Cumulative-weight sampling over the options in catalog order
        r = self.rng.next_float(cell.weight_sum)
        chosen = cell.options[-1]
        for index in cell.options:
            r -= self.catalog.weights[index]
            if r < 0:
                chosen = index
                break

        cell.collapse_to(chosen, self.catalog)
        return self.propagate(x, y)

    # -------------------------------------------------------------------------
    # Propagation
    # -------------------------------------------------------------------------

    def propagate(self, x: GridCoord, y: GridCoord) -> bool:
        """Push the consequences of a collapse at (x, y) out to the grid.

        Returns:
            False if a contradiction was found and the grid was rebuilt.
        """
        try:
            self._propagate(x, y)
        except WFCContradiction as exc:
            self._restart(exc)
            return False
        return True

    def _propagate(self, start_x: GridCoord, start_y: GridCoord) -> None:
        """Narrow neighbors of collapsed cells until nothing changes.

        Uses the catalog's precompiled adjacency rows, never raw sockets.

        Raises:
            WFCContradiction: If a neighbor loses its last option, or two
                collapsed neighbors cannot touch.
        """
        catalog = self.catalog
        cells = self.grid.items
        stack = [(start_x, start_y)]

        while stack:
            x, y = stack.pop()
            current = self.grid.get(x, y)
            if not current.collapsed:
                continue

            for neighbor in self.grid.get_adjacent(x, y):
                other = cells[neighbor.index]

                if other.collapsed:
                    if not catalog.allows(
                        current.tile_index, neighbor.direction, other.tile_index
                    ):
                        raise WFCContradiction(
                            f"Collapsed cells ({x}, {y}) and "
                            f"({neighbor.x}, {neighbor.y}) disagree on their "
                            f"{Direction(neighbor.direction).name} socket",
                            (neighbor.x, neighbor.y),
                        )
                    continue

                allowed = catalog.adjacency[neighbor.direction, current.tile_index]
                if not other.restrict(allowed, catalog):
                    continue

                if not other.options:
                    raise WFCContradiction(
                        f"No valid tiles at ({neighbor.x}, {neighbor.y}) "
                        f"after propagation from ({x}, {y})",
                        (neighbor.x, neighbor.y),
                    )
                if len(other.options) == 1:
                    other.collapse_to(other.options[0], catalog)

                stack.append((neighbor.x, neighbor.y))

    # -------------------------------------------------------------------------
    # Run loop and recovery
    # -------------------------------------------------------------------------

    def is_collapsed(self) -> bool:
        """Whether every cell is collapsed.

        A cell found with no options left triggers a restart, and the
        fresh grid is reported as not collapsed.
        """
        done = True
        for cell in self.grid.items:
            if cell.is_contradiction:
                self._restart(
                    WFCContradiction(
                        f"No options left at ({cell.x}, {cell.y})", (cell.x, cell.y)
                    )
                )
                return False
            if not cell.collapsed:
                done = False
        return done

    def run(self, seed: RandomSeed = None) -> Grid[Cell]:
        """Collapse the whole grid and return it.

        Args:
            seed: If given, reseed the generator and start from a fresh grid.

        Raises:
            Unsatisfiable: If the catalog has no legal pair of tiles along an
                axis the grid extends in.
            BudgetExceeded: If `max_restarts` or `time_budget` runs out.
            GenerationFailed: If uncollapsed cells remain but none has a
                comparable entropy.
        """
        self._check_satisfiable()

        if seed is not None:
            self.seed = self.rng.set_seed(seed)
            self.grid = self.generate_empty_grid()

        self.restart_count = 0
        self._deadline = (
            time.perf_counter() + self.time_budget
            if self.time_budget is not None
            else None
        )
        try:
            while not self.is_collapsed():
                self._check_deadline()
                coordinates = self.get_lowest_entropy_coordinates()
                if coordinates is None:
                    logger.warning(
                        f"No selectable cell in an uncollapsed {self.width}x"
                        f"{self.height} grid"
                    )
                    raise GenerationFailed(
                        "Grid is not collapsed but no cell can be selected",
                        self.restart_count,
                    )
                self.collapse_coordinates(*coordinates)
        finally:
            self._deadline = None

        logger.info(
            f"Collapsed {self.width}x{self.height} grid with "
            f"{self.restart_count} restart(s)"
        )
        return self.grid

    def values(self) -> list[list[T]]:
        """Row-major payloads of the collapsed grid."""
        return [[cell.value for cell in row] for row in self.grid.rows()]

    def _check_satisfiable(self) -> None:
        spans_x = self.width > 1 or self.wrap
        spans_y = self.height > 1 or self.wrap
        if spans_x and not self.catalog.has_pairs(Direction.RIGHT):
            raise Unsatisfiable(
                "No two tiles can sit side by side horizontally "
                f"on a {self.width}x{self.height} grid"
            )
        if spans_y and not self.catalog.has_pairs(Direction.DOWN):
            raise Unsatisfiable(
                "No two tiles can sit on top of each other "
                f"on a {self.width}x{self.height} grid"
            )

    def _check_deadline(self) -> None:
        if self._deadline is not None and time.perf_counter() > self._deadline:
            logger.warning(
                f"Gave up after {self.time_budget}s and {self.restart_count} restart(s)"
            )
            raise BudgetExceeded(
                f"Time budget of {self.time_budget}s exceeded", self.restart_count
            )

    def _restart(self, cause: WFCContradiction) -> None:
        """Discard the grid and rebuild it, continuing the same random stream."""
        self.restart_count += 1
        logger.debug(f"Restart {self.restart_count}: {cause}")

        if self.on_restart is not None:
            self.on_restart(cause)

        if self.max_restarts is not None and self.restart_count > self.max_restarts:
            logger.warning(f"Gave up after {self.max_restarts} restart(s)")
            raise BudgetExceeded(
                f"Exceeded {self.max_restarts} restart(s)", self.restart_count
            ) from cause

        self._check_deadline()
        self.grid = self.generate_empty_grid()

    def __repr__(self) -> str:
        return (
            f"WaveFunctionCollapse({self.width}x{self.height}, "
            f"{len(self.catalog)} tiles, wrap={self.wrap}, seed={self.seed})"
        )


def collapse(
    width: int,
    height: int,
    tiles: TileCatalog[Any] | Iterable[Tile[Any]],
    seed: RandomSeed = None,
    **kwargs: Any,
) -> list[list[Any]]:
    """One-shot helper: run an engine and return the row-major payloads."""
    engine = WaveFunctionCollapse(width, height, tiles, seed, **kwargs)
    engine.run()
    return engine.values()
