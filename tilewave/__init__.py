"""Socket-based Wave Function Collapse for small tile catalogs."""

from tilewave.util.grid import Grid, Neighbor
from tilewave.util.rng import PseudoRandom
from tilewave.wfc.cell import Cell
from tilewave.wfc.engine import WaveFunctionCollapse
from tilewave.wfc.errors import (
    BudgetExceeded,
    ConfigurationError,
    GenerationFailed,
    Unsatisfiable,
    WFCContradiction,
    WFCError,
)
from tilewave.wfc.render import render
from tilewave.wfc.sockets import Direction, Socket
from tilewave.wfc.tiles import Tile, TileCatalog

__all__ = [
    "BudgetExceeded",
    "Cell",
    "ConfigurationError",
    "Direction",
    "GenerationFailed",
    "Grid",
    "Neighbor",
    "PseudoRandom",
    "Socket",
    "Tile",
    "TileCatalog",
    "Unsatisfiable",
    "WFCContradiction",
    "WFCError",
    "WaveFunctionCollapse",
    "render",
]
