"""Built-in toy tile catalogs for the command-line demo and tests.

Sockets are 1 where a pipe crosses the edge and 0 where it does not, so the
rendered grid is a set of connected box-drawing pipes. All sixteen edge
combinations are present, so the pipe catalog never contradicts itself.
"""

from __future__ import annotations

from tilewave.wfc.sockets import Socket
from tilewave.wfc.tiles import Tile

# value: (up, right, down, left), weight
PIPE_TILES: dict[str, tuple[tuple[int, int, int, int], float]] = {
    " ": ((0, 0, 0, 0), 6.0),
    "─": ((0, 1, 0, 1), 3.0),
    "│": ((1, 0, 1, 0), 3.0),
    "┌": ((0, 1, 1, 0), 1.0),
    "┐": ((0, 0, 1, 1), 1.0),
    "└": ((1, 1, 0, 0), 1.0),
    "┘": ((1, 0, 0, 1), 1.0),
    "├": ((1, 1, 1, 0), 0.5),
    "┤": ((1, 0, 1, 1), 0.5),
    "┬": ((0, 1, 1, 1), 0.5),
    "┴": ((1, 1, 0, 1), 0.5),
    "┼": ((1, 1, 1, 1), 0.25),
    "╵": ((1, 0, 0, 0), 0.1),
    "╶": ((0, 1, 0, 0), 0.1),
    "╷": ((0, 0, 1, 0), 0.1),
    "╴": ((0, 0, 0, 1), 0.1),
}


def pipe_tiles() -> list[Tile[str]]:
    """Box-drawing pipe pieces, weighted towards empty space and straights."""
    return [
        Tile(value, Socket(*sockets), weight)
        for value, (sockets, weight) in PIPE_TILES.items()
    ]


def stripe_tiles() -> list[Tile[str]]:
    """Horizontal bands: rows of '#' and '.' separated by '=' borders.

    Tiles only connect to themselves sideways, so every row is uniform.
    """
    return [
        Tile("#", Socket("solid", "#", "solid", "#")),
        Tile("=", Socket("solid", "=", "open", "=")),
        Tile(".", Socket("open", ".", "open", "."), weight=2.0),
    ]


CATALOGS = {
    "pipes": pipe_tiles,
    "stripes": stripe_tiles,
}
