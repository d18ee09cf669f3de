from __future__ import annotations

from collections.abc import Hashable
from typing import TypeAlias

# =============================================================================
# SPATIAL TYPES
# =============================================================================

GridCoord: TypeAlias = int  # Always integer cell position
GridPos: TypeAlias = tuple[GridCoord, GridCoord]  # Example: (5, 3) = column 5, row 3

# Index into the dense row-major cell array: x + y * width
CellIndex: TypeAlias = int

# =============================================================================
# TILE TYPES
# =============================================================================

# Position of a tile in its catalog. Tiles reference each other only by index.
TileIndex: TypeAlias = int

# 0 = up, 1 = right, 2 = down, 3 = left
DirectionIndex: TypeAlias = int

# Connector value on one edge of a tile. Only equality is ever used.
SocketValue: TypeAlias = Hashable

# =============================================================================
# RANDOMNESS
# =============================================================================

# None (or 0) means "draw a fresh seed from system entropy"
RandomSeed: TypeAlias = int | None
