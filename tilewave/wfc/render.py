"""Flatten a collapsed grid into text."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from tilewave.util.grid import Grid
from tilewave.wfc.cell import Cell

UNRESOLVED = "?"


def render(
    grid: Grid[Cell],
    *,
    separator: str = "",
    row_separator: str = "\n",
    formatter: Callable[[Any], str] = str,
) -> str:
    """Join cell values row by row, breaking the line every `grid.width` cells.

    Cells that have not collapsed render as `UNRESOLVED`.
    """
    lines = []
    for row in grid.rows():
        lines.append(
            separator.join(
                formatter(cell.value) if cell.collapsed else UNRESOLVED
                for cell in row
            )
        )
    return row_separator.join(lines)
