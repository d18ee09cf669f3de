"""Exception hierarchy for the Wave Function Collapse engine.

Only configuration problems and exhausted budgets ever reach the caller.
Contradictions are raised and caught inside the engine and turned into
full-grid restarts.
"""

from __future__ import annotations

from tilewave.types import GridPos


class WFCError(Exception):
    """Base class for all tilewave errors."""


class ConfigurationError(WFCError, ValueError):
    """Raised at construction time for input the engine cannot run with.

    Examples are an empty tile catalog, a non-positive tile weight or a grid
    with zero area.
    """


class WFCContradiction(WFCError):
    """Raised when propagation leaves a cell with no admissible tiles.

    Also raised when two collapsed neighbors disagree on their shared socket.
    The engine recovers by discarding the grid and starting over.
    """

    def __init__(self, message: str, position: GridPos | None = None) -> None:
        super().__init__(message)
        self.position = position


class GenerationFailed(WFCError):
    """Raised when a run gives up without producing a collapsed grid."""

    def __init__(self, message: str, restarts: int = 0) -> None:
        super().__init__(message)
        self.restarts = restarts


class BudgetExceeded(GenerationFailed):
    """The restart count or wall-clock budget for a run was exhausted."""


class Unsatisfiable(GenerationFailed):
    """The catalog can be shown up front to have no way of tiling the grid."""
