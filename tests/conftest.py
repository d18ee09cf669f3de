from __future__ import annotations

import pytest

from tilewave.demo import pipe_tiles
from tilewave.wfc.tiles import TileCatalog

from tests.helpers import mismatched_tiles


@pytest.fixture
def pipes() -> TileCatalog[str]:
    """The 16-piece pipe catalog. Every edge combination exists."""
    return TileCatalog(pipe_tiles())


@pytest.fixture
def mismatched() -> TileCatalog[str]:
    return TileCatalog(mismatched_tiles())
