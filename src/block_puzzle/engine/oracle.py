from __future__ import annotations

import logging
from typing import Iterator, List, Sequence, Tuple

from .grid import GameGrid
from .placement import can_place
from .shapes import ShapeDef


logger = logging.getLogger(__name__)


def valid_placements(grid: GameGrid, shape: ShapeDef) -> List[Tuple[int, int]]:
    """Get all valid (row, col) origins for a shape"""
    return [
        (row, col)
        for row in range(grid.size)
        for col in range(grid.size)
        if can_place(grid, shape, row, col)
    ]


def iter_valid_moves(grid: GameGrid, shapes: Sequence[ShapeDef]) -> Iterator[Tuple[int, int, int]]:
    """Yield (shape_index, row, col) for every placement that fits"""
    for idx, shape in enumerate(shapes):
        for row, col in valid_placements(grid, shape):
            yield idx, row, col


def any_placement_exists(grid: GameGrid, shapes: Sequence[ShapeDef]) -> bool:
    """Return True if at least one shape fits somewhere on the grid.

    An empty shape list is not a blocker and returns True.
    """
    if not shapes:
        return True
    for shape in shapes:
        for row in range(grid.size):
            for col in range(grid.size):
                if can_place(grid, shape, row, col):
                    logger.debug("Shape %s fits at (%d, %d)", shape.name, row, col)
                    return True
    logger.debug("No placement for any of %s", [s.name for s in shapes])
    return False
