from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Tuple

from .errors import PreconditionError
from .grid import GameGrid
from .shapes import ShapeDef


Coordinate = Tuple[int, int]


@dataclass
class PlacementResult:
    cells: List[Coordinate]
    score: int


def _mask_offsets(mask) -> Iterable[Coordinate]:
    if isinstance(mask, ShapeDef):
        return mask.cells()
    return ((dr, dc) for dr, row in enumerate(mask) for dc, cell in enumerate(row) if cell)


def can_place(grid: GameGrid, mask, origin_row: int, origin_col: int) -> bool:
    """Check if a shape mask fits with its top-left corner at (origin_row, origin_col).

    ``mask`` is a ``ShapeDef`` or any row-major 2D sequence/array of 0/1.
    Unset mask cells impose no constraint, so shapes with holes can wrap
    around occupied cells.
    """
    for dr, dc in _mask_offsets(mask):
        row = origin_row + dr
        col = origin_col + dc
        if not grid.is_inside(row, col):
            return False
        if grid.grid[row, col] != 0:
            return False
    return True


def apply_placement(grid: GameGrid, shape: ShapeDef, origin_row: int, origin_col: int) -> PlacementResult:
    """
    Fill the shape's cells with its color token and return the placement score.
    The placement must already be valid; an invalid one leaves the grid
    untouched and raises PreconditionError.
    """
    if not can_place(grid, shape, origin_row, origin_col):
        raise PreconditionError(
            f"Cannot apply {shape.name!r} at ({origin_row}, {origin_col}): placement is not valid"
        )
    cells: List[Coordinate] = []
    for dr, dc in shape.cells():
        row, col = origin_row + dr, origin_col + dc
        grid.fill(row, col, shape.color)
        cells.append((row, col))
    return PlacementResult(cells=cells, score=shape.placement_score)
