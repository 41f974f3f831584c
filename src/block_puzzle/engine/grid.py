from __future__ import annotations

from typing import List

import numpy as np

from .errors import PreconditionError


class GameGrid:
    """Square occupancy grid for block placement.

    The grid uses 0 for empty cells and positive integers for filled cells.
    A filled cell's value is the color token of the shape that filled it.
    """

    def __init__(self, size: int = 8) -> None:
        self.size = int(size)
        self.grid = np.zeros((self.size, self.size), dtype=np.int8)

    def reset(self) -> None:
        self.grid.fill(0)

    def is_inside(self, row: int, col: int) -> bool:
        return 0 <= row < self.size and 0 <= col < self.size

    def _check_inside(self, row: int, col: int) -> None:
        if not self.is_inside(row, col):
            raise PreconditionError(f"Cell ({row}, {col}) is outside the {self.size}x{self.size} grid")

    def is_occupied(self, row: int, col: int) -> bool:
        self._check_inside(row, col)
        return bool(self.grid[row, col] != 0)

    def color_at(self, row: int, col: int) -> int:
        self._check_inside(row, col)
        return int(self.grid[row, col])

    def fill(self, row: int, col: int, token: int) -> None:
        if token <= 0:
            raise PreconditionError(f"Color token must be positive, got {token}")
        if self.is_occupied(row, col):
            raise PreconditionError(f"Cell ({row}, {col}) is already occupied")
        self.grid[row, col] = token

    def clear(self, row: int, col: int) -> None:
        self._check_inside(row, col)
        self.grid[row, col] = 0

    def is_empty(self) -> bool:
        return not bool(np.any(self.grid))

    def filled_count(self) -> int:
        return int(np.count_nonzero(self.grid))

    def full_rows(self) -> List[int]:
        return [int(r) for r in np.flatnonzero(np.all(self.grid != 0, axis=1))]

    def full_cols(self) -> List[int]:
        return [int(c) for c in np.flatnonzero(np.all(self.grid != 0, axis=0))]

    def copy(self) -> "GameGrid":
        new_grid = GameGrid(self.size)
        new_grid.grid = self.grid.copy()
        return new_grid

    def clone_state(self) -> np.ndarray:
        return self.grid.copy()

    def to_text(self) -> str:
        return "\n".join("".join("█" if cell else "·" for cell in row) for row in self.grid)
