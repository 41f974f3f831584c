from __future__ import annotations

from typing import Sequence

from block_puzzle.engine import GameGrid, ShapeDef

FILL = 9


def grid_from_rows(rows: Sequence[str]) -> GameGrid:
    """Build a grid from strings where '#' is filled and '.' is empty."""
    grid = GameGrid(len(rows))
    for r, line in enumerate(rows):
        assert len(line) == len(rows), "rows must form a square"
        for c, ch in enumerate(line):
            if ch == "#":
                grid.grid[r, c] = FILL
    return grid


def full_grid(size: int = 8) -> GameGrid:
    grid = GameGrid(size)
    grid.grid.fill(FILL)
    return grid


def make_shape(name: str, rows: Sequence[Sequence[int]], color: int = 1, score_value=None, min_level: int = 0) -> ShapeDef:
    return ShapeDef(name, tuple(tuple(row) for row in rows), color, score_value, min_level)


BAR_1x8 = make_shape("1x8", [[1] * 8], color=3)
DOMINO = make_shape("1x2", [[1, 1]], color=2)
MONO = make_shape("1x1", [[1]], color=1)


def checkerboard_with_pair() -> list[str]:
    """Every (r + c) even cell empty, plus (0, 1): row 0 opens with the only horizontal gap."""
    rows = []
    for r in range(8):
        line = "".join("." if (r + c) % 2 == 0 else "#" for c in range(8))
        if r == 0:
            line = line[0] + "." + line[2:]
        rows.append(line)
    return rows
