from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Set, Tuple

from .grid import GameGrid
from .rules import ScoringRules


@dataclass(frozen=True)
class ClearedCell:
    row: int
    col: int
    color: int


@dataclass
class ClearResult:
    cells: List[ClearedCell] = field(default_factory=list)
    rows: List[int] = field(default_factory=list)
    cols: List[int] = field(default_factory=list)
    score: int = 0
    bonus: int = 0

    @property
    def rows_cleared(self) -> int:
        return len(self.rows)

    @property
    def cols_cleared(self) -> int:
        return len(self.cols)

    @property
    def combo(self) -> int:
        return self.rows_cleared + self.cols_cleared

    @property
    def full_clear(self) -> bool:
        return self.bonus > 0

    @property
    def total(self) -> int:
        return self.score + self.bonus

    def __bool__(self) -> bool:
        return bool(self.cells)


def resolve_lines(grid: GameGrid, rules: Optional[ScoringRules] = None) -> ClearResult:
    """
    Clear complete rows and columns in one step.

    A cell on both a full row and a full column is cleared (and scored) once,
    while the combo counts every full line. Colors are captured before the
    cells are emptied so the renderer can animate them.
    """
    rules = rules or ScoringRules()
    rows = grid.full_rows()
    cols = grid.full_cols()
    if not rows and not cols:
        return ClearResult()

    to_clear: Set[Tuple[int, int]] = set()
    for row in rows:
        to_clear.update((row, col) for col in range(grid.size))
    for col in cols:
        to_clear.update((row, col) for row in range(grid.size))

    cells = [ClearedCell(r, c, grid.color_at(r, c)) for r, c in sorted(to_clear)]
    for cell in cells:
        grid.clear(cell.row, cell.col)

    result = ClearResult(cells=cells, rows=rows, cols=cols)
    result.score = rules.score_for_clear(len(cells), result.combo)
    if grid.is_empty():
        result.bonus = rules.full_clear_bonus
    return result
