from __future__ import annotations

from dataclasses import dataclass

from .config import GameConfig


@dataclass
class ScoringRules:
    line_clear_points: int = 10
    full_clear_bonus: int = 500

    @classmethod
    def from_config(cls, config: GameConfig) -> "ScoringRules":
        return cls(line_clear_points=config.line_clear_points, full_clear_bonus=config.full_clear_bonus)

    def score_for_clear(self, cells_cleared: int, combo: int) -> int:
        # Every distinct cell is worth line_clear_points, scaled by combo squared
        if cells_cleared <= 0 or combo <= 0:
            return 0
        return cells_cleared * self.line_clear_points * combo * combo
