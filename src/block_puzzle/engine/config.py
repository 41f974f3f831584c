from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from .errors import CatalogError


@dataclass
class GameConfig:
    """Configuration for the block puzzle rule engine"""
    grid_size: int = 8
    hand_size: int = 3
    # Score targets per progression level; level i is beaten at level_targets[i]
    level_targets: Tuple[int, ...] = (250, 600, 1200, 2000, 3000)
    # Classic mode draws from every shape with min_level <= this
    classic_unlock_level: int = 1
    line_clear_points: int = 10
    full_clear_bonus: int = 500
    pop_duration_ms: int = 300
    # On-screen time per notice kind
    notice_ms: int = 1500
    invalid_notice_ms: int = 1000
    full_clear_notice_ms: int = 2500
    level_up_notice_ms: int = 2000
    victory_notice_ms: int = 5000
    random_seed: Optional[int] = None

    def validate(self) -> "GameConfig":
        if self.grid_size <= 0:
            raise CatalogError(f"grid_size must be positive, got {self.grid_size}")
        if self.hand_size <= 0:
            raise CatalogError(f"hand_size must be positive, got {self.hand_size}")
        if not self.level_targets:
            raise CatalogError("level_targets must not be empty")
        previous = 0
        for target in self.level_targets:
            if target <= previous:
                raise CatalogError(f"level_targets must be positive and increasing: {self.level_targets}")
            previous = target
        durations = (self.pop_duration_ms, self.notice_ms, self.invalid_notice_ms,
                     self.full_clear_notice_ms, self.level_up_notice_ms, self.victory_notice_ms)
        if any(ms <= 0 for ms in durations):
            raise CatalogError("animation and notice durations must be positive")
        return self
