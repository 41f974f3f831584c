from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence

from .config import GameConfig
from .events import (
    EVENT_CELLS_CLEARED,
    EVENT_GAME_OVER,
    EVENT_HAND_DEALT,
    EVENT_LEVEL_UP,
    EVENT_NOTICE,
    EVENT_PHASE_CHANGED,
    EVENT_PIECE_PLACED,
    EVENT_PLACEMENT_REJECTED,
    EVENT_SCORE_CHANGED,
    EVENT_SESSION_RESET,
    EventBus,
)
from .grid import GameGrid
from .highscore import HighScoreStore, MemoryHighScoreStore
from .lines import ClearResult, resolve_lines
from .oracle import any_placement_exists
from .placement import apply_placement, can_place
from .rules import ScoringRules
from .shapes import CATALOG, HandSlot, ShapeDef, draw_hand, unlocked_shapes


logger = logging.getLogger(__name__)


class GameMode(Enum):
    CLASSIC = "classic"
    PROGRESSION = "progression"


class Phase(Enum):
    MENU = "menu"
    PLAYING = "playing"
    PAUSED = "paused"
    GAME_OVER = "game_over"
    ALL_LEVELS_COMPLETE = "all_levels_complete"


@dataclass
class MoveOutcome:
    """Result of a single placement attempt"""
    accepted: bool
    reason: str = ""
    placement_score: int = 0
    clear: Optional[ClearResult] = None
    level_up: bool = False
    game_over: bool = False

    @property
    def gained(self) -> int:
        clear_total = self.clear.total if self.clear is not None else 0
        return self.placement_score + clear_total


class Session:
    """Owns one player's board, hand, score and progression.

    All commands run synchronously; every state change is published on
    ``bus`` stamped with the current ``generation``, which increases each
    time the board is reset.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        rules: Optional[ScoringRules] = None,
        bus: Optional[EventBus] = None,
        store: Optional[HighScoreStore] = None,
        catalog: Sequence[ShapeDef] = CATALOG,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.config = (config or GameConfig()).validate()
        self.rules = rules or ScoringRules.from_config(self.config)
        self.bus = bus or EventBus()
        self.store = store if store is not None else MemoryHighScoreStore()
        self.catalog = tuple(catalog)
        self.rng = rng or random.Random(self.config.random_seed)

        self.grid = GameGrid(self.config.grid_size)
        self.hand: List[HandSlot] = []
        self.mode: Optional[GameMode] = None
        self.phase = Phase.MENU
        self.score = 0
        self.high_score = 0
        self.level = 0
        self.generation = 0

    # ------------------------------------------------------------------
    # Read accessors
    # ------------------------------------------------------------------

    @property
    def is_game_over(self) -> bool:
        return self.phase is Phase.GAME_OVER

    @property
    def unlock_level(self) -> int:
        if self.mode is GameMode.PROGRESSION:
            return self.level
        return self.config.classic_unlock_level

    @property
    def level_target(self) -> Optional[int]:
        if self.mode is not GameMode.PROGRESSION:
            return None
        if self.level >= len(self.config.level_targets):
            return None
        return self.config.level_targets[self.level]

    def remaining_shapes(self) -> List[ShapeDef]:
        return [slot.shape for slot in self.hand if not slot.placed]

    def snapshot(self) -> Dict[str, Any]:
        return {
            "grid": self.grid.clone_state(),
            "hand": [
                {"name": slot.shape.name, "mask": slot.shape.mask, "color": slot.shape.color, "placed": slot.placed}
                for slot in self.hand
            ],
            "score": self.score,
            "high_score": self.high_score,
            "level": self.level,
            "level_target": self.level_target,
            "mode": self.mode,
            "phase": self.phase,
            "generation": self.generation,
        }

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def select_mode(self, mode: GameMode) -> None:
        self.mode = GameMode(mode)
        self.level = 0
        if self.mode is GameMode.CLASSIC:
            self.high_score = self.store.load()
        self._start_board("select_mode")
        self._set_phase(Phase.PLAYING)
        self._evaluate_game_over()

    def pause(self) -> bool:
        if self.phase is not Phase.PLAYING:
            return False
        self._set_phase(Phase.PAUSED)
        return True

    def resume(self) -> bool:
        if self.phase is not Phase.PAUSED:
            return False
        self._set_phase(Phase.PLAYING)
        return True

    def restart(self) -> bool:
        """Start the board over; progression mode repeats the current level."""
        if self.phase not in (Phase.PLAYING, Phase.PAUSED, Phase.GAME_OVER):
            return False
        self._start_board("restart")
        self._set_phase(Phase.PLAYING)
        self._evaluate_game_over()
        return True

    def back_to_menu(self) -> None:
        self.generation += 1
        self.grid.reset()
        self.hand = []
        self.score = 0
        self.mode = None
        self._emit(EVENT_SESSION_RESET, reason="menu")
        self._set_phase(Phase.MENU)

    def place(self, slot_index: int, row: int, col: int) -> MoveOutcome:
        if self.phase is not Phase.PLAYING:
            return self._reject(slot_index, row, col, "not_playing", notify=False)
        if not 0 <= slot_index < len(self.hand):
            return self._reject(slot_index, row, col, "no_such_slot")
        slot = self.hand[slot_index]
        if slot.placed:
            return self._reject(slot_index, row, col, "slot_used")
        if not can_place(self.grid, slot.shape, row, col):
            return self._reject(slot_index, row, col, "blocked")

        placement = apply_placement(self.grid, slot.shape, row, col)
        slot.placed = True
        self._emit(EVENT_PIECE_PLACED, slot=slot_index, shape=slot.shape, cells=placement.cells, score=placement.score)

        clear = resolve_lines(self.grid, self.rules)
        outcome = MoveOutcome(accepted=True, placement_score=placement.score, clear=clear)
        self.score += outcome.gained
        if clear:
            self._announce_clear(clear)
        self._emit(EVENT_SCORE_CHANGED, score=self.score, delta=outcome.gained)

        if all(s.placed for s in self.hand):
            self._deal_hand()

        if self.mode is GameMode.PROGRESSION and self._check_level_up():
            outcome.level_up = True
            if self.phase is Phase.ALL_LEVELS_COMPLETE:
                return outcome

        outcome.game_over = self._evaluate_game_over()
        return outcome

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _emit(self, name: str, **payload) -> None:
        self.bus.emit(name, generation=self.generation, **payload)

    def _notice(self, text: str, color: str, duration_ms: Optional[int] = None) -> None:
        if duration_ms is None:
            duration_ms = self.config.notice_ms
        self._emit(EVENT_NOTICE, text=text, color=color, duration_ms=duration_ms)

    def _set_phase(self, phase: Phase) -> None:
        previous = self.phase
        self.phase = phase
        if previous is not phase:
            logger.info("Phase %s -> %s", previous.value, phase.value)
            self._emit(EVENT_PHASE_CHANGED, phase=phase, previous=previous)

    def _start_board(self, reason: str) -> None:
        self.generation += 1
        self.grid.reset()
        self.score = 0
        self._emit(EVENT_SESSION_RESET, reason=reason)
        self._deal_hand()
        self._emit(EVENT_SCORE_CHANGED, score=self.score, delta=0)

    def _deal_hand(self) -> None:
        pool = unlocked_shapes(self.unlock_level, self.catalog)
        self.hand = draw_hand(self.rng, pool, self.config.hand_size)
        self._emit(EVENT_HAND_DEALT, shapes=[slot.shape for slot in self.hand])

    def _reject(self, slot_index: int, row: int, col: int, reason: str, notify: bool = True) -> MoveOutcome:
        logger.debug("Rejected placement of slot %s at (%s, %s): %s", slot_index, row, col, reason)
        self._emit(EVENT_PLACEMENT_REJECTED, slot=slot_index, row=row, col=col, reason=reason)
        if notify:
            self._notice("Invalid placement!", "red", self.config.invalid_notice_ms)
        return MoveOutcome(accepted=False, reason=reason)

    def _announce_clear(self, clear: ClearResult) -> None:
        self._emit(
            EVENT_CELLS_CLEARED,
            cells=list(clear.cells),
            rows_cleared=clear.rows_cleared,
            cols_cleared=clear.cols_cleared,
            combo=clear.combo,
            score=clear.score,
            bonus=clear.bonus,
            duration_ms=self.config.pop_duration_ms,
        )
        if clear.combo > 1:
            self._notice(f"Combo x{clear.combo}! Amazing!", "green")
        else:
            self._notice("Good Clear!", "blue")
        if clear.full_clear:
            self._notice(f"GRID CLEARED! +{clear.bonus} Bonus!", "gold", self.config.full_clear_notice_ms)

    def _check_level_up(self) -> bool:
        target = self.level_target
        if target is None or self.score < target:
            return False
        self.level += 1
        if self.level >= len(self.config.level_targets):
            logger.info("All %d levels complete with score %d", self.level, self.score)
            self._notice("You beat all levels!", "gold", self.config.victory_notice_ms)
            self._set_phase(Phase.ALL_LEVELS_COMPLETE)
            return True
        logger.info("Level up to %d (target %d)", self.level, self.config.level_targets[self.level])
        self._start_board("level_up")
        self._emit(EVENT_LEVEL_UP, level=self.level, target=self.config.level_targets[self.level])
        self._notice(f"Level {self.level + 1}!", "cyan", self.config.level_up_notice_ms)
        return True

    def _evaluate_game_over(self) -> bool:
        if any_placement_exists(self.grid, self.remaining_shapes()):
            return False
        if self.mode is GameMode.CLASSIC and self.score > self.high_score:
            self.high_score = self.score
            self.store.save(self.high_score)
        logger.info("Game over with score %d", self.score)
        self._set_phase(Phase.GAME_OVER)
        self._emit(EVENT_GAME_OVER, score=self.score, high_score=self.high_score)
        return True
