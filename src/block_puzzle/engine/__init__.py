"""Block Puzzle (8x8) rule engine.

The player places pieces from a 3-piece hand onto a square board; full rows
and columns clear and score. Classic mode plays for a stored high score,
progression mode climbs through score targets that unlock new shapes.
"""

from .config import GameConfig
from .errors import BlockPuzzleError, CatalogError, PreconditionError
from .events import EventBus
from .grid import GameGrid
from .highscore import FileHighScoreStore, HighScoreStore, MemoryHighScoreStore
from .lines import ClearedCell, ClearResult, resolve_lines
from .oracle import any_placement_exists, iter_valid_moves, valid_placements
from .placement import PlacementResult, apply_placement, can_place
from .presentation import NoticeBoard, PopAnimator
from .rules import ScoringRules
from .session import GameMode, MoveOutcome, Phase, Session
from .shapes import CATALOG, COLORS, HandSlot, ShapeDef, draw_hand, shape_by_name, unlocked_shapes

__all__ = [
    "GameConfig",
    "BlockPuzzleError",
    "CatalogError",
    "PreconditionError",
    "EventBus",
    "GameGrid",
    "HighScoreStore",
    "MemoryHighScoreStore",
    "FileHighScoreStore",
    "ClearedCell",
    "ClearResult",
    "resolve_lines",
    "any_placement_exists",
    "iter_valid_moves",
    "valid_placements",
    "PlacementResult",
    "apply_placement",
    "can_place",
    "NoticeBoard",
    "PopAnimator",
    "ScoringRules",
    "GameMode",
    "MoveOutcome",
    "Phase",
    "Session",
    "CATALOG",
    "COLORS",
    "HandSlot",
    "ShapeDef",
    "draw_hand",
    "shape_by_name",
    "unlocked_shapes",
]
