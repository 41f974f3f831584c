from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence, Tuple

import numpy as np

from .errors import CatalogError


Mask = Tuple[Tuple[int, ...], ...]
Offset = Tuple[int, int]

# Board cells are stored as int8
MAX_COLOR_TOKEN = int(np.iinfo(np.int8).max)


# Palette for color tokens; token t renders as COLORS[t - 1]
COLORS: Tuple[str, ...] = (
    "#FF0D72", "#0DC2FF", "#0DFF72", "#F538FF", "#FF8E0D",
    "#FFE138", "#3877FF", "#9E22FF", "#FF00A0", "#00FFFF",
    "#FFD700", "#FF4500", "#C500FF", "#FF005D", "#00FFD8",
)


def color_hex(token: int) -> str:
    """Hex color for a board color token (0 is empty)."""
    if token <= 0 or token > len(COLORS):
        raise KeyError(f"No palette entry for color token {token}")
    return COLORS[token - 1]


@dataclass(frozen=True)
class ShapeDef:
    """Immutable polyomino definition.

    ``mask`` is row-major and rectangular; zero cells are holes and impose no
    placement constraint. ``score_value`` of ``None`` means a placement is
    worth one point per filled cell.
    """
    name: str
    mask: Mask
    color: int
    score_value: Optional[int] = None
    min_level: int = 0
    _offsets: Tuple[Offset, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if not self.mask or not self.mask[0]:
            raise CatalogError(f"Shape {self.name!r} has an empty mask")
        width = len(self.mask[0])
        if any(len(row) != width for row in self.mask):
            raise CatalogError(f"Shape {self.name!r} has a ragged mask")
        if not 0 < self.color <= MAX_COLOR_TOKEN:
            raise CatalogError(f"Shape {self.name!r} color token {self.color} is outside 1..{MAX_COLOR_TOKEN}")
        offsets = tuple(
            (dr, dc)
            for dr, row in enumerate(self.mask)
            for dc, cell in enumerate(row)
            if cell
        )
        if not offsets:
            raise CatalogError(f"Shape {self.name!r} has no filled cells")
        object.__setattr__(self, "_offsets", offsets)

    @property
    def height(self) -> int:
        return len(self.mask)

    @property
    def width(self) -> int:
        return len(self.mask[0])

    @property
    def cell_count(self) -> int:
        return len(self._offsets)

    @property
    def placement_score(self) -> int:
        return self.score_value if self.score_value is not None else self.cell_count

    def cells(self) -> Tuple[Offset, ...]:
        """(row, col) offsets of the filled mask cells"""
        return self._offsets

    def as_array(self) -> np.ndarray:
        return np.array(self.mask, dtype=np.int8)


def _shape(name: str, rows: Sequence[Sequence[int]], color: int, score_value: int, min_level: int) -> ShapeDef:
    return ShapeDef(
        name=name,
        mask=tuple(tuple(int(v) for v in row) for row in rows),
        color=color,
        score_value=score_value,
        min_level=min_level,
    )


CATALOG: Tuple[ShapeDef, ...] = (
    # Level 0
    _shape("1x1", [[1]], 1, 1, 0),
    _shape("1x2", [[1, 1]], 2, 2, 0),
    _shape("2x1", [[1], [1]], 2, 2, 0),
    _shape("1x3", [[1, 1, 1]], 3, 3, 0),
    _shape("3x1", [[1], [1], [1]], 3, 3, 0),
    _shape("2x2", [[1, 1], [1, 1]], 4, 4, 0),
    # Level 1
    _shape("S", [[0, 1, 1], [1, 1, 0]], 5, 4, 1),
    _shape("Z", [[1, 1, 0], [0, 1, 1]], 5, 4, 1),
    _shape("T", [[1, 1, 1], [0, 1, 0]], 6, 4, 1),
    _shape("L", [[1, 0], [1, 0], [1, 1]], 7, 4, 1),
    _shape("J", [[0, 1], [0, 1], [1, 1]], 7, 4, 1),
    # Level 2
    _shape("3x3", [[1, 1, 1], [1, 1, 1], [1, 1, 1]], 8, 9, 2),
    _shape("1x4", [[1, 1, 1, 1]], 10, 4, 2),
    _shape("4x1", [[1], [1], [1], [1]], 10, 4, 2),
    # Level 3
    _shape("U-Shape", [[1, 0, 1], [1, 1, 1]], 13, 15, 3),
    _shape("Plus-Sign", [[0, 1, 0], [1, 1, 1], [0, 1, 0]], 14, 20, 3),
    # Level 4
    _shape("Hollow-Square", [[1, 1, 1, 1], [1, 0, 0, 1], [1, 1, 1, 1]], 15, 30, 4),
    _shape("Big-S", [[0, 1, 1], [1, 1, 0], [0, 1, 1]], 5, 25, 4),
)


def shape_by_name(name: str, catalog: Iterable[ShapeDef] = CATALOG) -> ShapeDef:
    for shape in catalog:
        if shape.name == name:
            return shape
    raise KeyError(f"Unknown shape {name!r}")


def shape_index(shape: ShapeDef, catalog: Sequence[ShapeDef] = CATALOG) -> int:
    """Position of ``shape`` in the catalog, used as a compact piece id"""
    return list(catalog).index(shape)


def unlocked_shapes(level: int, catalog: Iterable[ShapeDef] = CATALOG) -> List[ShapeDef]:
    return [shape for shape in catalog if shape.min_level <= level]


@dataclass
class HandSlot:
    """One piece in the player's hand"""
    shape: ShapeDef
    placed: bool = False


def draw_hand(rng: random.Random, pool: Sequence[ShapeDef], size: int = 3) -> List[HandSlot]:
    """Draw ``size`` shapes independently and uniformly from ``pool``."""
    if not pool:
        raise CatalogError("No shapes are unlocked to draw a hand from")
    return [HandSlot(rng.choice(pool)) for _ in range(size)]
