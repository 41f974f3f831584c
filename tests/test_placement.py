import numpy as np
import pytest

from block_puzzle.engine import GameGrid, PreconditionError, apply_placement, can_place, shape_by_name
from tests.helpers import DOMINO, grid_from_rows, make_shape


def test_can_place_on_empty_grid_respects_bounds():
    grid = GameGrid(8)
    bar = shape_by_name("1x3")
    assert can_place(grid, bar, 0, 5)
    assert not can_place(grid, bar, 0, 6)
    assert not can_place(grid, bar, -1, 0)
    assert not can_place(grid, bar, 8, 0)


def test_can_place_rejects_overlap():
    grid = GameGrid(8)
    grid.fill(3, 4, 1)
    assert not can_place(grid, DOMINO, 3, 3)
    assert not can_place(grid, DOMINO, 3, 4)
    assert can_place(grid, DOMINO, 3, 5)


def test_mask_holes_impose_no_constraint():
    grid = GameGrid(8)
    grid.fill(2, 2, 1)
    grid.fill(2, 3, 1)
    hollow = shape_by_name("Hollow-Square")
    # The 2x2 hole sits over the filled cells
    assert can_place(grid, hollow, 1, 1)
    assert not can_place(grid, hollow, 1, 0)


def test_out_of_bounds_hole_does_not_block():
    grid = GameGrid(8)
    # The unset third cell lands past the right edge
    tee = make_shape("tee", [[1, 1, 0]])
    assert can_place(grid, tee, 0, 6)


def test_can_place_accepts_plain_masks():
    grid = GameGrid(8)
    grid.fill(0, 1, 1)
    assert not can_place(grid, [[1, 1]], 0, 0)
    assert not can_place(grid, np.array([[1, 0], [1, 1]]), 0, 1)
    assert can_place(grid, np.array([[1, 0], [1, 1]]), 1, 0)


def test_apply_fills_cells_and_scores():
    grid = GameGrid(8)
    tee = shape_by_name("T")
    result = apply_placement(grid, tee, 4, 2)
    assert sorted(result.cells) == [(4, 2), (4, 3), (4, 4), (5, 3)]
    assert result.score == tee.score_value == 4
    assert all(grid.color_at(r, c) == tee.color for r, c in result.cells)
    assert grid.filled_count() == 4


def test_apply_then_same_placement_is_invalid():
    grid = GameGrid(8)
    for name in ("1x1", "2x2", "Plus-Sign", "Hollow-Square"):
        shape = shape_by_name(name)
        apply_placement(grid, shape, 2, 2)
        assert not can_place(grid, shape, 2, 2)
        grid.reset()


def test_apply_without_score_value_counts_cells():
    grid = GameGrid(8)
    result = apply_placement(grid, DOMINO, 7, 6)
    assert result.score == 2


def test_apply_invalid_placement_raises_and_leaves_grid_untouched():
    grid = grid_from_rows([
        "........",
        "........",
        "........",
        "...#....",
        "........",
        "........",
        "........",
        "........",
    ])
    before = grid.clone_state()
    with pytest.raises(PreconditionError):
        apply_placement(grid, shape_by_name("2x2"), 2, 2)
    with pytest.raises(PreconditionError):
        apply_placement(grid, shape_by_name("1x3"), 0, 7)
    assert np.array_equal(grid.grid, before)
