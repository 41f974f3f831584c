from block_puzzle.engine import (
    CATALOG,
    GameGrid,
    any_placement_exists,
    can_place,
    iter_valid_moves,
    shape_by_name,
    valid_placements,
)
from tests.helpers import DOMINO, MONO, full_grid


def test_empty_board_is_never_game_over():
    grid = GameGrid(8)
    for shape in CATALOG:
        assert any_placement_exists(grid, [shape])
    assert any_placement_exists(grid, list(CATALOG))


def test_single_isolated_hole_blocks_two_cell_piece():
    grid = full_grid()
    grid.clear(4, 4)
    assert not any_placement_exists(grid, [DOMINO, shape_by_name("2x1")])
    assert any_placement_exists(grid, [DOMINO, MONO])


def test_empty_hand_does_not_block():
    assert any_placement_exists(full_grid(), [])


def test_oracle_agrees_with_exhaustive_can_place():
    grid = full_grid()
    for r, c in [(0, 0), (0, 1), (3, 5), (4, 5), (5, 5), (7, 2)]:
        grid.clear(r, c)
    for shape in CATALOG:
        expected = any(can_place(grid, shape, r, c) for r in range(8) for c in range(8))
        assert any_placement_exists(grid, [shape]) == expected
    assert any_placement_exists(grid, [shape_by_name("3x1")])
    assert not any_placement_exists(grid, [shape_by_name("2x2")])


def test_valid_placement_enumeration():
    grid = GameGrid(8)
    assert len(valid_placements(grid, MONO)) == 64
    assert len(valid_placements(grid, shape_by_name("2x2"))) == 49
    assert len(valid_placements(grid, shape_by_name("Hollow-Square"))) == 6 * 5
    moves = list(iter_valid_moves(grid, [MONO, shape_by_name("3x3")]))
    assert sum(1 for idx, _, _ in moves if idx == 1) == 36
    assert moves[0] == (0, 0, 0)
