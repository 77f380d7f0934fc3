import numpy as np
import pytest

from blockfall.game import GameGrid, Placement


A, B, C = 1, 2, 3


def make_grid(rows):
    grid = GameGrid(width=len(rows[0]), height=len(rows))
    grid.grid[:] = np.array(rows, dtype=np.int8)
    return grid


def single_cell():
    shape = np.zeros((4, 4), dtype=np.int8)
    shape[0, 0] = A
    return shape


def test_clear_single_full_row_drops_rows_above():
    grid = make_grid([[A, 0], [0, B], [C, C]])
    assert grid.clear_full_rows() == 1
    assert grid.grid.tolist() == [[0, 0], [A, 0], [0, B]]


def test_clear_middle_row_leaves_rows_below_untouched():
    grid = make_grid([[A, 0, 0], [B, B, B], [0, C, 0], [C, 0, C]])
    assert grid.clear_full_rows() == 1
    assert grid.grid.tolist() == [[0, 0, 0], [A, 0, 0], [0, C, 0], [C, 0, C]]


def test_clear_non_adjacent_full_rows_in_one_pass():
    grid = make_grid([[A, A], [0, B], [C, C]])
    assert grid.clear_full_rows() == 2
    assert grid.grid.tolist() == [[0, 0], [0, 0], [0, B]]


def test_clear_stacked_full_rows():
    grid = make_grid([[0, A], [B, B], [C, C], [A, 0]])
    assert grid.clear_full_rows() == 2
    assert grid.grid.tolist() == [[0, 0], [0, 0], [0, A], [A, 0]]


def test_clear_without_full_rows_is_identity():
    rows = [[A, 0], [0, B], [C, 0]]
    grid = make_grid(rows)
    assert grid.clear_full_rows() == 0
    assert grid.grid.tolist() == rows


def test_clear_whole_board():
    grid = make_grid([[A, B], [C, C]])
    assert grid.clear_full_rows() == 2
    assert not grid.grid.any()


def test_check_reports_row_bounds_before_column_bounds():
    grid = GameGrid(width=8, height=10)
    assert grid.check(single_cell(), -1, -1) is Placement.OUT_OF_BOUNDS_ROW
    assert grid.check(single_cell(), 10, 8) is Placement.OUT_OF_BOUNDS_ROW
    assert grid.check(single_cell(), 0, 8) is Placement.OUT_OF_BOUNDS_COL
    assert grid.check(single_cell(), 9, -1) is Placement.OUT_OF_BOUNDS_COL


def test_check_overlap_and_ok():
    grid = GameGrid(width=8, height=10)
    grid.grid[4, 5] = B
    assert grid.check(single_cell(), 4, 5) is Placement.OVERLAP
    assert grid.check(single_cell(), 4, 4) is Placement.OK


def test_check_ignores_empty_cells_outside_board():
    grid = GameGrid(width=8, height=10)
    # Only (0, 0) of the frame is filled, so the frame may hang off the edges
    assert grid.check(single_cell(), 9, 7) is Placement.OK


def test_first_failing_cell_decides_result():
    grid = GameGrid(width=4, height=4)
    grid.grid[0, 0] = C
    shape = np.zeros((4, 4), dtype=np.int8)
    shape[0, 0] = A
    shape[1, 0] = A
    # (0, 0) overlaps before (4, 0) falls off the bottom
    assert grid.check(shape, 0, 0) is Placement.OVERLAP
    assert grid.check(shape, 3, 1) is Placement.OUT_OF_BOUNDS_ROW


def test_write_copies_only_filled_cells():
    grid = GameGrid(width=8, height=10)
    grid.grid[3, 3] = C
    shape = np.zeros((4, 4), dtype=np.int8)
    shape[0, 1] = A
    shape[1, 0] = B
    assert grid.write(shape, 2, 2) == 2
    assert grid.grid[2, 3] == A
    assert grid.grid[3, 2] == B
    assert grid.grid[3, 3] == C
    assert np.count_nonzero(grid.grid) == 3


def test_board_features():
    grid = make_grid([[0, 0, 0], [0, A, 0], [0, 0, 0], [B, B, 0]])
    assert grid.get_max_height() == 3
    assert grid.count_holes() == 1
    assert GameGrid(3, 3).get_max_height() == 0


@pytest.mark.parametrize("row,col,inside", [(0, 0, True), (9, 7, True), (10, 0, False), (0, -1, False)])
def test_is_inside(row, col, inside):
    assert GameGrid(width=8, height=10).is_inside(row, col) is inside


def test_holes_count_every_covered_gap():
    grid = make_grid([[A, 0, 0], [0, 0, B], [0, C, 0], [A, 0, 0]])
    # Two gaps in column 0, one under C, two under B
    assert grid.count_holes() == 5
    assert grid.get_max_height() == 4
    assert GameGrid(3, 3).count_holes() == 0
