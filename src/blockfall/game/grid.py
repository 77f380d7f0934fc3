from __future__ import annotations

from enum import Enum

import numpy as np

from .pieces import Shape


class Placement(Enum):
    OK = "ok"
    OUT_OF_BOUNDS_ROW = "out_of_bounds_row"
    OUT_OF_BOUNDS_COL = "out_of_bounds_col"
    OVERLAP = "overlap"


class GameGrid:
    """Board of locked blocks.

    The grid uses 0 for empty cells and the piece color tag (1..7) for
    filled cells. Row 0 is the top of the board.
    """

    def __init__(self, width: int, height: int) -> None:
        self.width = int(width)
        self.height = int(height)
        self.grid = np.zeros((self.height, self.width), dtype=np.int8)

    def is_inside(self, row: int, col: int) -> bool:
        return 0 <= row < self.height and 0 <= col < self.width

    def check(self, shape: Shape, row: int, col: int) -> Placement:
        """Classify placing ``shape`` with its (0, 0) cell at (row, col).

        Cells are scanned row-major; the first failing cell decides the
        result, with row bounds tested before column bounds before overlap.
        """
        h, w = shape.shape
        for dy in range(h):
            for dx in range(w):
                if shape[dy, dx] == 0:
                    continue
                y, x = row + dy, col + dx
                if not 0 <= y < self.height:
                    return Placement.OUT_OF_BOUNDS_ROW
                if not 0 <= x < self.width:
                    return Placement.OUT_OF_BOUNDS_COL
                if self.grid[y, x] != 0:
                    return Placement.OVERLAP
        return Placement.OK

    def write(self, shape: Shape, row: int, col: int) -> int:
        """Copy the non-empty cells of ``shape`` onto the board.

        Assumes position is already validated. Returns the number of cells
        written.
        """
        written = 0
        h, w = shape.shape
        for dy in range(h):
            for dx in range(w):
                if shape[dy, dx]:
                    self.grid[row + dy, col + dx] = shape[dy, dx]
                    written += 1
        return written

    def is_row_full(self, row: int) -> bool:
        return bool(np.all(self.grid[row] != 0))

    def clear_full_rows(self) -> int:
        write_y = self.height - 1
        for y in range(self.height - 1, -1, -1):
            if self.is_row_full(y):
                continue
            if write_y != y:
                self.grid[write_y] = self.grid[y]
            write_y -= 1
        # Everything above the last written row has been moved down
        self.grid[: write_y + 1] = 0
        return write_y + 1

    def get_max_height(self) -> int:
        """Height of the stack, counted in rows up from the floor."""
        occupied = np.flatnonzero(self.grid.any(axis=1))
        return self.height - int(occupied[0]) if occupied.size else 0

    def count_holes(self) -> int:
        """Empty cells that have a block somewhere above them in their column."""
        filled = self.grid != 0
        covered = np.maximum.accumulate(filled, axis=0)
        return int(np.count_nonzero(covered & ~filled))

    def clone_state(self) -> np.ndarray:
        return self.grid.copy()
