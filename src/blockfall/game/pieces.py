from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Tuple

import numpy as np


FRAME = 4


class CellColor(IntEnum):
    NONE = 0
    LIGHT_BLUE = 1
    BLUE = 2
    ORANGE = 3
    YELLOW = 4
    GREEN = 5
    PURPLE = 6
    RED = 7


class TetrominoType(IntEnum):
    I = 0
    J = 1
    L = 2
    O = 3
    S = 4
    T = 5
    Z = 6


Shape = np.ndarray


@dataclass(frozen=True)
class PieceShape:
    """A catalog entry: 4x4 color grid, bounding size and family."""

    kind: TetrominoType
    grid: Shape
    size: int


def _frame(rows: Tuple[str, ...], color: CellColor) -> Shape:
    grid = np.zeros((FRAME, FRAME), dtype=np.int8)
    for y, row in enumerate(rows):
        for x, ch in enumerate(row):
            if ch == "X":
                grid[y, x] = int(color)
    grid.setflags(write=False)
    return grid


TETROMINOES: Tuple[PieceShape, ...] = (
    PieceShape(TetrominoType.I, _frame(("XXXX",), CellColor.LIGHT_BLUE), 4),
    PieceShape(TetrominoType.J, _frame(("X..", "XXX"), CellColor.BLUE), 3),
    PieceShape(TetrominoType.L, _frame(("..X", "XXX"), CellColor.ORANGE), 3),
    PieceShape(TetrominoType.O, _frame(("XX", "XX"), CellColor.YELLOW), 2),
    PieceShape(TetrominoType.S, _frame((".XX", "XX."), CellColor.GREEN), 3),
    PieceShape(TetrominoType.T, _frame((".X.", "XXX"), CellColor.PURPLE), 3),
    PieceShape(TetrominoType.Z, _frame(("XX.", ".XX"), CellColor.RED), 3),
)


def pick(index: int) -> PieceShape:
    if not 0 <= index < len(TETROMINOES):
        raise IndexError(f"piece index {index} outside [0, {len(TETROMINOES)})")
    return TETROMINOES[index]


def cell_count(grid: Shape) -> int:
    return int(np.count_nonzero(grid))


def rotate_frame(grid: Shape, size: int, clockwise: bool) -> Shape:
    """Rotate the top-left ``size`` x ``size`` block of a 4x4 frame by 90 degrees.

    Cells outside that block are copied unchanged. Returns a new read-only
    array; ``grid`` is never touched.
    """
    rotated = grid.copy()
    k = 1 if clockwise else -1
    rotated[:size, :size] = np.rot90(grid[:size, :size], k, axes=(1, 0))
    rotated.setflags(write=False)
    return rotated
