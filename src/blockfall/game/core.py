from __future__ import annotations

import random
from dataclasses import dataclass, field, replace
from enum import Enum, IntEnum
from typing import Optional, Protocol

import numpy as np

from .grid import GameGrid, Placement
from .pieces import FRAME, TETROMINOES, Shape, TetrominoType, pick, rotate_frame


class Action(IntEnum):
    LEFT = 0
    RIGHT = 1
    ROTATE_CW = 2
    ROTATE_CCW = 3
    SOFT_DROP = 4
    NONE = 5


class GamePhase(Enum):
    RUNNING = "running"
    OVER = "over"


class Axis(Enum):
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"


class Rotation(Enum):
    CLOCKWISE = "cw"
    COUNTER_CLOCKWISE = "ccw"


class MoveOutcome(Enum):
    MOVED = "moved"
    BLOCKED = "blocked"
    LOCKED = "locked"
    IGNORED = "ignored"


class RandomSource(Protocol):
    def randrange(self, stop: int) -> int: ...


@dataclass
class GameConfig:
    width: int = 8
    height: int = 10
    random_seed: Optional[int] = None


@dataclass
class ActivePiece:
    kind: TetrominoType
    grid: Shape
    size: int
    row: int = 0
    col: int = 0

    def copy(self) -> "ActivePiece":
        return replace(self, grid=self.grid.copy())


@dataclass(frozen=True)
class Snapshot:
    board: np.ndarray
    phase: GamePhase
    piece: Optional[ActivePiece] = field(default=None)

    @property
    def running(self) -> bool:
        return self.phase is GamePhase.RUNNING

    def composite(self, mark_active: bool = False) -> np.ndarray:
        """Board with the active piece painted in.

        With ``mark_active`` the piece cells carry the negated color tag so
        callers can tell falling blocks from locked ones.
        """
        state = self.board.copy()
        if self.piece is None:
            return state
        h, w = state.shape
        for dy in range(FRAME):
            for dx in range(FRAME):
                value = int(self.piece.grid[dy, dx])
                y, x = self.piece.row + dy, self.piece.col + dx
                if value and 0 <= y < h and 0 <= x < w:
                    state[y, x] = -value if mark_active else value
        return state


class BoardEngine:
    """Falling-block rule engine.

    Owns the board, the falling piece and the game phase. A piece becomes
    part of the board only through a failed vertical move (the lock path).
    """

    def __init__(self, config: Optional[GameConfig] = None, rng: Optional[RandomSource] = None) -> None:
        self.config = config or GameConfig()
        self.rng = rng if rng is not None else random.Random(self.config.random_seed)
        self.grid = GameGrid(self.config.width, self.config.height)
        self.phase = GamePhase.RUNNING
        self.piece: ActivePiece
        self.rows_cleared_total = 0
        self.pieces_locked = 0
        self.spawn_next()

    @property
    def game_over(self) -> bool:
        return self.phase is GamePhase.OVER

    def placement_check(self) -> Placement:
        return self.grid.check(self.piece.grid, self.piece.row, self.piece.col)

    def _commit(self) -> None:
        self.grid.write(self.piece.grid, self.piece.row, self.piece.col)
        self.pieces_locked += 1

    def clear_full_rows(self) -> int:
        cleared = self.grid.clear_full_rows()
        self.rows_cleared_total += cleared
        return cleared

    def spawn_next(self, rng: Optional[RandomSource] = None) -> None:
        source = rng if rng is not None else self.rng
        shape = pick(source.randrange(len(TETROMINOES)))
        self.piece = ActivePiece(
            kind=shape.kind,
            grid=shape.grid.copy(),
            size=shape.size,
            row=0,
            col=(self.grid.width - FRAME) // 2,
        )
        if self.placement_check() is not Placement.OK:
            self.phase = GamePhase.OVER

    def rotate(self, direction: Rotation) -> bool:
        if self.game_over:
            return False
        previous = self.piece.grid
        self.piece.grid = rotate_frame(previous, self.piece.size, direction is Rotation.CLOCKWISE)
        if self.placement_check() is not Placement.OK:
            self.piece.grid = previous
            return False
        return True

    def move(self, axis: Axis, step: int) -> MoveOutcome:
        if step == 0:
            raise ValueError("move step must be non-zero")
        if self.game_over:
            return MoveOutcome.IGNORED

        row, col = self.piece.row, self.piece.col
        if axis is Axis.HORIZONTAL:
            self.piece.col += step
        else:
            self.piece.row += step
        if self.placement_check() is Placement.OK:
            return MoveOutcome.MOVED

        self.piece.row, self.piece.col = row, col
        if axis is Axis.HORIZONTAL:
            return MoveOutcome.BLOCKED

        self._lock_piece()
        return MoveOutcome.LOCKED

    def _lock_piece(self) -> int:
        assert self.placement_check() is Placement.OK
        self._commit()
        cleared = self.clear_full_rows()
        self.spawn_next()
        return cleared

    def move_left(self) -> MoveOutcome:
        return self.move(Axis.HORIZONTAL, -1)

    def move_right(self) -> MoveOutcome:
        return self.move(Axis.HORIZONTAL, 1)

    def soft_drop(self) -> MoveOutcome:
        return self.move(Axis.VERTICAL, 1)

    def apply(self, action: Action) -> MoveOutcome:
        if self.game_over:
            return MoveOutcome.IGNORED

        if action == Action.LEFT:
            return self.move_left()
        elif action == Action.RIGHT:
            return self.move_right()
        elif action == Action.ROTATE_CW:
            rotated = self.rotate(Rotation.CLOCKWISE)
            return MoveOutcome.MOVED if rotated else MoveOutcome.BLOCKED
        elif action == Action.ROTATE_CCW:
            rotated = self.rotate(Rotation.COUNTER_CLOCKWISE)
            return MoveOutcome.MOVED if rotated else MoveOutcome.BLOCKED
        elif action == Action.SOFT_DROP:
            return self.soft_drop()
        return MoveOutcome.IGNORED

    def snapshot(self) -> Snapshot:
        board = self.grid.clone_state()
        board.setflags(write=False)
        piece = None if self.game_over else self.piece.copy()
        return Snapshot(board=board, phase=self.phase, piece=piece)
