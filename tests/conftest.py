from __future__ import annotations

from typing import Iterable

import numpy as np
import pytest

from blockfall.game import BoardEngine, GameConfig, TetrominoType


class ScriptedRandom:
    """Random source that replays a fixed cycle of piece indices."""

    def __init__(self, indices: Iterable[int]) -> None:
        self.indices = list(indices)
        self.calls = 0

    def randrange(self, stop: int) -> int:
        value = self.indices[self.calls % len(self.indices)]
        self.calls += 1
        assert 0 <= value < stop
        return value


def make_engine(*kinds: TetrominoType, width: int = 8, height: int = 10) -> BoardEngine:
    return BoardEngine(GameConfig(width=width, height=height), ScriptedRandom(int(k) for k in kinds))


def piece_cells(engine: BoardEngine):
    ys, xs = np.nonzero(engine.piece.grid)
    return [(engine.piece.row + int(y), engine.piece.col + int(x)) for y, x in zip(ys, xs)]


@pytest.fixture
def o_engine() -> BoardEngine:
    return make_engine(TetrominoType.O)


@pytest.fixture
def i_engine() -> BoardEngine:
    return make_engine(TetrominoType.I)
