"""Game module for Blockfall.

Exports the rule engine and supporting classes:
- CellColor, TetrominoType, PieceShape: the static piece catalog
- GameGrid, Placement: board storage, placement scan and row compaction
- BoardEngine: falling piece, rotation, movement and locking
- GameDriver: command queue plus fixed-step gravity
"""

from .pieces import TETROMINOES, CellColor, PieceShape, TetrominoType, pick
from .grid import GameGrid, Placement
from .core import (
    Action,
    ActivePiece,
    Axis,
    BoardEngine,
    GameConfig,
    GamePhase,
    MoveOutcome,
    Rotation,
    Snapshot,
)
from .driver import GameDriver

__all__ = [
    "TETROMINOES",
    "CellColor",
    "PieceShape",
    "TetrominoType",
    "pick",
    "GameGrid",
    "Placement",
    "Action",
    "ActivePiece",
    "Axis",
    "BoardEngine",
    "GameConfig",
    "GamePhase",
    "MoveOutcome",
    "Rotation",
    "Snapshot",
    "GameDriver",
]
