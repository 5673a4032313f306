"""Game module for Tetris Core.

Exports the core game engine and supporting classes:
- GameGrid: Board of locked cells, collision testing and line clearing
- Piece: Falling tetromino with clockwise rotation
- TetrominoType: Enum of the seven piece kinds
- ScoringRules: Line-clear scores and the level/speed curve
- TetrisGame: State machine tying board, pieces and scoring together
- FallScheduler: Drives `tick()` from caller-supplied elapsed time
"""

from .grid import Cell, GameGrid
from .pieces import COLORS, KICK_OFFSETS, Piece, TetrominoType, rotate_cw, shape_of
from .rules import ScoringRules
from .core import Action, GameConfig, GameSnapshot, GameState, TetrisGame
from .scheduler import FallScheduler

__all__ = [
    "Cell",
    "GameGrid",
    "COLORS",
    "KICK_OFFSETS",
    "Piece",
    "TetrominoType",
    "rotate_cw",
    "shape_of",
    "ScoringRules",
    "Action",
    "GameConfig",
    "GameSnapshot",
    "GameState",
    "TetrisGame",
    "FallScheduler",
]
