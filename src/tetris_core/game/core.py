from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Optional, Tuple

import numpy as np

from .grid import GameGrid
from .pieces import COLORS, KICK_OFFSETS, Piece, Shape, TetrominoType
from .rules import ScoringRules

logger = logging.getLogger(__name__)


class Action(IntEnum):
    LEFT = 0
    RIGHT = 1
    ROTATE = 2
    SOFT_DROP = 3
    HARD_DROP = 4
    HOLD = 5
    NONE = 6


class GameState(Enum):
    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"
    GAME_OVER = "game_over"


@dataclass
class GameConfig:
    width: int = 10
    height: int = 20
    random_seed: Optional[int] = None

    def __post_init__(self) -> None:
        if self.width < 4 or self.height < 4:
            raise ValueError(f"board must be at least 4x4, got {self.width}x{self.height}")


@dataclass
class HeldPiece:
    kind: TetrominoType
    shape: Shape

    @property
    def color(self) -> str:
        return COLORS[self.kind]


@dataclass(frozen=True)
class PieceView:
    kind: TetrominoType
    color: str
    shape: np.ndarray
    x: int
    y: int


@dataclass(frozen=True)
class GameSnapshot:
    """Read-only view of the engine for renderers, taken after a command returns."""

    board: np.ndarray
    board_colors: Tuple[Tuple[Optional[str], ...], ...]
    active: Optional[PieceView]
    ghost_y: Optional[int]
    next_kind: Optional[TetrominoType]
    hold: Optional[HeldPiece]
    can_hold: bool
    score: int
    level: int
    lines: int
    fall_interval_ms: int
    state: GameState


def _frozen(a: np.ndarray) -> np.ndarray:
    a = a.copy()
    a.setflags(write=False)
    return a


class TetrisGame:
    """Falling-block rules engine.

    Holds no timer: the caller invokes `tick()` every `fall_interval_ms`
    milliseconds while the game is running. Commands issued in a state where
    they make no sense are no-ops.
    """

    def __init__(self, config: Optional[GameConfig] = None, rules: Optional[ScoringRules] = None) -> None:
        self.config = config or GameConfig()
        self.rules = rules or ScoringRules()
        self.rng = random.Random(self.config.random_seed)
        self.grid = GameGrid(self.config.width, self.config.height)
        self.state = GameState.IDLE
        self.current_piece: Optional[Piece] = None
        self.next_piece: Optional[TetrominoType] = None
        self.hold_piece: Optional[HeldPiece] = None
        self.can_hold = True
        self.score = 0
        self.level = 1
        self.lines = 0
        self.fall_interval_ms = self.rules.fall_interval_ms(1)
        self.reset()

    @property
    def running(self) -> bool:
        return self.state is GameState.RUNNING

    @property
    def game_over(self) -> bool:
        return self.state is GameState.GAME_OVER

    def seed(self, seed: Optional[int]) -> None:
        self.rng.seed(seed)

    def _random_kind(self) -> TetrominoType:
        return self.rng.choice(list(TetrominoType))

    def _reset_counters(self) -> None:
        self.grid.reset()
        self.score = 0
        self.level = 1
        self.lines = 0
        self.fall_interval_ms = self.rules.fall_interval_ms(self.level)
        self.current_piece = None
        self.hold_piece = None
        self.can_hold = True

    # -- lifecycle ---------------------------------------------------------

    def reset(self) -> None:
        self._reset_counters()
        self.next_piece = self._random_kind()
        self.state = GameState.IDLE
        logger.info("game reset")

    def start(self) -> None:
        if self.state not in (GameState.IDLE, GameState.GAME_OVER):
            return
        self._reset_counters()
        self.next_piece = self._random_kind()
        self.state = GameState.RUNNING
        logger.info("game started")
        self.spawn()

    def pause(self) -> None:
        if self.state is GameState.RUNNING:
            self.state = GameState.PAUSED

    def resume(self) -> None:
        if self.state is GameState.PAUSED:
            self.state = GameState.RUNNING

    def toggle_pause(self) -> None:
        if self.state is GameState.RUNNING:
            self.pause()
        else:
            self.resume()

    def _end_game(self) -> None:
        self.current_piece = None
        self.state = GameState.GAME_OVER
        logger.info("game over: score=%d level=%d lines=%d", self.score, self.level, self.lines)

    # -- piece flow --------------------------------------------------------

    def spawn(self) -> bool:
        """Promote the next piece to active and roll a new one.

        Returns False and ends the game if the spawn position is blocked.
        """
        if self.state is not GameState.RUNNING:
            return False
        kind = self.next_piece if self.next_piece is not None else self._random_kind()
        piece = Piece.spawn(kind, self.grid.width)
        self.next_piece = self._random_kind()
        if self.grid.collides(piece.shape, piece.x, piece.y):
            self._end_game()
            return False
        self.current_piece = piece
        return True

    def move(self, dx: int, dy: int) -> bool:
        if self.state is not GameState.RUNNING or self.current_piece is None:
            return False
        piece = self.current_piece
        new_x = piece.x + dx
        new_y = piece.y + dy
        if self.grid.collides(piece.shape, new_x, new_y):
            return False
        piece.x = new_x
        piece.y = new_y
        return True

    def rotate(self) -> bool:
        """Rotate clockwise, trying each kick offset in turn. False if none fit."""
        if self.state is not GameState.RUNNING or self.current_piece is None:
            return False
        piece = self.current_piece
        rotated = piece.rotated_shape()
        for kick in KICK_OFFSETS:
            if not self.grid.collides(rotated, piece.x + kick, piece.y):
                piece.shape = rotated
                piece.x += kick
                return True
        return False

    def tick(self) -> bool:
        """One gravity step. Returns True if the piece moved down."""
        if self.state is not GameState.RUNNING or self.current_piece is None:
            return False
        if self.move(0, 1):
            return True
        self._land()
        return False

    def soft_drop(self) -> bool:
        return self.tick()

    def hard_drop(self) -> int:
        """Drop the piece as far as it goes and land it. Returns rows dropped."""
        if self.state is not GameState.RUNNING or self.current_piece is None:
            return 0
        rows = 0
        while self.move(0, 1):
            rows += 1
        self._land()
        return rows

    def hold(self) -> bool:
        if self.state is not GameState.RUNNING or self.current_piece is None or not self.can_hold:
            return False
        active = self.current_piece
        stashed = HeldPiece(active.kind, active.shape.copy())
        self.can_hold = False
        if self.hold_piece is None:
            self.hold_piece = stashed
            self.current_piece = None
            self.spawn()
            return True
        held = self.hold_piece
        self.hold_piece = stashed
        piece = Piece.at_spawn(held.kind, held.shape.copy(), self.grid.width)
        if self.grid.collides(piece.shape, piece.x, piece.y):
            self._end_game()
            return True
        self.current_piece = piece
        return True

    def _land(self) -> None:
        piece = self.current_piece
        assert piece is not None
        # A piece that cannot enter the visible board tops out.
        if piece.y < 0:
            self._end_game()
            return
        self._lock_piece()
        self.spawn()

    def _lock_piece(self) -> int:
        piece = self.current_piece
        assert piece is not None
        self.grid.lock(piece.shape, piece.x, piece.y, piece.kind)
        self.current_piece = None
        cleared = self.grid.clear_full_rows()
        self.score += self.rules.score_for_lines(cleared) * self.level
        self.lines += cleared
        level = self.rules.level_for_lines(self.lines)
        if level != self.level:
            logger.debug("level up: %d -> %d", self.level, level)
        self.level = level
        self.fall_interval_ms = self.rules.fall_interval_ms(self.level)
        self.can_hold = True
        logger.debug("locked %s at (%d, %d), cleared %d", piece.kind.name, piece.x, piece.y, cleared)
        return cleared

    def step(self, action: Action) -> None:
        if action == Action.LEFT:
            self.move(-1, 0)
        elif action == Action.RIGHT:
            self.move(1, 0)
        elif action == Action.ROTATE:
            self.rotate()
        elif action == Action.SOFT_DROP:
            self.soft_drop()
        elif action == Action.HARD_DROP:
            self.hard_drop()
        elif action == Action.HOLD:
            self.hold()
        elif action == Action.NONE:
            pass

    # -- read-only views ---------------------------------------------------

    def ghost_y(self) -> Optional[int]:
        piece = self.current_piece
        if piece is None:
            return None
        return piece.y + self.grid.drop_distance(piece.shape, piece.x, piece.y)

    def get_state(self) -> np.ndarray:
        # Overlay current piece on a copy of the grid for observation
        state = self.grid.clone_state()
        if self.current_piece is not None:
            for x, y in self.current_piece.cells():
                if self.grid.is_inside(x, y):
                    # Use negative to indicate falling piece overlay
                    state[y, x] = -int(self.current_piece.kind)
        return state

    def snapshot(self) -> GameSnapshot:
        piece = self.current_piece
        active = None
        if piece is not None:
            active = PieceView(piece.kind, piece.color, _frozen(piece.shape), piece.x, piece.y)
        hold = None
        if self.hold_piece is not None:
            hold = HeldPiece(self.hold_piece.kind, _frozen(self.hold_piece.shape))
        return GameSnapshot(
            board=_frozen(self.grid.grid),
            board_colors=self.grid.colors(),
            active=active,
            ghost_y=self.ghost_y(),
            next_kind=self.next_piece,
            hold=hold,
            can_hold=self.can_hold,
            score=self.score,
            level=self.level,
            lines=self.lines,
            fall_interval_ms=self.fall_interval_ms,
            state=self.state,
        )
