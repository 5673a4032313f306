from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Dict, List, Tuple

import numpy as np


class TetrominoType(IntEnum):
    I = 1
    J = 2
    L = 3
    O = 4
    S = 5
    T = 6
    Z = 7


Shape = np.ndarray


COLORS: Dict[TetrominoType, str] = {
    TetrominoType.I: "#00f0f0",
    TetrominoType.J: "#0000f0",
    TetrominoType.L: "#f0a000",
    TetrominoType.O: "#f0f000",
    TetrominoType.S: "#00f000",
    TetrominoType.T: "#a000f0",
    TetrominoType.Z: "#f00000",
}


BASE_SHAPES = {
    TetrominoType.I: np.array([[1, 1, 1, 1]], dtype=np.int8),
    TetrominoType.J: np.array([[1, 0, 0], [1, 1, 1]], dtype=np.int8),
    TetrominoType.L: np.array([[0, 0, 1], [1, 1, 1]], dtype=np.int8),
    TetrominoType.O: np.array([[1, 1], [1, 1]], dtype=np.int8),
    TetrominoType.S: np.array([[0, 1, 1], [1, 1, 0]], dtype=np.int8),
    TetrominoType.T: np.array([[0, 1, 0], [1, 1, 1]], dtype=np.int8),
    TetrominoType.Z: np.array([[1, 1, 0], [0, 1, 1]], dtype=np.int8),
}

# Horizontal offsets tried, in order, when a rotation collides.
KICK_OFFSETS: Tuple[int, ...] = (0, -1, 1, -2, 2)


def shape_of(kind: TetrominoType) -> Shape:
    """Canonical (unpadded) orientation of `kind`. Returns a fresh copy."""
    return BASE_SHAPES[kind].copy()


def color_of(kind: TetrominoType) -> str:
    return COLORS[TetrominoType(kind)]


def pad_square(shape: Shape) -> Shape:
    h, w = shape.shape
    n = max(h, w)
    if h == w:
        return shape.copy()
    padded = np.zeros((n, n), dtype=np.int8)
    padded[:h, :w] = shape
    return padded


def rotate_cw(shape: Shape) -> Shape:
    """Rotate a square matrix clockwise: out[c][n-1-r] = in[r][c]."""
    h, w = shape.shape
    if h != w:
        raise ValueError(f"rotation needs a square matrix, got {h}x{w}")
    return np.ascontiguousarray(np.rot90(shape, 1, axes=(1, 0)))


def spawn_origin(size: int, board_width: int) -> Tuple[int, int]:
    """Origin for a padded `size`x`size` shape: centered, just above row 0."""
    return (board_width - size) // 2, -max(1, size - 1)


@dataclass
class Piece:
    kind: TetrominoType
    shape: Shape
    x: int = 0
    y: int = 0

    @classmethod
    def spawn(cls, kind: TetrominoType, board_width: int) -> "Piece":
        return cls.at_spawn(kind, shape_of(kind), board_width)

    @classmethod
    def at_spawn(cls, kind: TetrominoType, shape: Shape, board_width: int) -> "Piece":
        square = pad_square(shape)
        x, y = spawn_origin(square.shape[0], board_width)
        return cls(TetrominoType(kind), square, x, y)

    @property
    def color(self) -> str:
        return color_of(self.kind)

    @property
    def size(self) -> int:
        return int(self.shape.shape[0])

    def rotated_shape(self) -> Shape:
        return rotate_cw(self.shape)

    def cell_count(self) -> int:
        return int(np.count_nonzero(self.shape))

    def cells_at(self, origin_x: int, origin_y: int) -> List[Tuple[int, int]]:
        cells: List[Tuple[int, int]] = []
        for dy, dx in np.argwhere(self.shape):
            cells.append((origin_x + int(dx), origin_y + int(dy)))
        return cells

    def cells(self) -> List[Tuple[int, int]]:
        return self.cells_at(self.x, self.y)
