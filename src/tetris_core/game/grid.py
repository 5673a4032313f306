from __future__ import annotations

from typing import NamedTuple, Optional, Tuple

import numpy as np

from .pieces import COLORS, Shape, TetrominoType


class Cell(NamedTuple):
    kind: TetrominoType
    color: str


class GameGrid:
    """Fixed-size board of locked cells.

    The grid uses 0 for empty cells and the tetromino value for locked cells,
    so the color of a cell is always the color of the piece that wrote it.
    Row 0 is the top of the visible board; pieces may hang above it with
    negative rows while falling.
    """

    def __init__(self, width: int, height: int) -> None:
        self.width = int(width)
        self.height = int(height)
        self.grid = np.zeros((self.height, self.width), dtype=np.int8)

    def reset(self) -> None:
        self.grid.fill(0)

    def is_inside(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def collides(self, shape: Shape, origin_x: int, origin_y: int) -> bool:
        """True if `shape` at the origin leaves the board or hits a locked cell.

        Cells above the board (row < 0) are only checked against the side walls.
        """
        for dy, dx in np.argwhere(shape):
            x = origin_x + int(dx)
            y = origin_y + int(dy)
            if x < 0 or x >= self.width or y >= self.height:
                return True
            if y >= 0 and self.grid[y, x] != 0:
                return True
        return False

    def lock(self, shape: Shape, origin_x: int, origin_y: int, kind: TetrominoType) -> int:
        """Write the occupied cells of `shape` into the grid.

        Assumes the position was already checked with `collides`. Cells above
        the board are dropped. Returns the number of cells written.
        """
        written = 0
        for dy, dx in np.argwhere(shape):
            x = origin_x + int(dx)
            y = origin_y + int(dy)
            if self.is_inside(x, y):
                self.grid[y, x] = int(kind)
                written += 1
        return written

    def clear_full_rows(self) -> int:
        full = np.all(self.grid != 0, axis=1)
        num = int(full.sum())
        if num == 0:
            return 0
        # All full rows go at once; the survivors keep their order.
        new_rows = np.zeros((num, self.width), dtype=np.int8)
        self.grid = np.vstack((new_rows, self.grid[~full]))
        return num

    def drop_distance(self, shape: Shape, origin_x: int, origin_y: int) -> int:
        """Rows `shape` can fall from the origin before it would collide."""
        distance = 0
        while not self.collides(shape, origin_x, origin_y + distance + 1):
            distance += 1
        return distance

    def cell(self, x: int, y: int) -> Optional[Cell]:
        v = int(self.grid[y, x])
        if v == 0:
            return None
        kind = TetrominoType(v)
        return Cell(kind, COLORS[kind])

    def colors(self) -> Tuple[Tuple[Optional[str], ...], ...]:
        return tuple(
            tuple(COLORS[TetrominoType(v)] if v else None for v in row.tolist())
            for row in self.grid
        )

    def filled_count(self) -> int:
        return int(np.count_nonzero(self.grid))

    def get_max_height(self) -> int:
        # y=0 is top; find first non-empty from top
        non_empty_rows = np.where(np.any(self.grid != 0, axis=1))[0]
        if non_empty_rows.size == 0:
            return 0
        top_index = int(non_empty_rows[0])
        return self.height - top_index

    def count_holes(self) -> int:
        holes = 0
        for x in range(self.width):
            column = self.grid[:, x]
            seen_block = False
            for cell in column:
                if cell != 0:
                    seen_block = True
                elif seen_block:
                    holes += 1
        return holes

    def clone_state(self) -> np.ndarray:
        return self.grid.copy()
