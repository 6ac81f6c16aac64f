from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Dict, List, Mapping, Tuple

import numpy as np

from .pieces import Position, Tetromino, TetrominoType


@dataclass(frozen=True)
class GameBoard:
    """Immutable playfield.

    Only occupied cells are stored, keyed by position. Row 0 is the top of the
    visible board and y grows downward. Every mutating operation returns a new
    board.
    """

    width: int = 10
    height: int = 20
    cells: Mapping[Position, TetrominoType] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Board dimensions must be positive, got {self.width}x{self.height}")

    def is_position_occupied(self, position: Position) -> bool:
        return position in self.cells

    def is_position_valid(self, position: Position) -> bool:
        return 0 <= position.x < self.width and 0 <= position.y < self.height

    def lock_piece(self, piece: Tetromino, offset: Position) -> "GameBoard":
        """Return a board with `piece` merged in at `offset`."""
        cells: Dict[Position, TetrominoType] = dict(self.cells)
        for pos in piece.absolute_positions(offset):
            cells[pos] = piece.type
        return replace(self, cells=cells)

    def is_row_complete(self, y: int) -> bool:
        return all(Position(x, y) in self.cells for x in range(self.width))

    def complete_rows(self) -> List[int]:
        return [y for y in range(self.height) if self.is_row_complete(y)]

    def clear_lines(self) -> Tuple["GameBoard", int]:
        """Remove complete rows and collapse the rows above them.

        Returns: (new_board, lines_cleared)
        """
        completed = set(self.complete_rows())
        if not completed:
            return self, 0

        cells: Dict[Position, TetrominoType] = {}
        target_y = self.height - 1
        for y in range(self.height - 1, -1, -1):
            if y in completed:
                continue
            for x in range(self.width):
                kind = self.cells.get(Position(x, y))
                if kind is not None:
                    cells[Position(x, target_y)] = kind
            target_y -= 1
        return replace(self, cells=cells), len(completed)

    def to_array(self) -> np.ndarray:
        """Integer grid indexed [y, x]; 0 is empty, otherwise the piece type value."""
        grid = np.zeros((self.height, self.width), dtype=np.int8)
        for pos, kind in self.cells.items():
            if self.is_position_valid(pos):
                grid[pos.y, pos.x] = int(kind)
        return grid

    @classmethod
    def from_rows(cls, rows: List[str], kind: TetrominoType = TetrominoType.I) -> "GameBoard":
        """Build a board from text rows, '#' marking filled cells.

        Handy for fixtures: ``GameBoard.from_rows(["..#", "###"])``.
        """
        height = len(rows)
        width = len(rows[0]) if rows else 0
        cells = {
            Position(x, y): kind
            for y, row in enumerate(rows)
            for x, ch in enumerate(row)
            if ch == "#"
        }
        return cls(width=width, height=height, cells=cells)
