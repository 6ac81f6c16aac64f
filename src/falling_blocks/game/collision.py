from __future__ import annotations

from .board import GameBoard
from .pieces import Position, Tetromino


def is_position_valid(board: GameBoard, position: Position) -> bool:
    """Inside the board and not occupied by a locked block."""
    return board.is_position_valid(position) and not board.is_position_occupied(position)


def collides(board: GameBoard, piece: Tetromino, position: Position) -> bool:
    """True if any block of `piece` placed at `position` is out of bounds or overlaps.

    The bounds check is uniform: rows above the board (y < 0) count as out of
    bounds, spawn checks included.
    """
    return any(not is_position_valid(board, pos) for pos in piece.absolute_positions(position))


def can_place(board: GameBoard, piece: Tetromino, position: Position) -> bool:
    return not collides(board, piece, position)
