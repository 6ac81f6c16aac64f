from __future__ import annotations

from typing import Optional

from .board import GameBoard
from .pieces import Position, Tetromino
from .state import GameState


def _blocked_below(board: GameBoard, piece: Tetromino, x: int, y: int) -> bool:
    # Rows above the board are not checked so a piece poking over the top still projects.
    for block in piece.blocks:
        pos = Position(x + block.x, y + block.y + 1)
        if pos.y >= board.height or pos.x < 0 or pos.x >= board.width:
            return True
        if board.is_position_occupied(pos):
            return True
    return False


def ghost_y(board: GameBoard, piece: Tetromino, position: Position) -> int:
    """Row the piece would come to rest on if dropped straight down from `position`."""
    y = position.y
    while y < board.height:
        if _blocked_below(board, piece, position.x, y):
            return y
        y += 1
    return y


def ghost_y_for_state(state: GameState) -> Optional[int]:
    piece = state.current_piece
    if piece is None:
        return None
    return ghost_y(state.board, piece, state.current_position)
