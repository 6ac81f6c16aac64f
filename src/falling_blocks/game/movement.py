from __future__ import annotations

from enum import Enum
from typing import Dict, List, Optional, Tuple

from .collision import collides
from .pieces import Position, Tetromino, TetrominoType
from .state import Active, GameState


class Direction(Enum):
    LEFT = Position(-1, 0)
    RIGHT = Position(1, 0)
    DOWN = Position(0, 1)


Transition = Tuple[int, int]

# SRS wall kicks for clockwise turns, tried in order after the in-place attempt.
# Offsets are board deltas (y grows downward).
STANDARD_KICKS: Dict[Transition, List[Position]] = {
    (0, 1): [Position(-1, 0), Position(-1, 1), Position(0, -2), Position(-1, -2)],
    (1, 2): [Position(1, 0), Position(1, -1), Position(0, 2), Position(1, 2)],
    (2, 3): [Position(1, 0), Position(1, 1), Position(0, -2), Position(1, -2)],
    (3, 0): [Position(-1, 0), Position(-1, -1), Position(0, 2), Position(-1, 2)],
}

I_KICKS: Dict[Transition, List[Position]] = {
    (0, 1): [Position(-2, 0), Position(1, 0), Position(-2, -1), Position(1, 2)],
    (1, 2): [Position(-1, 0), Position(2, 0), Position(-1, 2), Position(2, -1)],
    (2, 3): [Position(2, 0), Position(-1, 0), Position(2, 1), Position(-1, -2)],
    (3, 0): [Position(1, 0), Position(-2, 0), Position(1, -2), Position(-2, 1)],
}


def _active(state: GameState) -> Optional[Active]:
    if state.is_game_over or state.is_paused:
        return None
    if not isinstance(state.phase, Active):
        return None
    return state.phase


def move(state: GameState, direction: Direction) -> Optional[GameState]:
    """Shift the falling piece one cell. None if blocked, paused or finished."""
    active = _active(state)
    if active is None:
        return None
    new_position = active.position + direction.value
    if collides(state.board, active.piece, new_position):
        return None
    return state.with_position(new_position)


def move_left(state: GameState) -> Optional[GameState]:
    return move(state, Direction.LEFT)


def move_right(state: GameState) -> Optional[GameState]:
    return move(state, Direction.RIGHT)


def move_down(state: GameState) -> Optional[GameState]:
    return move(state, Direction.DOWN)


def wall_kick_offsets(piece: Tetromino, rotated: Tetromino) -> List[Position]:
    table = I_KICKS if piece.type == TetrominoType.I else STANDARD_KICKS
    return table.get((piece.rotation, rotated.rotation), [])


def rotate(state: GameState) -> Optional[GameState]:
    """Rotate clockwise, trying SRS kicks when the in-place turn collides."""
    active = _active(state)
    if active is None:
        return None
    rotated = active.piece.rotate()
    candidates = [Position(0, 0)] + wall_kick_offsets(active.piece, rotated)
    for offset in candidates:
        position = active.position + offset
        if not collides(state.board, rotated, position):
            return state.with_piece(rotated, position)
    return None


def _drop_position(state: GameState, active: Active) -> Position:
    position = active.position
    below = Direction.DOWN.value
    while not collides(state.board, active.piece, position + below):
        position = position + below
    return position


def hard_drop(state: GameState) -> Optional[GameState]:
    """Move the piece to its lowest legal row. Locking is left to the caller."""
    active = _active(state)
    if active is None:
        return None
    return state.with_position(_drop_position(state, active))


def drop_distance(state: GameState) -> int:
    active = _active(state)
    if active is None:
        return 0
    return _drop_position(state, active).y - active.position.y
