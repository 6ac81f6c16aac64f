from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional, Union

from .board import GameBoard
from .pieces import Position, Tetromino
from .rules import level_for_lines


@dataclass(frozen=True)
class Active:
    piece: Tetromino
    position: Position


@dataclass(frozen=True)
class Finished:
    position: Position


Phase = Union[Active, Finished]


@dataclass(frozen=True)
class GameState:
    """Snapshot of a game. Every action produces a new instance.

    While the phase is `Active` the falling piece sits on a collision-free
    position. `Finished` is terminal for the session.
    """

    board: GameBoard
    phase: Phase
    next_piece: Tetromino
    score: int = 0
    lines_cleared: int = 0
    is_paused: bool = False

    @property
    def current_piece(self) -> Optional[Tetromino]:
        if isinstance(self.phase, Active):
            return self.phase.piece
        return None

    @property
    def current_position(self) -> Position:
        return self.phase.position

    @property
    def is_game_over(self) -> bool:
        return isinstance(self.phase, Finished)

    @property
    def level(self) -> int:
        return level_for_lines(self.lines_cleared)

    def with_position(self, position: Position) -> "GameState":
        if not isinstance(self.phase, Active):
            raise ValueError("finished game has no falling piece to move")
        return replace(self, phase=Active(self.phase.piece, position))

    def with_piece(self, piece: Tetromino, position: Position) -> "GameState":
        return replace(self, phase=Active(piece, position))

    def paused(self, is_paused: bool) -> "GameState":
        return replace(self, is_paused=is_paused)
