from __future__ import annotations

from dataclasses import replace
from typing import Optional

from .board import GameBoard
from .collision import collides
from .generator import PieceGenerator
from .pieces import Position
from .rules import ScoringRules
from .settings import GameSettings
from .state import Active, Finished, GameState

SPAWN_Y = 0
SPAWN_FOOTPRINT = 4

DEFAULT_RULES = ScoringRules()


def spawn_position(board: GameBoard) -> Position:
    """Top row, centered for a four-wide spawn footprint ((3, 0) on a 10-wide board)."""
    return Position((board.width - SPAWN_FOOTPRINT) // 2, SPAWN_Y)


def start_game(settings: GameSettings, generator: PieceGenerator) -> GameState:
    generator.reset()
    board = GameBoard(width=settings.board_width, height=settings.board_height)
    current = generator.next()
    nxt = generator.next()
    return GameState(
        board=board,
        phase=Active(current, spawn_position(board)),
        next_piece=nxt,
    )


def should_lock(state: GameState) -> bool:
    """True when the falling piece can't move one row down."""
    piece = state.current_piece
    if piece is None:
        return False
    return collides(state.board, piece, state.current_position + Position(0, 1))


def lock(state: GameState, generator: PieceGenerator, rules: Optional[ScoringRules] = None) -> GameState:
    """Commit the falling piece, clear rows, score, and spawn the next piece.

    If the promoted piece overlaps at the spawn point the game ends and the
    result carries no current piece.
    """
    piece = state.current_piece
    if piece is None:
        return state
    rules = rules or DEFAULT_RULES

    board = state.board.lock_piece(piece, state.current_position)
    cleared_board, lines = board.clear_lines()

    spawn = spawn_position(cleared_board)
    new_current = state.next_piece
    new_next = generator.next()
    if collides(cleared_board, new_current, spawn):
        phase = Finished(spawn)
    else:
        phase = Active(new_current, spawn)

    return replace(
        state,
        board=cleared_board,
        phase=phase,
        next_piece=new_next,
        score=state.score + rules.score_for_lines(lines),
        lines_cleared=state.lines_cleared + lines,
    )
