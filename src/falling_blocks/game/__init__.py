"""Game module for Falling Blocks.

Exports the rules engine and supporting classes:
- Position, Tetromino, TetrominoType: geometry and the piece catalog
- GameBoard: immutable playfield with line clearing
- PieceGenerator: 7-bag randomizer
- GameState: immutable snapshot (Active / Finished phase)
- movement, lock, ghost helpers as plain functions
- GameSession, GameLoop: single-writer session and its gravity/clock timers
"""

from .analytics import BoardAnalytics
from .board import GameBoard
from .collision import can_place, collides, is_position_valid
from .core import Action, GameSession, LockOutcome, TickResult, advance_tick, process_lock
from .generator import PieceGenerator
from .ghost import ghost_y, ghost_y_for_state
from .lock import lock, should_lock, spawn_position, start_game
from .loop import GameLoop
from .movement import Direction, drop_distance, hard_drop, move, move_down, move_left, move_right, rotate
from .pieces import Position, Tetromino, TetrominoType
from .rules import Difficulty, LevelProgression, ScoringRules, level_for_lines
from .settings import GameSettings
from .state import Active, Finished, GameState

__all__ = [
    "Action",
    "Active",
    "BoardAnalytics",
    "Difficulty",
    "Direction",
    "Finished",
    "GameBoard",
    "GameLoop",
    "GameSession",
    "GameSettings",
    "GameState",
    "LevelProgression",
    "LockOutcome",
    "PieceGenerator",
    "Position",
    "ScoringRules",
    "Tetromino",
    "TetrominoType",
    "TickResult",
    "advance_tick",
    "can_place",
    "collides",
    "drop_distance",
    "ghost_y",
    "ghost_y_for_state",
    "hard_drop",
    "is_position_valid",
    "level_for_lines",
    "lock",
    "move",
    "move_down",
    "move_left",
    "move_right",
    "process_lock",
    "rotate",
    "should_lock",
    "spawn_position",
    "start_game",
]
