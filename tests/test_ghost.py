from dataclasses import replace

from falling_blocks.game import (
    Finished,
    GameBoard,
    Position,
    Tetromino,
    TetrominoType,
    ghost_y,
    ghost_y_for_state,
)

from conftest import filled_rows, make_state


def test_empty_board_lands_on_floor():
    board = GameBoard()
    assert ghost_y(board, Tetromino.create(TetrominoType.T), Position(3, 0)) == 18
    assert ghost_y(board, Tetromino.create(TetrominoType.I), Position(3, 0)) == 18
    assert ghost_y(board, Tetromino.create(TetrominoType.I, 1), Position(3, 0)) == 16
    assert ghost_y(board, Tetromino.create(TetrominoType.O), Position(3, 0)) == 18


def test_stops_above_full_row():
    board = filled_rows([15])
    piece = Tetromino.create(TetrominoType.T)
    y = ghost_y(board, piece, Position(3, 0))
    assert y == 13
    assert max(block.y for block in piece.absolute_positions(Position(3, y))) == 14


def test_already_resting_returns_same_row():
    assert ghost_y(GameBoard(), Tetromino.create(TetrominoType.T), Position(3, 18)) == 18


def test_piece_above_visible_board_still_projects():
    assert ghost_y(GameBoard(), Tetromino.create(TetrominoType.I, 1), Position(3, -2)) == 16


def test_ghost_for_state():
    assert ghost_y_for_state(make_state(position=Position(3, 0))) == 18
    over = replace(make_state(), phase=Finished(Position(3, 0)))
    assert ghost_y_for_state(over) is None
