from __future__ import annotations

from typing import Iterable, Optional

import pytest

from falling_blocks.game import (
    Active,
    GameBoard,
    GameState,
    Position,
    Tetromino,
    TetrominoType,
)


class FakeClock:
    def __init__(self, start: float = 0.0) -> None:
        self.t = start

    def __call__(self) -> float:
        return self.t

    def advance(self, seconds: float) -> None:
        self.t += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(100.0)


def filled_rows(rows: Iterable[int], gaps: Iterable[int] = (), width: int = 10, height: int = 20,
                kind: TetrominoType = TetrominoType.Z) -> GameBoard:
    gap_set = set(gaps)
    cells = {
        Position(x, y): kind
        for y in rows
        for x in range(width)
        if x not in gap_set
    }
    return GameBoard(width=width, height=height, cells=cells)


def make_state(kind: TetrominoType = TetrominoType.T, position: Position = Position(3, 0),
               board: Optional[GameBoard] = None, rotation: int = 0,
               next_kind: TetrominoType = TetrominoType.O, **kwargs) -> GameState:
    return GameState(
        board=board if board is not None else GameBoard(),
        phase=Active(Tetromino.create(kind, rotation), position),
        next_piece=Tetromino.create(next_kind),
        **kwargs,
    )
