from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Dict, List, Tuple


@dataclass(frozen=True)
class Position:
    x: int
    y: int

    def __add__(self, other: "Position") -> "Position":
        return Position(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Position") -> "Position":
        return Position(self.x - other.x, self.y - other.y)


class TetrominoType(IntEnum):
    I = 1
    O = 2
    T = 3
    S = 4
    Z = 5
    J = 6
    L = 7


Blocks = Tuple[Position, ...]


def _blocks(*coords: Tuple[int, int]) -> Blocks:
    return tuple(Position(x, y) for x, y in coords)


# Rotation states 0..3, offsets relative to the piece origin (y grows downward)
SHAPES: Dict[TetrominoType, Tuple[Blocks, ...]] = {
    TetrominoType.I: (
        _blocks((0, 1), (1, 1), (2, 1), (3, 1)),
        _blocks((2, 0), (2, 1), (2, 2), (2, 3)),
        _blocks((0, 2), (1, 2), (2, 2), (3, 2)),
        _blocks((1, 0), (1, 1), (1, 2), (1, 3)),
    ),
    TetrominoType.O: (
        _blocks((0, 0), (1, 0), (0, 1), (1, 1)),
    ) * 4,
    TetrominoType.T: (
        _blocks((1, 0), (0, 1), (1, 1), (2, 1)),
        _blocks((1, 0), (1, 1), (2, 1), (1, 2)),
        _blocks((0, 1), (1, 1), (2, 1), (1, 2)),
        _blocks((1, 0), (0, 1), (1, 1), (1, 2)),
    ),
    TetrominoType.S: (
        _blocks((1, 0), (2, 0), (0, 1), (1, 1)),
        _blocks((1, 0), (1, 1), (2, 1), (2, 2)),
        _blocks((1, 1), (2, 1), (0, 2), (1, 2)),
        _blocks((0, 0), (0, 1), (1, 1), (1, 2)),
    ),
    TetrominoType.Z: (
        _blocks((0, 0), (1, 0), (1, 1), (2, 1)),
        _blocks((2, 0), (1, 1), (2, 1), (1, 2)),
        _blocks((0, 1), (1, 1), (1, 2), (2, 2)),
        _blocks((1, 0), (0, 1), (1, 1), (0, 2)),
    ),
    TetrominoType.J: (
        _blocks((0, 0), (0, 1), (1, 1), (2, 1)),
        _blocks((1, 0), (2, 0), (1, 1), (1, 2)),
        _blocks((0, 1), (1, 1), (2, 1), (2, 2)),
        _blocks((1, 0), (1, 1), (0, 2), (1, 2)),
    ),
    TetrominoType.L: (
        _blocks((2, 0), (0, 1), (1, 1), (2, 1)),
        _blocks((1, 0), (1, 1), (1, 2), (2, 2)),
        _blocks((0, 1), (1, 1), (2, 1), (0, 2)),
        _blocks((0, 0), (1, 0), (1, 1), (1, 2)),
    ),
}


@dataclass(frozen=True)
class Tetromino:
    type: TetrominoType
    rotation: int = 0  # 0..3

    def __post_init__(self) -> None:
        object.__setattr__(self, "type", TetrominoType(self.type))
        object.__setattr__(self, "rotation", self.rotation % 4)

    @classmethod
    def create(cls, kind: TetrominoType, rotation: int = 0) -> "Tetromino":
        return cls(kind, rotation)

    @property
    def blocks(self) -> Blocks:
        return SHAPES[self.type][self.rotation]

    def rotate(self) -> "Tetromino":
        """Return this piece turned one step clockwise."""
        return Tetromino(self.type, (self.rotation + 1) % 4)

    def absolute_positions(self, offset: Position) -> List[Position]:
        return [block + offset for block in self.blocks]
