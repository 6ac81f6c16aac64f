from __future__ import annotations

import random
from typing import List, Optional, Tuple

from .pieces import Tetromino, TetrominoType


class PieceGenerator:
    """7-bag randomizer.

    Each bag holds one of every piece type in shuffled order, so any seven
    draws starting at a bag boundary contain every type exactly once. The bag
    and RNG belong to the generator instance; sessions own one each.
    """

    def __init__(self, seed: Optional[int] = None, rng: Optional[random.Random] = None) -> None:
        self.rng = rng or random.Random(seed)
        self._bag: List[TetrominoType] = []

    @property
    def remaining(self) -> Tuple[TetrominoType, ...]:
        return tuple(self._bag)

    def _refill(self) -> None:
        self._bag = list(TetrominoType)
        self.rng.shuffle(self._bag)

    def next(self) -> Tetromino:
        if not self._bag:
            self._refill()
        return Tetromino.create(self._bag.pop(0), rotation=0)

    def reset(self) -> None:
        self._bag.clear()
