from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from falling_blocks.input.gestures import GestureConfig, SwipeSensitivity

from .rules import Difficulty


@dataclass(frozen=True)
class GameSettings:
    difficulty: Difficulty = Difficulty.NORMAL
    board_width: int = 10
    board_height: int = 20
    random_seed: Optional[int] = None
    swipe_sensitivity: SwipeSensitivity = field(default_factory=SwipeSensitivity)
    gesture: GestureConfig = field(default_factory=GestureConfig)
