from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True)
class ScoringRules:
    line_clear_scores: tuple[int, int, int, int] = (100, 300, 500, 800)

    def score_for_lines(self, lines: int) -> int:
        # Four-block pieces can't clear more than four rows at once
        if 1 <= lines <= len(self.line_clear_scores):
            return self.line_clear_scores[lines - 1]
        return 0

    def score_with_multiplier(self, lines: int, multiplier: float) -> int:
        return int(self.score_for_lines(lines) * multiplier)


class LevelProgression:
    START_LEVEL = 1
    LINES_PER_LEVEL = 10

    @classmethod
    def level_for_lines(cls, lines_cleared: int) -> int:
        return max(lines_cleared, 0) // cls.LINES_PER_LEVEL + cls.START_LEVEL


class Difficulty(Enum):
    """Gravity curve per difficulty: (base delay, floor, per-level step), in ms."""

    EASY = (1000, 180, 60)
    NORMAL = (600, 100, 45)
    HARD = (300, 80, 25)

    def __init__(self, fall_delay_ms: int, min_fall_delay_ms: int, fall_delay_step_ms: int) -> None:
        self.fall_delay_ms = fall_delay_ms
        self.min_fall_delay_ms = min_fall_delay_ms
        self.fall_delay_step_ms = fall_delay_step_ms

    def fall_delay_for_level(self, level: int) -> int:
        level_offset = max(level, LevelProgression.START_LEVEL) - LevelProgression.START_LEVEL
        adjusted = self.fall_delay_ms - level_offset * self.fall_delay_step_ms
        return max(adjusted, self.min_fall_delay_ms)


def level_for_lines(lines_cleared: int) -> int:
    return LevelProgression.level_for_lines(lines_cleared)
