"""
Line-clear feedback planning.
Decides how loud a clear should feel (intensity, power) and which presentation
effects to emit. Produces plain data; drawing and animation happen elsewhere.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional, Tuple, Union


class IntensityLevel(Enum):
    LOW = "low"
    HIGH = "high"


class VisualTextKey(Enum):
    SINGLE = "single"
    DOUBLE = "double"
    TRIPLE = "triple"
    TETRIS = "tetris"
    CLEAR = "clear"


@dataclass(frozen=True)
class ScreenShake:
    intensity: IntensityLevel
    power: float


@dataclass(frozen=True)
class FloatingText:
    intensity: IntensityLevel
    power: float
    text_key: VisualTextKey


@dataclass(frozen=True)
class ScreenFlash:
    intensity: IntensityLevel
    power: float


@dataclass(frozen=True)
class Explosion:
    intensity: IntensityLevel
    power: float
    particle_count: int


VisualEffectEvent = Union[ScreenShake, FloatingText, ScreenFlash, Explosion]


BASE_POWER = {1: 0.30, 2: 0.45, 3: 0.75, 4: 1.00}
TEXT_KEYS = {
    1: VisualTextKey.SINGLE,
    2: VisualTextKey.DOUBLE,
    3: VisualTextKey.TRIPLE,
    4: VisualTextKey.TETRIS,
}
HIGH_INTENSITY_LINES = 3
COMBO_BOOST_STREAK = 2
MAX_COMBO_BONUS = 0.25
BASE_PARTICLES = 24
PARTICLES_PER_POWER = 48


@dataclass(frozen=True)
class BurstSpec:
    lines_cleared: int
    combo_streak: int
    intensity: IntensityLevel
    power: float
    events: Tuple[VisualEffectEvent, ...]


@dataclass(frozen=True)
class FeedbackPlan:
    next_combo_streak: int
    burst: Optional[BurstSpec]


@dataclass(frozen=True)
class VisualEffectBurst:
    id: int
    lines_cleared: int
    combo_streak: int
    intensity: IntensityLevel
    power: float
    events: Tuple[VisualEffectEvent, ...]


@dataclass(frozen=True)
class VisualEffectFeed:
    """Holds at most one pending burst; consumers acknowledge it by id."""

    sequence: int = 0
    latest: Optional[VisualEffectBurst] = None

    def publish(self, spec: BurstSpec) -> "VisualEffectFeed":
        sequence = self.sequence + 1
        burst = VisualEffectBurst(
            id=sequence,
            lines_cleared=spec.lines_cleared,
            combo_streak=spec.combo_streak,
            intensity=spec.intensity,
            power=spec.power,
            events=spec.events,
        )
        return VisualEffectFeed(sequence=sequence, latest=burst)

    def acknowledge(self, burst_id: int) -> "VisualEffectFeed":
        if self.latest is None or self.latest.id != burst_id:
            return self
        return replace(self, latest=None)


def combo_bonus(combo_streak: int) -> float:
    if combo_streak < COMBO_BOOST_STREAK:
        return 0.0
    return min(MAX_COMBO_BONUS, 0.15 + (combo_streak - COMBO_BOOST_STREAK) * 0.05)


def _create_burst(lines_cleared: int, combo_streak: int) -> BurstSpec:
    base_intensity = IntensityLevel.HIGH if lines_cleared >= HIGH_INTENSITY_LINES else IntensityLevel.LOW
    intensity = base_intensity
    if base_intensity == IntensityLevel.LOW and combo_streak >= COMBO_BOOST_STREAK:
        intensity = IntensityLevel.HIGH

    base_power = BASE_POWER.get(lines_cleared, 1.0)
    power = min(1.0, base_power + combo_bonus(combo_streak))
    text_key = TEXT_KEYS.get(lines_cleared, VisualTextKey.CLEAR)

    events = [
        ScreenShake(intensity=intensity, power=power),
        FloatingText(intensity=intensity, power=power, text_key=text_key),
    ]
    if intensity == IntensityLevel.HIGH:
        events.append(ScreenFlash(intensity=IntensityLevel.HIGH, power=power))
        events.append(
            Explosion(
                intensity=IntensityLevel.HIGH,
                power=power,
                particle_count=BASE_PARTICLES + math.floor(PARTICLES_PER_POWER * power),
            )
        )

    return BurstSpec(
        lines_cleared=lines_cleared,
        combo_streak=combo_streak,
        intensity=intensity,
        power=power,
        events=tuple(events),
    )


def plan_feedback(current_combo_streak: int, lines_cleared: int) -> FeedbackPlan:
    """Advance the combo streak and describe the burst for this lock, if any."""
    next_streak = current_combo_streak + 1 if lines_cleared > 0 else 0
    burst = _create_burst(lines_cleared, next_streak) if lines_cleared > 0 else None
    return FeedbackPlan(next_combo_streak=next_streak, burst=burst)
