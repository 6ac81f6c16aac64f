from __future__ import annotations

import time
from dataclasses import dataclass, replace
from enum import Enum
from typing import Callable, Optional, Union


@dataclass(frozen=True)
class GestureConfig:
    swipe_threshold_px: float = 50.0
    direction_ratio: float = 1.5
    hard_drop_height_fraction: float = 0.25
    hard_drop_max_duration_ms: float = 500.0


@dataclass(frozen=True)
class SwipeSensitivity:
    soft_drop_threshold: float = 0.5  # vertical velocity above this is a hard drop
    horizontal_sensitivity: float = 1.0
    vertical_sensitivity: float = 1.0


class GestureAction(Enum):
    MOVE_LEFT = "move_left"
    MOVE_RIGHT = "move_right"
    MOVE_DOWN = "move_down"
    HARD_DROP = "hard_drop"


@dataclass(frozen=True)
class DragStarted:
    board_height_px: float


@dataclass(frozen=True)
class Dragged:
    delta_x: float
    delta_y: float


@dataclass(frozen=True)
class DragEnded:
    pass


GestureEvent = Union[DragStarted, Dragged, DragEnded]


@dataclass(frozen=True)
class _GestureState:
    accumulated_x: float = 0.0
    total_drag_y: float = 0.0
    start_ms: float = 0.0
    is_horizontal: bool = False
    board_height_px: float = 0.0


class GestureInterpreter:
    """Turns raw drag deltas into discrete moves.

    One instance tracks one drag at a time. A drag is classified horizontal
    the first time a delta is clearly sideways and stays that way until it
    ends; horizontal drags emit a move every time the accumulated distance
    passes the swipe threshold. Vertical drags are judged on release: a fast,
    long pull is a hard drop, a shorter one a single step down.
    """

    def __init__(self, config: Optional[GestureConfig] = None,
                 clock: Callable[[], float] = time.monotonic) -> None:
        self.config = config or GestureConfig()
        self.clock = clock
        self._state: Optional[_GestureState] = None

    @property
    def is_dragging(self) -> bool:
        return self._state is not None

    def _now_ms(self) -> float:
        return self.clock() * 1000.0

    def handle(self, event: GestureEvent) -> Optional[GestureAction]:
        if isinstance(event, DragStarted):
            self._state = _GestureState(start_ms=self._now_ms(), board_height_px=event.board_height_px)
            return None
        if isinstance(event, Dragged):
            return self._on_drag(event)
        if isinstance(event, DragEnded):
            return self._on_end()
        raise ValueError(f"Unknown gesture event: {event!r}")

    __call__ = handle

    def _on_drag(self, event: Dragged) -> Optional[GestureAction]:
        state = self._state
        if state is None:
            return None
        cfg = self.config

        if not state.is_horizontal and abs(event.delta_x) > abs(event.delta_y) * cfg.direction_ratio:
            state = replace(state, is_horizontal=True)

        result: Optional[GestureAction] = None
        if state.is_horizontal:
            accumulated = state.accumulated_x + event.delta_x
            if abs(accumulated) > cfg.swipe_threshold_px:
                result = GestureAction.MOVE_RIGHT if accumulated > 0 else GestureAction.MOVE_LEFT
                accumulated = 0.0
            state = replace(state, accumulated_x=accumulated)
        elif event.delta_y > 0:
            state = replace(state, total_drag_y=state.total_drag_y + event.delta_y)

        self._state = state
        return result

    def _on_end(self) -> Optional[GestureAction]:
        state = self._state
        if state is None:
            return None
        self._state = None
        if state.is_horizontal:
            return None

        cfg = self.config
        duration_ms = self._now_ms() - state.start_ms
        if (state.total_drag_y > state.board_height_px * cfg.hard_drop_height_fraction
                and duration_ms < cfg.hard_drop_max_duration_ms):
            return GestureAction.HARD_DROP
        if state.total_drag_y > cfg.swipe_threshold_px:
            return GestureAction.MOVE_DOWN
        return None


def interpret_swipe(delta_x: float, delta_y: float, velocity_x: float, velocity_y: float,
                    sensitivity: Optional[SwipeSensitivity] = None) -> Optional[GestureAction]:
    """Classify a completed swipe by its dominant axis.

    Vertical swipes faster than the sensitivity threshold are hard drops.
    """
    sensitivity = sensitivity or SwipeSensitivity()
    abs_x = abs(delta_x)
    abs_y = abs(delta_y)
    if abs_x > abs_y:
        return GestureAction.MOVE_RIGHT if delta_x > 0 else GestureAction.MOVE_LEFT
    if abs_y > abs_x:
        normalized = abs(velocity_y) * sensitivity.vertical_sensitivity
        if normalized > sensitivity.soft_drop_threshold:
            return GestureAction.HARD_DROP
        return GestureAction.MOVE_DOWN
    return None
