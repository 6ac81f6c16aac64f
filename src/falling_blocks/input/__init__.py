"""Touch input translation: drag gestures and swipes to discrete moves."""

from .gestures import (
    GestureConfig,
    SwipeSensitivity,
    DragEnded,
    DragStarted,
    Dragged,
    GestureAction,
    GestureEvent,
    GestureInterpreter,
    interpret_swipe,
)

__all__ = [
    "GestureConfig",
    "SwipeSensitivity",
    "DragEnded",
    "DragStarted",
    "Dragged",
    "GestureAction",
    "GestureEvent",
    "GestureInterpreter",
    "interpret_swipe",
]
