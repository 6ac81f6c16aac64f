import pytest

from falling_blocks.input import (
    DragEnded,
    DragStarted,
    Dragged,
    GestureAction,
    GestureInterpreter,
    SwipeSensitivity,
    interpret_swipe,
)

BOARD_PX = 800.0


@pytest.fixture
def gestures(clock):
    interpreter = GestureInterpreter(clock=clock)
    assert interpreter.handle(DragStarted(BOARD_PX)) is None
    return interpreter


def test_drag_right_and_left(gestures):
    assert gestures.handle(Dragged(60, 10)) == GestureAction.MOVE_RIGHT
    assert gestures.handle(Dragged(-60, 10)) == GestureAction.MOVE_LEFT


def test_horizontal_moves_accumulate_across_deltas(gestures):
    assert gestures.handle(Dragged(30, 0)) is None
    assert gestures.handle(Dragged(30, 0)) == GestureAction.MOVE_RIGHT
    # accumulator was reset after the move
    assert gestures.handle(Dragged(30, 0)) is None


def test_one_move_per_delta(gestures):
    assert gestures.handle(Dragged(200, 0)) == GestureAction.MOVE_RIGHT
    assert gestures.handle(Dragged(20, 0)) is None


def test_horizontal_classification_is_sticky(gestures):
    assert gestures.handle(Dragged(30, 5)) is None
    assert gestures.handle(Dragged(0, 400)) is None
    assert gestures.handle(Dragged(25, 0)) == GestureAction.MOVE_RIGHT
    assert gestures.handle(DragEnded()) is None


def test_fast_long_pull_is_hard_drop(gestures, clock):
    assert gestures.handle(Dragged(0, 300)) is None
    clock.advance(0.2)
    assert gestures.handle(DragEnded()) == GestureAction.HARD_DROP


def test_slow_long_pull_is_soft_drop(gestures, clock):
    gestures.handle(Dragged(0, 300))
    clock.advance(0.6)
    assert gestures.handle(DragEnded()) == GestureAction.MOVE_DOWN


def test_short_pull_is_soft_drop(gestures):
    assert gestures.handle(Dragged(0, 60)) is None
    assert gestures.handle(DragEnded()) == GestureAction.MOVE_DOWN


def test_tiny_pull_does_nothing(gestures):
    gestures.handle(Dragged(0, 30))
    assert gestures.handle(DragEnded()) is None


def test_upward_drag_is_ignored(gestures):
    gestures.handle(Dragged(0, -200))
    assert gestures.handle(DragEnded()) is None


def test_state_resets_after_drag_end(gestures):
    gestures.handle(Dragged(0, 60))
    gestures.handle(DragEnded())
    assert not gestures.is_dragging
    assert gestures.handle(Dragged(60, 0)) is None
    assert gestures.handle(DragEnded()) is None


def test_events_without_drag_start_are_ignored(clock):
    interpreter = GestureInterpreter(clock=clock)
    assert interpreter.handle(Dragged(100, 0)) is None
    assert interpreter.handle(DragEnded()) is None


def test_unknown_event_raises(gestures):
    with pytest.raises(ValueError):
        gestures.handle("tap")


@pytest.mark.parametrize("args, expected", [
    ((100, 10, 0, 0), GestureAction.MOVE_RIGHT),
    ((-100, 10, 0, 0), GestureAction.MOVE_LEFT),
    ((5, 100, 0, 0.2), GestureAction.MOVE_DOWN),
    ((5, 100, 0, 2.0), GestureAction.HARD_DROP),
    ((50, 50, 1, 1), None),
])
def test_interpret_swipe(args, expected):
    assert interpret_swipe(*args) == expected


def test_swipe_sensitivity_scales_velocity():
    sensitive = SwipeSensitivity(vertical_sensitivity=4.0)
    assert interpret_swipe(0, 100, 0, 0.2, sensitive) == GestureAction.HARD_DROP
