from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional

from falling_blocks.effects.feedback import VisualEffectFeed, plan_feedback
from falling_blocks.input.gestures import GestureAction, GestureEvent, GestureInterpreter, interpret_swipe

from .generator import PieceGenerator
from .ghost import ghost_y_for_state
from .lock import lock, start_game
from .loop import GameLoop
from .movement import hard_drop, move_down, move_left, move_right, rotate
from .rules import ScoringRules
from .settings import GameSettings
from .state import GameState

logger = logging.getLogger(__name__)


class Action(Enum):
    MOVE_LEFT = "move_left"
    MOVE_RIGHT = "move_right"
    MOVE_DOWN = "move_down"
    ROTATE = "rotate"
    HARD_DROP = "hard_drop"
    PAUSE = "pause"
    RESUME = "resume"


GESTURE_ACTIONS = {
    GestureAction.MOVE_LEFT: Action.MOVE_LEFT,
    GestureAction.MOVE_RIGHT: Action.MOVE_RIGHT,
    GestureAction.MOVE_DOWN: Action.MOVE_DOWN,
    GestureAction.HARD_DROP: Action.HARD_DROP,
}


@dataclass(frozen=True)
class LockOutcome:
    state: GameState
    ghost_y: Optional[int]
    lines_cleared: int
    next_combo_streak: int
    feed: VisualEffectFeed
    level_increased: bool


@dataclass(frozen=True)
class TickResult:
    state: GameState
    ghost_y: Optional[int]
    requires_lock: bool


def process_lock(
    state: GameState,
    generator: PieceGenerator,
    combo_streak: int,
    feed: VisualEffectFeed,
    rules: Optional[ScoringRules] = None,
) -> LockOutcome:
    """Lock the falling piece and plan the feedback for whatever it cleared."""
    locked = lock(state, generator, rules)
    lines = locked.lines_cleared - state.lines_cleared
    plan = plan_feedback(combo_streak, lines)
    if plan.burst is not None:
        feed = feed.publish(plan.burst)
    return LockOutcome(
        state=locked,
        ghost_y=ghost_y_for_state(locked),
        lines_cleared=lines,
        next_combo_streak=plan.next_combo_streak,
        feed=feed,
        level_increased=locked.level > state.level,
    )


def advance_tick(state: GameState) -> TickResult:
    """One gravity step: fall a row, or report that the piece has to lock."""
    moved = move_down(state)
    if moved is None:
        return TickResult(state=state, ghost_y=ghost_y_for_state(state), requires_lock=True)
    return TickResult(state=moved, ghost_y=ghost_y_for_state(moved), requires_lock=False)


Listener = Callable[["GameSession"], None]


class GameSession:
    """Single writer for the state of one play session.

    Inputs (actions, gestures, gravity ticks) are applied through the pure
    engine functions and the result replaces `state` in one assignment.
    Listeners are called after every published change.
    """

    def __init__(
        self,
        settings: Optional[GameSettings] = None,
        generator: Optional[PieceGenerator] = None,
        rules: Optional[ScoringRules] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.settings = settings or GameSettings()
        self.generator = generator or PieceGenerator(seed=self.settings.random_seed)
        self.rules = rules or ScoringRules()
        self.clock = clock
        self.gestures = GestureInterpreter(self.settings.gesture, clock=clock)

        self.state: Optional[GameState] = None
        self.ghost_y: Optional[int] = None
        self.combo_streak = 0
        self.feed = VisualEffectFeed()
        self.elapsed_ms = 0
        self.loop: Optional[GameLoop] = None
        self._listeners: List[Listener] = []

    # -- observation ---------------------------------------------------------

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)

    def _publish(self, state: GameState) -> None:
        self.state = state
        self.ghost_y = ghost_y_for_state(state)
        self._notify()

    # -- lifecycle -----------------------------------------------------------

    def start(self) -> GameState:
        state = start_game(self.settings, self.generator)
        self.combo_streak = 0
        self.feed = VisualEffectFeed(sequence=self.feed.sequence)
        self.elapsed_ms = 0
        self.gestures = GestureInterpreter(self.settings.gesture, clock=self.clock)
        logger.info("new game on %dx%d board, difficulty %s",
                    state.board.width, state.board.height, self.settings.difficulty.name)
        self._publish(state)
        if self.loop is not None:
            self.loop.start()
        return state

    def restore(self, state: GameState) -> None:
        """Continue from a previously saved snapshot."""
        self.combo_streak = 0
        self._publish(state)
        if self.loop is None:
            return
        if state.is_game_over:
            self.loop.stop()
            return
        if not self.loop.is_running:
            self.loop.start()
        self._sync_loop_pause(state)

    def _sync_loop_pause(self, state: GameState) -> None:
        if state.is_paused:
            self.loop.pause()
        else:
            self.loop.resume()

    def fall_delay_ms(self) -> int:
        level = self.state.level if self.state is not None else 1
        return self.settings.difficulty.fall_delay_for_level(level)

    def run_loop(self) -> GameLoop:
        """Attach and start gravity/clock timers on the running event loop."""
        if self.loop is None:
            self.loop = GameLoop(
                on_tick=self.tick,
                on_timer=self.update_elapsed,
                fall_delay_ms=self.fall_delay_ms,
                clock=self.clock,
            )
        self.loop.start()
        if self.state is not None:
            self._sync_loop_pause(self.state)
        return self.loop

    def stop(self) -> None:
        if self.loop is not None:
            self.loop.stop()

    # -- input ---------------------------------------------------------------

    def dispatch(self, action: Action) -> bool:
        """Apply one action. Returns False when it changed nothing."""
        if not isinstance(action, Action):
            raise ValueError(f"Unknown action: {action!r}")
        state = self.state
        if state is None:
            return False

        if action == Action.PAUSE:
            return self._pause(state)
        if action == Action.RESUME:
            return self._resume(state)

        if action == Action.MOVE_LEFT:
            return self._apply(move_left(state))
        if action == Action.MOVE_RIGHT:
            return self._apply(move_right(state))
        if action == Action.ROTATE:
            return self._apply(rotate(state))
        if action == Action.MOVE_DOWN:
            moved = move_down(state)
            if moved is not None:
                return self._apply(moved)
            if state.is_game_over or state.is_paused:
                return False
            self._lock(state)
            return True
        if action == Action.HARD_DROP:
            dropped = hard_drop(state)
            if dropped is None:
                return False
            self._lock(dropped)
            return True
        return False

    def handle_gesture(self, event: GestureEvent) -> bool:
        result = self.gestures.handle(event)
        if result is None:
            return False
        return self.dispatch(GESTURE_ACTIONS[result])

    def handle_swipe(self, delta_x: float, delta_y: float, velocity_x: float, velocity_y: float) -> bool:
        result = interpret_swipe(delta_x, delta_y, velocity_x, velocity_y, self.settings.swipe_sensitivity)
        if result is None:
            return False
        return self.dispatch(GESTURE_ACTIONS[result])

    def tick(self) -> bool:
        """Gravity step driven by the loop."""
        state = self.state
        if state is None or state.is_game_over or state.is_paused:
            return False
        result = advance_tick(state)
        if result.requires_lock:
            self._lock(state)
        else:
            self._publish(result.state)
        return True

    def update_elapsed(self, elapsed_ms: int) -> None:
        self.elapsed_ms = elapsed_ms
        self._notify()

    def acknowledge_effect(self, burst_id: int) -> None:
        self.feed = self.feed.acknowledge(burst_id)

    # -- internals -----------------------------------------------------------

    def _apply(self, new_state: Optional[GameState]) -> bool:
        if new_state is None:
            return False
        self._publish(new_state)
        return True

    def _pause(self, state: GameState) -> bool:
        if state.is_game_over or state.is_paused:
            return False
        if self.loop is not None:
            self.loop.pause()
        self._publish(state.paused(True))
        return True

    def _resume(self, state: GameState) -> bool:
        if not state.is_paused:
            return False
        if self.loop is not None:
            self.loop.resume()
        self._publish(state.paused(False))
        return True

    def _lock(self, state: GameState) -> LockOutcome:
        outcome = process_lock(state, self.generator, self.combo_streak, self.feed, self.rules)
        self.combo_streak = outcome.next_combo_streak
        self.feed = outcome.feed
        if outcome.lines_cleared:
            logger.debug("cleared %d line(s), score %d, combo %d",
                         outcome.lines_cleared, outcome.state.score, outcome.next_combo_streak)
        if outcome.level_increased:
            logger.debug("level up to %d", outcome.state.level)
        self._publish(outcome.state)
        if outcome.state.is_game_over:
            logger.info("game over: score %d, lines %d", outcome.state.score, outcome.state.lines_cleared)
            self.stop()
        return outcome
