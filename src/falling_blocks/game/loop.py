from __future__ import annotations

import asyncio
import logging
import time
from typing import Callable, Optional

logger = logging.getLogger(__name__)

DEFAULT_TIMER_INTERVAL_MS = 100


class GameLoop:
    """Gravity and clock timers for one running game.

    Two independent asyncio tasks: the gravity task sleeps for the current
    fall delay and then calls `on_tick`; the clock task reports elapsed play
    time every `timer_interval_ms`. No callbacks fire while paused, and the
    paused interval is excluded from elapsed time. The two tasks are not
    ordered relative to each other.
    """

    def __init__(
        self,
        on_tick: Callable[[], None],
        on_timer: Callable[[int], None],
        fall_delay_ms: Callable[[], int],
        clock: Callable[[], float] = time.monotonic,
        timer_interval_ms: int = DEFAULT_TIMER_INTERVAL_MS,
    ) -> None:
        if timer_interval_ms <= 0:
            raise ValueError("timer_interval_ms must be positive")
        self.on_tick = on_tick
        self.on_timer = on_timer
        self.fall_delay_ms = fall_delay_ms
        self.clock = clock
        self.timer_interval_ms = timer_interval_ms

        self._gravity_task: Optional[asyncio.Task] = None
        self._timer_task: Optional[asyncio.Task] = None
        self._start_ms = 0.0
        self._paused_at_ms = 0.0
        self._total_paused_ms = 0.0
        self._paused = False

    def _now_ms(self) -> float:
        return self.clock() * 1000.0

    @property
    def is_running(self) -> bool:
        return self._gravity_task is not None

    @property
    def is_paused(self) -> bool:
        return self._paused

    def elapsed_ms(self) -> int:
        end = self._paused_at_ms if self._paused else self._now_ms()
        return int(end - self._start_ms - self._total_paused_ms)

    def start(self) -> None:
        """Start both timers. Must be called from a running event loop."""
        self.stop()
        loop = asyncio.get_running_loop()
        self._paused = False
        self._start_ms = self._now_ms()
        self._total_paused_ms = 0.0
        self._gravity_task = loop.create_task(self._run_gravity())
        self._timer_task = loop.create_task(self._run_clock())
        logger.debug("game loop started")

    def pause(self) -> None:
        if self._paused:
            return
        self._paused = True
        self._paused_at_ms = self._now_ms()

    def resume(self) -> None:
        if not self._paused:
            return
        self._paused = False
        self._total_paused_ms += self._now_ms() - self._paused_at_ms

    def stop(self) -> None:
        for task in (self._gravity_task, self._timer_task):
            if task is not None:
                task.cancel()
        if self._gravity_task is not None:
            logger.debug("game loop stopped after %d ms", self.elapsed_ms())
        self._gravity_task = None
        self._timer_task = None
        self._paused = False

    async def _run_gravity(self) -> None:
        while True:
            await asyncio.sleep(self.fall_delay_ms() / 1000.0)
            if not self._paused:
                self.on_tick()

    async def _run_clock(self) -> None:
        while True:
            await asyncio.sleep(self.timer_interval_ms / 1000.0)
            if not self._paused:
                self.on_timer(self.elapsed_ms())
