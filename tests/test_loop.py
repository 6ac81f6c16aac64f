import asyncio
from dataclasses import replace

import pytest

from falling_blocks.game import (
    Action,
    Finished,
    GameBoard,
    GameLoop,
    GameSession,
    GameSettings,
    Position,
    TetrominoType,
)

from conftest import make_state


def _loop(ticks, timers, clock=None, fall_delay_ms=1, timer_interval_ms=1):
    kwargs = {"clock": clock} if clock is not None else {}
    return GameLoop(
        on_tick=lambda: ticks.append(1),
        on_timer=timers.append,
        fall_delay_ms=lambda: fall_delay_ms,
        timer_interval_ms=timer_interval_ms,
        **kwargs,
    )


def test_timers_fire_and_pause_silences_them():
    ticks, timers = [], []

    async def scenario():
        loop = _loop(ticks, timers)
        loop.start()
        assert loop.is_running
        await asyncio.sleep(0.05)
        assert ticks and timers
        assert all(isinstance(ms, int) for ms in timers)

        loop.pause()
        await asyncio.sleep(0.01)
        seen = (len(ticks), len(timers))
        await asyncio.sleep(0.05)
        assert (len(ticks), len(timers)) == seen

        loop.resume()
        await asyncio.sleep(0.05)
        assert len(ticks) > seen[0]
        loop.stop()
        assert not loop.is_running

    asyncio.run(scenario())


def test_elapsed_excludes_paused_time(clock):
    clock.t = 10.0

    async def scenario():
        loop = _loop([], [], clock=clock, fall_delay_ms=60000, timer_interval_ms=60000)
        loop.start()
        clock.t = 11.0
        assert loop.elapsed_ms() == 1000
        loop.pause()
        assert loop.is_paused
        clock.t = 15.0
        assert loop.elapsed_ms() == 1000
        loop.resume()
        clock.t = 16.0
        assert loop.elapsed_ms() == 2000
        loop.stop()

    asyncio.run(scenario())


def test_start_needs_running_event_loop():
    with pytest.raises(RuntimeError):
        _loop([], []).start()


def test_timer_interval_must_be_positive():
    with pytest.raises(ValueError):
        _loop([], [], timer_interval_ms=0)


def test_session_pause_reaches_loop(clock):
    async def scenario():
        session = GameSession(GameSettings(random_seed=1), clock=clock)
        session.start()
        loop = session.run_loop()
        assert loop.is_running
        session.dispatch(Action.PAUSE)
        assert loop.is_paused
        session.dispatch(Action.RESUME)
        assert not loop.is_paused
        session.stop()
        assert not loop.is_running

    asyncio.run(scenario())


def test_session_loop_starts_paused_for_paused_state(clock):
    async def scenario():
        session = GameSession(clock=clock)
        session.restore(make_state().paused(True))
        loop = session.run_loop()
        assert loop.is_paused
        session.stop()

    asyncio.run(scenario())


def test_game_over_stops_loop(clock):
    async def scenario():
        session = GameSession(clock=clock)
        board = GameBoard(cells={Position(4, 0): TetrominoType.Z, Position(4, 1): TetrominoType.Z})
        session.restore(make_state(kind=TetrominoType.I, position=Position(0, 18), board=board))
        loop = session.run_loop()
        session.dispatch(Action.HARD_DROP)
        assert session.state.is_game_over
        assert not loop.is_running

    asyncio.run(scenario())


def test_new_game_after_game_over_restarts_loop(clock):
    async def scenario():
        session = GameSession(clock=clock)
        board = GameBoard(cells={Position(4, 0): TetrominoType.Z, Position(4, 1): TetrominoType.Z})
        session.restore(make_state(kind=TetrominoType.I, position=Position(0, 18), board=board))
        loop = session.run_loop()
        session.dispatch(Action.HARD_DROP)
        assert not loop.is_running

        session.start()
        assert not session.state.is_game_over
        assert loop.is_running
        assert not loop.is_paused
        session.stop()

    asyncio.run(scenario())


def test_restore_unpaused_state_resumes_loop(clock):
    async def scenario():
        session = GameSession(clock=clock)
        session.start()
        loop = session.run_loop()
        session.dispatch(Action.PAUSE)
        assert loop.is_paused

        session.restore(make_state())
        assert not session.state.is_paused
        assert not loop.is_paused
        session.stop()

    asyncio.run(scenario())


def test_restore_paused_state_pauses_loop(clock):
    async def scenario():
        session = GameSession(clock=clock)
        session.start()
        loop = session.run_loop()
        clock.advance(1.0)
        session.restore(make_state().paused(True))
        assert loop.is_paused
        frozen = loop.elapsed_ms()
        clock.advance(5.0)
        assert loop.elapsed_ms() == frozen

        assert session.dispatch(Action.RESUME)
        assert not loop.is_paused
        session.stop()

    asyncio.run(scenario())


def test_restore_after_game_over_restarts_loop(clock):
    async def scenario():
        session = GameSession(clock=clock)
        board = GameBoard(cells={Position(4, 0): TetrominoType.Z, Position(4, 1): TetrominoType.Z})
        session.restore(make_state(kind=TetrominoType.I, position=Position(0, 18), board=board))
        loop = session.run_loop()
        session.dispatch(Action.HARD_DROP)
        assert not loop.is_running

        session.restore(make_state())
        assert loop.is_running

        session.restore(replace(make_state(), phase=Finished(Position(3, 0))))
        assert not loop.is_running

    asyncio.run(scenario())
