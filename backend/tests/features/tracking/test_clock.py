"""
Tests for SessionClock and ClockTicker.
"""

import asyncio

import pytest

from stridelog.features.tracking import ClockTicker, SessionClock


class TestSessionClock:

    def test_idle_clock_does_not_tick(self):
        clock = SessionClock()
        assert clock.tick() is False
        assert clock.elapsed_seconds == 0

    def test_counts_ticks_while_running(self):
        clock = SessionClock()
        clock.start()
        for _ in range(3):
            clock.tick()
        assert clock.elapsed_seconds == 3

    def test_pause_preserves_elapsed(self):
        clock = SessionClock()
        clock.start()
        clock.tick()
        clock.tick()
        clock.pause()
        clock.tick()
        assert clock.elapsed_seconds == 2

        clock.start()
        clock.tick()
        assert clock.elapsed_seconds == 3

    def test_reset(self):
        clock = SessionClock()
        clock.start()
        clock.tick()
        clock.reset()
        assert clock.elapsed_seconds == 0
        assert clock.running is False


class TestClockTicker:

    def test_start_without_event_loop(self):
        ticker = ClockTicker(lambda: None)
        assert ticker.start() is False
        assert ticker.running is False

    @pytest.mark.asyncio
    async def test_ticks_periodically(self):
        ticks = []
        ticker = ClockTicker(lambda: ticks.append(1), interval=0.01)
        assert ticker.start() is True
        await asyncio.sleep(0.1)
        ticker.stop()
        assert len(ticks) >= 2

    @pytest.mark.asyncio
    async def test_no_ticks_after_stop(self):
        ticks = []
        ticker = ClockTicker(lambda: ticks.append(1), interval=0.01)
        ticker.start()
        await asyncio.sleep(0.05)
        ticker.stop()
        count = len(ticks)
        await asyncio.sleep(0.05)
        assert len(ticks) == count
        assert ticker.running is False
