"""
Session clock.

SessionClock counts ticks while running. ClockTicker is the periodic
asyncio task that delivers those ticks once per interval.
"""

import asyncio
import logging
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class SessionClock:
    """Pausable count of active seconds."""

    def __init__(self):
        self.elapsed_seconds = 0
        self.running = False

    def start(self) -> None:
        """Begin or resume counting."""
        self.running = True

    def pause(self) -> None:
        """Stop counting, keeping the elapsed total."""
        self.running = False

    def reset(self) -> None:
        self.elapsed_seconds = 0
        self.running = False

    def tick(self) -> bool:
        """
        Count one second if running.

        Returns:
            True if the tick was counted
        """
        if not self.running:
            return False
        self.elapsed_seconds += 1
        return True


class ClockTicker:
    """
    Periodic tick source.

    Call `start()` from inside a running event loop; `stop()` cancels the
    task synchronously so no further ticks are delivered.

    Usage:
        ticker = ClockTicker(session.tick, interval=1.0)
        ticker.start()
        # ... later ...
        ticker.stop()
    """

    def __init__(self, on_tick: Callable[[], object], interval: float = 1.0):
        self._on_tick = on_tick
        self.interval = interval
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> bool:
        """
        Start ticking.

        Returns:
            False when there is no running event loop (ticks must then be
            driven by the caller)
        """
        if self.running:
            return True
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.debug("No running event loop, clock ticks are driven manually")
            return False
        self._task = loop.create_task(self._run_loop())
        return True

    def stop(self) -> None:
        if self._task is not None:
            self._task.cancel()
            self._task = None

    async def _run_loop(self):
        while True:
            await asyncio.sleep(self.interval)
            self._on_tick()
