"""
Background save queue.

Finished activities are stored off the tracking path. A failed save is
retried a bounded number of times; records that still fail are kept in
`SaveQueue.failed` and reported through `on_failed` rather than dropped.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional, Union

from stridelog.config import settings
from stridelog.features.activities import ActivityRecord, ActivityService
from stridelog.shared.errors import StorageError

logger = logging.getLogger(__name__)


@dataclass
class PendingSave:
    """A finished activity waiting to be stored."""
    record: ActivityRecord
    account_id: int
    attempts: int = 0
    last_error: Optional[str] = None


SavedCallback = Callable[[PendingSave, int], Union[None, Awaitable[None]]]
FailedCallback = Callable[[PendingSave], Union[None, Awaitable[None]]]


class SaveQueue:
    """
    Stores finished activities in a background task.

    `submit()` never blocks and may be called from any thread once the
    queue has been started.

    Usage:
        queue = SaveQueue(AsyncSessionLocal)
        await queue.start()
        queue.submit(record, account_id)
        # ... later ...
        await queue.stop()
    """

    def __init__(
        self,
        db_factory,
        max_attempts: Optional[int] = None,
        retry_delay: Optional[float] = None,
        on_saved: Optional[SavedCallback] = None,
        on_failed: Optional[FailedCallback] = None,
    ):
        self._db_factory = db_factory
        self.max_attempts = max_attempts or settings.save_max_attempts
        self.retry_delay = retry_delay if retry_delay is not None else settings.save_retry_delay_seconds
        self._on_saved = on_saved
        self._on_failed = on_failed

        self._queue: asyncio.Queue[PendingSave] = asyncio.Queue()
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._task: Optional[asyncio.Task] = None
        self._running = False
        self.failed: list[PendingSave] = []

    @property
    def pending_count(self) -> int:
        return self._queue.qsize()

    @property
    def running(self) -> bool:
        return self._running

    async def start(self):
        """Start the background save loop."""
        if self._running:
            return

        self._running = True
        self._loop = asyncio.get_running_loop()
        self._task = asyncio.create_task(self._run_loop())
        logger.info("Save queue started")

    async def stop(self, drain: bool = True):
        """
        Stop the save loop.

        Args:
            drain: Wait for queued saves (including retries) to finish first
        """
        if drain and self._running:
            await self._queue.join()
        self._running = False
        if self._task:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None
        logger.info("Save queue stopped")

    async def join(self):
        """Wait until every submitted record has been handled."""
        await self._queue.join()

    def submit(self, record: ActivityRecord, account_id: int) -> None:
        """Queue a finished activity for storage."""
        item = PendingSave(record=record, account_id=account_id)
        try:
            current = asyncio.get_running_loop()
        except RuntimeError:
            current = None

        if self._loop is not None and current is not self._loop:
            self._loop.call_soon_threadsafe(self._queue.put_nowait, item)
        else:
            self._queue.put_nowait(item)
        logger.debug(f"Queued {record.type} activity for account {account_id}")

    async def _run_loop(self):
        """Main save loop."""
        while self._running:
            item = await self._queue.get()
            try:
                await self._save(item)
            except Exception as e:
                logger.error(f"Unexpected save error for account {item.account_id}: {e}")
                item.last_error = str(e)
                await self._give_up(item)
            finally:
                self._queue.task_done()

    async def _save(self, item: PendingSave):
        """Store one record, retrying storage failures."""
        while True:
            item.attempts += 1
            try:
                async with self._db_factory() as db:
                    activity_id = await ActivityService(db).create(item.record, item.account_id)
            except StorageError as e:
                item.last_error = str(e)
                logger.warning(
                    f"Save attempt {item.attempts}/{self.max_attempts} failed "
                    f"for account {item.account_id}: {e}"
                )
                if item.attempts >= self.max_attempts:
                    await self._give_up(item)
                    return
                await asyncio.sleep(self.retry_delay)
                continue

            item.record.id = activity_id
            await self._call(self._on_saved, item, activity_id)
            return

    async def _give_up(self, item: PendingSave):
        self.failed.append(item)
        logger.error(
            f"Giving up on {item.record.type} activity for account {item.account_id} "
            f"after {item.attempts} attempts; kept for later retry"
        )
        await self._call(self._on_failed, item)

    async def retry_failed(self) -> int:
        """
        Re-queue every record that previously gave up.

        Returns:
            Number of records re-queued
        """
        items, self.failed = self.failed, []
        for item in items:
            item.attempts = 0
            self._queue.put_nowait(item)
        if items:
            logger.info(f"Re-queued {len(items)} failed saves")
        return len(items)

    @staticmethod
    async def _call(callback, *args):
        if callback is None:
            return
        result = callback(*args)
        if asyncio.iscoroutine(result):
            await result
