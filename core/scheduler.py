"""
Check Scheduler - Runs the aggregate check on an interval and on demand.
"""

import asyncio
import logging
from typing import Awaitable, Callable, Optional, Set

from core.context import ServiceContext
from models.check_result import CheckResult, StatusSnapshot

DEFAULT_CHECK_INTERVAL = 30

CheckFn = Callable[[], Awaitable[CheckResult]]
NotifyFn = Callable[[Optional[str], Optional[str]], Awaitable[object]]


class CheckScheduler:
    """Serializes aggregate checks and fires the notifier on the first find."""

    def __init__(
        self,
        check: CheckFn,
        context: ServiceContext,
        notify: NotifyFn = None,
        interval: float = DEFAULT_CHECK_INTERVAL
    ):
        """
        Args:
            check: Coroutine function running one aggregate check
            context: Shared service state
            notify: Coroutine function called with (model, source) on the first find
            interval: Seconds between scheduled checks
        """
        self.check = check
        self.context = context
        self.notify = notify
        self.interval = interval
        self.logger = logging.getLogger('CheckScheduler')
        self._checking = False
        self._tasks: Set[asyncio.Task] = set()

    @property
    def is_checking(self) -> bool:
        return self._checking

    async def perform_check(self) -> StatusSnapshot:
        """
        Run one aggregate check unless one is already in flight.

        A call made while a check is running returns immediately with the
        current snapshot; it is not queued.

        Returns:
            The status snapshot after this call
        """
        if self._checking:
            self.logger.debug("Check already in progress, skipping")
            return self.context.status
        self._checking = True

        try:
            result = await self.check()
            first_find = self.context.record(result)
            if first_find:
                self.logger.info(f"Sonnet 5 detected for the first time: {result}")
                self._spawn_notification(result)
        except Exception as e:
            self.logger.error(f"Check failed: {type(e).__name__}: {e}")
        finally:
            self._checking = False

        return self.context.status

    def _spawn_notification(self, result: CheckResult) -> None:
        if self.notify is None:
            return
        task = asyncio.create_task(self.notify(result.model, result.source))
        self._tasks.add(task)
        task.add_done_callback(self._on_notification_done)

    def _on_notification_done(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            self.logger.error(f"Notification failed: {type(exc).__name__}: {exc}")

    def _spawn_check(self) -> None:
        task = asyncio.create_task(self.perform_check())
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def run_forever(self) -> None:
        """Check immediately, then start one check per interval tick."""
        self.logger.info(f"Scheduler started, checking every {self.interval}s")
        while True:
            self._spawn_check()
            await asyncio.sleep(self.interval)

    async def drain(self) -> None:
        """Wait for background checks and notifications to finish."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    async def shutdown(self) -> None:
        """Cancel background checks and notifications still in flight."""
        tasks = list(self._tasks)
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        self._tasks.clear()
