"""
Cycle scheduler - fixed timer with a skip-if-busy policy.

A first cycle runs immediately, then one tick fires every interval. A tick
that finds the previous cycle still running is skipped, so two cycles never
mutate the store or the blacklists at the same time.
"""

import asyncio
import logging
from typing import Optional, Set

from dexwatch.pipeline.orchestrator import CycleOrchestrator, CycleResult

logger = logging.getLogger(__name__)


class CycleScheduler:
    """
    Runs CycleOrchestrator.run_cycle() on a fixed interval.

    Usage:
        scheduler = CycleScheduler(orchestrator, interval_seconds=60)
        scheduler.start()
        ...
        await scheduler.stop()
    """

    def __init__(self, orchestrator: CycleOrchestrator, interval_seconds: float):
        self.orchestrator = orchestrator
        self.interval_seconds = interval_seconds
        self._lock = asyncio.Lock()
        self._timer_task: Optional[asyncio.Task] = None
        self._inflight: Set[asyncio.Task] = set()
        self.completed = 0
        self.skipped = 0

    @property
    def is_running(self) -> bool:
        return self._timer_task is not None and not self._timer_task.done()

    @property
    def is_busy(self) -> bool:
        return self._lock.locked()

    async def run_once(self) -> Optional[CycleResult]:
        """
        Run a cycle unless one is already in progress.

        Returns:
            The cycle result, or None if the tick was skipped or the cycle crashed
        """
        if self._lock.locked():
            self.skipped += 1
            logger.warning("Previous cycle still running, skipping this tick")
            return None

        async with self._lock:
            try:
                result = await self.orchestrator.run_cycle()
            except Exception as e:
                logger.error(f"Cycle crashed: {e}")
                logger.exception("Full traceback:")
                return None
            self.completed += 1
            return result

    def start(self) -> None:
        if self.is_running:
            logger.warning("CycleScheduler already running")
            return
        logger.info(f"Starting cycle scheduler (interval={self.interval_seconds}s)")
        self._timer_task = asyncio.create_task(self._run())

    async def _run(self) -> None:
        self._spawn()
        while True:
            await asyncio.sleep(self.interval_seconds)
            logger.info("Fetching new data...")
            self._spawn()

    def _spawn(self) -> None:
        task = asyncio.create_task(self.run_once())
        self._inflight.add(task)
        task.add_done_callback(self._inflight.discard)

    async def wait(self) -> None:
        """Block until the scheduler is stopped."""
        if self._timer_task is not None:
            try:
                await self._timer_task
            except asyncio.CancelledError:
                pass

    async def stop(self) -> None:
        """Stop ticking and let the in-flight cycle finish."""
        if self._timer_task is not None:
            self._timer_task.cancel()
            try:
                await self._timer_task
            except asyncio.CancelledError:
                pass
            self._timer_task = None

        if self._inflight:
            await asyncio.gather(*self._inflight, return_exceptions=True)
        logger.info(f"Cycle scheduler stopped ({self.completed} cycles, {self.skipped} skipped ticks)")
