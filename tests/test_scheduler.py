"""
Scheduler tests: skip-if-busy ticks, crash isolation and shutdown.
"""

import asyncio

from dexwatch.pipeline.orchestrator import CycleResult
from dexwatch.pipeline.scheduler import CycleScheduler


class BlockingOrchestrator:
    """run_cycle() waits until released."""

    def __init__(self):
        self.release = asyncio.Event()
        self.started = 0

    async def run_cycle(self) -> CycleResult:
        self.started += 1
        await self.release.wait()
        return CycleResult(cycle=self.started)


class CrashingOrchestrator:
    async def run_cycle(self) -> CycleResult:
        raise RuntimeError("boom")


async def test_tick_skipped_while_cycle_running():
    orchestrator = BlockingOrchestrator()
    scheduler = CycleScheduler(orchestrator, interval_seconds=60)

    first = asyncio.create_task(scheduler.run_once())
    await asyncio.sleep(0)
    assert scheduler.is_busy

    assert await scheduler.run_once() is None
    assert scheduler.skipped == 1

    orchestrator.release.set()
    result = await first

    assert result.cycle == 1
    assert orchestrator.started == 1
    assert scheduler.completed == 1
    assert not scheduler.is_busy


async def test_crashed_cycle_returns_none():
    scheduler = CycleScheduler(CrashingOrchestrator(), interval_seconds=60)

    assert await scheduler.run_once() is None
    assert scheduler.completed == 0
    assert not scheduler.is_busy


async def test_start_runs_first_cycle_immediately_and_stop_waits():
    orchestrator = BlockingOrchestrator()
    scheduler = CycleScheduler(orchestrator, interval_seconds=3600)

    scheduler.start()
    assert scheduler.is_running
    for _ in range(5):
        await asyncio.sleep(0)
    assert orchestrator.started == 1

    orchestrator.release.set()
    await scheduler.stop()

    assert not scheduler.is_running
    assert scheduler.completed == 1


async def test_short_interval_skips_overlapping_ticks():
    orchestrator = BlockingOrchestrator()
    scheduler = CycleScheduler(orchestrator, interval_seconds=0.01)

    scheduler.start()
    await asyncio.sleep(0.1)
    orchestrator.release.set()
    await scheduler.stop()

    assert orchestrator.started >= 1
    assert scheduler.skipped >= 1
