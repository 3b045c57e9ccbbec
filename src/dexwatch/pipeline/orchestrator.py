"""
Cycle Orchestrator - one poll cycle from fetch to summary.

    fetch -> for each snapshot: filter -> store -> detect -> decide
          -> summarize -> publish collected events

Events produced while snapshots are processed are only published once the
whole batch has gone through the decision logic.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from dexwatch.core.event_bus import EventBus
from dexwatch.core.events import CycleSummary, Event, PatternDetected, PatternEvent
from dexwatch.core.exceptions import PerAssetFailure, TransportFailure
from dexwatch.decision.engine import DecisionEngine
from dexwatch.decision.patterns import PatternDetector
from dexwatch.market_data.feed import MarketDataFeed
from dexwatch.market_data.models import AssetSnapshot
from dexwatch.risk.chain import RiskFilterChain
from dexwatch.storage.observation_store import AssetRecord, ObservationStore
from dexwatch.utils.logger import get_performance_logger

logger = logging.getLogger(__name__)
perf = get_performance_logger(__name__)


@dataclass
class CycleResult:
    """What happened during one cycle."""
    cycle: int
    fetched: int = 0
    admitted: int = 0
    denied: int = 0
    failures: int = 0
    events: List[Event] = field(default_factory=list)
    summary: Optional[CycleSummary] = None


class CycleOrchestrator:
    """
    Drives one full cycle over a snapshot batch.

    Every collaborator is injected, so tests can run cycles against isolated
    stores, blacklists and fake oracles.
    """

    def __init__(
        self,
        feed: MarketDataFeed,
        risk_chain: RiskFilterChain,
        store: ObservationStore,
        detector: PatternDetector,
        engine: DecisionEngine,
        event_bus: Optional[EventBus] = None
    ):
        self.feed = feed
        self.risk_chain = risk_chain
        self.store = store
        self.detector = detector
        self.engine = engine
        self.event_bus = event_bus or EventBus()
        self.cycle_count = 0

    async def run_cycle(self) -> CycleResult:
        """
        Run one cycle and publish its events.

        Returns:
            CycleResult with counts, collected events and the summary
        """
        self.cycle_count += 1
        result = CycleResult(cycle=self.cycle_count)

        with perf.timer("cycle", cycle=result.cycle):
            try:
                snapshots = await self.feed.fetch_snapshots()
            except TransportFailure as e:
                logger.error(f"Failed to fetch market data: {e}")
                snapshots = []
            result.fetched = len(snapshots)

            for snapshot in snapshots:
                try:
                    await self.process_snapshot(snapshot, result)
                except Exception as e:
                    result.failures += 1
                    failure = PerAssetFailure(snapshot.address, e)
                    logger.error(str(failure), exc_info=True, extra={'address': snapshot.address, 'cycle': result.cycle})

            result.summary = self.summarize(result.cycle)
            result.events.append(result.summary)
            self.log_summary(result.summary)

        await self.event_bus.publish_all(result.events)
        return result

    async def process_snapshot(self, snapshot: AssetSnapshot, result: CycleResult) -> Optional[AssetRecord]:
        """Filter, store, detect and decide for a single snapshot."""
        verdict = await self.risk_chain.admit(snapshot)
        if verdict.denied:
            result.denied += 1
            return None
        result.admitted += 1

        record = self.store.record(snapshot.identity, snapshot.observation)

        patterns = self.detector.analyze(record)
        if patterns.new:
            prev, last = record.window.latest_pair()
            for pattern in sorted(patterns.new, key=lambda p: p.value):
                result.events.append(PatternDetected(
                    address=record.address,
                    symbol=record.symbol,
                    pattern=pattern,
                    price=last.price,
                    previous_price=prev.price,
                ))

        intent = self.engine.step(record)
        if intent is not None:
            result.events.append(intent)

        return record

    def summarize(self, cycle: int = 0) -> CycleSummary:
        """Counts over every tracked asset."""
        return CycleSummary(
            cycle=cycle,
            tracked_count=len(self.store),
            rugged_count=self.store.count_with(PatternEvent.RUGGED),
            pumped_count=self.store.count_with(PatternEvent.PUMPED),
        )

    @staticmethod
    def log_summary(summary: CycleSummary) -> None:
        logger.info("=== PATTERN SUMMARY ===")
        logger.info(f"Tracked tokens: {summary.tracked_count}")
        logger.info(f"Rugged: {summary.rugged_count}, Pumped: {summary.pumped_count}")
