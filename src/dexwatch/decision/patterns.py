"""
Rug/pump pattern detection on the two most recent observations.

- Rug:  (prev - last) / prev >= price_drop_threshold
- Pump: last / prev >= price_pump_threshold

Both checks are independent. A non-positive previous price yields no signal.
"""

from dataclasses import dataclass, field
from typing import Set
import logging

from dexwatch.core.events import PatternEvent
from dexwatch.storage.observation_store import AssetRecord

logger = logging.getLogger(__name__)


@dataclass
class PatternResult:
    """Patterns triggered by the latest pair, and which of them the record did not have yet."""
    triggered: Set[PatternEvent] = field(default_factory=set)
    new: Set[PatternEvent] = field(default_factory=set)


class PatternDetector:
    """
    Flags collapse (rugged) and spike (pumped) patterns on an AssetRecord.

    Flagged patterns are added to the record's event set, so re-running the
    detector on the same pair never duplicates an event.
    """

    def __init__(self, price_drop_threshold: float = 0.90, price_pump_threshold: float = 1.50):
        self.price_drop_threshold = price_drop_threshold
        self.price_pump_threshold = price_pump_threshold

    def analyze(self, record: AssetRecord) -> PatternResult:
        result = PatternResult()
        pair = record.window.latest_pair()
        if pair is None:
            return result

        prev, last = pair
        if prev.price <= 0:
            logger.debug(f"Skipping pattern detection for {record.symbol}: previous price {prev.price}")
            return result

        drop_ratio = (prev.price - last.price) / prev.price
        if drop_ratio >= self.price_drop_threshold:
            result.triggered.add(PatternEvent.RUGGED)
            logger.warning(f"[ALERT] {record.symbol} possibly RUGGED (drop {drop_ratio:.1%}).")

        pump_ratio = last.price / prev.price
        if pump_ratio >= self.price_pump_threshold:
            result.triggered.add(PatternEvent.PUMPED)
            logger.warning(f"[ALERT] {record.symbol} PUMPED (x{pump_ratio:.2f}).")

        result.new = result.triggered - record.events
        record.events |= result.triggered
        return result

    def detect(self, record: AssetRecord) -> Set[PatternEvent]:
        """Return the patterns triggered by the record's latest pair (empty with < 2 observations)."""
        return self.analyze(record).triggered
