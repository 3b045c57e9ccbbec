"""
In-memory observation store.

Keeps one AssetRecord per token address for the lifetime of the process.
Every record owns a bounded FIFO window of observations; there is no
deletion API, which is fine for a bounded watch-list but grows without
limit under open-ended token discovery.
"""

from collections import deque
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Set, Tuple
import logging

from dexwatch.core.events import PatternEvent, TradeState
from dexwatch.market_data.models import AssetIdentity, Observation

logger = logging.getLogger(__name__)


class ObservationWindow:
    """Ordered observations of one asset, oldest first, capped at `capacity`."""

    def __init__(self, capacity: int):
        if capacity < 1:
            raise ValueError(f"Window capacity must be >= 1, got {capacity}")
        self._items: deque = deque(maxlen=capacity)

    @property
    def capacity(self) -> int:
        return self._items.maxlen

    def append(self, observation: Observation) -> None:
        """Append, evicting the oldest observation when full."""
        self._items.append(observation)

    def latest_pair(self) -> Optional[Tuple[Observation, Observation]]:
        """Return (previous, last) or None with fewer than two observations."""
        if len(self._items) < 2:
            return None
        return self._items[-2], self._items[-1]

    def as_list(self) -> List[Observation]:
        return list(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Observation]:
        return iter(self._items)


@dataclass
class AssetRecord:
    """Everything tracked about one asset."""
    identity: AssetIdentity
    window: ObservationWindow
    events: Set[PatternEvent] = field(default_factory=set)
    last_action: TradeState = TradeState.NONE

    @property
    def address(self) -> str:
        return self.identity.address

    @property
    def symbol(self) -> str:
        return self.identity.symbol


class ObservationStore:
    """
    Owner of every AssetRecord, keyed by lowercase token address.

    Usage:
        store = ObservationStore(window_size=5)
        record = store.record(snapshot.identity, snapshot.observation)
    """

    def __init__(self, window_size: int = 5):
        if window_size < 2:
            raise ValueError(f"window_size must be >= 2, got {window_size}")
        self.window_size = window_size
        self._records: Dict[str, AssetRecord] = {}

    def record(self, identity: AssetIdentity, observation: Observation) -> AssetRecord:
        """
        Append an observation to the asset's window, creating the record on first sight.

        The identity of an existing record is never replaced.
        """
        key = identity.address.lower()
        record = self._records.get(key)
        if record is None:
            if identity.address != key:
                identity = AssetIdentity(address=key, symbol=identity.symbol, chain=identity.chain)
            record = AssetRecord(identity=identity, window=ObservationWindow(self.window_size))
            self._records[key] = record
            logger.debug(f"Tracking new asset {identity.symbol} ({key}) on {identity.chain}")

        record.window.append(observation)
        return record

    def get(self, address: str) -> Optional[AssetRecord]:
        return self._records.get(address.lower())

    def records(self) -> List[AssetRecord]:
        return list(self._records.values())

    def count_with(self, event: PatternEvent) -> int:
        """Number of distinct assets whose event set contains `event`."""
        return sum(1 for record in self._records.values() if event in record.events)

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, address: str) -> bool:
        return address.lower() in self._records
