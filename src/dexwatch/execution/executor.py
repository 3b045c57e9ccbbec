"""
Trade executor - forwards TradeIntent events to the execution channel.
"""

import logging

from dexwatch.core.event_bus import EventBus
from dexwatch.core.events import TradeIntent
from dexwatch.execution.channel import TradeChannel

logger = logging.getLogger(__name__)


class TradeExecutor:
    """Subscribes to TradeIntent and delivers each one exactly once (no retries)."""

    def __init__(self, event_bus: EventBus, channel: TradeChannel):
        self.event_bus = event_bus
        self.channel = channel
        self.stats = {"delivered": 0, "failed": 0}

    def start(self) -> None:
        self.event_bus.subscribe(TradeIntent, self.on_trade_intent)

    def stop(self) -> None:
        self.event_bus.unsubscribe_all(self.on_trade_intent)

    async def on_trade_intent(self, intent: TradeIntent) -> None:
        if await self.channel.execute(intent):
            self.stats["delivered"] += 1
        else:
            self.stats["failed"] += 1
