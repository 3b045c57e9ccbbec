"""
Notification Service

Subscribes to the pipeline events on the EventBus and forwards a rendered
text message to every configured sink.
"""

import asyncio
import logging
from typing import Dict, List

from dexwatch.core.event_bus import EventBus
from dexwatch.core.events import CycleSummary, PatternDetected, TradeIntent

from . import templates
from .base import NotificationSink

logger = logging.getLogger(__name__)


class NotificationService:
    """
    Routes pipeline events to notification sinks.

    - PatternDetected: rug/pump alert
    - TradeIntent: "executing trade" message
    - CycleSummary: only when notify_summary is enabled (always logged)
    """

    def __init__(
        self,
        event_bus: EventBus,
        sinks: List[NotificationSink],
        bot_username: str = "BonkBot",
        notify_summary: bool = False
    ):
        self.event_bus = event_bus
        self.sinks = sinks
        self.bot_username = bot_username
        self.notify_summary = notify_summary
        self.is_running = False

        self.stats = {
            "notifications_sent": 0,
            "notifications_failed": 0,
        }

    def start(self) -> None:
        """Subscribe to pipeline events."""
        if self.is_running:
            logger.warning("NotificationService already running")
            return

        self.event_bus.subscribe(PatternDetected, self._handle_pattern)
        self.event_bus.subscribe(TradeIntent, self._handle_trade)
        self.event_bus.subscribe(CycleSummary, self._handle_summary)
        self.is_running = True
        logger.info(f"NotificationService started with sinks: {[sink.name for sink in self.sinks]}")

    def stop(self) -> None:
        if not self.is_running:
            return
        self.event_bus.unsubscribe_all(self._handle_pattern)
        self.event_bus.unsubscribe_all(self._handle_trade)
        self.event_bus.unsubscribe_all(self._handle_summary)
        self.is_running = False

    async def _handle_pattern(self, event: PatternDetected) -> None:
        await self.broadcast(templates.render_pattern_alert(event))

    async def _handle_trade(self, event: TradeIntent) -> None:
        await self.broadcast(templates.render_trade(event, self.bot_username))

    async def _handle_summary(self, event: CycleSummary) -> None:
        if self.notify_summary:
            await self.broadcast(templates.render_summary(event))

    async def broadcast(self, message: str) -> Dict[str, bool]:
        """Send a message to every sink, returning delivery per sink."""
        results = await asyncio.gather(*(sink.send(message) for sink in self.sinks))
        for delivered in results:
            if delivered:
                self.stats["notifications_sent"] += 1
            else:
                self.stats["notifications_failed"] += 1
        return {sink.name: delivered for sink, delivered in zip(self.sinks, results)}
