"""
Event bus for the publish/subscribe dispatch of cycle output.

Handlers are keyed by event class name. A failing handler is logged and
never prevents the other handlers (or the next cycle) from running.
"""

import asyncio
import inspect
import logging
from collections import defaultdict
from typing import Callable, Dict, Iterable, List, Type

from .events import Event

logger = logging.getLogger(__name__)


class EventBus:
    """
    Event bus for publish-subscribe pattern.

    Usage:
        bus = EventBus()
        bus.subscribe(TradeIntent, executor.on_trade_intent)
        await bus.publish(TradeIntent(...))
    """

    def __init__(self):
        self._subscribers: Dict[str, List[Callable]] = defaultdict(list)
        self.handler_errors = 0
        self.logger = logging.getLogger(f"{__name__}.EventBus")

    def subscribe(self, event_type: Type[Event], callback: Callable) -> None:
        """
        Subscribe to an event type.

        Args:
            event_type: Event class to subscribe to
            callback: Sync or async callable taking the event
        """
        self._subscribers[event_type.__name__].append(callback)
        self.logger.debug(f"Subscribed to {event_type.__name__}: {_name(callback)}")

    def unsubscribe_all(self, callback: Callable) -> None:
        """Remove a callback from every event type."""
        for callbacks in self._subscribers.values():
            while callback in callbacks:
                callbacks.remove(callback)

    def subscriber_count(self, event_type: Type[Event]) -> int:
        return len(self._subscribers[event_type.__name__])

    async def publish(self, event: Event) -> None:
        """
        Publish an event to all subscribers.

        Args:
            event: Event object to publish
        """
        event_type = event.__class__.__name__
        callbacks = list(self._subscribers[event_type])
        if not callbacks:
            return

        results = await asyncio.gather(
            *(self._invoke(callback, event) for callback in callbacks),
            return_exceptions=True,
        )
        for callback, result in zip(callbacks, results):
            if isinstance(result, Exception):
                self.handler_errors += 1
                self.logger.error(f"Error in subscriber {_name(callback)} for {event_type}: {result}")

    async def publish_all(self, events: Iterable[Event]) -> None:
        """Publish events one after the other, preserving their order."""
        for event in events:
            await self.publish(event)

    @staticmethod
    async def _invoke(callback: Callable, event: Event) -> None:
        result = callback(event)
        if inspect.isawaitable(result):
            await result


def _name(callback: Callable) -> str:
    return getattr(callback, '__name__', repr(callback))
