"""
Notification sink interface.

A sink accepts a plain text message. Sinks never raise for delivery or
configuration problems: they log and report False.
"""

from abc import ABC, abstractmethod
import logging


class NotificationSink(ABC):
    """Destination for plain text alerts."""

    def __init__(self, name: str = None):
        self.name = name or self.__class__.__name__
        self.logger = logging.getLogger(f"{__name__}.{self.name}")
        self.sent = 0
        self.failed = 0
        self._warned_unconfigured = False

    @property
    @abstractmethod
    def is_configured(self) -> bool:
        """True when the sink has everything it needs to deliver."""

    @abstractmethod
    async def _deliver(self, message: str) -> bool:
        """Deliver the message; only called on a configured sink."""

    async def send(self, message: str) -> bool:
        """
        Send a message.

        Returns:
            True if delivered, False if skipped or failed
        """
        if not self.is_configured:
            if not self._warned_unconfigured:
                self.logger.warning(f"{self.name} not configured. Skipping notifications.")
                self._warned_unconfigured = True
            return False

        delivered = await self._deliver(message)
        if delivered:
            self.sent += 1
        else:
            self.failed += 1
        return delivered
