"""
Trade execution channels.

A channel receives the structured command {action, symbol, address, amount}.
Delivery failures are logged and reported, never retried.
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from collections import deque
from typing import Any, Deque, Dict, Optional

import aiohttp

from dexwatch.core.events import TradeIntent
from dexwatch.core.exceptions import ConfigurationMissing
from dexwatch.notifications.templates import format_command

logger = logging.getLogger(__name__)


def command_payload(intent: TradeIntent) -> Dict[str, Any]:
    return {
        "action": intent.action.value,
        "symbol": intent.symbol,
        "address": intent.address,
        "amount": intent.amount,
    }


class TradeChannel(ABC):
    """Destination of trade commands."""

    @abstractmethod
    async def execute(self, intent: TradeIntent) -> bool:
        """Deliver one command; return True on success."""

    async def close(self) -> None:
        pass


class LoggingTradeChannel(TradeChannel):
    """Logs bot commands; used when no execution endpoint is configured."""

    def __init__(self, bot_username: str = "BonkBot", history: int = 100):
        self.bot_username = bot_username
        self.commands: Deque[str] = deque(maxlen=history)

    async def execute(self, intent: TradeIntent) -> bool:
        command = format_command(intent)
        self.commands.append(command)
        logger.info(f"[{self.bot_username}] Executing trade: {command}")
        return True


class HttpTradeChannel(TradeChannel):
    """POSTs the command as JSON to the execution endpoint."""

    def __init__(
        self,
        api_url: str,
        timeout_seconds: float = 10.0,
        session: Optional[aiohttp.ClientSession] = None
    ):
        if not api_url:
            raise ConfigurationMissing("endpoints.execution_api_url")
        self.api_url = api_url
        self.timeout = aiohttp.ClientTimeout(total=timeout_seconds)
        self._session = session
        self._owns_session = session is None

    async def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(timeout=self.timeout)
            self._owns_session = True
        return self._session

    async def execute(self, intent: TradeIntent) -> bool:
        session = await self._get_session()
        try:
            async with session.post(self.api_url, json=command_payload(intent), timeout=self.timeout) as response:
                if response.status < 200 or response.status >= 300:
                    logger.error(f"Trade command {format_command(intent)} rejected: HTTP {response.status}")
                    return False
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.error(f"Trade command {format_command(intent)} failed: {e!r}")
            return False

        logger.info(f"Trade command delivered: {format_command(intent)}")
        return True

    async def close(self) -> None:
        if self._owns_session and self._session is not None and not self._session.closed:
            await self._session.close()
