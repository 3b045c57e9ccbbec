"""
Telegram notification sink using the Bot API sendMessage method.
"""

import asyncio
from typing import Optional

import aiohttp

from .base import NotificationSink

TELEGRAM_API_URL = "https://api.telegram.org"


class TelegramNotifier(NotificationSink):
    """
    Sends alerts to a Telegram chat.

    Without a bot token or chat id the sink is a no-op (warned once).
    """

    def __init__(
        self,
        bot_token: Optional[str],
        chat_id: Optional[str],
        timeout_seconds: float = 10.0,
        api_url: str = TELEGRAM_API_URL,
        session: Optional[aiohttp.ClientSession] = None
    ):
        super().__init__("telegram")
        self.bot_token = bot_token or None
        self.chat_id = chat_id or None
        self.api_url = api_url.rstrip('/')
        self.timeout = aiohttp.ClientTimeout(total=timeout_seconds)
        self._session = session
        self._owns_session = session is None

    @property
    def is_configured(self) -> bool:
        return bool(self.bot_token and self.chat_id)

    async def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(timeout=self.timeout)
            self._owns_session = True
        return self._session

    async def _deliver(self, message: str) -> bool:
        url = f"{self.api_url}/bot{self.bot_token}/sendMessage"
        session = await self._get_session()
        try:
            async with session.post(
                url,
                json={"chat_id": self.chat_id, "text": message},
                timeout=self.timeout,
            ) as response:
                if response.status != 200:
                    self.logger.error(f"Failed to send Telegram notification: HTTP {response.status}")
                    return False
                return True
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            self.logger.error(f"Failed to send Telegram notification: {e!r}")
            return False

    async def close(self) -> None:
        if self._owns_session and self._session is not None and not self._session.closed:
            await self._session.close()
