"""
Market data feeds.

The orchestrator only depends on MarketDataFeed.fetch_snapshots(); the
DexScreener implementation polls the HTTP API with aiohttp.
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Dict, List, Optional

import aiohttp

from dexwatch.core.exceptions import TransportFailure
from dexwatch.market_data.models import AssetSnapshot, utc_now

logger = logging.getLogger(__name__)


class MarketDataFeed(ABC):
    """Source of snapshot batches."""

    @abstractmethod
    async def fetch_snapshots(self) -> List[AssetSnapshot]:
        """
        Fetch one batch of snapshots.

        Raises:
            TransportFailure: If the source could not be reached
        """

    async def close(self) -> None:
        pass


def parse_pairs(data: Optional[Dict[str, Any]], observed_at: Optional[datetime] = None) -> List[AssetSnapshot]:
    """Turn a DexScreener payload into snapshots, skipping pairs without a base token or with a malformed shape."""
    pairs = data.get('pairs') if data else None
    if not isinstance(pairs, list):
        return []

    observed_at = observed_at or utc_now()
    snapshots = []
    for pair in pairs:
        if not isinstance(pair, dict):
            continue
        try:
            snapshot = AssetSnapshot.from_pair(pair, observed_at=observed_at)
        except (AttributeError, TypeError, ValueError) as e:
            logger.warning(f"Skipping malformed pair {pair.get('pairAddress', '?')}: {e!r}")
            continue
        if snapshot is not None:
            snapshots.append(snapshot)
    return snapshots


class DexScreenerFeed(MarketDataFeed):
    """
    DexScreener HTTP feed.

    Each fetch is one GET against the configured URL; the response must be a
    JSON object with a 'pairs' list.
    """

    def __init__(
        self,
        api_url: str,
        timeout_seconds: float = 10.0,
        session: Optional[aiohttp.ClientSession] = None
    ):
        """
        Initialize the feed.

        Args:
            api_url: DexScreener endpoint
            timeout_seconds: Total timeout of one fetch
            session: Optional shared aiohttp session
        """
        self.api_url = api_url
        self.timeout = aiohttp.ClientTimeout(total=timeout_seconds)
        self._session = session
        self._owns_session = session is None
        self.fetch_count = 0

    async def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(timeout=self.timeout)
            self._owns_session = True
        return self._session

    async def fetch_snapshots(self) -> List[AssetSnapshot]:
        session = await self._get_session()
        try:
            async with session.get(self.api_url, timeout=self.timeout) as response:
                if response.status != 200:
                    raise TransportFailure("dexscreener", f"HTTP {response.status}", status=response.status)
                data = await response.json(content_type=None)
        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
            raise TransportFailure("dexscreener", str(e) or e.__class__.__name__) from e

        self.fetch_count += 1
        snapshots = parse_pairs(data if isinstance(data, dict) else None)
        logger.debug(f"Fetched {len(snapshots)} snapshots from DexScreener")
        return snapshots

    async def close(self) -> None:
        if self._owns_session and self._session is not None and not self._session.closed:
            await self._session.close()
