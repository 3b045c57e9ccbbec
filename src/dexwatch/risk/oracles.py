"""
Risk oracle clients.

Each oracle answers one question about a token:
- BundlingOracle: is the supply bundled?
- IntegrityOracle: what trust status does the token have? (RugCheck)
- FakeVolumeOracle: is the 24h volume fake? (Pocket Universe)

HTTP clients raise TransportFailure on any network/HTTP/JSON problem; the
checks decide what a failure means.
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable, Optional

import aiohttp

from dexwatch.core.exceptions import ConfigurationMissing, TransportFailure

logger = logging.getLogger(__name__)


# ============================================================================
# Interfaces
# ============================================================================

class BundlingOracle(ABC):
    @abstractmethod
    async def is_bundled(self, address: str) -> bool:
        """Return True if the token's supply is held by a few controlling wallets."""


class IntegrityOracle(ABC):
    @abstractmethod
    async def status(self, address: str) -> Optional[str]:
        """Return the trust status reported for the token."""


class FakeVolumeOracle(ABC):
    @abstractmethod
    async def is_fake(self, address: str, volume_24h: float) -> bool:
        """Return True if the reported 24h volume looks fabricated."""


# ============================================================================
# HTTP plumbing
# ============================================================================

class HttpOracle:
    """Shared aiohttp session handling for the oracle clients."""

    service = "oracle"

    def __init__(
        self,
        api_url: str,
        timeout_seconds: float = 10.0,
        session: Optional[aiohttp.ClientSession] = None
    ):
        if not api_url:
            raise ConfigurationMissing(f"{self.service} api_url")
        self.api_url = api_url
        self.timeout = aiohttp.ClientTimeout(total=timeout_seconds)
        self._session = session
        self._owns_session = session is None
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    async def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(timeout=self.timeout)
            self._owns_session = True
        return self._session

    async def _request_json(self, method: str, **kwargs) -> Dict[str, Any]:
        session = await self._get_session()
        try:
            async with session.request(method, self.api_url, timeout=self.timeout, **kwargs) as response:
                if response.status < 200 or response.status >= 300:
                    raise TransportFailure(self.service, f"HTTP {response.status}", status=response.status)
                data = await response.json(content_type=None)
        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
            raise TransportFailure(self.service, str(e) or e.__class__.__name__) from e

        if not isinstance(data, dict):
            raise TransportFailure(self.service, f"unexpected payload type {type(data).__name__}")
        return data

    async def close(self) -> None:
        if self._owns_session and self._session is not None and not self._session.closed:
            await self._session.close()


# ============================================================================
# Implementations
# ============================================================================

class StaticBundlingOracle(BundlingOracle):
    """Bundling verdicts from a fixed list of known-bundled tokens."""

    def __init__(self, known_bundled: Iterable[str] = ()):
        self.known_bundled = {address.lower() for address in known_bundled}

    async def is_bundled(self, address: str) -> bool:
        return address.lower() in self.known_bundled


class HttpBundlingOracle(HttpOracle, BundlingOracle):
    """GET {url}?address=... -> {"bundled": bool}"""

    service = "bundling"

    async def is_bundled(self, address: str) -> bool:
        data = await self._request_json("GET", params={"address": address})
        return bool(data.get("bundled"))


class RugCheckOracle(HttpOracle, IntegrityOracle):
    """GET {url}?address=... -> {"status": "Good" | "Bad" | "Suspicious"}"""

    service = "rugcheck"

    async def status(self, address: str) -> Optional[str]:
        data = await self._request_json("GET", params={"address": address})
        return data.get("status")


class PocketUniverseOracle(HttpOracle, FakeVolumeOracle):
    """POST {"tokenAddress", "volume24h"} -> {"isFake": bool}"""

    service = "pocket_universe"

    async def is_fake(self, address: str, volume_24h: float) -> bool:
        data = await self._request_json(
            "POST",
            json={"tokenAddress": address, "volume24h": volume_24h},
        )
        return bool(data.get("isFake"))
