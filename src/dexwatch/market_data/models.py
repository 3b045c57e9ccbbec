"""
Market data value objects.

AssetSnapshot is one entry of a feed batch; the pipeline splits it into the
immutable AssetIdentity (who) and Observation (what was seen, when).
"""

import math
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Optional

UNKNOWN = "UNKNOWN"


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class AssetIdentity:
    """Token identity, keyed by lowercase address."""
    address: str
    symbol: str = UNKNOWN
    chain: str = UNKNOWN


@dataclass(frozen=True)
class Observation:
    """A single market observation of one token."""
    timestamp: datetime
    price: float
    liquidity: float
    volume24h: float


@dataclass(frozen=True)
class AssetSnapshot:
    """One token as reported by the market-data feed."""
    address: str
    symbol: str = UNKNOWN
    chain: str = UNKNOWN
    price_usd: float = 0.0
    liquidity_usd: float = 0.0
    volume_24h: float = 0.0
    observed_at: datetime = field(default_factory=utc_now)

    def __post_init__(self):
        object.__setattr__(self, 'address', self.address.strip().lower())

    @property
    def identity(self) -> AssetIdentity:
        return AssetIdentity(address=self.address, symbol=self.symbol, chain=self.chain)

    @property
    def observation(self) -> Observation:
        return Observation(
            timestamp=self.observed_at,
            price=self.price_usd,
            liquidity=self.liquidity_usd,
            volume24h=self.volume_24h,
        )

    @classmethod
    def from_pair(cls, pair: Dict[str, Any], observed_at: Optional[datetime] = None) -> Optional['AssetSnapshot']:
        """
        Build a snapshot from a DexScreener pair object.

        Returns None for pairs without a base token address.
        Missing numbers default to 0 and missing names to UNKNOWN.
        """
        base_token = _section(pair, "baseToken")
        address = base_token.get("address")
        if not isinstance(address, str) or not address.strip():
            return None

        return cls(
            address=address,
            symbol=str(base_token.get('symbol') or UNKNOWN),
            chain=str(pair.get('chainId') or base_token.get('chainId') or UNKNOWN),
            price_usd=_to_float(pair.get('priceUsd')),
            liquidity_usd=_to_float(_section(pair, "liquidity").get("usd")),
            volume_24h=_to_float(_section(pair, "volume").get("h24")),
            observed_at=observed_at or utc_now(),
        )


def _to_float(value: Any) -> float:
    """DexScreener sends prices as strings; anything unparsable or non-finite counts as 0."""
    if value is None or isinstance(value, bool):
        return 0.0
    try:
        result = float(value)
    except (TypeError, ValueError):
        return 0.0
    return result if math.isfinite(result) else 0.0


def _section(pair: Dict[str, Any], key: str) -> Dict[str, Any]:
    """Nested object of a pair; anything but a dict reads as empty."""
    value = pair.get(key)
    return value if isinstance(value, dict) else {}
