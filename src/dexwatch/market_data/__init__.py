"""Market data: snapshot models and the DexScreener feed."""

from .models import AssetIdentity, Observation, AssetSnapshot, UNKNOWN
from .feed import MarketDataFeed, DexScreenerFeed, parse_pairs

__all__ = [
    'AssetIdentity',
    'Observation',
    'AssetSnapshot',
    'UNKNOWN',
    'MarketDataFeed',
    'DexScreenerFeed',
    'parse_pairs',
]
