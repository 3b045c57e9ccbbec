"""
Event definitions.

Events are collected while a cycle runs and published on the EventBus once
the cycle's decision logic is done, so side effects (notifications, trade
commands) never interleave with filtering and state transitions.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict


# ============================================================================
# Enums
# ============================================================================

class PatternEvent(str, Enum):
    """Price pattern flagged on an asset."""
    RUGGED = "rugged"
    PUMPED = "pumped"


class TradeState(str, Enum):
    """Per-asset trading state (last action taken)."""
    NONE = "none"
    BOUGHT = "bought"
    SOLD = "sold"


class TradeAction(str, Enum):
    """Command sent to the execution channel."""
    BUY = "buy"
    SELL = "sell"


# ============================================================================
# Base Event
# ============================================================================

@dataclass(kw_only=True)
class Event:
    """Base class for all events."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    metadata: Dict[str, Any] = field(default_factory=dict)


# ============================================================================
# Pipeline Events
# ============================================================================

@dataclass
class PatternDetected(Event):
    """A rug or pump pattern was newly flagged on an asset."""
    address: str
    symbol: str
    pattern: PatternEvent
    price: float
    previous_price: float


@dataclass
class TradeIntent(Event):
    """Buy/sell command produced by the decision engine."""
    action: TradeAction
    symbol: str
    address: str
    amount: str
    price: float = 0.0


@dataclass
class CycleSummary(Event):
    """Counts over every tracked asset, emitted at the end of each cycle."""
    cycle: int
    tracked_count: int
    rugged_count: int
    pumped_count: int
