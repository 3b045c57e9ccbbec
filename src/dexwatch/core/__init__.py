"""
Core building blocks shared by every component.

- exceptions: error taxonomy for transport, configuration and per-asset failures
- events: output events collected during a cycle
- event_bus: publish/subscribe dispatcher for those events
"""

from .exceptions import (
    DexWatchError,
    TransportFailure,
    ConfigurationMissing,
    PerAssetFailure,
)
from .events import (
    Event,
    PatternEvent,
    TradeAction,
    TradeState,
    PatternDetected,
    TradeIntent,
    CycleSummary,
)
from .event_bus import EventBus

__all__ = [
    'DexWatchError',
    'TransportFailure',
    'ConfigurationMissing',
    'PerAssetFailure',
    'Event',
    'PatternEvent',
    'TradeAction',
    'TradeState',
    'PatternDetected',
    'TradeIntent',
    'CycleSummary',
    'EventBus',
]
