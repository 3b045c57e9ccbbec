"""
Decision layer - pattern detection and the per-asset trading state machine.

Components:
- PatternDetector: rug/pump flags from the two latest observations
- DecisionEngine: NONE -> BOUGHT -> SOLD transitions producing trade intents
"""

from .patterns import PatternDetector, PatternResult
from .engine import DecisionEngine

__all__ = ['PatternDetector', 'PatternResult', 'DecisionEngine']
