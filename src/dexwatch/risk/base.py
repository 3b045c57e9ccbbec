"""
Base class for risk checks.

A risk check looks at one snapshot and either lets it through or denies it
with a reason. The chain stops at the first denial.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional
import logging

from dexwatch.market_data.models import AssetSnapshot

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Verdict:
    """Outcome of an admission check."""
    allowed: bool
    check: Optional[str] = None
    reason: str = ""

    @classmethod
    def allow(cls) -> 'Verdict':
        return cls(allowed=True)

    @classmethod
    def deny(cls, check: str, reason: str) -> 'Verdict':
        return cls(allowed=False, check=check, reason=reason)

    @property
    def denied(self) -> bool:
        return not self.allowed


class RiskCheck(ABC):
    """
    Base class for admission checks.

    Subclasses implement evaluate(); a check must not raise for expected
    oracle problems, it resolves them to its own fail-safe verdict.
    """

    def __init__(self, name: str = None):
        self.name = name or self.__class__.__name__
        self.logger = logging.getLogger(f"{__name__}.{self.name}")

    @abstractmethod
    async def evaluate(self, snapshot: AssetSnapshot) -> Verdict:
        """
        Evaluate one snapshot.

        Args:
            snapshot: Snapshot under admission

        Returns:
            Verdict.allow() or Verdict.deny(self.name, reason)
        """

    def deny(self, reason: str) -> Verdict:
        return Verdict.deny(self.name, reason)
