"""
Risk filter chain.

Runs the admission checks strictly in order and stops at the first denial:
Blacklist -> Bundling -> Integrity -> FakeVolume -> Threshold
"""

import logging
from collections import Counter
from typing import Dict, List

from dexwatch.config.settings import FilterConfig
from dexwatch.market_data.models import AssetSnapshot
from dexwatch.risk.base import RiskCheck, Verdict
from dexwatch.risk.blacklist import BlacklistSets, DeveloperMap
from dexwatch.risk.checks import (
    BlacklistCheck,
    BundlingCheck,
    FakeVolumeCheck,
    IntegrityCheck,
    ThresholdCheck,
)
from dexwatch.risk.oracles import BundlingOracle, FakeVolumeOracle, IntegrityOracle

logger = logging.getLogger(__name__)


class RiskFilterChain:
    """
    Ordered, short-circuiting sequence of admission checks.

    Each check either allows the snapshot to reach the next check or denies
    it; the verdict of the first denying check is returned.
    """

    def __init__(self, checks: List[RiskCheck]):
        """
        Initialize the chain.

        Args:
            checks: Checks in the order they must run
        """
        self.checks = checks
        self.admitted = 0
        self.denied: Counter = Counter()

        logger.info(f"Risk filter chain built: {self.describe()}")

    async def admit(self, snapshot: AssetSnapshot) -> Verdict:
        """
        Run the snapshot through every check until one denies it.

        Args:
            snapshot: Snapshot to admit

        Returns:
            Verdict.allow() if all checks pass, otherwise the first denial
        """
        for check in self.checks:
            verdict = await check.evaluate(snapshot)
            if verdict.denied:
                self.denied[verdict.check] += 1
                logger.debug(f"Denied {snapshot.symbol} ({snapshot.address}) at {verdict.check}: {verdict.reason}")
                return verdict

        self.admitted += 1
        return Verdict.allow()

    def describe(self) -> str:
        return " -> ".join(check.name for check in self.checks)

    def get_stats(self) -> Dict[str, object]:
        return {
            'checks': [check.name for check in self.checks],
            'admitted': self.admitted,
            'denied': dict(self.denied),
        }


def build_risk_chain(
    filters: FilterConfig,
    blacklist: BlacklistSets,
    developers: DeveloperMap,
    bundling_oracle: BundlingOracle,
    integrity_oracle: IntegrityOracle,
    fake_volume_oracle: FakeVolumeOracle
) -> RiskFilterChain:
    """
    Factory function creating the standard five-step chain.

    Returns:
        Configured RiskFilterChain instance
    """
    return RiskFilterChain([
        BlacklistCheck(blacklist, developers, filters.chains_allowed),
        BundlingCheck(bundling_oracle, blacklist, developers),
        IntegrityCheck(integrity_oracle),
        FakeVolumeCheck(fake_volume_oracle),
        ThresholdCheck(filters.min_liquidity, filters.min_volume_24h),
    ])
