"""
The five admission checks, in the order the chain runs them:

1. BlacklistCheck - token/developer blacklist and chain allow-list
2. BundlingCheck - bundled supply, blacklists token + developer on a hit
3. IntegrityCheck - only an exact positive trust status passes
4. FakeVolumeCheck - fabricated volume, fails open on oracle outages
5. ThresholdCheck - minimum liquidity and 24h volume
"""

from typing import Iterable, Optional

from dexwatch.core.exceptions import TransportFailure
from dexwatch.market_data.models import AssetSnapshot
from dexwatch.risk.base import RiskCheck, Verdict
from dexwatch.risk.blacklist import BlacklistSets, DeveloperMap
from dexwatch.risk.oracles import BundlingOracle, FakeVolumeOracle, IntegrityOracle

POSITIVE_STATUS = "Good"


class BlacklistCheck(RiskCheck):
    """Deny blacklisted tokens, tokens of blacklisted developers and disallowed chains."""

    def __init__(
        self,
        blacklist: BlacklistSets,
        developers: DeveloperMap,
        chains_allowed: Optional[Iterable[str]] = None
    ):
        super().__init__("blacklist")
        self.blacklist = blacklist
        self.developers = developers
        self.chains_allowed = {chain.lower() for chain in (chains_allowed or [])}

    async def evaluate(self, snapshot: AssetSnapshot) -> Verdict:
        if self.blacklist.is_token_blacklisted(snapshot.address):
            return self.deny("token blacklisted")

        dev_address = self.developers.developer_for(snapshot.address)
        if self.blacklist.is_developer_blacklisted(dev_address):
            return self.deny(f"developer {dev_address} blacklisted")

        if snapshot.chain and self.chains_allowed and snapshot.chain.lower() not in self.chains_allowed:
            return self.deny(f"chain {snapshot.chain} not allowed")

        return Verdict.allow()


class BundlingCheck(RiskCheck):
    """
    Deny tokens with bundled supply.

    A bundled verdict blacklists the token and its developer so later cycles
    stop at the blacklist check. An oracle failure counts as not bundled.
    """

    def __init__(self, oracle: BundlingOracle, blacklist: BlacklistSets, developers: DeveloperMap):
        super().__init__("bundling")
        self.oracle = oracle
        self.blacklist = blacklist
        self.developers = developers

    async def evaluate(self, snapshot: AssetSnapshot) -> Verdict:
        try:
            bundled = await self.oracle.is_bundled(snapshot.address)
        except TransportFailure as e:
            self.logger.error(f"Bundling check failed for {snapshot.address}: {e}")
            return Verdict.allow()

        if bundled:
            self.logger.warning(f"[WARNING] {snapshot.symbol} supply is bundled. Blacklisting token & dev.")
            self.blacklist.blacklist_token_and_developer(snapshot.address, self.developers)
            return self.deny("supply bundled")

        return Verdict.allow()


class IntegrityCheck(RiskCheck):
    """Admit only tokens whose trust status is exactly the positive status."""

    def __init__(self, oracle: IntegrityOracle, positive_status: str = POSITIVE_STATUS):
        super().__init__("integrity")
        self.oracle = oracle
        self.positive_status = positive_status

    async def evaluate(self, snapshot: AssetSnapshot) -> Verdict:
        try:
            status = await self.oracle.status(snapshot.address)
        except TransportFailure as e:
            self.logger.warning(f"Integrity lookup failed for {snapshot.address}: {e}")
            return self.deny("integrity lookup failed")

        if status != self.positive_status:
            self.logger.info(f"[INFO] {snapshot.symbol} not \"{self.positive_status}\" (status={status}). Skipping.")
            return self.deny(f"status {status!r}")

        return Verdict.allow()


class FakeVolumeCheck(RiskCheck):
    """Deny tokens flagged for fake volume; an unreachable oracle counts as not fake."""

    def __init__(self, oracle: FakeVolumeOracle):
        super().__init__("fake_volume")
        self.oracle = oracle

    async def evaluate(self, snapshot: AssetSnapshot) -> Verdict:
        try:
            fake = await self.oracle.is_fake(snapshot.address, snapshot.volume_24h)
        except TransportFailure as e:
            self.logger.error(f"Error checking fake volume for {snapshot.address}: {e}")
            return Verdict.allow()

        if fake:
            self.logger.warning(f"[WARNING] {snapshot.symbol} flagged for fake volume. Skipping.")
            return self.deny("fake volume")

        return Verdict.allow()


class ThresholdCheck(RiskCheck):
    """Deny tokens below the liquidity or 24h volume minimums."""

    def __init__(self, min_liquidity: float = 0.0, min_volume_24h: float = 0.0):
        super().__init__("threshold")
        self.min_liquidity = min_liquidity
        self.min_volume_24h = min_volume_24h

    async def evaluate(self, snapshot: AssetSnapshot) -> Verdict:
        # written as not-(>=) so NaN never passes
        if not snapshot.liquidity_usd >= self.min_liquidity:
            return self.deny(f"liquidity {snapshot.liquidity_usd:.2f} < {self.min_liquidity:.2f}")
        if not snapshot.volume_24h >= self.min_volume_24h:
            return self.deny(f"volume {snapshot.volume_24h:.2f} < {self.min_volume_24h:.2f}")
        return Verdict.allow()
