"""
Risk filtering - ordered admission checks for incoming snapshots.

Components:
- RiskFilterChain: runs the checks, first denial wins
- RiskCheck / Verdict: check base class and its outcome
- BlacklistSets / DeveloperMap: shared blacklist state
- Oracle clients for bundling, integrity and fake volume lookups
"""

from .base import RiskCheck, Verdict
from .blacklist import BlacklistSets, DeveloperMap
from .checks import (
    BlacklistCheck,
    BundlingCheck,
    IntegrityCheck,
    FakeVolumeCheck,
    ThresholdCheck,
    POSITIVE_STATUS,
)
from .chain import RiskFilterChain, build_risk_chain
from .oracles import (
    BundlingOracle,
    IntegrityOracle,
    FakeVolumeOracle,
    HttpOracle,
    StaticBundlingOracle,
    HttpBundlingOracle,
    RugCheckOracle,
    PocketUniverseOracle,
)

__all__ = [
    'RiskCheck',
    'Verdict',
    'BlacklistSets',
    'DeveloperMap',
    'BlacklistCheck',
    'BundlingCheck',
    'IntegrityCheck',
    'FakeVolumeCheck',
    'ThresholdCheck',
    'POSITIVE_STATUS',
    'RiskFilterChain',
    'build_risk_chain',
    'BundlingOracle',
    'IntegrityOracle',
    'FakeVolumeOracle',
    'HttpOracle',
    'StaticBundlingOracle',
    'HttpBundlingOracle',
    'RugCheckOracle',
    'PocketUniverseOracle',
]
