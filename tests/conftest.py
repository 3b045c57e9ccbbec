"""
Shared fixtures for the pipeline tests.
"""

from typing import List

import pytest

from dexwatch.core.event_bus import EventBus
from dexwatch.decision.engine import DecisionEngine
from dexwatch.decision.patterns import PatternDetector
from dexwatch.pipeline.orchestrator import CycleOrchestrator
from dexwatch.risk.blacklist import BlacklistSets, DeveloperMap
from dexwatch.risk.chain import RiskFilterChain
from dexwatch.risk.checks import (
    BlacklistCheck,
    BundlingCheck,
    FakeVolumeCheck,
    IntegrityCheck,
    ThresholdCheck,
)
from dexwatch.storage.observation_store import ObservationStore

from fakes import (
    DEV,
    TOKEN,
    FakeBundlingOracle,
    FakeIntegrityOracle,
    FakeVolumeOracleStub,
    RecordingSink,
    ScriptedFeed,
    make_observation,
    make_snapshot,
)

# ============================================================================
# Fixtures
# ============================================================================

@pytest.fixture
def blacklist():
    return BlacklistSets()


@pytest.fixture
def developers():
    return DeveloperMap({TOKEN: DEV})


@pytest.fixture
def bundling_oracle():
    return FakeBundlingOracle()


@pytest.fixture
def integrity_oracle():
    return FakeIntegrityOracle()


@pytest.fixture
def volume_oracle():
    return FakeVolumeOracleStub()


@pytest.fixture
def risk_chain(blacklist, developers, bundling_oracle, integrity_oracle, volume_oracle):
    return RiskFilterChain([
        BlacklistCheck(blacklist, developers),
        BundlingCheck(bundling_oracle, blacklist, developers),
        IntegrityCheck(integrity_oracle),
        FakeVolumeCheck(volume_oracle),
        ThresholdCheck(min_liquidity=1_000.0, min_volume_24h=500.0),
    ])


@pytest.fixture
def store():
    return ObservationStore(window_size=5)


@pytest.fixture
def event_bus():
    return EventBus()


@pytest.fixture
def make_orchestrator(risk_chain, store, event_bus):
    """Build an orchestrator around a scripted feed."""
    def _make(batches: List[object]) -> CycleOrchestrator:
        return CycleOrchestrator(
            feed=ScriptedFeed(batches),
            risk_chain=risk_chain,
            store=store,
            detector=PatternDetector(0.90, 1.50),
            engine=DecisionEngine("0.1 BNB", "ALL"),
            event_bus=event_bus,
        )
    return _make


@pytest.fixture
def token_address():
    return TOKEN


@pytest.fixture
def dev_address():
    return DEV


@pytest.fixture
def snapshot_factory():
    return make_snapshot


@pytest.fixture
def observation_factory():
    return make_observation


@pytest.fixture
def recording_sink():
    return RecordingSink()
