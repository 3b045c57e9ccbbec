"""
Unit tests for the RiskFilterChain and its checks.

Tests:
- Check order and short-circuiting
- Bundling side effects on the blacklist
- Fail-closed integrity lookups, fail-open bundling/fake volume lookups
- Threshold filter
"""

import pytest

from dexwatch.config.settings import FilterConfig
from dexwatch.core.exceptions import ConfigurationMissing
from dexwatch.market_data.feed import parse_pairs
from dexwatch.risk.blacklist import BlacklistSets, DeveloperMap
from dexwatch.risk.chain import build_risk_chain
from dexwatch.risk.checks import BlacklistCheck, ThresholdCheck
from dexwatch.risk.oracles import RugCheckOracle, StaticBundlingOracle

from fakes import FakeBundlingOracle, FakeIntegrityOracle, FakeVolumeOracleStub


# ============================================================================
# Chain Behaviour
# ============================================================================

async def test_clean_snapshot_is_admitted(risk_chain, snapshot_factory):
    verdict = await risk_chain.admit(snapshot_factory())

    assert verdict.allowed
    assert risk_chain.admitted == 1


async def test_blacklisted_token_never_reaches_bundling_oracle(
    risk_chain, blacklist, bundling_oracle, snapshot_factory, token_address
):
    blacklist.add_token(token_address)

    verdict = await risk_chain.admit(snapshot_factory())

    assert verdict.denied
    assert verdict.check == "blacklist"
    assert bundling_oracle.calls == []


async def test_blacklisted_developer_denies(risk_chain, blacklist, dev_address, snapshot_factory):
    blacklist.add_developer(dev_address.upper())

    verdict = await risk_chain.admit(snapshot_factory())

    assert verdict.denied
    assert verdict.check == "blacklist"


async def test_bundled_token_blacklists_token_and_developer(
    blacklist, developers, integrity_oracle, volume_oracle, snapshot_factory, token_address, dev_address
):
    bundling = FakeBundlingOracle(bundled=[token_address])
    chain = build_risk_chain(FilterConfig(), blacklist, developers, bundling, integrity_oracle, volume_oracle)

    verdict = await chain.admit(snapshot_factory())

    assert verdict.denied
    assert verdict.check == "bundling"
    assert token_address in blacklist.tokens
    assert dev_address in blacklist.developers
    assert integrity_oracle.calls == []

    # Next cycle stops at the blacklist without asking the oracle again
    again = await chain.admit(snapshot_factory())
    assert again.check == "blacklist"
    assert len(bundling.calls) == 1


async def test_bundled_token_without_known_developer(integrity_oracle, volume_oracle, snapshot_factory):
    blacklist = BlacklistSets()
    bundled_address = "0xbundled11111111111111111111111111111111111"
    chain = build_risk_chain(
        FilterConfig(), blacklist, DeveloperMap(),
        StaticBundlingOracle([bundled_address]), integrity_oracle, volume_oracle
    )

    verdict = await chain.admit(snapshot_factory(address=bundled_address))

    assert verdict.check == "bundling"
    assert blacklist.tokens == {bundled_address}
    assert blacklist.developers == set()


async def test_bundling_outage_fails_open(blacklist, developers, integrity_oracle, volume_oracle, snapshot_factory):
    chain = build_risk_chain(
        FilterConfig(), blacklist, developers,
        FakeBundlingOracle(fail=True), integrity_oracle, volume_oracle
    )

    verdict = await chain.admit(snapshot_factory())

    assert verdict.allowed
    assert blacklist.tokens == set()


@pytest.mark.parametrize("status", ["Bad", "Suspicious", "good", None])
async def test_integrity_requires_exact_positive_status(
    blacklist, developers, bundling_oracle, volume_oracle, snapshot_factory, token_address, status
):
    integrity = FakeIntegrityOracle(statuses={token_address: status})
    chain = build_risk_chain(FilterConfig(), blacklist, developers, bundling_oracle, integrity, volume_oracle)

    verdict = await chain.admit(snapshot_factory())

    assert verdict.denied
    assert verdict.check == "integrity"
    assert volume_oracle.calls == []


async def test_integrity_outage_denies(blacklist, developers, bundling_oracle, volume_oracle, snapshot_factory):
    chain = build_risk_chain(
        FilterConfig(), blacklist, developers,
        bundling_oracle, FakeIntegrityOracle(fail=True), volume_oracle
    )

    verdict = await chain.admit(snapshot_factory())

    assert verdict.check == "integrity"


async def test_fake_volume_denies(blacklist, developers, bundling_oracle, integrity_oracle, snapshot_factory, token_address):
    volume = FakeVolumeOracleStub(fake=[token_address])
    chain = build_risk_chain(FilterConfig(), blacklist, developers, bundling_oracle, integrity_oracle, volume)

    verdict = await chain.admit(snapshot_factory(volume=1234.0))

    assert verdict.check == "fake_volume"
    assert volume.calls == [(token_address, 1234.0)]


async def test_fake_volume_outage_fails_open(blacklist, developers, bundling_oracle, integrity_oracle, snapshot_factory):
    chain = build_risk_chain(
        FilterConfig(), blacklist, developers,
        bundling_oracle, integrity_oracle, FakeVolumeOracleStub(fail=True)
    )

    verdict = await chain.admit(snapshot_factory())

    assert verdict.allowed


async def test_denials_are_counted_per_check(risk_chain, blacklist, snapshot_factory):
    blacklist.add_token("0xdead")

    await risk_chain.admit(snapshot_factory(address="0xdead"))
    await risk_chain.admit(snapshot_factory(liquidity=1.0))
    await risk_chain.admit(snapshot_factory())

    stats = risk_chain.get_stats()
    assert stats["denied"] == {"blacklist": 1, "threshold": 1}
    assert stats["admitted"] == 1


def test_default_chain_order(blacklist, developers, bundling_oracle, integrity_oracle, volume_oracle):
    chain = build_risk_chain(FilterConfig(), blacklist, developers, bundling_oracle, integrity_oracle, volume_oracle)

    assert chain.describe() == "blacklist -> bundling -> integrity -> fake_volume -> threshold"


# ============================================================================
# Individual Checks
# ============================================================================

async def test_chain_allow_list_is_case_insensitive(blacklist, developers, snapshot_factory):
    check = BlacklistCheck(blacklist, developers, chains_allowed=["Solana", "ethereum"])

    assert (await check.evaluate(snapshot_factory(chain="solana"))).allowed
    assert (await check.evaluate(snapshot_factory(chain="bsc"))).denied


async def test_empty_allow_list_allows_every_chain(blacklist, developers, snapshot_factory):
    check = BlacklistCheck(blacklist, developers, chains_allowed=[])

    assert (await check.evaluate(snapshot_factory(chain="bsc"))).allowed


async def test_empty_chain_skips_allow_list(blacklist, developers, snapshot_factory):
    check = BlacklistCheck(blacklist, developers, chains_allowed=["solana"])

    assert (await check.evaluate(snapshot_factory(chain=""))).allowed


async def test_threshold_check(snapshot_factory):
    check = ThresholdCheck(min_liquidity=1_000.0, min_volume_24h=500.0)

    assert (await check.evaluate(snapshot_factory(liquidity=1_000.0, volume=500.0))).allowed
    assert (await check.evaluate(snapshot_factory(liquidity=999.0))).denied
    assert (await check.evaluate(snapshot_factory(volume=499.0))).denied


async def test_threshold_denies_unusable_liquidity(snapshot_factory):
    check = ThresholdCheck(min_liquidity=1_000.0)
    [parsed] = parse_pairs({"pairs": [{"baseToken": {"address": "0xnan"}, "liquidity": {"usd": "NaN"}, "volume": {"h24": 900}}]})

    assert (await check.evaluate(parsed)).denied
    assert (await check.evaluate(snapshot_factory(liquidity=float("nan")))).denied


async def test_threshold_defaults_are_no_op(snapshot_factory):
    check = ThresholdCheck()

    assert (await check.evaluate(snapshot_factory(liquidity=0.0, volume=0.0))).allowed


def test_http_oracle_requires_url():
    with pytest.raises(ConfigurationMissing):
        RugCheckOracle("")
