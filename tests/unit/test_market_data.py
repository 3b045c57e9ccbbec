"""
Unit tests for snapshot parsing of DexScreener payloads.
"""

from datetime import datetime

from dexwatch.market_data.feed import parse_pairs
from dexwatch.market_data.models import UNKNOWN, AssetSnapshot


def dexscreener_pair(**overrides):
    pair = {
        "chainId": "solana",
        "baseToken": {"address": "So1AbCdEf", "symbol": "TKN"},
        "priceUsd": "0.0123",
        "liquidity": {"usd": 15000.5},
        "volume": {"h24": 8000},
    }
    pair.update(overrides)
    return pair


def test_parse_full_pair():
    observed_at = datetime(2025, 1, 1)

    [snapshot] = parse_pairs({"pairs": [dexscreener_pair()]}, observed_at=observed_at)

    assert snapshot == AssetSnapshot(
        address="so1abcdef",
        symbol="TKN",
        chain="solana",
        price_usd=0.0123,
        liquidity_usd=15000.5,
        volume_24h=8000.0,
        observed_at=observed_at,
    )


def test_missing_fields_default_to_zero_and_unknown():
    pair = {"baseToken": {"address": "0xABC"}}

    [snapshot] = parse_pairs({"pairs": [pair]})

    assert snapshot.address == "0xabc"
    assert snapshot.symbol == UNKNOWN
    assert snapshot.chain == UNKNOWN
    assert snapshot.price_usd == 0.0
    assert snapshot.liquidity_usd == 0.0
    assert snapshot.volume_24h == 0.0


def test_chain_falls_back_to_base_token():
    pair = dexscreener_pair(chainId=None, baseToken={"address": "0x1", "symbol": "A", "chainId": "bsc"})

    [snapshot] = parse_pairs({"pairs": [pair]})

    assert snapshot.chain == "bsc"


def test_pairs_without_base_token_are_skipped():
    payload = {"pairs": [{"priceUsd": "1"}, dexscreener_pair(baseToken={"symbol": "NOADDR"}), dexscreener_pair()]}

    snapshots = parse_pairs(payload)

    assert [snapshot.symbol for snapshot in snapshots] == ["TKN"]


def test_unparsable_numbers_count_as_zero():
    [snapshot] = parse_pairs({"pairs": [dexscreener_pair(priceUsd="n/a", volume={"h24": None})]})

    assert snapshot.price_usd == 0.0
    assert snapshot.volume_24h == 0.0


def test_empty_payloads():
    assert parse_pairs(None) == []
    assert parse_pairs({}) == []
    assert parse_pairs({"pairs": None}) == []


def test_snapshot_splits_into_identity_and_observation():
    snapshot = parse_pairs({"pairs": [dexscreener_pair()]})[0]

    assert snapshot.identity.address == snapshot.address
    assert snapshot.identity.symbol == "TKN"
    assert snapshot.observation.price == 0.0123
    assert snapshot.observation.liquidity == 15000.5
    assert snapshot.observation.volume24h == 8000.0
    assert snapshot.observation.timestamp == snapshot.observed_at


def test_malformed_pairs_do_not_drop_the_batch():
    payload = {"pairs": [
        {"baseToken": {"address": 123}},
        dexscreener_pair(liquidity=5),
        dexscreener_pair(volume=[1, 2], baseToken={"address": "0xVOL", "symbol": "VOL"}),
        {"baseToken": "0xnotadict"},
        "garbage",
        dexscreener_pair(baseToken={"address": "0xGOOD", "symbol": "GOOD"}),
    ]}

    snapshots = parse_pairs(payload)

    assert [snapshot.symbol for snapshot in snapshots] == ["TKN", "VOL", "GOOD"]
    assert snapshots[0].liquidity_usd == 0.0
    assert snapshots[1].volume_24h == 0.0


def test_pairs_must_be_a_list():
    assert parse_pairs({"pairs": 7}) == []
    assert parse_pairs({"pairs": {"a": 1}}) == []


def test_non_finite_numbers_count_as_zero():
    pair = dexscreener_pair(priceUsd="NaN", liquidity={"usd": "inf"}, volume={"h24": float("-inf")})

    [snapshot] = parse_pairs({"pairs": [pair]})

    assert snapshot.price_usd == 0.0
    assert snapshot.liquidity_usd == 0.0
    assert snapshot.volume_24h == 0.0


def test_default_observation_time_is_utc_aware():
    [snapshot] = parse_pairs({"pairs": [dexscreener_pair()]})

    assert snapshot.observed_at.tzinfo is not None
    assert snapshot.observed_at.utcoffset().total_seconds() == 0
