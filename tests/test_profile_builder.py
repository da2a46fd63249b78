"""
Profile builder tests with fake asset and history sources.
"""

from __future__ import annotations

import time

import pytest
from structlog.testing import capture_logs

from fakes import (
    MARINADE,
    SOLEND,
    VALID_WALLET,
    BlockingHistory,
    FakeAssetSource,
    FakeHistory,
    make_tx,
    nft_assets,
    token_assets,
)
from interest_profiler.analytics.models import DEGRADED_ERROR, DEGRADED_RATE_LIMITED, InterestProfile, Tier
from interest_profiler.analytics.profile_builder import (
    build_interest_profile,
    build_profile_report,
    count_token_holdings,
    partition_assets,
    validate_address,
)
from interest_profiler.core.exceptions import (
    STAGE_ASSETS,
    STAGE_BALANCE,
    CollaboratorError,
    InvalidAddressError,
    RateLimitedError,
)


def test_platinum_scenario():
    """150 NFTs, 120 SOL, 5 tokens, 2 DeFi programs, no DEX trades."""
    assets = FakeAssetSource(nft_assets(150) + token_assets(5), lamports=120_000_000_000)
    history = FakeHistory([make_tx([VALID_WALLET, SOLEND]), make_tx([VALID_WALLET, MARINADE, SOLEND])])

    profile = build_interest_profile(VALID_WALLET, assets, history)

    assert profile == InterestProfile(
        tier=Tier.PLATINUM,
        nft_count=150,
        sol_balance=120.0,
        trading_volume=0.0,
        token_holdings=5,
        defi_interactions=2,
    )


def test_rate_limited_history_defaults_metrics_and_keeps_tier():
    assets = FakeAssetSource(nft_assets(60), lamports=50_000_000_000)
    history = FakeHistory(error=RateLimitedError("history", "429 Too Many Requests"))

    report = build_profile_report(VALID_WALLET, assets, history)

    assert report.profile.tier == Tier.GOLD
    assert report.profile.trading_volume == 0.0
    assert report.profile.defi_interactions == 0
    assert report.degraded == {
        "trading_volume": DEGRADED_RATE_LIMITED,
        "defi_interactions": DEGRADED_RATE_LIMITED,
    }
    assert report.is_degraded


def test_plain_429_message_is_classified_as_rate_limit():
    history = FakeHistory(error=RuntimeError("HTTP error 429 Too Many Requests"))
    report = build_profile_report(VALID_WALLET, FakeAssetSource(), history)
    assert set(report.degraded.values()) == {DEGRADED_RATE_LIMITED}


def test_other_history_errors_degrade_as_error():
    history = FakeHistory(error=ConnectionError("connection reset"))
    report = build_profile_report(VALID_WALLET, FakeAssetSource(lamports=1), history)
    assert set(report.degraded.values()) == {DEGRADED_ERROR}
    assert report.profile.tier == Tier.BRONZE


def test_asset_failure_aborts_with_stage():
    assets = FakeAssetSource(error=RuntimeError("boom"))
    with pytest.raises(CollaboratorError) as exc_info:
        build_profile_report(VALID_WALLET, assets, FakeHistory())
    assert exc_info.value.stage == STAGE_ASSETS


def test_tx_limit_is_passed_to_history():
    history = FakeHistory([make_tx([VALID_WALLET])])
    report = build_profile_report(VALID_WALLET, FakeAssetSource(), history, tx_limit=25)
    assert history.limits == [25]
    assert report.transactions_scanned == 1
    assert not report.is_degraded


def test_invalid_address_rejected_before_fetch():
    assets = FakeAssetSource(error=AssertionError("must not be called"))
    with pytest.raises(InvalidAddressError):
        build_profile_report("not-a-wallet", assets, FakeHistory())
    with pytest.raises(InvalidAddressError):
        validate_address("   ")
    assert validate_address(f"  {VALID_WALLET} ") == VALID_WALLET


def test_partition_assets():
    assets = [
        {"id": "a", "interface": "V1_NFT"},
        {"id": "b", "interface": "V1_PRINT", "token_info": {"supply": 1}},
        {"id": "c", "interface": "ProgrammableNFT"},
        {"id": "d", "interface": "FungibleToken", "token_info": {"supply": 10}},
        {"id": "d", "interface": "FungibleToken", "token_info": {"supply": 10}},
        {"id": "e", "interface": "FungibleAsset", "token_info": {"supply": 0}},
        {"id": "f", "interface": "FungibleToken", "token_info": {}},
        {"id": "g", "interface": "FungibleToken", "token_info": {"supply": None}},
    ]
    nfts, tokens = partition_assets(assets)
    assert [a["id"] for a in nfts] == ["a", "b"]
    assert [a["id"] for a in tokens] == ["d", "d", "e", "g"]
    assert count_token_holdings(tokens) == 3


def test_balance_failure_aborts_with_stage():
    assets = FakeAssetSource(nft_assets(3), balance_error=RuntimeError("getBalance timed out"))
    with pytest.raises(CollaboratorError) as exc_info:
        build_profile_report(VALID_WALLET, assets, FakeHistory())
    assert exc_info.value.stage == STAGE_BALANCE
    assert "balance fetch failed" in str(exc_info.value)


def test_required_fetch_failure_does_not_wait_for_history():
    history = BlockingHistory(timeout=5.0)
    assets = FakeAssetSource(error=RuntimeError("503 Service Unavailable"))
    start = time.monotonic()
    try:
        with pytest.raises(CollaboratorError):
            build_profile_report(VALID_WALLET, assets, history)
        elapsed = time.monotonic() - start
    finally:
        history.release.set()
    assert elapsed < 2.0


def test_rate_limited_history_logs_warning():
    history = FakeHistory(error=RateLimitedError("history", "429 Too Many Requests"))
    with capture_logs() as logs:
        build_profile_report(VALID_WALLET, FakeAssetSource(), history)
    warnings = [entry for entry in logs if entry["log_level"] == "warning"]
    assert [entry["event"] for entry in warnings] == ["profile_history_rate_limited"]
    assert "429" in warnings[0]["error"]


def test_failed_history_logs_warning():
    history = FakeHistory(error=ConnectionError("connection reset"))
    with capture_logs() as logs:
        build_profile_report(VALID_WALLET, FakeAssetSource(), history)
    warnings = [entry for entry in logs if entry["log_level"] == "warning"]
    assert [entry["event"] for entry in warnings] == ["profile_history_failed"]
