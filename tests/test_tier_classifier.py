"""
Pytest tests for tier classification: strict thresholds, first match wins.
"""

from __future__ import annotations

import pytest

from interest_profiler.analytics.models import Tier
from interest_profiler.analytics.tier_classifier import classify_tier


def test_platinum_requires_both_thresholds():
    assert classify_tier(101, 100.01) == Tier.PLATINUM
    assert classify_tier(150, 120.0) == Tier.PLATINUM


@pytest.mark.parametrize("nfts,sol", [(100, 500.0), (500, 100.0), (100, 100.0)])
def test_platinum_boundaries_are_strict(nfts, sol):
    """Exactly 100 NFTs or exactly 100 SOL is not PLATINUM."""
    assert classify_tier(nfts, sol) != Tier.PLATINUM
    assert classify_tier(nfts, sol) == Tier.GOLD


def test_first_match_wins():
    """60 NFTs / 50 SOL satisfies GOLD before SILVER is considered."""
    assert classify_tier(60, 50.0) == Tier.GOLD
    assert classify_tier(21, 10.5) == Tier.SILVER


def test_gold_and_silver_boundaries():
    assert classify_tier(49, 31.0) == Tier.SILVER
    assert classify_tier(50, 30.0) == Tier.SILVER
    assert classify_tier(20, 11.0) == Tier.BRONZE
    assert classify_tier(21, 10.0) == Tier.BRONZE


def test_large_balance_without_nfts_is_bronze():
    assert classify_tier(0, 1_000_000.0) == Tier.BRONZE
    assert classify_tier(10_000, 0.0) == Tier.BRONZE


def test_tier_codes_are_a_bijection():
    codes = {tier: tier.code for tier in Tier}
    assert codes == {Tier.BRONZE: 0, Tier.SILVER: 1, Tier.GOLD: 2, Tier.PLATINUM: 3}
    for tier in Tier:
        assert Tier.from_code(tier.code) is tier
    with pytest.raises(ValueError):
        Tier.from_code(4)


def test_tier_ordering():
    assert Tier.BRONZE < Tier.SILVER < Tier.GOLD < Tier.PLATINUM
    assert max([Tier.SILVER, Tier.PLATINUM, Tier.BRONZE]) == Tier.PLATINUM
    assert Tier.PLATINUM.value == "PLATINUM_TIER"
