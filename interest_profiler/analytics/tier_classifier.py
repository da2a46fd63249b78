"""
Tier classification for wallet interest profiles.

Both thresholds of a row must hold (strictly greater) and rows are checked from
PLATINUM down; first match wins. A large balance without NFTs stays BRONZE.
"""

from __future__ import annotations

from interest_profiler.analytics.models import Tier

# (tier, min NFTs exclusive, min SOL exclusive), highest first
TIER_THRESHOLDS: tuple[tuple[Tier, int, float], ...] = (
    (Tier.PLATINUM, 100, 100.0),  # mega whales
    (Tier.GOLD, 49, 30.0),  # whales
    (Tier.SILVER, 20, 10.0),  # active users
)


def classify_tier(nft_count: int, sol_balance: float) -> Tier:
    """Return the tier for an NFT count and SOL balance."""
    for tier, min_nfts, min_sol in TIER_THRESHOLDS:
        if nft_count > min_nfts and sol_balance > min_sol:
            return tier
    return Tier.BRONZE
