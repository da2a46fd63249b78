"""
Profile builder: assets + balance + transaction window -> InterestProfile.

Assets, balance and transaction history are fetched in parallel. Assets and
balance are required for the tier, so their failures abort the run. A history
failure (rate limit or otherwise) is logged as a warning and both trading volume
and DeFi interactions default to 0; the degradation is recorded on the report.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from typing import Any, Iterable

from interest_profiler.analytics.models import (
    DEGRADED_ERROR,
    DEGRADED_RATE_LIMITED,
    LAMPORTS_PER_SOL,
    InterestProfile,
    ProfileReport,
)
from interest_profiler.analytics.tier_classifier import classify_tier
from interest_profiler.analytics.transaction_scanner import ScanResult, scan_transactions
from interest_profiler.config.env import DEFAULT_TX_SCAN_LIMIT
from interest_profiler.core.exceptions import (
    STAGE_ASSETS,
    STAGE_BALANCE,
    STAGE_HISTORY,
    InvalidAddressError,
    RateLimitedError,
    as_collaborator_error,
)
from interest_profiler.profiler_logging import get_logger, short_address
from interest_profiler.sources.base import AssetSource, TransactionHistorySource

logger = get_logger(__name__)

# DAS interface tags that identify non-fungible assets
NFT_INTERFACES = frozenset({
    "V1_NFT",
    "V1_PRINT",
    "V1_NFT_PRINT",
    "V1_NFT_SOL",
    "V1_NFT_POL",
    "V1_NFT_EDITION",
    "V1_NFT_EDITION_PRINT",
})

DEGRADED_METRICS = ("trading_volume", "defi_interactions")


def validate_address(address: str) -> str:
    """Strip and check that address is a base58 Solana public key."""
    from solders.pubkey import Pubkey

    address = (address or "").strip()
    if not address:
        raise InvalidAddressError(address, "empty")
    try:
        Pubkey.from_string(address)
    except Exception as e:
        raise InvalidAddressError(address, str(e)) from e
    return address


def _has_supply(asset: dict[str, Any]) -> bool:
    token_info = asset.get("token_info")
    return isinstance(token_info, dict) and "supply" in token_info


def partition_assets(assets: Iterable[dict[str, Any]]) -> tuple[list[dict[str, Any]], list[dict[str, Any]]]:
    """
    Split DAS assets into (nfts, fungible tokens).

    NFTs carry one of NFT_INTERFACES. Fungible tokens are everything else that
    carries a token_info.supply key, even when null
    (V1_PRINT is never fungible).
    """
    nfts: list[dict[str, Any]] = []
    tokens: list[dict[str, Any]] = []
    for asset in assets:
        interface = asset.get("interface")
        if interface in NFT_INTERFACES:
            nfts.append(asset)
        elif interface != "V1_PRINT" and _has_supply(asset):
            tokens.append(asset)
    return nfts, tokens


def count_token_holdings(tokens: Iterable[dict[str, Any]]) -> int:
    """Distinct asset ids; duplicates collapse."""
    return len({t.get("id") for t in tokens})


def _fetch_window(history: TransactionHistorySource, address: str, limit: int) -> list[Any]:
    signatures = history.get_signatures(address, limit)
    if not signatures:
        return []
    return history.get_parsed_transactions(signatures)


def build_profile_report(
    address: str,
    assets_source: AssetSource,
    history_source: TransactionHistorySource,
    *,
    tx_limit: int = DEFAULT_TX_SCAN_LIMIT,
) -> ProfileReport:
    """
    Build the interest profile of one wallet and report degraded metrics.

    Raises InvalidAddressError for a malformed address and CollaboratorError
    (stage assets | balance) when a required input cannot be fetched.
    """
    address = validate_address(address)
    wallet = short_address(address)
    logger.info("profile_build_start", wallet=wallet, tx_limit=tx_limit)

    # shutdown(wait=False): a failed required fetch must not block on the history window
    executor = ThreadPoolExecutor(max_workers=3)
    try:
        assets_future = executor.submit(assets_source.get_assets_by_owner, address)
        balance_future = executor.submit(assets_source.get_balance, address)
        history_future = executor.submit(_fetch_window, history_source, address, tx_limit)

        try:
            assets = assets_future.result()
        except Exception as e:
            logger.error("profile_assets_failed", wallet=wallet, error=str(e))
            raise as_collaborator_error(STAGE_ASSETS, e) from e
        try:
            lamports = balance_future.result()
        except Exception as e:
            logger.error("profile_balance_failed", wallet=wallet, error=str(e))
            raise as_collaborator_error(STAGE_BALANCE, e) from e

        degraded: dict[str, str] = {}
        try:
            scan = scan_transactions(history_future.result())
        except Exception as e:
            error = as_collaborator_error(STAGE_HISTORY, e)
            reason = DEGRADED_RATE_LIMITED if isinstance(error, RateLimitedError) else DEGRADED_ERROR
            if reason == DEGRADED_RATE_LIMITED:
                logger.warning(
                    "profile_history_rate_limited",
                    wallet=wallet,
                    error=str(error),
                    hint="set HELIUS_API_KEY or SOLANA_RPC_URL to a dedicated RPC, or lower TX_SCAN_LIMIT",
                )
            else:
                logger.warning("profile_history_failed", wallet=wallet, error=str(error))
            for metric in DEGRADED_METRICS:
                degraded[metric] = reason
            scan = ScanResult()
    finally:
        executor.shutdown(wait=False, cancel_futures=True)

    nfts, tokens = partition_assets(assets)
    nft_count = len(nfts)
    token_holdings = count_token_holdings(tokens)
    sol_balance = int(lamports) / LAMPORTS_PER_SOL
    tier = classify_tier(nft_count, sol_balance)

    profile = InterestProfile(
        tier=tier,
        nft_count=nft_count,
        sol_balance=sol_balance,
        trading_volume=scan.trading_volume,
        token_holdings=token_holdings,
        defi_interactions=scan.defi_interactions,
    )
    logger.info(
        "profile_built",
        wallet=wallet,
        tier=tier.value,
        nft_count=nft_count,
        sol_balance=sol_balance,
        trading_volume=round(scan.trading_volume, 2),
        token_holdings=token_holdings,
        defi_interactions=scan.defi_interactions,
        transactions_scanned=scan.transactions_scanned,
        degraded=sorted(degraded),
    )
    return ProfileReport(
        address=address,
        profile=profile,
        transactions_scanned=scan.transactions_scanned,
        degraded=degraded,
    )


def build_interest_profile(
    address: str,
    assets_source: AssetSource,
    history_source: TransactionHistorySource,
    *,
    tx_limit: int = DEFAULT_TX_SCAN_LIMIT,
) -> InterestProfile:
    """Build the InterestProfile of one wallet (see build_profile_report)."""
    return build_profile_report(address, assets_source, history_source, tx_limit=tx_limit).profile
