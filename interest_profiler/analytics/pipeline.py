"""
Profile pipeline: settings -> sources -> profile -> (optional) vault encryption.

Single entrypoint for the CLI. Wires HeliusAssetSource and RpcTransactionHistory
from Settings, builds the profile report, and when asked runs a handshake with
the configured MXE and encrypts the six-field record.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from interest_profiler.analytics.models import EncryptedProfile, ProfileReport
from interest_profiler.analytics.profile_builder import build_profile_report
from interest_profiler.config import Settings, get_settings
from interest_profiler.profiler_logging import get_logger, mask_api_key, short_address
from interest_profiler.sources import HeliusAssetSource, RpcTransactionHistory
from interest_profiler.vault import VaultSession, encrypt_interest_profile
from interest_profiler.vault.mxe import MxeAccountKeySource, PeerKeySource, StaticPeerKey

logger = get_logger(__name__)


@dataclass
class PipelineResult:
    report: ProfileReport
    encrypted: EncryptedProfile | None = None

    def to_dict(self) -> dict[str, Any]:
        out = self.report.to_dict()
        out["encrypted"] = self.encrypted.to_dict() if self.encrypted else None
        return out


def build_sources(settings: Settings) -> tuple[HeliusAssetSource, RpcTransactionHistory]:
    """Helius DAS for assets/balance, Solana RPC for transaction history."""
    assets = HeliusAssetSource(
        settings.helius_rpc_url(),
        timeout=settings.request_timeout,
        max_pages=settings.asset_page_limit,
    )
    history = RpcTransactionHistory(settings.solana_rpc_url, timeout=settings.request_timeout)
    logger.info(
        "pipeline_sources_ready",
        network=settings.network,
        rpc=mask_api_key(settings.solana_rpc_url),
    )
    return assets, history


def peer_key_source(settings: Settings) -> PeerKeySource:
    """MXE_PUBLIC_KEY when configured, otherwise the on-chain MXE account."""
    if settings.mxe_public_key is not None:
        return StaticPeerKey(settings.mxe_public_key)
    return MxeAccountKeySource(
        settings.solana_rpc_url,
        settings.mxe_program_id,
        settings.arcium_program_id,
        timeout=settings.request_timeout,
    )


def run_profile(
    address: str,
    settings: Settings | None = None,
    *,
    tx_limit: int | None = None,
    encrypt: bool = False,
    session: VaultSession | None = None,
) -> PipelineResult:
    """
    Profile one wallet and optionally encrypt the result.

    session: an uninitialized VaultSession to handshake with the configured
    MXE, or an initialized one to reuse; a new session is created when None.
    """
    settings = settings or get_settings()
    limit = tx_limit if tx_limit is not None else settings.tx_scan_limit
    assets, history = build_sources(settings)
    report = build_profile_report(address, assets, history, tx_limit=limit)
    result = PipelineResult(report=report)
    if report.is_degraded:
        logger.warning(
            "pipeline_profile_degraded",
            wallet=short_address(report.address),
            degraded=report.degraded,
        )
    if not encrypt:
        return result

    session = session or VaultSession()
    if not session.initialized:
        session.initialize(peer_key_source(settings))
    result.encrypted = encrypt_interest_profile(session, report.profile)
    return result
