"""
Application settings.

Collects the environment getters from config.env into one frozen object that
the CLI hands to sources and the vault session. Missing HELIUS_API_KEY is
tolerated here; the asset source raises ConfigurationError when it needs it.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from interest_profiler.config import env
from interest_profiler.core.exceptions import ConfigurationError


@dataclass(frozen=True)
class Settings:
    """Resolved configuration for one profiler run."""

    network: str
    solana_rpc_url: str
    helius_api_key: str | None
    tx_scan_limit: int
    asset_page_limit: int
    request_timeout: float
    mxe_program_id: str
    arcium_program_id: str
    mxe_public_key: bytes | None

    def helius_rpc_url(self) -> str:
        """Helius DAS endpoint; requires helius_api_key."""
        if not self.helius_api_key:
            raise ConfigurationError("HELIUS_API_KEY is not set")
        if self.network == "devnet":
            return env.HELIUS_DEVNET_URL_TEMPLATE.format(key=self.helius_api_key)
        return env.HELIUS_MAINNET_URL_TEMPLATE.format(key=self.helius_api_key)


def get_settings() -> Settings:
    """Return settings resolved from environment variables and .env."""
    env.load_profiler_env()
    return Settings(
        network=env.get_solana_network(),
        solana_rpc_url=env.get_solana_rpc_url(),
        helius_api_key=(os.getenv("HELIUS_API_KEY") or "").strip() or None,
        tx_scan_limit=env.get_tx_scan_limit(),
        asset_page_limit=env.get_asset_page_limit(),
        request_timeout=env.get_request_timeout(),
        mxe_program_id=env.get_mxe_program_id(),
        arcium_program_id=env.get_arcium_program_id(),
        mxe_public_key=env.get_mxe_public_key(),
    )
