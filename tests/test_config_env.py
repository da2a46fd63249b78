"""
Environment configuration tests.
"""

from __future__ import annotations

import pytest

from interest_profiler.analytics.pipeline import peer_key_source
from interest_profiler.config import get_settings
from interest_profiler.config import env
from interest_profiler.core.exceptions import ConfigurationError
from interest_profiler.vault.mxe import MxeAccountKeySource, derive_mxe_account_address


def test_rpc_url_priority(clean_env):
    assert env.get_solana_rpc_url() == env.DEVNET_RPC_URL

    clean_env.setenv("HELIUS_API_KEY", "k1")
    assert env.get_solana_rpc_url() == "https://devnet.helius-rpc.com/?api-key=k1"

    clean_env.setenv("SOLANA_NETWORK", "mainnet-beta")
    assert env.get_solana_rpc_url() == "https://mainnet.helius-rpc.com/?api-key=k1"

    clean_env.setenv("SOLANA_RPC_URL", "https://my-rpc.example")
    assert env.get_solana_rpc_url() == "https://my-rpc.example"


def test_missing_helius_key_is_configuration_error(clean_env):
    with pytest.raises(ConfigurationError):
        env.get_helius_api_key()
    settings = get_settings()
    assert settings.helius_api_key is None
    with pytest.raises(ConfigurationError):
        settings.helius_rpc_url()


def test_scan_limit_defaults_and_validation(clean_env):
    assert env.get_tx_scan_limit() == 100
    clean_env.setenv("TX_SCAN_LIMIT", "250")
    assert env.get_tx_scan_limit() == 250
    clean_env.setenv("TX_SCAN_LIMIT", "5000")
    assert env.get_tx_scan_limit() == env.MAX_TX_SCAN_LIMIT
    clean_env.setenv("TX_SCAN_LIMIT", "zero")
    with pytest.raises(ConfigurationError):
        env.get_tx_scan_limit()


def test_request_timeout(clean_env):
    assert env.get_request_timeout() == env.DEFAULT_REQUEST_TIMEOUT
    clean_env.setenv("REQUEST_TIMEOUT_SECONDS", "2.5")
    assert env.get_request_timeout() == 2.5
    clean_env.setenv("REQUEST_TIMEOUT_SECONDS", "-1")
    with pytest.raises(ConfigurationError):
        env.get_request_timeout()


def test_mxe_public_key(clean_env):
    assert env.get_mxe_public_key() is None
    clean_env.setenv("MXE_PUBLIC_KEY", "0x" + "ab" * 32)
    assert env.get_mxe_public_key() == bytes([0xAB]) * 32
    clean_env.setenv("MXE_PUBLIC_KEY", "abcd")
    with pytest.raises(ConfigurationError):
        env.get_mxe_public_key()


def test_settings_from_env(clean_env):
    clean_env.setenv("HELIUS_API_KEY", "k2")
    clean_env.setenv("TX_SCAN_LIMIT", "40")
    settings = get_settings()
    assert settings.network == "devnet"
    assert settings.tx_scan_limit == 40
    assert settings.helius_rpc_url() == "https://devnet.helius-rpc.com/?api-key=k2"
    assert settings.solana_rpc_url == settings.helius_rpc_url()


def test_program_ids_default_to_arcium(clean_env):
    assert env.get_arcium_program_id() == env.DEFAULT_ARCIUM_PROGRAM_ID
    assert env.get_mxe_program_id() == env.DEFAULT_ARCIUM_PROGRAM_ID

    clean_env.setenv("MXE_PROGRAM_ID", "JUP6LkbZbjS1jKKwapdHNy74zcZ3tLUZoi5QNyVTaV4")
    assert env.get_mxe_program_id() == "JUP6LkbZbjS1jKKwapdHNy74zcZ3tLUZoi5QNyVTaV4"
    assert env.get_arcium_program_id() == env.DEFAULT_ARCIUM_PROGRAM_ID


def test_encrypt_without_public_key_uses_mxe_account(clean_env):
    settings = get_settings()
    source = peer_key_source(settings)
    assert isinstance(source, MxeAccountKeySource)
    assert source.account == derive_mxe_account_address(
        env.DEFAULT_ARCIUM_PROGRAM_ID, env.DEFAULT_ARCIUM_PROGRAM_ID
    )
