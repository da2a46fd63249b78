"""
Environment variable loading and validation for Interest Profiler.

- SOLANA_NETWORK: devnet | mainnet (default: devnet; Arcium MXE runs on devnet)
- SOLANA_RPC_URL: RPC endpoint override (priority 1)
- HELIUS_API_KEY: Helius key; required for DAS asset queries, also selects Helius RPC
- TX_SCAN_LIMIT: recent transactions scanned for volume / DeFi (default 100)
- ASSET_PAGE_LIMIT: max getAssetsByOwner pages fetched (default 10)
- REQUEST_TIMEOUT_SECONDS: per-request timeout for RPC / DAS calls (default 15)
- ARCIUM_PROGRAM_ID: Arcium program (default DEFAULT_ARCIUM_PROGRAM_ID)
- MXE_PROGRAM_ID: MXE program whose account holds the key (default: ARCIUM_PROGRAM_ID)
- MXE_PUBLIC_KEY: hex X25519 key of the MXE; skips the on-chain lookup when set
- Loads .env from project root when available.
"""

from __future__ import annotations

import os
from pathlib import Path

from interest_profiler.core.exceptions import ConfigurationError

# Project root: config is interest_profiler/config/, root is 2 levels up
_CONFIG_DIR = Path(__file__).resolve().parent
_PACKAGE_DIR = _CONFIG_DIR.parent
_ROOT = _PACKAGE_DIR.parent
_ENV_PATH = _ROOT / ".env"

DEVNET_RPC_URL = "https://api.devnet.solana.com"
MAINNET_RPC_URL = "https://api.mainnet-beta.solana.com"
HELIUS_MAINNET_URL_TEMPLATE = "https://mainnet.helius-rpc.com/?api-key={key}"
HELIUS_DEVNET_URL_TEMPLATE = "https://devnet.helius-rpc.com/?api-key={key}"

DEFAULT_TX_SCAN_LIMIT = 100
MAX_TX_SCAN_LIMIT = 1000  # getSignaturesForAddress hard cap
DEFAULT_ASSET_PAGE_LIMIT = 10
DEFAULT_REQUEST_TIMEOUT = 15.0

# Arcium program (@arcium-hq/client getArciumProgramId); also the default MXE program
DEFAULT_ARCIUM_PROGRAM_ID = "Arcj82pX7HxYKLR92qvgZUAd7vGS1k4hQvAFcPATFdEQ"


def load_profiler_env() -> None:
    """Load .env from project root. Safe to call multiple times."""
    from dotenv import load_dotenv

    load_dotenv(_ENV_PATH)


def _int_env(name: str, default: int, minimum: int = 1, maximum: int | None = None) -> int:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError as e:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}") from e
    if value < minimum:
        raise ConfigurationError(f"{name} must be >= {minimum}, got {value}")
    if maximum is not None:
        value = min(value, maximum)
    return value


def get_solana_network() -> str:
    """
    Return SOLANA_NETWORK from env: devnet | mainnet.
    Default: devnet.
    """
    load_profiler_env()
    raw = (os.getenv("SOLANA_NETWORK") or "devnet").strip().lower()
    if raw in ("mainnet", "mainnet-beta"):
        return "mainnet"
    return "devnet"


def get_helius_api_key() -> str:
    """Return HELIUS_API_KEY; raise ConfigurationError when unset."""
    load_profiler_env()
    key = (os.getenv("HELIUS_API_KEY") or "").strip()
    if not key:
        raise ConfigurationError("HELIUS_API_KEY is not set")
    return key


def get_helius_rpc_url() -> str:
    """Helius JSON-RPC endpoint (DAS methods) for the configured network."""
    key = get_helius_api_key()
    if get_solana_network() == "devnet":
        return HELIUS_DEVNET_URL_TEMPLATE.format(key=key)
    return HELIUS_MAINNET_URL_TEMPLATE.format(key=key)


def get_solana_rpc_url() -> str:
    """
    Resolve Solana RPC URL from env.
    Order: SOLANA_RPC_URL > HELIUS_API_KEY (network-specific) > public endpoint.
    """
    load_profiler_env()
    url = (os.getenv("SOLANA_RPC_URL") or "").strip()
    if url:
        return url
    if (os.getenv("HELIUS_API_KEY") or "").strip():
        return get_helius_rpc_url()
    return DEVNET_RPC_URL if get_solana_network() == "devnet" else MAINNET_RPC_URL


def get_tx_scan_limit() -> int:
    load_profiler_env()
    return _int_env("TX_SCAN_LIMIT", DEFAULT_TX_SCAN_LIMIT, maximum=MAX_TX_SCAN_LIMIT)


def get_asset_page_limit() -> int:
    load_profiler_env()
    return _int_env("ASSET_PAGE_LIMIT", DEFAULT_ASSET_PAGE_LIMIT)


def get_request_timeout() -> float:
    load_profiler_env()
    raw = (os.getenv("REQUEST_TIMEOUT_SECONDS") or "").strip()
    if not raw:
        return DEFAULT_REQUEST_TIMEOUT
    try:
        value = float(raw)
    except ValueError as e:
        raise ConfigurationError(f"REQUEST_TIMEOUT_SECONDS must be a number, got {raw!r}") from e
    if value <= 0:
        raise ConfigurationError("REQUEST_TIMEOUT_SECONDS must be positive")
    return value


def get_mxe_program_id() -> str:
    """
    Return MXE_PROGRAM_ID from env, or the Arcium program id.
    The MXE account PDA is derived from this id.
    """
    load_profiler_env()
    pid = (os.getenv("MXE_PROGRAM_ID") or "").strip()
    if pid:
        return pid
    return get_arcium_program_id()


def get_arcium_program_id() -> str:
    """Return ARCIUM_PROGRAM_ID from env, or DEFAULT_ARCIUM_PROGRAM_ID."""
    load_profiler_env()
    pid = (os.getenv("ARCIUM_PROGRAM_ID") or "").strip()
    if pid:
        return pid
    return DEFAULT_ARCIUM_PROGRAM_ID


def get_mxe_public_key() -> bytes | None:
    """
    Return MXE_PUBLIC_KEY decoded from hex, or None when unset.
    Raises ConfigurationError when set but not a 32-byte hex string.
    """
    load_profiler_env()
    raw = (os.getenv("MXE_PUBLIC_KEY") or "").strip()
    if not raw:
        return None
    try:
        key = bytes.fromhex(raw.removeprefix("0x"))
    except ValueError as e:
        raise ConfigurationError("MXE_PUBLIC_KEY must be hex") from e
    if len(key) != 32:
        raise ConfigurationError(f"MXE_PUBLIC_KEY must be 32 bytes, got {len(key)}")
    return key
