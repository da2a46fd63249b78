"""
Build (and optionally encrypt) the interest profile of one Solana wallet.

How to run:
    From project root (with .env configured):
        py -m interest_profiler.tools.profile_wallet <address> --limit 100 --encrypt

Required env vars:
    HELIUS_API_KEY                    (DAS asset and balance queries)
    MXE_PUBLIC_KEY                    (--encrypt; otherwise read from the MXE account)

Exit codes: 0 success, 1 a stage failed, 2 configuration error.
"""

from __future__ import annotations

import argparse
import json
import sys

from interest_profiler.analytics.pipeline import PipelineResult, run_profile
from interest_profiler.config import get_settings
from interest_profiler.core.exceptions import (
    CollaboratorError,
    ConfigurationError,
    EncryptionNotInitializedError,
    HandshakeError,
    InvalidAddressError,
)
from interest_profiler.profiler_logging import get_logger

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_STAGE_FAILED = 1
EXIT_CONFIG_ERROR = 2


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Build a wallet interest profile")
    parser.add_argument("address", help="Solana wallet address (base58)")
    parser.add_argument(
        "--limit",
        type=int,
        default=None,
        help="Recent transactions scanned for volume / DeFi (default: TX_SCAN_LIMIT or 100)",
    )
    parser.add_argument("--encrypt", action="store_true", help="Encrypt the profile for the MXE vault")
    parser.add_argument("--json", action="store_true", help="Print the result as JSON")
    return parser.parse_args(argv)


def format_result(result: PipelineResult) -> str:
    profile = result.report.profile
    lines = [
        f"=== Interest Profile for {result.report.address} ===",
        f"  Tier: {profile.tier.value}",
        f"  NFT Count: {profile.nft_count}",
        f"  SOL Balance: {profile.sol_balance} SOL",
        f"  Trading Volume: ${profile.trading_volume:.2f} USD",
        f"  Token Holdings: {profile.token_holdings}",
        f"  DeFi Interactions: {profile.defi_interactions}",
        f"  Transactions scanned: {result.report.transactions_scanned}",
    ]
    for metric, reason in sorted(result.report.degraded.items()):
        lines.append(f"  WARNING: {metric} defaulted to 0 ({reason})")
    if result.encrypted is not None:
        enc = result.encrypted
        lines += [
            f"=== Encrypted Interest Profile ({enc.field_count} fields) ===",
            f"  Nonce: {enc.nonce.hex()}",
            f"  Client Public Key: {enc.client_public_key.hex()}",
        ]
        lines += [f"  Ciphertext[{i}]: {block.hex()}" for i, block in enumerate(enc.ciphertext)]
    return "\n".join(lines)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    try:
        settings = get_settings()
        result = run_profile(args.address, settings, tx_limit=args.limit, encrypt=args.encrypt)
    except ConfigurationError as e:
        print(f"[profile_wallet] configuration error: {e}", file=sys.stderr)
        return EXIT_CONFIG_ERROR
    except InvalidAddressError as e:
        print(f"[profile_wallet] {e}", file=sys.stderr)
        return EXIT_STAGE_FAILED
    except CollaboratorError as e:
        logger.error("profile_wallet_stage_failed", stage=e.stage, error=str(e))
        print(f"[profile_wallet] stage '{e.stage}' failed: {e}", file=sys.stderr)
        return EXIT_STAGE_FAILED
    except (HandshakeError, EncryptionNotInitializedError) as e:
        logger.error("profile_wallet_encryption_failed", error=str(e))
        print(f"[profile_wallet] stage 'encrypt' failed: {e}", file=sys.stderr)
        return EXIT_STAGE_FAILED

    if args.json:
        print(json.dumps(result.to_dict(), indent=2))
    else:
        print(format_result(result))
    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
