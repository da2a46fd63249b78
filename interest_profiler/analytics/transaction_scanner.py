"""
Transaction scanner: trading volume and DeFi interactions from parsed transactions.

Works on jsonParsed getTransaction results (dicts or solders objects). Failed
transactions (meta.err set), null entries and entries without meta are skipped.

Trading volume is a coarse estimate: for every transaction touching a known DEX
program, the absolute lamport delta of *every* account slot is summed and
priced at PLACEHOLDER_SOL_PRICE_USD. Fee and rent movements of unrelated
accounts are counted too; this is the documented behavior of the estimator.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable

from interest_profiler.analytics.models import LAMPORTS_PER_SOL

PLACEHOLDER_SOL_PRICE_USD = 100.0

JUPITER_PROGRAM_IDS = frozenset({
    "JUP6LkbZbjS1jKKwapdHNy74zcZ3tLUZoi5QNyVTaV4",  # Jupiter V6
    "JUP4Fb2cqiRUcaTHdrPC8h2gNsA2ETXiPDD33WcGuJB",  # Jupiter V4
})
ORCA_PROGRAM_IDS = frozenset({
    "9W959DqEETiGZocYWCQPaJ6sBmUzgfxXfqGeTEdp3aQP",  # Orca V1
    "whirLbMiicVdio4qvUfM5KAg6Ct8VwpYzGff3uctyCc",  # Whirlpools
})
RAYDIUM_AMM_PROGRAM_ID = "675kPX9MHTjS2zt1qfr1NYHuzeLXfQM9H24wFSUt1Mp8"
RAYDIUM_CLMM_PROGRAM_ID = "CAMMCzo5YL8w4VFF8KVHrK22GGUsp5VTaW7grrKgrWqK"

# Programs whose presence marks a transaction as a trade
DEX_PROGRAM_IDS = JUPITER_PROGRAM_IDS | ORCA_PROGRAM_IDS | frozenset({RAYDIUM_AMM_PROGRAM_ID})

# Programs counted as DeFi interactions (distinct per run)
DEFI_PROGRAM_IDS = JUPITER_PROGRAM_IDS | ORCA_PROGRAM_IDS | frozenset({
    RAYDIUM_AMM_PROGRAM_ID,
    RAYDIUM_CLMM_PROGRAM_ID,
    "9xQeWvG816bUx9EPjHmaT23yvVM2ZWbrrpZb9PusVFin",  # Serum DEX
    "So1endDq2YkqhipRh3WViPa8hdiSpxWy6z3Z6tMCpAo",  # Solend
    "MarBmsSgKXdrN1egZf5sqe1TMai9K1rChYNDJgjq7aD",  # Marinade
    "CrX7kMhLC3cSsXJdT7JDgqrRVWGnUpX3gfEfxxU2NVLi",  # Lido
})


def _field(obj: Any, *names: str) -> Any:
    """First present attribute or dict key among names (solders objects or raw JSON)."""
    if obj is None:
        return None
    for name in names:
        if isinstance(obj, dict):
            if name in obj:
                return obj[name]
        else:
            value = getattr(obj, name, None)
            if value is not None:
                return value
    return None


def _pubkey_str(key: Any) -> str | None:
    """Parsed account keys are {pubkey, signer, writable} dicts or ParsedAccount objects."""
    if key is None:
        return None
    if isinstance(key, str):
        return key
    pubkey = _field(key, "pubkey")
    if pubkey is not None:
        return str(pubkey)
    return str(key)


def is_successful(tx: Any) -> bool:
    """True for a non-null transaction with meta and no error."""
    if tx is None:
        return False
    meta = _field(tx, "meta")
    if meta is None:
        return False
    return _field(meta, "err") is None


def account_keys(tx: Any) -> list[str]:
    """Account keys of transaction.message as base58 strings."""
    message = _field(_field(tx, "transaction"), "message")
    keys = _field(message, "accountKeys", "account_keys") or []
    out = []
    for key in keys:
        pk = _pubkey_str(key)
        if pk:
            out.append(pk)
    return out


def trade_volume_usd(tx: Any) -> float:
    """Estimated USD volume of one transaction; 0.0 when it touches no DEX program."""
    if not DEX_PROGRAM_IDS.intersection(account_keys(tx)):
        return 0.0
    meta = _field(tx, "meta")
    pre = _field(meta, "preBalances", "pre_balances") or []
    post = _field(meta, "postBalances", "post_balances") or []
    volume = 0.0
    for before, after in zip(pre, post):
        diff = abs(int(after or 0) - int(before or 0))
        if diff > 0:
            volume += diff / LAMPORTS_PER_SOL * PLACEHOLDER_SOL_PRICE_USD
    return volume


@dataclass
class ScanResult:
    """Aggregates over one transaction window."""

    trading_volume: float = 0.0
    defi_programs: set[str] = field(default_factory=set)
    transactions_scanned: int = 0
    trades: int = 0

    @property
    def defi_interactions(self) -> int:
        return len(self.defi_programs)


def scan_transactions(transactions: Iterable[Any]) -> ScanResult:
    """
    Accumulate trading volume and distinct DeFi programs over parsed transactions.

    Each DeFi program counts once per window regardless of how many
    transactions reference it.
    """
    result = ScanResult()
    for tx in transactions:
        if not is_successful(tx):
            continue
        result.transactions_scanned += 1
        keys = account_keys(tx)
        if DEX_PROGRAM_IDS.intersection(keys):
            result.trades += 1
            result.trading_volume += trade_volume_usd(tx)
        result.defi_programs.update(k for k in keys if k in DEFI_PROGRAM_IDS)
    return result


def estimate_trading_volume(transactions: Iterable[Any]) -> float:
    """Estimated USD trading volume over a transaction window."""
    return scan_transactions(transactions).trading_volume


def count_defi_interactions(transactions: Iterable[Any]) -> int:
    """Number of distinct known DeFi programs referenced in a transaction window."""
    return scan_transactions(transactions).defi_interactions
