"""
Tests for trading volume estimation and DeFi interaction counting.
"""

from __future__ import annotations

import pytest

from interest_profiler.analytics.transaction_scanner import (
    count_defi_interactions,
    estimate_trading_volume,
    scan_transactions,
)
from fakes import JUPITER_V6, MARINADE, RAYDIUM_AMM, SOLEND, SYSTEM_PROGRAM, VALID_WALLET, make_tx


def test_dex_transaction_sums_all_balance_deltas():
    """Every slot's absolute delta counts, priced at 100 USD/SOL."""
    tx = make_tx([VALID_WALLET, "Pool111", JUPITER_V6], pre=[5_000_000_000, 1_000_000_000, 1], post=[4_000_000_000, 2_000_000_000, 1])
    assert estimate_trading_volume([tx]) == pytest.approx(200.0)


def test_non_dex_transaction_adds_no_volume():
    tx = make_tx([VALID_WALLET, SYSTEM_PROGRAM], pre=[5_000_000_000, 0], post=[1_000_000_000, 0])
    assert estimate_trading_volume([tx]) == 0.0


def test_failed_and_null_transactions_are_skipped():
    failed = make_tx([VALID_WALLET, RAYDIUM_AMM], pre=[2_000_000_000, 0], post=[1_000_000_000, 0], err={"InstructionError": [0, "Custom"]})
    no_meta = {"transaction": {"message": {"accountKeys": [RAYDIUM_AMM]}}}
    result = scan_transactions([None, failed, no_meta])
    assert result.trading_volume == 0.0
    assert result.defi_interactions == 0
    assert result.transactions_scanned == 0


def test_mismatched_balance_lengths_use_shorter_list():
    tx = make_tx([VALID_WALLET, RAYDIUM_AMM], pre=[3_000_000_000, 0, 7], post=[2_000_000_000])
    assert estimate_trading_volume([tx]) == pytest.approx(100.0)


def test_defi_programs_count_once_per_window():
    """Same program in three transactions counts once."""
    txs = [make_tx([VALID_WALLET, SOLEND]) for _ in range(3)]
    assert count_defi_interactions(txs) == 1


def test_distinct_defi_programs_are_counted():
    txs = [make_tx([VALID_WALLET, SOLEND, MARINADE]), make_tx([VALID_WALLET, JUPITER_V6]), make_tx([VALID_WALLET, SYSTEM_PROGRAM])]
    result = scan_transactions(txs)
    assert result.defi_interactions == 3
    assert result.defi_programs == {SOLEND, MARINADE, JUPITER_V6}
    assert result.trades == 1
    assert result.transactions_scanned == 3


def test_plain_string_account_keys_are_accepted():
    tx = {
        "meta": {"err": None, "preBalances": [1_000_000_000], "postBalances": [0]},
        "transaction": {"message": {"accountKeys": [JUPITER_V6]}},
    }
    assert estimate_trading_volume([tx]) == pytest.approx(100.0)
    assert count_defi_interactions([tx]) == 1
