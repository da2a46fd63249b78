"""
External data sources: Helius DAS (assets, balance) and Solana RPC (transaction history).
"""

from interest_profiler.sources.base import AssetSource, TransactionHistorySource
from interest_profiler.sources.helius_das import HeliusAssetSource
from interest_profiler.sources.rpc_history import RpcTransactionHistory

__all__ = [
    "AssetSource",
    "TransactionHistorySource",
    "HeliusAssetSource",
    "RpcTransactionHistory",
]
