"""
Collaborator interfaces used by the profile builder.

Any object with these methods can stand in for Helius or the Solana RPC
(tests pass in-memory fakes).
"""

from __future__ import annotations

from typing import Any, Protocol, Sequence


class AssetSource(Protocol):
    def get_assets_by_owner(self, address: str) -> list[dict[str, Any]]: ...

    def get_balance(self, address: str) -> int: ...


class TransactionHistorySource(Protocol):
    def get_signatures(self, address: str, limit: int) -> list[str]: ...

    def get_parsed_transactions(self, signatures: Sequence[str]) -> list[dict[str, Any] | None]: ...
