"""
Data models for wallet interest profiles.

Tier is the four-level classification; InterestProfile is the immutable record
built once per run; EncodedFields is the six-integer wire layout consumed by the
vault. Field order and units of EncodedFields are a storage contract.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

LAMPORTS_PER_SOL = 1_000_000_000
CENTS_PER_USD = 100
FIELD_COUNT = 6

# Storage widths (bits) of the on-chain SharedEncryptedStruct<6>, by position.
FIELD_NAMES = (
    "tier_code",
    "nft_count",
    "sol_balance_lamports",
    "trading_volume_cents",
    "token_holdings",
    "defi_interactions",
)
FIELD_BIT_WIDTHS = (8, 32, 64, 64, 32, 32)


class Tier(str, Enum):
    """Wallet tier. Ordered BRONZE < SILVER < GOLD < PLATINUM."""

    BRONZE = "BRONZE_TIER"
    SILVER = "SILVER_TIER"
    GOLD = "GOLD_TIER"
    PLATINUM = "PLATINUM_TIER"

    @property
    def code(self) -> int:
        """Numeric code used at the encryption boundary (0..3)."""
        return _TIER_CODES[self]

    @classmethod
    def from_code(cls, code: int) -> "Tier":
        for tier, value in _TIER_CODES.items():
            if value == code:
                return tier
        raise ValueError(f"Unknown tier code: {code}")

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Tier):
            return NotImplemented
        return self.code < other.code

    def __le__(self, other: object) -> bool:
        if not isinstance(other, Tier):
            return NotImplemented
        return self.code <= other.code

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, Tier):
            return NotImplemented
        return self.code > other.code

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, Tier):
            return NotImplemented
        return self.code >= other.code


_TIER_CODES = {
    Tier.BRONZE: 0,
    Tier.SILVER: 1,
    Tier.GOLD: 2,
    Tier.PLATINUM: 3,
}


@dataclass(frozen=True)
class InterestProfile:
    """
    Interest profile of one wallet.

    sol_balance is in whole SOL; trading_volume is an estimated USD amount over
    the scanned transaction window. Counts are non-negative integers.
    """

    tier: Tier
    nft_count: int
    sol_balance: float
    trading_volume: float
    token_holdings: int
    defi_interactions: int

    def __post_init__(self) -> None:
        for name in ("nft_count", "sol_balance", "trading_volume", "token_holdings", "defi_interactions"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be non-negative")

    def to_dict(self) -> dict[str, Any]:
        return {
            "tier": self.tier.value,
            "nft_count": self.nft_count,
            "sol_balance": self.sol_balance,
            "trading_volume": self.trading_volume,
            "token_holdings": self.token_holdings,
            "defi_interactions": self.defi_interactions,
        }


@dataclass(frozen=True)
class EncodedFields:
    """Six non-negative integers in wire order (see FIELD_NAMES)."""

    tier_code: int
    nft_count: int
    sol_balance_lamports: int
    trading_volume_cents: int
    token_holdings: int
    defi_interactions: int

    @property
    def field_count(self) -> int:
        return FIELD_COUNT

    def as_list(self) -> list[int]:
        return [
            self.tier_code,
            self.nft_count,
            self.sol_balance_lamports,
            self.trading_volume_cents,
            self.token_holdings,
            self.defi_interactions,
        ]

    def overflowing_fields(self) -> list[str]:
        """Names of fields whose value exceeds its on-chain storage width."""
        return [
            name
            for name, value, bits in zip(FIELD_NAMES, self.as_list(), FIELD_BIT_WIDTHS)
            if value >= 1 << bits
        ]


@dataclass(frozen=True)
class EncryptedProfile:
    """
    Encrypted field record ready for an on-chain SharedEncryptedStruct.

    ciphertext holds one 32-byte block per encrypted field.
    """

    ciphertext: list[bytes]
    nonce: bytes
    client_public_key: bytes
    field_count: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "ciphertext": [block.hex() for block in self.ciphertext],
            "nonce": self.nonce.hex(),
            "client_public_key": self.client_public_key.hex(),
            "field_count": self.field_count,
        }


DEGRADED_RATE_LIMITED = "rate_limited"
DEGRADED_ERROR = "error"


@dataclass
class ProfileReport:
    """
    Result of one profile run.

    degraded maps a defaulted metric (trading_volume, defi_interactions) to the
    reason it was defaulted: rate_limited | error. Empty when every metric was
    computed from live data.
    """

    address: str
    profile: InterestProfile
    transactions_scanned: int = 0
    degraded: dict[str, str] = field(default_factory=dict)

    @property
    def is_degraded(self) -> bool:
        return bool(self.degraded)

    def to_dict(self) -> dict[str, Any]:
        return {
            "address": self.address,
            "profile": self.profile.to_dict(),
            "transactions_scanned": self.transactions_scanned,
            "degraded": dict(self.degraded),
        }
