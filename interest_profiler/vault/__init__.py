"""
Vault encryption: X25519 handshake with an MXE and six-field profile encoding.
"""

from interest_profiler.vault.encoder import (
    NamedTier,
    TierCode,
    TierValue,
    encode_fields,
    encrypt_interest_profile,
    encrypt_tier,
)
from interest_profiler.vault.session import VaultSession

__all__ = [
    "NamedTier",
    "TierCode",
    "TierValue",
    "VaultSession",
    "encode_fields",
    "encrypt_interest_profile",
    "encrypt_tier",
]
