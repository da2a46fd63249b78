"""
Field encoder: InterestProfile -> six integers -> encrypted record.

Wire order: tier_code, nft_count, sol_balance_lamports, trading_volume_cents,
token_holdings, defi_interactions. Balance and volume are floored after unit
conversion (never rounded). Values beyond the on-chain widths are not clamped;
they are logged so the publisher can reject them.

Every encryption draws a fresh 16-byte nonce, so the same profile encrypts to
different ciphertexts while its EncodedFields stay identical.
"""

from __future__ import annotations

import math
import secrets
import warnings
from dataclasses import dataclass
from typing import Union

from interest_profiler.analytics.models import (
    CENTS_PER_USD,
    FIELD_COUNT,
    LAMPORTS_PER_SOL,
    EncodedFields,
    EncryptedProfile,
    InterestProfile,
    Tier,
)
from interest_profiler.core.exceptions import EncryptionNotInitializedError
from interest_profiler.profiler_logging import get_logger
from interest_profiler.vault.cipher import NONCE_SIZE
from interest_profiler.vault.session import VaultSession

logger = get_logger(__name__)


def encode_fields(profile: InterestProfile) -> EncodedFields:
    """Integer fields of a profile in wire order and units."""
    return EncodedFields(
        tier_code=profile.tier.code,
        nft_count=math.floor(profile.nft_count),
        sol_balance_lamports=math.floor(profile.sol_balance * LAMPORTS_PER_SOL),
        trading_volume_cents=math.floor(profile.trading_volume * CENTS_PER_USD),
        token_holdings=math.floor(profile.token_holdings),
        defi_interactions=math.floor(profile.defi_interactions),
    )


def new_nonce() -> bytes:
    return secrets.token_bytes(NONCE_SIZE)


def encrypt_interest_profile(session: VaultSession, profile: InterestProfile) -> EncryptedProfile:
    """Encrypt all six profile fields for a SharedEncryptedStruct<6>."""
    if not session.initialized:
        raise EncryptionNotInitializedError()
    fields = encode_fields(profile)
    overflow = fields.overflowing_fields()
    if overflow:
        logger.warning("encoded_fields_overflow", fields=overflow)
    nonce = new_nonce()
    ciphertext = session.encrypt(fields.as_list(), nonce)
    logger.info("interest_profile_encrypted", field_count=FIELD_COUNT, tier=profile.tier.value)
    return EncryptedProfile(
        ciphertext=ciphertext,
        nonce=nonce,
        client_public_key=session.client_public_key,
        field_count=FIELD_COUNT,
    )


@dataclass(frozen=True)
class TierCode:
    """Tier given by its numeric code (0..3)."""

    code: int


@dataclass(frozen=True)
class NamedTier:
    """Tier given as a classified Tier."""

    tier: Tier


TierValue = Union[TierCode, NamedTier]


def resolve_tier_code(value: TierValue) -> int:
    if isinstance(value, NamedTier):
        return value.tier.code
    if isinstance(value, TierCode):
        return Tier.from_code(value.code).code
    raise TypeError(f"expected TierCode or NamedTier, got {type(value).__name__}")


def encrypt_tier(session: VaultSession, value: TierValue) -> EncryptedProfile:
    """
    Encrypt the tier code alone.

    Deprecated: kept for vaults that still store a single Enc<Shared, u8>.
    Use encrypt_interest_profile() for the six-field record.
    """
    warnings.warn(
        "encrypt_tier is deprecated; use encrypt_interest_profile",
        DeprecationWarning,
        stacklevel=2,
    )
    if not session.initialized:
        raise EncryptionNotInitializedError()
    code = resolve_tier_code(value)
    nonce = new_nonce()
    ciphertext = session.encrypt([code], nonce)
    return EncryptedProfile(
        ciphertext=ciphertext,
        nonce=nonce,
        client_public_key=session.client_public_key,
        field_count=1,
    )
