"""
MXE public key sources for the vault handshake.

StaticPeerKey wraps a key supplied by configuration (MXE_PUBLIC_KEY).
MxeAccountKeySource reads the key from the MXE account on-chain: the account
address is the PDA of [b"MXEAccount", mxe_program_id] under the Arcium program,
and the X25519 key is read from the account data at key_offset. An all-zero
key means the MXE has not published its key yet.
"""

from __future__ import annotations

import base64
from typing import Any, Protocol

from interest_profiler.config.env import DEFAULT_REQUEST_TIMEOUT
from interest_profiler.core.exceptions import (
    STAGE_PEER_KEY,
    ConfigurationError,
    HandshakeError,
    as_collaborator_error,
)
from interest_profiler.profiler_logging import get_logger

logger = get_logger(__name__)

X25519_KEY_SIZE = 32
MXE_ACCOUNT_SEED = b"MXEAccount"
# Anchor discriminator (8) precedes the utility pubkeys in the MXE account
DEFAULT_MXE_KEY_OFFSET = 8


class PeerKeySource(Protocol):
    def fetch(self) -> bytes: ...


def _check_key(key: bytes | None) -> bytes:
    if not key or len(key) != X25519_KEY_SIZE:
        raise HandshakeError("Could not fetch MXE Public Key")
    if not any(key):
        raise HandshakeError("MXE Public Key is not set on the MXE account")
    return bytes(key)


class StaticPeerKey:
    """A known MXE X25519 public key."""

    def __init__(self, key: bytes) -> None:
        self.key = bytes(key)

    def fetch(self) -> bytes:
        return _check_key(self.key)


def derive_mxe_account_address(mxe_program_id: str, arcium_program_id: str) -> Any:
    """PDA of the MXE account for an MXE program."""
    from solders.pubkey import Pubkey

    try:
        mxe = Pubkey.from_string(mxe_program_id)
        arcium = Pubkey.from_string(arcium_program_id)
    except Exception as e:
        raise ConfigurationError(f"invalid program id: {e}") from e
    address, _bump = Pubkey.find_program_address([MXE_ACCOUNT_SEED, bytes(mxe)], arcium)
    return address


def _account_data(resp: Any) -> bytes | None:
    """Account data bytes from a getAccountInfo response (solders object or raw dict)."""
    if isinstance(resp, dict):
        value = (resp.get("result") or {}).get("value")
        if not value:
            return None
        data = value.get("data")
        if isinstance(data, list) and data:
            return base64.b64decode(data[0])
        return None
    value = getattr(resp, "value", None)
    if value is None:
        return None
    return bytes(value.data)


class MxeAccountKeySource:
    """Reads the MXE X25519 public key from its on-chain account."""

    def __init__(
        self,
        rpc_url: str,
        mxe_program_id: str | None,
        arcium_program_id: str | None,
        *,
        key_offset: int = DEFAULT_MXE_KEY_OFFSET,
        timeout: float = DEFAULT_REQUEST_TIMEOUT,
        client: Any = None,
    ) -> None:
        if not mxe_program_id:
            raise ConfigurationError("MXE_PROGRAM_ID is not set")
        if not arcium_program_id:
            raise ConfigurationError("ARCIUM_PROGRAM_ID is not set")
        self.account = derive_mxe_account_address(mxe_program_id, arcium_program_id)
        self.key_offset = key_offset
        if client is None:
            from solana.rpc.api import Client

            client = Client(rpc_url, timeout=timeout)
        self.client = client

    def fetch(self) -> bytes:
        try:
            resp = self.client.get_account_info(self.account)
        except Exception as e:
            raise as_collaborator_error(STAGE_PEER_KEY, e) from e
        data = _account_data(resp)
        if data is None:
            logger.warning("mxe_account_missing", account=str(self.account))
            raise HandshakeError("Could not fetch MXE Public Key")
        key = data[self.key_offset:self.key_offset + X25519_KEY_SIZE]
        return _check_key(key)
