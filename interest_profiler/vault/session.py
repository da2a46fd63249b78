"""
Vault session: one X25519 handshake with one MXE, then field encryption.

A session generates an ephemeral key pair, fetches the MXE public key, derives
the shared secret and builds a field cipher. It can be initialized exactly once;
talking to another MXE needs a new session. Encrypting before initialization
raises EncryptionNotInitializedError.
"""

from __future__ import annotations

from typing import Sequence

from cryptography.hazmat.primitives.asymmetric.x25519 import X25519PrivateKey, X25519PublicKey
from cryptography.hazmat.primitives.serialization import Encoding, PublicFormat

from interest_profiler.core.exceptions import EncryptionNotInitializedError, HandshakeError
from interest_profiler.profiler_logging import get_logger
from interest_profiler.vault.cipher import CipherFactory, CtrFieldCipher, FieldCipher
from interest_profiler.vault.mxe import PeerKeySource, StaticPeerKey

logger = get_logger(__name__)


class VaultSession:
    """Client side of the encrypted channel to an MXE vault."""

    def __init__(self, cipher_factory: CipherFactory = CtrFieldCipher) -> None:
        self._cipher_factory = cipher_factory
        self._cipher: FieldCipher | None = None
        self._client_public_key: bytes | None = None
        self._peer_public_key: bytes | None = None

    @property
    def initialized(self) -> bool:
        return self._cipher is not None

    @property
    def client_public_key(self) -> bytes:
        if self._client_public_key is None:
            raise EncryptionNotInitializedError()
        return self._client_public_key

    @property
    def peer_public_key(self) -> bytes | None:
        return self._peer_public_key

    def initialize(self, peer: PeerKeySource | bytes) -> None:
        """Run the handshake against peer (a key source or raw 32-byte key)."""
        if self._cipher is not None:
            raise HandshakeError("session already initialized; create a new VaultSession per MXE")
        source = StaticPeerKey(peer) if isinstance(peer, (bytes, bytearray)) else peer
        peer_key = source.fetch()

        private_key = X25519PrivateKey.generate()
        try:
            shared_secret = private_key.exchange(X25519PublicKey.from_public_bytes(peer_key))
        except ValueError as e:
            raise HandshakeError(f"key exchange failed: {e}") from e

        self._cipher = self._cipher_factory(shared_secret)
        self._client_public_key = private_key.public_key().public_bytes(Encoding.Raw, PublicFormat.Raw)
        self._peer_public_key = peer_key
        logger.info("vault_handshake_complete", client_public_key=self._client_public_key.hex())

    def encrypt(self, values: Sequence[int], nonce: bytes) -> list[bytes]:
        if self._cipher is None:
            raise EncryptionNotInitializedError()
        return self._cipher.encrypt(list(values), nonce)
