"""
Field ciphers: encrypt a list of non-negative integers under a shared secret.

A field cipher is built from the X25519 shared secret of a vault handshake and
exposes encrypt(values, nonce) -> one 32-byte block per value. CtrFieldCipher
is the default: HKDF-SHA256 derives an AES-256 key, each value is laid out as a
32-byte little-endian block and the whole record is encrypted in CTR mode with
the 16-byte nonce as initial counter block. Deployments that need the vault's
own cipher pass a different factory to VaultSession.
"""

from __future__ import annotations

from typing import Callable, Protocol, Sequence

from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes
from cryptography.hazmat.primitives.kdf.hkdf import HKDF

NONCE_SIZE = 16
BLOCK_SIZE = 32
MAX_FIELD_VALUE = (1 << (8 * BLOCK_SIZE)) - 1
HKDF_INFO = b"interest-profiler/field-cipher/v1"


class FieldCipher(Protocol):
    def encrypt(self, values: Sequence[int], nonce: bytes) -> list[bytes]: ...


CipherFactory = Callable[[bytes], FieldCipher]


def _check_nonce(nonce: bytes) -> None:
    if len(nonce) != NONCE_SIZE:
        raise ValueError(f"nonce must be {NONCE_SIZE} bytes, got {len(nonce)}")


class CtrFieldCipher:
    """AES-256-CTR over 32-byte little-endian field blocks."""

    def __init__(self, shared_secret: bytes) -> None:
        if len(shared_secret) != 32:
            raise ValueError("shared secret must be 32 bytes")
        self._key = HKDF(
            algorithm=hashes.SHA256(),
            length=32,
            salt=None,
            info=HKDF_INFO,
        ).derive(shared_secret)

    def _apply(self, data: bytes, nonce: bytes) -> bytes:
        _check_nonce(nonce)
        ctx = Cipher(algorithms.AES(self._key), modes.CTR(nonce)).encryptor()
        return ctx.update(data) + ctx.finalize()

    def encrypt(self, values: Sequence[int], nonce: bytes) -> list[bytes]:
        plaintext = bytearray()
        for value in values:
            value = int(value)
            if value < 0 or value > MAX_FIELD_VALUE:
                raise ValueError(f"field value out of range: {value}")
            plaintext += value.to_bytes(BLOCK_SIZE, "little")
        data = self._apply(bytes(plaintext), nonce)
        return [data[i:i + BLOCK_SIZE] for i in range(0, len(data), BLOCK_SIZE)]

    def decrypt(self, ciphertext: Sequence[bytes], nonce: bytes) -> list[int]:
        data = self._apply(b"".join(ciphertext), nonce)
        return [
            int.from_bytes(data[i:i + BLOCK_SIZE], "little")
            for i in range(0, len(data), BLOCK_SIZE)
        ]
