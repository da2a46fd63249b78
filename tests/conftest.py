"""
Pytest fixtures for interest profiler tests. Fakes for Helius DAS, the Solana
RPC and the vault cipher live in fakes.py.
"""

from __future__ import annotations

import pytest

from fakes import RecordingCipher


@pytest.fixture
def peer_private_key():
    from cryptography.hazmat.primitives.asymmetric.x25519 import X25519PrivateKey

    return X25519PrivateKey.generate()


@pytest.fixture
def peer_public_bytes(peer_private_key) -> bytes:
    from cryptography.hazmat.primitives.serialization import Encoding, PublicFormat

    return peer_private_key.public_key().public_bytes(Encoding.Raw, PublicFormat.Raw)


@pytest.fixture
def recording_session(peer_public_bytes):
    """Initialized VaultSession whose cipher is a RecordingCipher."""
    from interest_profiler.vault.session import VaultSession

    ciphers: list[RecordingCipher] = []

    def factory(secret: bytes) -> RecordingCipher:
        cipher = RecordingCipher(secret)
        ciphers.append(cipher)
        return cipher

    session = VaultSession(cipher_factory=factory)
    session.initialize(peer_public_bytes)
    session.recording_cipher = ciphers[0]
    return session


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """Clear profiler env vars and point .env loading at an empty file."""
    for name in (
        "HELIUS_API_KEY",
        "SOLANA_RPC_URL",
        "SOLANA_NETWORK",
        "TX_SCAN_LIMIT",
        "ASSET_PAGE_LIMIT",
        "REQUEST_TIMEOUT_SECONDS",
        "MXE_PROGRAM_ID",
        "ARCIUM_PROGRAM_ID",
        "MXE_PUBLIC_KEY",
    ):
        monkeypatch.delenv(name, raising=False)
    import interest_profiler.config.env as env

    monkeypatch.setattr(env, "_ENV_PATH", tmp_path / ".env")
    return monkeypatch
