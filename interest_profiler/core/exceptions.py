"""
Application-level exceptions.

All errors raised by interest_profiler derive from ProfilerError so the CLI
can report them uniformly. CollaboratorError carries the pipeline stage that
failed (assets, balance, history, peer_key) for user-facing messages.
"""

from __future__ import annotations

STAGE_ASSETS = "assets"
STAGE_BALANCE = "balance"
STAGE_HISTORY = "history"
STAGE_PEER_KEY = "peer_key"

RATE_LIMIT_MARKERS = ("429", "Too Many Requests")


class ProfilerError(Exception):
    """Base class for interest profiler errors."""


class ConfigurationError(ProfilerError):
    """Missing or invalid configuration (API key, program id, public key)."""


class InvalidAddressError(ProfilerError):
    """Address is not a valid base58 Solana public key."""

    def __init__(self, address: str, reason: str = "") -> None:
        self.address = address
        message = f"Invalid wallet address: {address!r}"
        if reason:
            message += f" ({reason})"
        super().__init__(message)


class CollaboratorError(ProfilerError):
    """An external data source (Helius DAS, Solana RPC) failed."""

    def __init__(self, stage: str, message: str) -> None:
        self.stage = stage
        super().__init__(f"{stage} fetch failed: {message}")


class RateLimitedError(CollaboratorError):
    """The collaborator rejected the request with HTTP 429 / Too Many Requests."""


class EncryptionNotInitializedError(ProfilerError):
    """Encryption requested before the vault handshake completed."""

    def __init__(self) -> None:
        super().__init__("Encryption not initialized")


class HandshakeError(ProfilerError):
    """Vault key exchange failed or was attempted twice on one session."""


def is_rate_limit_message(message: str) -> bool:
    """True when an error message looks like an HTTP 429 rejection."""
    return any(marker in (message or "") for marker in RATE_LIMIT_MARKERS)


def as_collaborator_error(stage: str, exc: Exception) -> CollaboratorError:
    """Wrap a transport error, picking RateLimitedError for 429 responses."""
    if isinstance(exc, CollaboratorError):
        return exc
    message = str(exc) or type(exc).__name__
    # solana-py wraps httpx errors; the status text lives on the cause
    cause = exc.__cause__ or exc.__context__
    if cause is not None and str(cause) not in message:
        message = f"{message}: {cause}"
    if is_rate_limit_message(message):
        return RateLimitedError(stage, message)
    return CollaboratorError(stage, message)
