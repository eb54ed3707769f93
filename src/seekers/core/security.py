"""Identity hashing helpers."""
from __future__ import annotations

import hashlib
import hmac
import secrets

GOOGLE_PROVIDER = "google"
LOCAL_PROVIDER = "local"


def derive_identity_hash(provider: str, subject: str, key: bytes) -> str:
    """Return the keyed SHA-256 digest identifying an external account.

    The derivation is deterministic so returning users are found with a single
    indexed lookup. The raw subject never reaches the database.

    Args:
        provider: Short provider name, e.g. ``"google"``.
        subject: Stable account identifier issued by the provider.
        key: Server-side HMAC key.

    Returns:
        Hex-encoded HMAC-SHA256 digest.
    """
    message = f"{provider}:{subject}".encode("utf-8")
    return hmac.new(key, message, hashlib.sha256).hexdigest()


def new_local_subject() -> str:
    """Return a random subject for accounts registered without a provider."""
    return secrets.token_hex(16)


def new_session_id() -> str:
    """Return an opaque session identifier suitable for a cookie value."""
    return secrets.token_urlsafe(32)


def new_oauth_state() -> str:
    """Return a random OAuth ``state`` value."""
    return secrets.token_urlsafe(24)
