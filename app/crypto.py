"""
Fernet symmetric encryption for the target store's WC credentials.
Never logs plaintext values.
"""
from __future__ import annotations

import base64
import logging
from functools import lru_cache

from cryptography.fernet import Fernet, InvalidToken

logger = logging.getLogger(__name__)


@lru_cache(maxsize=4)
def _get_fernet(key: str) -> Fernet:
    raw = key.strip()
    if not raw:
        raise RuntimeError(
            "CONFIG_ENCRYPTION_KEY is not set. "
            "Generate one with: python -c \"from cryptography.fernet import Fernet; print(Fernet.generate_key().decode())\""
        )
    # Accept Fernet keys, or derive one from a raw secret of up to 32 chars
    try:
        return Fernet(raw.encode())
    except ValueError:
        padded = base64.urlsafe_b64encode(raw[:32].ljust(32).encode())
        return Fernet(padded)


def encrypt(plaintext: str, key: str) -> str:
    """Encrypt a plaintext string; returns a URL-safe base64 token string."""
    if not plaintext:
        return ""
    return _get_fernet(key).encrypt(plaintext.encode()).decode()


def decrypt(token: str, key: str) -> str:
    """Decrypt a Fernet token back to plaintext. Raises InvalidToken if tampered."""
    if not token:
        return ""
    try:
        return _get_fernet(key).decrypt(token.encode()).decode()
    except InvalidToken:
        logger.error("Failed to decrypt credential – possible key mismatch or tampered data")
        raise
