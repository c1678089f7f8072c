"""
Unit tests for Fernet-encrypted target credentials.
"""
from __future__ import annotations

import pytest
from cryptography.fernet import Fernet, InvalidToken

from app.crypto import decrypt, encrypt

_TEST_KEY = Fernet.generate_key().decode()


def test_encrypt_decrypt_roundtrip():
    plaintext = "ck_abc123_consumer_key"
    assert decrypt(encrypt(plaintext, _TEST_KEY), _TEST_KEY) == plaintext


def test_encrypt_produces_different_tokens():
    """Fernet is non-deterministic – same plaintext produces different ciphertext each time."""
    t1 = encrypt("same_secret", _TEST_KEY)
    t2 = encrypt("same_secret", _TEST_KEY)
    assert t1 != t2
    assert decrypt(t1, _TEST_KEY) == decrypt(t2, _TEST_KEY) == "same_secret"


def test_decrypt_with_other_key_raises():
    token = encrypt("cs_secret", _TEST_KEY)
    with pytest.raises(InvalidToken):
        decrypt(token, Fernet.generate_key().decode())


def test_raw_passphrase_key_accepted():
    key = "not-a-fernet-key-but-a-passphrase"
    assert decrypt(encrypt("cs_secret", key), key) == "cs_secret"


def test_empty_values_pass_through():
    assert encrypt("", _TEST_KEY) == ""
    assert decrypt("", _TEST_KEY) == ""


def test_missing_key_raises_runtime_error():
    with pytest.raises(RuntimeError, match="CONFIG_ENCRYPTION_KEY"):
        encrypt("test", "")


def test_settings_decrypt_credentials(make_settings):
    settings = make_settings(
        wc2_consumer_key=encrypt("ck_live", _TEST_KEY),
        wc2_consumer_secret=encrypt("cs_live", _TEST_KEY),
        wc2_credentials_encrypted=True,
        config_encryption_key=_TEST_KEY,
    )
    assert settings.wc2_credentials == ("ck_live", "cs_live")


def test_settings_plaintext_credentials(settings):
    assert settings.wc2_credentials == ("ck_test", "cs_test")
