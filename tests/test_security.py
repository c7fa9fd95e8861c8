"""
Unit tests for password hashing and JWT helpers.
"""

from datetime import UTC, datetime

import pytest
from jose import JWTError, jwt

from taskforge.core.config import settings
from taskforge.core.security import (
    blacklist_redis_key,
    create_access_token,
    create_refresh_token,
    decode_access_token,
    decode_refresh_token,
    hash_password,
    refresh_token_redis_key,
    seconds_until_expiry,
    verify_password,
)


def test_hash_and_verify_password():
    hashed = hash_password("password123")

    assert hashed != "password123"
    assert hashed.startswith("$2")
    assert verify_password("password123", hashed)
    assert not verify_password("password124", hashed)


def test_hashes_are_salted():
    assert hash_password("password123") != hash_password("password123")


def test_password_is_cut_at_bcrypt_limit():
    hashed = hash_password("a" * 72 + "tail")

    assert verify_password("a" * 72, hashed)
    assert verify_password("a" * 72 + "other tail", hashed)


def test_access_token_claims():
    token, jti = create_access_token("user-1", "Alice")

    payload = decode_access_token(token)

    assert payload["sub"] == "user-1"
    assert payload["name"] == "Alice"
    assert payload["jti"] == jti
    assert payload["type"] == "access"
    assert payload["exp"] - payload["iat"] == settings.JWT_ACCESS_TOKEN_EXPIRE_MINUTES * 60


def test_refresh_token_claims():
    token, jti = create_refresh_token("user-1")

    payload = decode_refresh_token(token)

    assert payload["jti"] == jti
    assert payload["type"] == "refresh"
    assert payload["exp"] - payload["iat"] == settings.JWT_REFRESH_TOKEN_EXPIRE_HOURS * 3600


def test_token_types_are_not_interchangeable():
    access, _ = create_access_token("user-1")
    refresh, _ = create_refresh_token("user-1")

    with pytest.raises(JWTError):
        decode_refresh_token(access)
    with pytest.raises(JWTError):
        decode_access_token(refresh)


def test_token_signed_with_other_key_is_rejected():
    forged = jwt.encode(
        {"sub": "user-1", "type": "access", "jti": "x"},
        "another-secret-key-that-is-long-enough",
        algorithm="HS256",
    )

    with pytest.raises(JWTError):
        decode_access_token(forged)


def test_expired_token_is_rejected():
    expired = jwt.encode(
        {"sub": "user-1", "type": "access", "jti": "x", "exp": 1},
        settings.JWT_SECRET_KEY,
        algorithm=settings.JWT_ALGORITHM,
    )

    with pytest.raises(JWTError):
        decode_access_token(expired)


def test_seconds_until_expiry():
    now = int(datetime.now(UTC).timestamp())

    assert 590 <= seconds_until_expiry({"exp": now + 600}) <= 600
    assert seconds_until_expiry({"exp": now - 10}) == 1


def test_redis_keys():
    assert refresh_token_redis_key("u", "j") == "refresh:u:j"
    assert blacklist_redis_key("j") == "blacklist:j"
