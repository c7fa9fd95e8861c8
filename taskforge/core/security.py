"""
Credentials for TaskForge.

Passwords are stored as bcrypt hashes. A session is a pair of signed JWTs:
a long-lived access token sent as a Bearer header on every request, and a
refresh token that can be exchanged once for a new pair. Both carry a
``jti`` so logout can revoke them through Redis.
"""

from __future__ import annotations

import uuid
from datetime import UTC, datetime, timedelta
from typing import Any, Literal

import bcrypt as _bcrypt
from jose import JWTError, jwt

from taskforge.core.config import settings

TokenKind = Literal["access", "refresh"]

# bcrypt ignores everything past 72 bytes and newer releases refuse longer input
BCRYPT_MAX_BYTES = 72
BCRYPT_ROUNDS = 12


def _password_bytes(password: str) -> bytes:
    return password.encode("utf-8")[:BCRYPT_MAX_BYTES]


def hash_password(password: str) -> str:
    """Hash for the ``users.password_hash`` column."""
    salt = _bcrypt.gensalt(rounds=BCRYPT_ROUNDS)
    return _bcrypt.hashpw(_password_bytes(password), salt).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return _bcrypt.checkpw(_password_bytes(plain_password), hashed_password.encode("utf-8"))


# ---------------------------------------------------------------------------
# Session tokens
# ---------------------------------------------------------------------------

def _issue(user_id: str, kind: TokenKind, lifetime: timedelta, **claims: Any) -> tuple[str, str]:
    issued_at = datetime.now(UTC)
    jti = str(uuid.uuid4())
    payload = {
        "sub": user_id,
        **claims,
        "jti": jti,
        "type": kind,
        "iat": issued_at,
        "exp": issued_at + lifetime,
    }
    return jwt.encode(payload, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM), jti


def _read(token: str, kind: TokenKind) -> dict[str, Any]:
    payload = jwt.decode(token, settings.JWT_SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
    if payload.get("type") != kind:
        raise JWTError(f"Expected a {kind} token")
    return payload


def create_access_token(user_id: str, name: str | None = None) -> tuple[str, str]:
    """
    Sign the token that authenticates API calls.

    ``name`` is copied into the claims for the frontend's benefit only;
    the server always reloads the user row by ``sub``.

    Returns ``(token, jti)``. Logout blacklists the jti until ``exp``.
    """
    lifetime = timedelta(minutes=settings.JWT_ACCESS_TOKEN_EXPIRE_MINUTES)
    return _issue(user_id, "access", lifetime, name=name)


def create_refresh_token(user_id: str) -> tuple[str, str]:
    """Sign a single-use refresh token. Returns ``(token, jti)``; the caller stores the jti."""
    return _issue(user_id, "refresh", timedelta(hours=settings.JWT_REFRESH_TOKEN_EXPIRE_HOURS))


def decode_access_token(token: str) -> dict[str, Any]:
    """Verified claims of an access token. A refresh token is rejected with ``JWTError``."""
    return _read(token, "access")


def decode_refresh_token(token: str) -> dict[str, Any]:
    """Verified claims of a refresh token. An access token is rejected with ``JWTError``."""
    return _read(token, "refresh")


def seconds_until_expiry(payload: dict[str, Any]) -> int:
    """TTL for Redis entries tied to a token; at least 1 so SETEX accepts it."""
    remaining = int(payload.get("exp", 0)) - int(datetime.now(UTC).timestamp())
    return max(remaining, 1)


# ---------------------------------------------------------------------------
# Revocation keys
# ---------------------------------------------------------------------------

def refresh_token_redis_key(user_id: str, jti: str) -> str:
    # Present while the refresh token is still redeemable.
    return f"refresh:{user_id}:{jti}"


def blacklist_redis_key(jti: str) -> str:
    # Present while a logged-out access token would otherwise still be valid.
    return f"blacklist:{jti}"
