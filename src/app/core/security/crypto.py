"""Password hashing, access tokens and single-use link tokens."""

import secrets
from datetime import UTC, datetime, timedelta
from hashlib import sha256
from typing import Any
from uuid import UUID, uuid4

import argon2
from argon2.exceptions import InvalidHashError, VerificationError
from jose import JWTError, jwt

from src.app.core.config import get_settings

# 20 random bytes rendered as 40 hex characters
ONE_TIME_TOKEN_BYTES = 20

_settings = get_settings()
_hasher = argon2.PasswordHasher(
    time_cost=_settings.argon2_time_cost,
    memory_cost=_settings.argon2_memory_cost,
    parallelism=_settings.argon2_parallelism,
)

# Verified against when the e-mail is unknown so login timing does not reveal accounts
DUMMY_PASSWORD_HASH = _hasher.hash("easypm-dummy-password")


# --- passwords -------------------------------------------------------------


def hash_password(password: str) -> str:
    return _hasher.hash(password)


def verify_password(password: str, hashed: str) -> bool:
    """Check ``password`` against an Argon2id hash. Malformed hashes never match."""
    try:
        return _hasher.verify(hashed, password)
    except (VerificationError, InvalidHashError):
        return False


def generate_temporary_password() -> str:
    """Unguessable placeholder password for invited users who have not set one yet."""
    return secrets.token_urlsafe(24)


# --- reset / invite links --------------------------------------------------


def generate_one_time_token() -> str:
    return secrets.token_hex(ONE_TIME_TOKEN_BYTES)


def hash_token(token: str) -> str:
    """SHA-256 digest of a link token. Only the digest is stored."""
    return sha256(token.encode()).hexdigest()


# --- access tokens ---------------------------------------------------------


def create_access_token(
    subject: str | UUID,
    role: str,
    expires_delta: timedelta | None = None,
) -> str:
    """Issue a signed access token for ``subject``.

    ``jti`` is unique per token so a logout revokes exactly the token presented.
    The role claim is informational; authorization reloads the role from the
    database on every request.
    """
    settings = get_settings()
    lifetime = expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    claims: dict[str, Any] = {
        "sub": str(subject),
        "role": role,
        "type": "access",
        "jti": uuid4().hex,
        "exp": datetime.now(UTC) + lifetime,
    }
    return jwt.encode(claims, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)  # type: ignore[no-any-return]


def decode_token(token: str) -> dict[str, Any] | None:
    """Return the token's claims, or None if it is expired, forged or malformed."""
    settings = get_settings()
    try:
        claims: dict[str, Any] = jwt.decode(
            token,
            settings.jwt_secret_key,
            algorithms=[settings.jwt_algorithm],
        )
    except JWTError:
        return None
    return claims
