"""Security utilities - crypto and password strength.

Re-exports all security-related functions for convenience.
"""

from src.app.core.security.crypto import (
    DUMMY_PASSWORD_HASH,
    create_access_token,
    decode_token,
    generate_one_time_token,
    generate_temporary_password,
    hash_password,
    hash_token,
    verify_password,
)
from src.app.core.security.validators import validate_password_strength

__all__ = [
    # Crypto
    "DUMMY_PASSWORD_HASH",
    "create_access_token",
    "decode_token",
    "generate_one_time_token",
    "generate_temporary_password",
    "hash_password",
    "hash_token",
    "verify_password",
    # Validators
    "validate_password_strength",
]
