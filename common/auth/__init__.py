"""
Authentication module - JWT token service and password hashing.
"""

from common.auth.jwt_auth import (
    TokenService,
    TokenKind,
    TokenResult,
    ValidToken,
    InvalidToken,
)
from common.auth.passwords import hash_password, verify_password, DUMMY_PASSWORD_HASH

__all__ = [
    "TokenService",
    "TokenKind",
    "TokenResult",
    "ValidToken",
    "InvalidToken",
    "hash_password",
    "verify_password",
    "DUMMY_PASSWORD_HASH",
]
