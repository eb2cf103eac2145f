"""
bcrypt password hashing.

Passwords are pre-hashed with SHA-256 before bcrypt. This handles bcrypt's
72-byte limit and keeps behavior consistent across password lengths.
"""

import base64
import hashlib

import bcrypt as bcrypt_lib


def _prehash_password(password: str) -> bytes:
    sha256_hash = hashlib.sha256(password.encode("utf-8")).digest()
    return base64.b64encode(sha256_hash)


def hash_password(password: str, rounds: int = 10) -> str:
    """Hash a password using bcrypt with SHA-256 pre-hashing."""
    salt = bcrypt_lib.gensalt(rounds=rounds)
    return bcrypt_lib.hashpw(_prehash_password(password), salt).decode("utf-8")


def verify_password(password: str, hashed: str) -> bool:
    """Return True if the password matches the stored hash."""
    if not hashed:
        return False
    try:
        return bcrypt_lib.checkpw(_prehash_password(password), hashed.encode("utf-8"))
    except ValueError:
        # Malformed hash
        return False


# Compared against when the email is unknown, so a login attempt costs
# one bcrypt check whether or not the account exists.
DUMMY_PASSWORD_HASH: str = hash_password("sessionauth-timing-dummy")
