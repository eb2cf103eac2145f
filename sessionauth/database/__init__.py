from sessionauth.database.collections import (
    USERS_COLLECTION,
    SESSIONS_COLLECTION,
    VERIFICATION_CODES_COLLECTION,
    ensure_indexes,
)

__all__ = [
    "USERS_COLLECTION",
    "SESSIONS_COLLECTION",
    "VERIFICATION_CODES_COLLECTION",
    "ensure_indexes",
]
