"""
SessionAuth collection names and indexes.
"""

import logging

from motor.motor_asyncio import AsyncIOMotorDatabase

logger = logging.getLogger(__name__)


USERS_COLLECTION = "users"
SESSIONS_COLLECTION = "sessions"
VERIFICATION_CODES_COLLECTION = "verificationCodes"


async def ensure_indexes(db: AsyncIOMotorDatabase) -> None:
    """
    Create the indexes the auth collections rely on.

    The unique email index backs the registration conflict check
    at the store level.
    """
    await db[USERS_COLLECTION].create_index("email", unique=True)
    await db[SESSIONS_COLLECTION].create_index("userId")
    await db[VERIFICATION_CODES_COLLECTION].create_index(
        [("userId", 1), ("type", 1), ("createdAt", -1)]
    )
    logger.info("Auth collection indexes ensured")
