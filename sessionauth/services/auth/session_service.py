"""
Session management for user authentication.

Manages the lifecycle of session documents. A session is one logical login
and is revocable independently of any token issued for it.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorDatabase

from sessionauth.database import SESSIONS_COLLECTION
from sessionauth.models import to_object_id

logger = logging.getLogger(__name__)


class SessionService:
    """
    Handles session CRUD operations.

    Expiry is never swept here; lookups compare expiresAt with the clock.
    """

    DEFAULT_EXPIRATION_DAYS = 30

    def __init__(
        self,
        db: AsyncIOMotorDatabase,
        expiration_days: int = DEFAULT_EXPIRATION_DAYS
    ):
        """
        Initialize SessionService.

        Args:
            db: MongoDB database connection
            expiration_days: Lifetime of a new session
        """
        self._db = db
        self._sessions_collection = db[SESSIONS_COLLECTION]
        self._expiration = timedelta(days=expiration_days)

    async def create_session(
        self,
        user_id,
        user_agent: Optional[str] = None,
        now: Optional[datetime] = None
    ) -> dict:
        """
        Create a new session for a user.

        Args:
            user_id: MongoDB user ID
            user_agent: Client User-Agent header
            now: Creation time (defaults to the current UTC time)

        Returns:
            The created session document
        """
        now = now or datetime.now(timezone.utc)
        session = {
            "userId": to_object_id(user_id),
            "userAgent": user_agent,
            "createdAt": now,
            "expiresAt": now + self._expiration,
        }

        result = await self._sessions_collection.insert_one(session)
        session["_id"] = result.inserted_id

        logger.info(f"Session {result.inserted_id} created for user {user_id}")
        return session

    async def get_session(self, session_id) -> Optional[dict]:
        """
        Load a session by id, expired or not.

        Returns:
            Session document or None if not found
        """
        object_id = to_object_id(session_id)
        if object_id is None:
            return None
        return await self._sessions_collection.find_one({"_id": object_id})

    async def extend_session(self, session_id, expires_at: datetime) -> None:
        """
        Move a session's expiry forward.

        Args:
            session_id: ID of the session
            expires_at: New expiry
        """
        await self._sessions_collection.update_one(
            {"_id": to_object_id(session_id)},
            {"$set": {"expiresAt": expires_at}}
        )
        logger.debug(f"Session {session_id} extended to {expires_at.isoformat()}")

    async def get_user_sessions(
        self,
        user_id,
        now: Optional[datetime] = None
    ) -> list[dict]:
        """
        Get all active (non-expired) sessions for a user, newest first.

        Args:
            user_id: MongoDB user ID

        Returns:
            List of session documents
        """
        now = now or datetime.now(timezone.utc)
        cursor = self._sessions_collection.find(
            {"userId": to_object_id(user_id), "expiresAt": {"$gt": now}},
            {"_id": 1, "userAgent": 1, "createdAt": 1}
        ).sort("createdAt", -1)
        return await cursor.to_list(length=None)

    async def delete_session(self, session_id) -> bool:
        """
        Delete a session. Deleting an absent session is not an error.

        Returns:
            True if a session was removed
        """
        object_id = to_object_id(session_id)
        if object_id is None:
            return False

        result = await self._sessions_collection.delete_one({"_id": object_id})
        if result.deleted_count > 0:
            logger.info(f"Session {session_id} deleted")
            return True
        return False

    async def revoke_user_session(self, user_id, session_id) -> bool:
        """
        Delete a session only if it belongs to the given user.

        Returns:
            True if removed, False if not found or owned by someone else
        """
        object_id = to_object_id(session_id)
        if object_id is None:
            return False

        result = await self._sessions_collection.delete_one(
            {"_id": object_id, "userId": to_object_id(user_id)}
        )
        if result.deleted_count > 0:
            logger.info(f"Session {session_id} revoked for user {user_id}")
            return True
        return False

    async def revoke_all_sessions(self, user_id) -> int:
        """
        Delete every session of a user.

        Returns:
            Number of sessions removed
        """
        result = await self._sessions_collection.delete_many(
            {"userId": to_object_id(user_id)}
        )
        logger.info(f"Revoked {result.deleted_count} sessions for user {user_id}")
        return result.deleted_count
