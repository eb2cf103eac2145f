"""
User service for credential storage.

Handles user creation, lookup, email verification and password updates.
"""

import logging
from datetime import datetime, timezone
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ReturnDocument
from pymongo.errors import DuplicateKeyError

from common.auth.passwords import hash_password, verify_password, DUMMY_PASSWORD_HASH
from sessionauth.database import USERS_COLLECTION
from sessionauth.models import to_object_id

logger = logging.getLogger(__name__)


class UserService:
    """
    Manages user records and their password hashes.
    """

    def __init__(self, db: AsyncIOMotorDatabase):
        """
        Initialize UserService.

        Args:
            db: MongoDB database connection
        """
        self._db = db
        self._users_collection = db[USERS_COLLECTION]

    async def email_exists(self, email: str) -> bool:
        """Check whether an account is registered for this email."""
        existing = await self._users_collection.find_one(
            {"email": email.lower()},
            {"_id": 1}
        )
        return existing is not None

    async def create_user(self, email: str, password: str) -> Optional[dict]:
        """
        Create a new, unverified user.

        Args:
            email: User's email address
            password: Plaintext password (stored hashed)

        Returns:
            Created user document (including the hash), or None if the
            email was taken by a concurrent insert
        """
        now = datetime.now(timezone.utc)
        user_doc = {
            "email": email.lower(),
            "password": hash_password(password),
            "verified": False,
            "createdAt": now,
            "updatedAt": now,
        }

        try:
            result = await self._users_collection.insert_one(user_doc)
        except DuplicateKeyError:
            logger.warning("User insert rejected: duplicate email")
            return None
        user_doc["_id"] = result.inserted_id

        logger.info(f"User created: {result.inserted_id}")
        return user_doc

    async def get_user_by_id(self, user_id: str) -> Optional[dict]:
        """
        Load user by MongoDB ID.

        Args:
            user_id: MongoDB ObjectId as string

        Returns:
            User document or None if not found
        """
        object_id = to_object_id(user_id)
        if object_id is None:
            return None
        return await self._users_collection.find_one({"_id": object_id})

    async def get_user_by_email(self, email: str) -> Optional[dict]:
        """
        Load user by email address.

        Args:
            email: User's email address

        Returns:
            User document or None if not found
        """
        return await self._users_collection.find_one({"email": email.lower()})

    async def authenticate(self, email: str, password: str) -> Optional[dict]:
        """
        Check credentials.

        bcrypt runs once whether or not the email is registered, so response
        time does not reveal which emails have accounts.

        Returns:
            User document on success, None for unknown email or wrong password
        """
        user = await self.get_user_by_email(email)
        if user is None:
            verify_password(password, DUMMY_PASSWORD_HASH)
            return None
        if not verify_password(password, user.get("password", "")):
            return None
        return user

    async def mark_verified(self, user_id) -> Optional[dict]:
        """
        Flip the verified flag.

        Returns:
            Updated user document, or None if no user matched
        """
        return await self._users_collection.find_one_and_update(
            {"_id": to_object_id(user_id)},
            {"$set": {"verified": True, "updatedAt": datetime.now(timezone.utc)}},
            return_document=ReturnDocument.AFTER,
        )

    async def update_password(self, user_id, password: str) -> Optional[dict]:
        """
        Replace the password hash.

        Returns:
            Updated user document, or None if no user matched
        """
        updated = await self._users_collection.find_one_and_update(
            {"_id": to_object_id(user_id)},
            {"$set": {
                "password": hash_password(password),
                "updatedAt": datetime.now(timezone.utc),
            }},
            return_document=ReturnDocument.AFTER,
        )
        if updated:
            logger.info(f"Password updated for user {user_id}")
        return updated
