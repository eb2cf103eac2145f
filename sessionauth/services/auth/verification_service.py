"""
Verification code ledger.

Single-use, typed, expiring codes tied to a user. The code's document id is
the artifact delivered by email.
"""

import logging
from datetime import datetime, timezone
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorDatabase

from sessionauth.database import VERIFICATION_CODES_COLLECTION
from sessionauth.models import VerificationCodeType, to_object_id

logger = logging.getLogger(__name__)


class VerificationCodeService:
    """
    Issues, looks up and consumes verification codes.
    """

    def __init__(self, db: AsyncIOMotorDatabase):
        """
        Initialize VerificationCodeService.

        Args:
            db: MongoDB database connection
        """
        self._db = db
        self._codes_collection = db[VERIFICATION_CODES_COLLECTION]

    async def create_code(
        self,
        user_id,
        code_type: VerificationCodeType,
        expires_at: datetime,
        now: Optional[datetime] = None
    ) -> dict:
        """
        Persist a new code.

        Args:
            user_id: Owning user
            code_type: Purpose of the code
            expires_at: Moment after which the code is no longer valid
            now: Creation time (defaults to the current UTC time)

        Returns:
            The created code document
        """
        code = {
            "userId": to_object_id(user_id),
            "type": code_type.value,
            "createdAt": now or datetime.now(timezone.utc),
            "expiresAt": expires_at,
        }

        result = await self._codes_collection.insert_one(code)
        code["_id"] = result.inserted_id

        logger.info(f"Created {code_type.value} code for user {user_id}")
        return code

    async def find_valid_code(
        self,
        code_id: str,
        code_type: VerificationCodeType,
        now: Optional[datetime] = None
    ) -> Optional[dict]:
        """
        Look up an unexpired code of the given type.

        Returns:
            Code document, or None for unknown, wrong-type, expired or
            malformed ids
        """
        object_id = to_object_id(code_id)
        if object_id is None:
            return None

        return await self._codes_collection.find_one({
            "_id": object_id,
            "type": code_type.value,
            "expiresAt": {"$gt": now or datetime.now(timezone.utc)},
        })

    async def count_recent_codes(
        self,
        user_id,
        code_type: VerificationCodeType,
        since: datetime
    ) -> int:
        """Count codes of a type created for the user after `since`."""
        return await self._codes_collection.count_documents({
            "userId": to_object_id(user_id),
            "type": code_type.value,
            "createdAt": {"$gt": since},
        })

    async def delete_code(self, code_id) -> None:
        """Consume a code."""
        await self._codes_collection.delete_one({"_id": to_object_id(code_id)})
        logger.debug(f"Verification code {code_id} consumed")
