"""
Expired record cleanup background job.

Deletes sessions and verification codes whose expiresAt has passed.
Lookups already ignore expired records, so this only reclaims storage.
This job should be run daily via CRON.

Usage:
    Run via CRON:
        0 3 * * * cd /path/to/project && python -m jobs.expired_cleanup

    Or run directly:
        python -m jobs.expired_cleanup
"""

import asyncio
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict

from motor.motor_asyncio import AsyncIOMotorDatabase

from common.database import MongoDB
from sessionauth.config import get_settings
from sessionauth.database.collections import (
    SESSIONS_COLLECTION,
    VERIFICATION_CODES_COLLECTION,
)

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


class ExpiredRecordCleanupJob:
    """
    Removes expired sessions and verification codes.

    Actions performed:
    1. Deletes sessions with expiresAt <= now
    2. Deletes verification codes with expiresAt <= now
    """

    def __init__(self, db: AsyncIOMotorDatabase):
        """
        Initialize the cleanup job.

        Args:
            db: MongoDB database holding the auth collections
        """
        self._sessions = db[SESSIONS_COLLECTION]
        self._codes = db[VERIFICATION_CODES_COLLECTION]

    async def run(self) -> Dict[str, Any]:
        """
        Execute the cleanup job.

        Returns:
            Dict with job results including counts and any errors
        """
        logger.info("Starting expired record cleanup job")
        start_time = datetime.now(timezone.utc)

        results = {
            "startTime": start_time.isoformat(),
            "sessionsDeleted": 0,
            "verificationCodesDeleted": 0,
            "errors": [],
        }

        expired = {"expiresAt": {"$lte": start_time}}

        try:
            sessions_result = await self._sessions.delete_many(expired)
            results["sessionsDeleted"] = sessions_result.deleted_count
        except Exception as e:
            error_msg = f"Failed to delete expired sessions: {str(e)}"
            logger.error(error_msg)
            results["errors"].append(error_msg)

        try:
            codes_result = await self._codes.delete_many(expired)
            results["verificationCodesDeleted"] = codes_result.deleted_count
        except Exception as e:
            error_msg = f"Failed to delete expired verification codes: {str(e)}"
            logger.error(error_msg)
            results["errors"].append(error_msg)

        results["endTime"] = datetime.now(timezone.utc).isoformat()
        results["durationSeconds"] = (
            datetime.now(timezone.utc) - start_time
        ).total_seconds()

        logger.info(
            f"Expired record cleanup completed. "
            f"Sessions: {results['sessionsDeleted']}, "
            f"Codes: {results['verificationCodesDeleted']}, "
            f"Errors: {len(results['errors'])}"
        )

        return results


async def main():
    """Main entry point for the cleanup job."""
    settings = get_settings()
    database = MongoDB()
    await database.connect(
        uri=settings.MONGODB_URI,
        database_name=settings.MONGODB_DATABASE,
    )

    try:
        results = await ExpiredRecordCleanupJob(database.db).run()

        print("\n=== Expired Record Cleanup Results ===")
        print(f"Start Time: {results['startTime']}")
        print(f"End Time: {results['endTime']}")
        print(f"Duration: {results['durationSeconds']:.2f} seconds")
        print(f"Sessions Deleted: {results['sessionsDeleted']}")
        print(f"Verification Codes Deleted: {results['verificationCodesDeleted']}")

        if results["errors"]:
            print(f"\nErrors ({len(results['errors'])}):")
            for error in results["errors"]:
                print(f"  - {error}")

        exit_code = 1 if results["errors"] else 0
        sys.exit(exit_code)

    finally:
        await database.disconnect()


if __name__ == "__main__":
    asyncio.run(main())
