"""
Document shapes and serializers for the auth collections.

Stored documents use camelCase keys. Services work with raw Motor dicts;
these helpers produce the public representations returned by the API.
"""

from enum import Enum
from typing import Optional

from bson import ObjectId
from bson.errors import InvalidId


class VerificationCodeType(str, Enum):
    """Purpose of a single-use verification code."""

    EMAIL_VERIFICATION = "email_verification"
    PASSWORD_RESET = "password_reset"


def to_object_id(value) -> Optional[ObjectId]:
    """Parse an id from a token or URL; None when it is not a valid ObjectId."""
    if isinstance(value, ObjectId):
        return value
    try:
        return ObjectId(str(value))
    except (InvalidId, TypeError):
        return None


def public_user(user: dict) -> dict:
    """User document without the password hash."""
    return {
        "id": str(user["_id"]),
        "email": user.get("email"),
        "verified": user.get("verified", False),
        "createdAt": user.get("createdAt"),
        "updatedAt": user.get("updatedAt"),
    }


def public_session(session: dict, current_session_id: Optional[str] = None) -> dict:
    """Session document as listed to its owner."""
    session_id = str(session["_id"])
    return {
        "id": session_id,
        "userAgent": session.get("userAgent"),
        "createdAt": session.get("createdAt"),
        "isCurrent": session_id == current_session_id,
    }
