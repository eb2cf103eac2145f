"""Shared test fixtures for SessionAuth backend tests."""

import pytest
from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock, MagicMock
from bson import ObjectId

from common.auth import TokenService


@pytest.fixture
def sample_user_id():
    return str(ObjectId())


@pytest.fixture
def fixed_now():
    # Wall time in whole seconds; tokens signed at it must still verify
    return datetime.now(timezone.utc).replace(microsecond=0)


@pytest.fixture
def token_service():
    return TokenService(
        access_secret="test-access-secret",
        refresh_secret="test-refresh-secret",
    )


@pytest.fixture
def mock_collection():
    collection = AsyncMock()
    # Motor's find() returns a cursor synchronously (not a coroutine),
    # so use MagicMock for it. Async methods like find_one, insert_one,
    # count_documents etc. stay as AsyncMock.
    collection.find = MagicMock()
    return collection


@pytest.fixture
def mock_db(mock_collection):
    db = MagicMock()
    db.__getitem__ = MagicMock(return_value=mock_collection)
    return db


@pytest.fixture
def sample_user_doc(sample_user_id, fixed_now):
    return {
        "_id": ObjectId(sample_user_id),
        "email": "a@b.com",
        "password": "$2b$04$notarealhashnotarealhashnotarealhashnotarealhashnot",
        "verified": False,
        "createdAt": fixed_now,
        "updatedAt": fixed_now,
    }


@pytest.fixture
def sample_session_doc(sample_user_id, fixed_now):
    return {
        "_id": ObjectId(),
        "userId": ObjectId(sample_user_id),
        "userAgent": "Mozilla/5.0",
        "createdAt": fixed_now,
        "expiresAt": fixed_now + timedelta(days=30),
    }
