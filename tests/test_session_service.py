"""Unit tests for SessionService."""

import pytest
from datetime import timedelta
from unittest.mock import AsyncMock, MagicMock
from bson import ObjectId

from sessionauth.services.auth.session_service import SessionService


@pytest.fixture
def service(mock_db):
    return SessionService(mock_db)


# ─────────────────────────────────────────────────────────────────
# create_session
# ─────────────────────────────────────────────────────────────────


class TestCreateSession:
    @pytest.mark.asyncio
    async def test_thirty_day_lifetime(self, service, mock_collection, sample_user_id, fixed_now):
        inserted_id = ObjectId()
        mock_collection.insert_one.return_value = MagicMock(inserted_id=inserted_id)

        session = await service.create_session(sample_user_id, "Mozilla/5.0", now=fixed_now)

        stored = mock_collection.insert_one.call_args[0][0]
        assert stored["userId"] == ObjectId(sample_user_id)
        assert stored["userAgent"] == "Mozilla/5.0"
        assert stored["createdAt"] == fixed_now
        assert stored["expiresAt"] == fixed_now + timedelta(days=30)
        assert session["_id"] == inserted_id

    @pytest.mark.asyncio
    async def test_custom_lifetime(self, mock_db, mock_collection, sample_user_id, fixed_now):
        mock_collection.insert_one.return_value = MagicMock(inserted_id=ObjectId())

        session = await SessionService(mock_db, expiration_days=7).create_session(
            sample_user_id, now=fixed_now
        )

        assert session["expiresAt"] == fixed_now + timedelta(days=7)
        assert session["userAgent"] is None


# ─────────────────────────────────────────────────────────────────
# lookup and listing
# ─────────────────────────────────────────────────────────────────


class TestLookup:
    @pytest.mark.asyncio
    async def test_get_session_malformed_id(self, service, mock_collection):
        assert await service.get_session("garbage") is None
        mock_collection.find_one.assert_not_called()

    @pytest.mark.asyncio
    async def test_get_session(self, service, mock_collection, sample_session_doc):
        mock_collection.find_one.return_value = sample_session_doc

        session = await service.get_session(str(sample_session_doc["_id"]))

        assert session is sample_session_doc

    @pytest.mark.asyncio
    async def test_get_user_sessions_filters_expired_newest_first(
        self, service, mock_collection, sample_user_id, sample_session_doc, fixed_now
    ):
        cursor = MagicMock()
        cursor.to_list = AsyncMock(return_value=[sample_session_doc])
        mock_collection.find.return_value.sort.return_value = cursor

        sessions = await service.get_user_sessions(sample_user_id, now=fixed_now)

        query = mock_collection.find.call_args[0][0]
        assert query == {"userId": ObjectId(sample_user_id), "expiresAt": {"$gt": fixed_now}}
        mock_collection.find.return_value.sort.assert_called_once_with("createdAt", -1)
        assert sessions == [sample_session_doc]


# ─────────────────────────────────────────────────────────────────
# mutation
# ─────────────────────────────────────────────────────────────────


class TestMutation:
    @pytest.mark.asyncio
    async def test_extend_session(self, service, mock_collection, sample_session_doc, fixed_now):
        new_expiry = fixed_now + timedelta(days=30)

        await service.extend_session(sample_session_doc["_id"], new_expiry)

        mock_collection.update_one.assert_called_once_with(
            {"_id": sample_session_doc["_id"]},
            {"$set": {"expiresAt": new_expiry}},
        )

    @pytest.mark.asyncio
    async def test_delete_session(self, service, mock_collection):
        mock_collection.delete_one.return_value = MagicMock(deleted_count=1)

        assert await service.delete_session(str(ObjectId())) is True

    @pytest.mark.asyncio
    async def test_delete_absent_session(self, service, mock_collection):
        mock_collection.delete_one.return_value = MagicMock(deleted_count=0)

        assert await service.delete_session(str(ObjectId())) is False

    @pytest.mark.asyncio
    async def test_delete_malformed_id(self, service, mock_collection):
        assert await service.delete_session("garbage") is False
        mock_collection.delete_one.assert_not_called()

    @pytest.mark.asyncio
    async def test_revoke_user_session_scoped_to_owner(self, service, mock_collection, sample_user_id):
        session_id = ObjectId()
        mock_collection.delete_one.return_value = MagicMock(deleted_count=0)

        assert await service.revoke_user_session(sample_user_id, str(session_id)) is False
        mock_collection.delete_one.assert_called_once_with(
            {"_id": session_id, "userId": ObjectId(sample_user_id)}
        )

    @pytest.mark.asyncio
    async def test_revoke_all_sessions(self, service, mock_collection, sample_user_id):
        mock_collection.delete_many.return_value = MagicMock(deleted_count=3)

        assert await service.revoke_all_sessions(sample_user_id) == 3
        mock_collection.delete_many.assert_called_once_with({"userId": ObjectId(sample_user_id)})
