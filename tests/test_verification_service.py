"""Unit tests for VerificationCodeService."""

import pytest
from datetime import timedelta
from unittest.mock import MagicMock
from bson import ObjectId

from sessionauth.models import VerificationCodeType
from sessionauth.services.auth.verification_service import VerificationCodeService


@pytest.fixture
def service(mock_db):
    return VerificationCodeService(mock_db)


class TestCreateCode:
    @pytest.mark.asyncio
    async def test_stores_typed_code(self, service, mock_collection, sample_user_id, fixed_now):
        inserted_id = ObjectId()
        mock_collection.insert_one.return_value = MagicMock(inserted_id=inserted_id)
        expires_at = fixed_now + timedelta(hours=1)

        code = await service.create_code(
            sample_user_id, VerificationCodeType.PASSWORD_RESET, expires_at, now=fixed_now
        )

        stored = mock_collection.insert_one.call_args[0][0]
        assert stored == {
            "userId": ObjectId(sample_user_id),
            "type": "password_reset",
            "createdAt": fixed_now,
            "expiresAt": expires_at,
            "_id": inserted_id,
        }
        assert code["_id"] == inserted_id


class TestFindValidCode:
    @pytest.mark.asyncio
    async def test_query_requires_type_and_unexpired(self, service, mock_collection, fixed_now):
        code_id = ObjectId()
        mock_collection.find_one.return_value = {"_id": code_id}

        code = await service.find_valid_code(
            str(code_id), VerificationCodeType.EMAIL_VERIFICATION, now=fixed_now
        )

        mock_collection.find_one.assert_called_once_with({
            "_id": code_id,
            "type": "email_verification",
            "expiresAt": {"$gt": fixed_now},
        })
        assert code == {"_id": code_id}

    @pytest.mark.asyncio
    async def test_malformed_id_is_not_found(self, service, mock_collection):
        code = await service.find_valid_code("not-hex", VerificationCodeType.PASSWORD_RESET)

        assert code is None
        mock_collection.find_one.assert_not_called()


class TestCountAndDelete:
    @pytest.mark.asyncio
    async def test_count_recent_codes(self, service, mock_collection, sample_user_id, fixed_now):
        mock_collection.count_documents.return_value = 2
        since = fixed_now - timedelta(minutes=5)

        count = await service.count_recent_codes(
            sample_user_id, VerificationCodeType.PASSWORD_RESET, since
        )

        assert count == 2
        mock_collection.count_documents.assert_called_once_with({
            "userId": ObjectId(sample_user_id),
            "type": "password_reset",
            "createdAt": {"$gt": since},
        })

    @pytest.mark.asyncio
    async def test_delete_code(self, service, mock_collection):
        code_id = ObjectId()

        await service.delete_code(code_id)

        mock_collection.delete_one.assert_called_once_with({"_id": code_id})
