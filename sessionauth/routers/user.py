"""
FastAPI router for the current user.
"""

from typing import Annotated

from fastapi import APIRouter, Depends

from sessionauth.dependencies import get_auth_service, require_auth
from sessionauth.schemas.auth import UserResponse
from sessionauth.services.auth.auth_service import AuthService

router = APIRouter(prefix="/user", tags=["user"])


@router.get("", response_model=UserResponse)
async def get_current_user(
    auth: Annotated[dict, Depends(require_auth)],
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
):
    """Get the authenticated user's public profile."""
    return await auth_service.get_user(auth["userId"])
