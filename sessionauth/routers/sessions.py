"""
FastAPI router for session management.

Lets a user see where they are logged in and end individual sessions.
"""

from typing import Annotated, List

from fastapi import APIRouter, Depends

from sessionauth.dependencies import get_auth_service, require_auth
from sessionauth.schemas.auth import MessageResponse
from sessionauth.schemas.session import SessionResponse
from sessionauth.services.auth.auth_service import AuthService

router = APIRouter(prefix="/sessions", tags=["sessions"])


@router.get("", response_model=List[SessionResponse])
async def list_sessions(
    auth: Annotated[dict, Depends(require_auth)],
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
):
    """List active sessions, newest first."""
    return await auth_service.list_sessions(auth["userId"], auth["sessionId"])


@router.delete("/{session_id}", response_model=MessageResponse)
async def revoke_session(
    session_id: str,
    auth: Annotated[dict, Depends(require_auth)],
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
):
    """End one of the caller's sessions."""
    await auth_service.revoke_session(auth["userId"], session_id)
    return {"message": "Session removed"}
