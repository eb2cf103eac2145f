"""
SessionAuth Schemas.

Pydantic models for request/response validation.
"""

from sessionauth.schemas.auth import (
    LoginRequest,
    RegisterRequest,
    ForgotPasswordRequest,
    ResetPasswordRequest,
    MessageResponse,
    UserResponse,
)
from sessionauth.schemas.session import SessionResponse

__all__ = [
    "LoginRequest",
    "RegisterRequest",
    "ForgotPasswordRequest",
    "ResetPasswordRequest",
    "MessageResponse",
    "UserResponse",
    "SessionResponse",
]
