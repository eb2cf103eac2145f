"""
Pydantic models for Auth request/response validation.

Defines schemas for registration, login, refresh and password reset.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, EmailStr, model_validator


class LoginRequest(BaseModel):
    """Request body for user login."""
    email: EmailStr = Field(..., max_length=255)
    password: str = Field(..., min_length=6, max_length=255)


class RegisterRequest(LoginRequest):
    """Request body for user registration."""
    # Optional; checked against password only when sent
    confirmPassword: Optional[str] = Field(None, min_length=6, max_length=255)

    @model_validator(mode="after")
    def passwords_match(self) -> "RegisterRequest":
        if self.confirmPassword is not None and self.password != self.confirmPassword:
            raise ValueError("Passwords do not match")
        return self


class ForgotPasswordRequest(BaseModel):
    """Request body for requesting a password reset email."""
    email: EmailStr = Field(..., max_length=255)


class ResetPasswordRequest(BaseModel):
    """Request body for setting a new password with a reset code."""
    password: str = Field(..., min_length=6, max_length=255)
    verificationCode: str = Field(..., min_length=1, max_length=24)


class MessageResponse(BaseModel):
    """Plain acknowledgement."""
    message: str


class UserResponse(BaseModel):
    """Public user representation."""
    id: str
    email: EmailStr
    verified: bool
    createdAt: datetime
    updatedAt: datetime
