"""
Common library for reusable infrastructure components.

This package provides generic modules that are independent of the
session/auth application logic:

- database: Async MongoDB connection with Motor
- auth: JWT token service and bcrypt password hashing
- utils: Standard responses and typed HTTP exceptions
- config: Base settings class
"""

from common.database import MongoDB
from common.auth import TokenService, TokenKind, ValidToken, InvalidToken
from common.utils import (
    success_response,
    error_response,
    APIException,
    BadRequestException,
    UnauthorizedException,
    NotFoundException,
    ConflictException,
    RateLimitException,
    InternalServerException,
)
from common.config import BaseAppSettings

__all__ = [
    # Database
    "MongoDB",
    # Auth
    "TokenService",
    "TokenKind",
    "ValidToken",
    "InvalidToken",
    # Utils
    "success_response",
    "error_response",
    "APIException",
    "BadRequestException",
    "UnauthorizedException",
    "NotFoundException",
    "ConflictException",
    "RateLimitException",
    "InternalServerException",
    # Config
    "BaseAppSettings",
]
