"""
SessionAuth Middleware.

All middleware components are imported here.
"""

from sessionauth.middleware.auth import AuthMiddleware, INVALID_ACCESS_TOKEN

__all__ = [
    "AuthMiddleware",
    "INVALID_ACCESS_TOKEN",
]
