"""
SessionAuth API Routers.

All routers are imported here for easy access.
"""

from sessionauth.routers.auth import router as auth_router
from sessionauth.routers.user import router as user_router
from sessionauth.routers.sessions import router as sessions_router

__all__ = [
    "auth_router",
    "user_router",
    "sessions_router",
]
