"""
Pydantic models for session listing.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class SessionResponse(BaseModel):
    """Session information in API responses."""
    id: str = Field(..., description="Session ID")
    userAgent: Optional[str] = None
    createdAt: datetime
    isCurrent: bool = Field(default=False)
