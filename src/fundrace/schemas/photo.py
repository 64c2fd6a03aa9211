"""Pydantic schemas for photo endpoints."""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import Field

from .common import CamelModel


class PhotoCreate(CamelModel):
    """Metadata for a photo already stored in object storage."""

    team_id: UUID
    url: str = Field(..., min_length=1, max_length=2048)
    file_name: Optional[str] = None


class PhotoRead(CamelModel):
    """Photo response payload."""

    photo_id: UUID
    team_id: UUID
    url: str
    file_name: Optional[str]
    approved: bool
    uploaded_at: datetime
    approved_at: Optional[datetime]


class PhotoReject(CamelModel):
    """Optional reason shown to the team when a photo is rejected."""

    reason: Optional[str] = Field(None, max_length=280)
