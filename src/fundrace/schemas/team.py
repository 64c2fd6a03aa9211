"""Pydantic schemas for team and user administration."""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import Field

from ..models.user import UserRole
from .common import CamelModel


class TeamCreate(CamelModel):
    """Request body for registering a team."""

    name: str = Field(..., min_length=1, max_length=80)


class TeamUpdate(CamelModel):
    """Partial team update; omitted fields are left unchanged."""

    name: Optional[str] = Field(None, min_length=1, max_length=80)
    is_active: Optional[bool] = None


class TeamRead(CamelModel):
    """Team response payload."""

    team_id: UUID
    name: str
    is_active: bool
    total_points: int
    created_at: datetime


class UserCreate(CamelModel):
    """Request body for creating a user, optionally already on a team."""

    name: str = Field(..., min_length=1, max_length=120)
    email: str = Field(..., max_length=254, pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
    role: UserRole = UserRole.STUDENT
    team_id: Optional[UUID] = None


class TeamAssignment(CamelModel):
    """Move a user to a team, or off every team when ``teamId`` is null."""

    team_id: Optional[UUID] = None


class UserRead(CamelModel):
    """User response payload."""

    user_id: UUID
    name: str
    email: str
    role: UserRole
    team_id: Optional[UUID]
    created_at: datetime
