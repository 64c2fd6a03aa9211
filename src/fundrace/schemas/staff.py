"""Pydantic schemas for staff point management."""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import Field

from .common import CamelModel


class ManualPointsCreate(CamelModel):
    """Request body for a manual points award."""

    team_id: UUID
    user_id: Optional[UUID] = None
    awarded_by_id: UUID
    points: int = Field(..., gt=0, le=10000)
    description: str = Field(..., min_length=1, max_length=280)


class ManualPointsRead(CamelModel):
    """Manual points award response payload."""

    award_id: UUID
    team_id: UUID
    user_id: Optional[UUID]
    awarded_by_id: Optional[UUID]
    points: int
    description: str
    created_at: datetime


class TeamPointsReset(CamelModel):
    """Result of zeroing a team's score."""

    team_id: UUID
    name: str
    points_removed: int
    total_points: int
