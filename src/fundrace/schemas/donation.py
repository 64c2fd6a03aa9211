"""Pydantic schemas for donation endpoints."""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import Field

from .common import CamelModel


class DonationCreate(CamelModel):
    """Request body for recording a donation."""

    team_id: UUID
    amount: float = Field(..., ge=0, description="Donated amount in ``currency``.")
    currency: str = Field("usd", min_length=3, max_length=3)
    user_id: Optional[UUID] = None


class DonationRead(CamelModel):
    """Donation response payload."""

    donation_id: UUID
    team_id: UUID
    user_id: Optional[UUID]
    amount: float
    currency: str
    created_at: datetime
