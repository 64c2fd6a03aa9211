"""Pydantic schemas for sale endpoints."""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import Field

from .common import CamelModel


class SaleCreate(CamelModel):
    """Request body for selling a product on behalf of a student's team."""

    product_id: UUID
    user_id: UUID
    seller_id: UUID
    quantity: int = Field(..., gt=0, le=100)
    payment_method: str = Field("cash", max_length=32)
    amount_paid: Optional[float] = Field(None, ge=0, description="Defaults to price times quantity.")


class SaleRead(CamelModel):
    """Sale response payload."""

    sale_id: UUID
    product_id: UUID
    team_id: UUID
    user_id: Optional[UUID]
    seller_id: Optional[UUID]
    quantity: int
    amount_paid: float
    payment_method: str
    points_awarded: int
    sold_at: datetime
