"""Donation endpoints."""

from __future__ import annotations

from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.concurrency import run_in_threadpool
from sqlalchemy.orm import Session

from ...core.database import get_db
from ...realtime import Broadcaster
from ...schemas import DonationCreate, DonationRead
from ...services import donation_service, leaderboard_service
from ...services.points_service import PointsRuleViolation
from ..deps import get_broadcaster

router = APIRouter(prefix="/donations", tags=["donations"])


def _record_donation(db: Session, payload: DonationCreate) -> DonationRead:
    try:
        donation = donation_service.create_donation(
            db,
            team_id=payload.team_id,
            amount=payload.amount,
            currency=payload.currency,
            user_id=payload.user_id,
        )
        db.commit()
        db.refresh(donation)
        return DonationRead.model_validate(donation)
    except PointsRuleViolation as exc:
        db.rollback()
        raise HTTPException(status_code=exc.status_code, detail=exc.detail) from exc


@router.post(
    "",
    response_model=DonationRead,
    status_code=status.HTTP_201_CREATED,
    summary="Record a donation",
    responses={
        201: {"description": "Donation recorded and team credited"},
        404: {"description": "Team or user not found"},
    },
)
async def create_donation(
    payload: DonationCreate,
    db: Session = Depends(get_db),
    broadcaster: Broadcaster = Depends(get_broadcaster),
) -> DonationRead:
    """Record a donation for a team.

    Example request body::

        {
            "teamId": "11111111-1111-1111-1111-111111111111",
            "amount": 25,
            "currency": "usd"
        }
    """

    response = await run_in_threadpool(_record_donation, db, payload)
    await leaderboard_service.recompute_and_broadcast(db, broadcaster)
    return response


@router.get("", response_model=List[DonationRead], summary="List donations")
def list_donations(
    *,
    team_id: Optional[UUID] = Query(None, alias="teamId", description="Filter by team UUID"),
    limit: int = Query(50, ge=1, le=100, description="Maximum items to return"),
    offset: int = Query(0, ge=0, description="Items to skip for pagination"),
    db: Session = Depends(get_db),
) -> List[DonationRead]:
    donations = donation_service.list_donations(db, team_id=team_id, limit=limit, offset=offset)
    return [DonationRead.model_validate(donation) for donation in donations]
