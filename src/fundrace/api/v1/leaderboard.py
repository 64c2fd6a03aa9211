"""Leaderboard and statistics endpoints."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ...core.config import get_settings
from ...core.database import get_db
from ...schemas import LeaderboardEntry, LeaderboardSnapshotRead, Statistics
from ...services import leaderboard_service
from ...utils.datetime import next_run_at

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/leaderboard", tags=["leaderboard"])


@router.get(
    "",
    response_model=List[LeaderboardEntry],
    summary="Ranked teams",
    responses={
        200: {
            "description": "Teams ordered by total score",
            "content": {
                "application/json": {
                    "example": [
                        {
                            "id": "11111111-1111-1111-1111-111111111111",
                            "name": "Blue Comets",
                            "totalScore": 1250,
                            "rank": 1,
                            "memberCount": 8,
                            "stats": {
                                "totalDonations": 900.0,
                                "donationCount": 12,
                                "shirtSaleCount": 5,
                                "totalShirtSales": 15,
                                "approvedPhotosCount": 2,
                                "activityPoints": 100
                            }
                        }
                    ]
                }
            },
        },
        500: {"description": "Leaderboard could not be computed"},
    },
)
def get_leaderboard(db: Session = Depends(get_db)) -> List[LeaderboardEntry]:
    """Recompute and return the full leaderboard."""

    try:
        return leaderboard_service.calculate_leaderboard(db)
    except SQLAlchemyError as exc:
        logger.exception("error fetching leaderboard")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch leaderboard data",
        ) from exc


@router.get("/statistics", response_model=Statistics, summary="Fundraising progress")
def get_statistics(db: Session = Depends(get_db)) -> Statistics:
    """Return totals raised against the donation goal; never fails."""

    return leaderboard_service.get_statistics(db)


@router.get("/snapshot", response_model=LeaderboardSnapshotRead, summary="Daily leaderboard snapshot")
def get_snapshot(db: Session = Depends(get_db)) -> LeaderboardSnapshotRead:
    """Serve the latest daily snapshot, falling back to a live calculation before the first one exists."""

    next_update = next_run_at(get_settings().leaderboard_snapshot_hour)
    snapshot = leaderboard_service.latest_snapshot(db)
    if snapshot is not None:
        return LeaderboardSnapshotRead(
            leaderboard=snapshot.rankings,
            last_updated=snapshot.calculated_at,
            next_update=next_update,
            is_cached=True,
            period=snapshot.period,
        )

    return LeaderboardSnapshotRead(
        leaderboard=leaderboard_service.calculate_leaderboard(db),
        last_updated=datetime.now(timezone.utc),
        next_update=next_update,
        is_cached=False,
        period="on-demand",
    )
