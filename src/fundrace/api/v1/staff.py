"""Staff point management endpoints."""

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.concurrency import run_in_threadpool
from sqlalchemy.orm import Session

from ...core.database import get_db
from ...realtime import POINTS_AWARDED, Broadcaster
from ...schemas import ManualPointsCreate, ManualPointsRead, TeamPointsReset
from ...services import leaderboard_service, staff_service
from ...services.points_service import PointsRuleViolation
from ..deps import get_broadcaster

router = APIRouter(prefix="/staff", tags=["staff"])


def _award(db: Session, payload: ManualPointsCreate) -> ManualPointsRead:
    try:
        award = staff_service.award_manual_points(
            db,
            team_id=payload.team_id,
            user_id=payload.user_id,
            awarded_by_id=payload.awarded_by_id,
            points=payload.points,
            description=payload.description,
        )
        db.commit()
        db.refresh(award)
        return ManualPointsRead.model_validate(award)
    except PointsRuleViolation as exc:
        db.rollback()
        raise HTTPException(status_code=exc.status_code, detail=exc.detail) from exc


def _reset(db: Session, team_id: UUID) -> TeamPointsReset:
    try:
        team, removed = staff_service.reset_team_points(db, team_id=team_id)
        response = TeamPointsReset(
            team_id=team.team_id,
            name=team.name,
            points_removed=removed,
            total_points=team.total_points,
        )
        db.commit()
        return response
    except PointsRuleViolation as exc:
        db.rollback()
        raise HTTPException(status_code=exc.status_code, detail=exc.detail) from exc


@router.post(
    "/points",
    response_model=ManualPointsRead,
    status_code=status.HTTP_201_CREATED,
    summary="Award points manually",
    responses={
        400: {"description": "Student is not on the team"},
        404: {"description": "Team or user not found"},
    },
)
async def award_points(
    payload: ManualPointsCreate,
    db: Session = Depends(get_db),
    broadcaster: Broadcaster = Depends(get_broadcaster),
) -> ManualPointsRead:
    response = await run_in_threadpool(_award, db, payload)
    await leaderboard_service.recompute_and_broadcast(db, broadcaster)
    await leaderboard_service.notify_team(
        broadcaster,
        response.team_id,
        POINTS_AWARDED,
        {"points": response.points, "description": response.description},
    )
    return response


@router.post(
    "/teams/{team_id}/reset-points",
    response_model=TeamPointsReset,
    summary="Reset a team's points",
    responses={404: {"description": "Team not found"}},
)
async def reset_team_points(
    team_id: UUID,
    db: Session = Depends(get_db),
    broadcaster: Broadcaster = Depends(get_broadcaster),
) -> TeamPointsReset:
    response = await run_in_threadpool(_reset, db, team_id)
    await leaderboard_service.recompute_and_broadcast(db, broadcaster)
    return response
