"""Team administration endpoints."""

from __future__ import annotations

from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.concurrency import run_in_threadpool
from sqlalchemy.orm import Session

from ...core.database import get_db
from ...realtime import Broadcaster
from ...schemas import TeamCreate, TeamRead, TeamUpdate
from ...services import leaderboard_service, team_service
from ...services.points_service import PointsRuleViolation
from ..deps import get_broadcaster

router = APIRouter(prefix="/teams", tags=["teams"])


def _create(db: Session, payload: TeamCreate) -> TeamRead:
    try:
        team = team_service.create_team(db, name=payload.name)
        db.commit()
        db.refresh(team)
        return TeamRead.model_validate(team)
    except PointsRuleViolation as exc:
        db.rollback()
        raise HTTPException(status_code=exc.status_code, detail=exc.detail) from exc


def _update(db: Session, team_id: UUID, payload: TeamUpdate) -> TeamRead:
    try:
        team = team_service.update_team(db, team_id=team_id, name=payload.name, is_active=payload.is_active)
        db.commit()
        db.refresh(team)
        return TeamRead.model_validate(team)
    except PointsRuleViolation as exc:
        db.rollback()
        raise HTTPException(status_code=exc.status_code, detail=exc.detail) from exc


@router.post(
    "",
    response_model=TeamRead,
    status_code=status.HTTP_201_CREATED,
    summary="Register a team",
    responses={409: {"description": "Team name already taken"}},
)
async def create_team(
    payload: TeamCreate,
    db: Session = Depends(get_db),
    broadcaster: Broadcaster = Depends(get_broadcaster),
) -> TeamRead:
    response = await run_in_threadpool(_create, db, payload)
    await leaderboard_service.recompute_and_broadcast(db, broadcaster)
    return response


@router.get("", response_model=List[TeamRead], summary="List teams")
def list_teams(
    active_only: bool = Query(False, alias="activeOnly"),
    db: Session = Depends(get_db),
) -> List[TeamRead]:
    return [TeamRead.model_validate(team) for team in team_service.list_teams(db, active_only=active_only)]


@router.patch(
    "/{team_id}",
    response_model=TeamRead,
    summary="Rename or deactivate a team",
    responses={404: {"description": "Team not found"}, 409: {"description": "Team name already taken"}},
)
async def update_team(
    team_id: UUID,
    payload: TeamUpdate,
    db: Session = Depends(get_db),
    broadcaster: Broadcaster = Depends(get_broadcaster),
) -> TeamRead:
    response = await run_in_threadpool(_update, db, team_id, payload)
    await leaderboard_service.recompute_and_broadcast(db, broadcaster)
    return response
