"""User administration endpoints."""

from __future__ import annotations

from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.concurrency import run_in_threadpool
from sqlalchemy.orm import Session

from ...core.database import get_db
from ...models import UserRole
from ...realtime import Broadcaster
from ...schemas import TeamAssignment, UserCreate, UserRead
from ...services import leaderboard_service, user_service
from ...services.points_service import PointsRuleViolation
from ..deps import get_broadcaster

router = APIRouter(prefix="/users", tags=["users"])


def _create(db: Session, payload: UserCreate) -> UserRead:
    try:
        user = user_service.create_user(
            db,
            name=payload.name,
            email=payload.email,
            role=payload.role,
            team_id=payload.team_id,
        )
        db.commit()
        db.refresh(user)
        return UserRead.model_validate(user)
    except PointsRuleViolation as exc:
        db.rollback()
        raise HTTPException(status_code=exc.status_code, detail=exc.detail) from exc


def _assign(db: Session, user_id: UUID, payload: TeamAssignment) -> UserRead:
    try:
        user = user_service.assign_team(db, user_id=user_id, team_id=payload.team_id)
        db.commit()
        db.refresh(user)
        return UserRead.model_validate(user)
    except PointsRuleViolation as exc:
        db.rollback()
        raise HTTPException(status_code=exc.status_code, detail=exc.detail) from exc


@router.post(
    "",
    response_model=UserRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create a user",
    responses={404: {"description": "Team not found"}, 409: {"description": "Email already registered"}},
)
async def create_user(
    payload: UserCreate,
    db: Session = Depends(get_db),
    broadcaster: Broadcaster = Depends(get_broadcaster),
) -> UserRead:
    """Create a user; joining a team straight away changes its member count on the leaderboard."""

    response = await run_in_threadpool(_create, db, payload)
    if response.team_id is not None:
        await leaderboard_service.recompute_and_broadcast(db, broadcaster)
    return response


@router.get("", response_model=List[UserRead], summary="List users")
def list_users(
    team_id: Optional[UUID] = Query(None, alias="teamId"),
    role: Optional[UserRole] = Query(None),
    db: Session = Depends(get_db),
) -> List[UserRead]:
    return [UserRead.model_validate(user) for user in user_service.list_users(db, team_id=team_id, role=role)]


@router.put(
    "/{user_id}/team",
    response_model=UserRead,
    summary="Move a user to another team",
    responses={404: {"description": "User or team not found"}},
)
async def assign_team(
    user_id: UUID,
    payload: TeamAssignment,
    db: Session = Depends(get_db),
    broadcaster: Broadcaster = Depends(get_broadcaster),
) -> UserRead:
    response = await run_in_threadpool(_assign, db, user_id, payload)
    await leaderboard_service.recompute_and_broadcast(db, broadcaster)
    return response
