"""Photo moderation endpoints."""

from __future__ import annotations

from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Body, Depends, HTTPException, Query, status
from fastapi.concurrency import run_in_threadpool
from sqlalchemy.orm import Session

from ...core.database import get_db
from ...realtime import PHOTO_APPROVED, PHOTO_REJECTED, Broadcaster
from ...schemas import PhotoCreate, PhotoRead, PhotoReject
from ...services import leaderboard_service, photo_service
from ...services.points_service import PointsRuleViolation
from ...utils.datetime import utcnow
from ..deps import get_broadcaster

router = APIRouter(prefix="/photos", tags=["photos"])


@router.post("", response_model=PhotoRead, status_code=status.HTTP_201_CREATED, summary="Register a team photo")
def submit_photo(payload: PhotoCreate, db: Session = Depends(get_db)) -> PhotoRead:
    """Register a photo that has already been uploaded to object storage."""

    try:
        photo = photo_service.submit_photo(db, team_id=payload.team_id, url=payload.url, file_name=payload.file_name)
        db.commit()
        db.refresh(photo)
        return PhotoRead.model_validate(photo)
    except PointsRuleViolation as exc:
        db.rollback()
        raise HTTPException(status_code=exc.status_code, detail=exc.detail) from exc


@router.get("", response_model=List[PhotoRead], summary="List photos")
def list_photos(
    *,
    approved: Optional[bool] = Query(None, description="Only pending (false) or approved (true) photos"),
    team_id: Optional[UUID] = Query(None, alias="teamId", description="Filter by team UUID"),
    limit: int = Query(50, ge=1, le=100),
    offset: int = Query(0, ge=0),
    db: Session = Depends(get_db),
) -> List[PhotoRead]:
    photos = photo_service.list_photos(db, approved=approved, team_id=team_id, limit=limit, offset=offset)
    return [PhotoRead.model_validate(photo) for photo in photos]


def _approve(db: Session, photo_id: UUID) -> tuple[PhotoRead, str]:
    try:
        photo = photo_service.approve_photo(db, photo_id)
        team_name = photo.team.name
        db.commit()
        db.refresh(photo)
        return PhotoRead.model_validate(photo), team_name
    except PointsRuleViolation as exc:
        db.rollback()
        raise HTTPException(status_code=exc.status_code, detail=exc.detail) from exc


def _reject(db: Session, photo_id: UUID) -> tuple[PhotoRead, bool]:
    try:
        photo = photo_service.reject_photo(db, photo_id)
        was_approved = photo.approved
        response = PhotoRead.model_validate(photo)
        db.commit()
        return response, was_approved
    except PointsRuleViolation as exc:
        db.rollback()
        raise HTTPException(status_code=exc.status_code, detail=exc.detail) from exc


@router.post(
    "/{photo_id}/approve",
    response_model=PhotoRead,
    summary="Approve a photo",
    responses={400: {"description": "Photo already approved"}, 404: {"description": "Photo not found"}},
)
async def approve_photo(
    photo_id: UUID,
    db: Session = Depends(get_db),
    broadcaster: Broadcaster = Depends(get_broadcaster),
) -> PhotoRead:
    response, team_name = await run_in_threadpool(_approve, db, photo_id)
    await leaderboard_service.recompute_and_broadcast(db, broadcaster)
    await leaderboard_service.notify_team(
        broadcaster,
        response.team_id,
        PHOTO_APPROVED,
        {
            "photoId": str(response.photo_id),
            "teamId": str(response.team_id),
            "teamName": team_name,
            "timestamp": utcnow().isoformat(),
        },
    )
    return response


@router.post(
    "/{photo_id}/reject",
    response_model=PhotoRead,
    summary="Reject and remove a photo",
    responses={404: {"description": "Photo not found"}},
)
async def reject_photo(
    photo_id: UUID,
    payload: Optional[PhotoReject] = Body(None),
    db: Session = Depends(get_db),
    broadcaster: Broadcaster = Depends(get_broadcaster),
) -> PhotoRead:
    response, was_approved = await run_in_threadpool(_reject, db, photo_id)
    if was_approved:
        await leaderboard_service.recompute_and_broadcast(db, broadcaster)
    await leaderboard_service.notify_team(
        broadcaster,
        response.team_id,
        PHOTO_REJECTED,
        {
            "photoId": str(response.photo_id),
            "reason": payload.reason if payload else None,
            "timestamp": utcnow().isoformat(),
        },
    )
    return response
