"""Domain logic for team photo moderation."""

from __future__ import annotations

from typing import Optional, Sequence
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.orm import Session, joinedload

from ..core.config import get_settings
from ..models import Photo, PointsEventType
from ..utils.datetime import utcnow
from . import points_service
from .points_service import PointsRuleViolation, ensure_team


def _ensure_photo(session: Session, photo_id: UUID, *, lock: bool = False) -> Photo:
    stmt = select(Photo).options(joinedload(Photo.team)).where(Photo.photo_id == photo_id)
    if lock:
        stmt = stmt.with_for_update(of=Photo, nowait=False).execution_options(populate_existing=True)
    photo = session.execute(stmt).scalar_one_or_none()
    if photo is None:
        raise PointsRuleViolation("Photo not found", status_code=404)
    return photo


def submit_photo(session: Session, *, team_id: UUID, url: str, file_name: Optional[str] = None) -> Photo:
    """Register an uploaded photo as pending review."""

    team = ensure_team(session, team_id)
    photo = Photo(team_id=team.team_id, url=url, file_name=file_name, approved=False)
    session.add(photo)
    session.flush()
    session.refresh(photo)
    return photo


def list_photos(
    session: Session,
    *,
    approved: Optional[bool] = None,
    team_id: Optional[UUID] = None,
    limit: int = 50,
    offset: int = 0,
) -> Sequence[Photo]:
    stmt = select(Photo).order_by(Photo.uploaded_at.desc()).offset(offset).limit(limit)
    if approved is not None:
        stmt = stmt.where(Photo.approved.is_(approved))
    if team_id:
        stmt = stmt.where(Photo.team_id == team_id)
    return session.execute(stmt).scalars().all()


def approve_photo(session: Session, photo_id: UUID) -> Photo:
    """Approve a pending photo and credit the team."""

    photo = _ensure_photo(session, photo_id, lock=True)
    if photo.approved:
        raise PointsRuleViolation("Photo already approved")

    photo.approved = True
    photo.approved_at = utcnow()
    session.flush()

    points_service.apply_points(
        session,
        team_id=photo.team_id,
        points_delta=get_settings().photo_points,
        event_type=PointsEventType.PHOTO_APPROVED,
        source_id=photo.photo_id,
        reason="Photo approved",
    )
    session.refresh(photo)
    return photo


def reject_photo(session: Session, photo_id: UUID) -> Photo:
    """Remove a photo; if it had been approved its points are taken back."""

    photo = _ensure_photo(session, photo_id, lock=True)

    if photo.approved:
        awarded = points_service.points_awarded_for(session, PointsEventType.PHOTO_APPROVED, photo.photo_id)
        if awarded:
            points_service.apply_points(
                session,
                team_id=photo.team_id,
                points_delta=-awarded,
                event_type=PointsEventType.PHOTO_REVOKED,
                source_id=photo.photo_id,
                reason="Approved photo removed",
            )

    session.delete(photo)
    session.flush()
    return photo
