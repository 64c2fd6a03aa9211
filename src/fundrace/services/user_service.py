"""User creation and team membership."""

from __future__ import annotations

import logging
from typing import Optional, Sequence
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from ..models import User, UserRole
from .points_service import PointsRuleViolation, ensure_team, ensure_user

logger = logging.getLogger(__name__)


def create_user(
    session: Session,
    *,
    name: str,
    email: str,
    role: UserRole = UserRole.STUDENT,
    team_id: Optional[UUID] = None,
) -> User:
    """Create a user, optionally placing them on a team straight away."""

    email = email.strip().lower()
    existing = session.execute(select(User.user_id).where(func.lower(User.email) == email)).first()
    if existing is not None:
        raise PointsRuleViolation("A user with this email already exists.", status_code=409)
    if team_id is not None:
        ensure_team(session, team_id)

    user = User(name=name.strip(), email=email, role=role, team_id=team_id)
    session.add(user)
    session.flush()
    session.refresh(user)
    return user


def assign_team(session: Session, *, user_id: UUID, team_id: Optional[UUID]) -> User:
    """Move a user onto ``team_id``, or off their team when it is ``None``.

    Points already earned stay with the team that was credited.
    """

    user = ensure_user(session, user_id)
    if team_id is not None:
        ensure_team(session, team_id)

    previous = user.team_id
    user.team_id = team_id
    session.flush()
    logger.info("user %s moved from team %s to team %s", user.user_id, previous, team_id)
    return user


def list_users(session: Session, *, team_id: Optional[UUID] = None, role: Optional[UserRole] = None) -> Sequence[User]:
    stmt = select(User).order_by(User.created_at.desc())
    if team_id:
        stmt = stmt.where(User.team_id == team_id)
    if role is not None:
        stmt = stmt.where(User.role == role)
    return session.execute(stmt).scalars().all()
