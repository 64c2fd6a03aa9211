"""Team registration and administration."""

from __future__ import annotations

import logging
from typing import Optional, Sequence
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from ..models import Team
from ..utils.datetime import utcnow
from .points_service import PointsRuleViolation, ensure_team

logger = logging.getLogger(__name__)


def _ensure_name_available(session: Session, name: str, *, exclude: Optional[UUID] = None) -> None:
    stmt = select(Team.team_id).where(func.lower(Team.name) == name.lower())
    if exclude is not None:
        stmt = stmt.where(Team.team_id != exclude)
    if session.execute(stmt).first() is not None:
        raise PointsRuleViolation(f"A team named {name!r} already exists.", status_code=409)


def create_team(session: Session, *, name: str) -> Team:
    """Register a team with an empty score."""

    name = name.strip()
    if not name:
        raise PointsRuleViolation("Team name is required.")
    _ensure_name_available(session, name)

    team = Team(name=name)
    session.add(team)
    session.flush()
    session.refresh(team)
    logger.info("team %s registered", team.name)
    return team


def list_teams(session: Session, *, active_only: bool = False) -> Sequence[Team]:
    stmt = select(Team).order_by(Team.created_at.asc(), Team.team_id.asc())
    if active_only:
        stmt = stmt.where(Team.is_active.is_(True))
    return session.execute(stmt).scalars().all()


def update_team(
    session: Session,
    *,
    team_id: UUID,
    name: Optional[str] = None,
    is_active: Optional[bool] = None,
) -> Team:
    """Rename or (de)activate a team; its score is untouched."""

    team = ensure_team(session, team_id)
    if name is not None:
        name = name.strip()
        _ensure_name_available(session, name, exclude=team.team_id)
        team.name = name
    if is_active is not None:
        team.is_active = is_active
    team.updated_at = utcnow()
    session.flush()
    return team
