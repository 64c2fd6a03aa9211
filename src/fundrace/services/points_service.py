"""Team score bookkeeping.

Every score change is appended to ``PointsLedger`` and ``Team.total_points``
is then re-derived from the ledger sum while the team row is locked, all in
the caller's transaction. No code path increments the cached total directly.
"""

from __future__ import annotations

import logging
from typing import Optional
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from ..core.config import Settings, get_settings
from ..models import PointsEventType, PointsLedger, Team, User
from ..utils.datetime import utcnow

logger = logging.getLogger(__name__)


class PointsRuleViolation(Exception):
    """Raised when a score-affecting operation breaks a business rule."""

    def __init__(self, detail: str, status_code: int = 400) -> None:
        super().__init__(detail)
        self.detail = detail
        self.status_code = status_code


def ensure_team(session: Session, team_id: UUID, *, lock: bool = False) -> Team:
    stmt = select(Team).where(Team.team_id == team_id)
    if lock:
        stmt = stmt.with_for_update(nowait=False)
    team = session.execute(stmt).scalar_one_or_none()
    if team is None:
        raise PointsRuleViolation(f"Team {team_id} not found", status_code=404)
    return team


def ensure_user(session: Session, user_id: UUID) -> User:
    user = session.execute(select(User).where(User.user_id == user_id)).scalar_one_or_none()
    if user is None:
        raise PointsRuleViolation(f"User {user_id} not found", status_code=404)
    return user


def ledger_balance(session: Session, team_id: UUID) -> int:
    stmt = select(func.coalesce(func.sum(PointsLedger.points_delta), 0)).where(PointsLedger.team_id == team_id)
    return int(session.execute(stmt).scalar_one())


def points_awarded_for(session: Session, event_type: PointsEventType, source_id: UUID) -> int:
    """Sum of ledger deltas of ``event_type`` recorded for one source record."""

    stmt = select(func.coalesce(func.sum(PointsLedger.points_delta), 0)).where(
        PointsLedger.event_type == event_type,
        PointsLedger.source_id == source_id,
    )
    return int(session.execute(stmt).scalar_one())


def donation_points(amount: float, settings: Optional[Settings] = None) -> int:
    settings = settings or get_settings()
    return int(round(amount * settings.donation_multiplier))


def apply_points(
    session: Session,
    *,
    team_id: UUID,
    points_delta: int,
    event_type: PointsEventType,
    source_id: Optional[UUID] = None,
    reason: Optional[str] = None,
) -> Team:
    """Record a score change and refresh the team's cached total from the ledger."""

    team = ensure_team(session, team_id, lock=True)

    session.add(
        PointsLedger(
            team_id=team.team_id,
            event_type=event_type,
            points_delta=points_delta,
            source_id=source_id,
            reason=reason,
        )
    )
    session.flush()

    team.total_points = ledger_balance(session, team.team_id)
    team.updated_at = utcnow()
    session.flush()

    logger.info(
        "team %s %+d points (%s); total now %d",
        team.name,
        points_delta,
        reason or event_type.value,
        team.total_points,
    )
    return team
