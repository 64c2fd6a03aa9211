"""Staff-driven score management."""

from __future__ import annotations

from typing import Optional
from uuid import UUID

from sqlalchemy import delete
from sqlalchemy.orm import Session

from ..models import ManualPointsAward, PointsEventType, Team
from . import points_service
from .points_service import PointsRuleViolation, ensure_team, ensure_user


def award_manual_points(
    session: Session,
    *,
    team_id: UUID,
    awarded_by_id: UUID,
    points: int,
    description: str,
    user_id: Optional[UUID] = None,
) -> ManualPointsAward:
    """Grant points for something done outside the app."""

    if points <= 0:
        raise PointsRuleViolation("Points must be greater than 0")

    team = ensure_team(session, team_id)
    ensure_user(session, awarded_by_id)
    if user_id is not None:
        student = ensure_user(session, user_id)
        if student.team_id != team.team_id:
            raise PointsRuleViolation("Student is not a member of this team.")

    award = ManualPointsAward(
        team_id=team.team_id,
        user_id=user_id,
        awarded_by_id=awarded_by_id,
        points=points,
        description=description,
    )
    session.add(award)
    session.flush()

    points_service.apply_points(
        session,
        team_id=team.team_id,
        points_delta=points,
        event_type=PointsEventType.MANUAL_AWARD,
        source_id=award.award_id,
        reason=description,
    )
    session.refresh(award)
    return award


def reset_team_points(session: Session, *, team_id: UUID) -> tuple[Team, int]:
    """Zero a team's score and drop its manual awards; returns the team and the points removed."""

    team = ensure_team(session, team_id, lock=True)

    session.execute(delete(ManualPointsAward).where(ManualPointsAward.team_id == team.team_id))
    balance = points_service.ledger_balance(session, team.team_id)

    team = points_service.apply_points(
        session,
        team_id=team.team_id,
        points_delta=-balance,
        event_type=PointsEventType.POINTS_RESET,
        reason="Points reset",
    )
    return team, balance
