"""Domain logic for donations."""

from __future__ import annotations

from typing import Optional, Sequence
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.orm import Session

from ..models import Donation, PointsEventType
from . import points_service
from .points_service import ensure_team, ensure_user


def create_donation(
    session: Session,
    *,
    team_id: UUID,
    amount: float,
    currency: str = "usd",
    user_id: Optional[UUID] = None,
) -> Donation:
    """Record a donation and credit its points to the team."""

    team = ensure_team(session, team_id)
    if user_id is not None:
        ensure_user(session, user_id)

    donation = Donation(team_id=team.team_id, user_id=user_id, amount=amount, currency=currency.lower())
    session.add(donation)
    session.flush()

    points_service.apply_points(
        session,
        team_id=team.team_id,
        points_delta=points_service.donation_points(amount),
        event_type=PointsEventType.DONATION,
        source_id=donation.donation_id,
        reason=f"Donation: {amount:.2f} {donation.currency}",
    )

    session.refresh(donation)
    return donation


def list_donations(
    session: Session,
    *,
    team_id: Optional[UUID] = None,
    limit: int = 50,
    offset: int = 0,
) -> Sequence[Donation]:
    """Return donations, newest first."""

    stmt = select(Donation).order_by(Donation.created_at.desc()).offset(offset).limit(limit)
    if team_id:
        stmt = stmt.where(Donation.team_id == team_id)
    return session.execute(stmt).scalars().all()
