"""Leaderboard aggregation, ranking and broadcast services."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Iterable, List, Optional, Sequence
from uuid import UUID

from fastapi.concurrency import run_in_threadpool
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from ..core.config import ScoreSource, TieBreakPolicy, get_settings
from ..models import ActivitySubmission, Donation, LeaderboardSnapshot, Photo, PointsLedger, Sale, SubmissionStatus, Team, User
from ..realtime import LEADERBOARD_UPDATE, Broadcaster
from ..schemas import LeaderboardEntry, Statistics, TeamStats
from . import config_service

logger = logging.getLogger(__name__)

TIE_BREAK_POLICIES = ("stable", "created_at", "name", "shared")


def aggregate_teams(session: Session, *, score_source: ScoreSource = "cached") -> List[LeaderboardEntry]:
    """Return one unranked entry per team, ordered by team creation time.

    The breakdown in ``stats`` is informational. ``total_score`` is the
    cached team total, or the ledger sum when ``score_source`` is ``"ledger"``.
    Database errors propagate.
    """

    donations = (
        select(
            Donation.team_id.label("team_id"),
            func.coalesce(func.sum(Donation.amount), 0).label("total"),
            func.count(Donation.donation_id).label("count"),
        )
        .group_by(Donation.team_id)
        .subquery()
    )
    sales = (
        select(
            Sale.team_id.label("team_id"),
            func.coalesce(func.sum(Sale.quantity), 0).label("quantity"),
            func.count(Sale.sale_id).label("count"),
        )
        .group_by(Sale.team_id)
        .subquery()
    )
    photos = (
        select(Photo.team_id.label("team_id"), func.count(Photo.photo_id).label("count"))
        .where(Photo.approved.is_(True))
        .group_by(Photo.team_id)
        .subquery()
    )
    activities = (
        select(
            ActivitySubmission.team_id.label("team_id"),
            func.coalesce(func.sum(func.coalesce(ActivitySubmission.points_awarded, 0)), 0).label("points"),
        )
        .where(ActivitySubmission.status == SubmissionStatus.APPROVED)
        .group_by(ActivitySubmission.team_id)
        .subquery()
    )
    members = (
        select(User.team_id.label("team_id"), func.count(User.user_id).label("count"))
        .where(User.team_id.is_not(None))
        .group_by(User.team_id)
        .subquery()
    )
    ledger = (
        select(PointsLedger.team_id.label("team_id"), func.sum(PointsLedger.points_delta).label("points"))
        .group_by(PointsLedger.team_id)
        .subquery()
    )

    score = Team.total_points if score_source == "cached" else func.coalesce(ledger.c.points, 0)

    stmt = (
        select(
            Team.team_id,
            Team.name,
            Team.created_at,
            score.label("total_score"),
            func.coalesce(members.c.count, 0).label("member_count"),
            func.coalesce(donations.c.total, 0).label("total_donations"),
            func.coalesce(donations.c.count, 0).label("donation_count"),
            func.coalesce(sales.c.count, 0).label("shirt_sale_count"),
            func.coalesce(sales.c.quantity, 0).label("total_shirt_sales"),
            func.coalesce(photos.c.count, 0).label("approved_photos_count"),
            func.coalesce(activities.c.points, 0).label("activity_points"),
        )
        .outerjoin(donations, donations.c.team_id == Team.team_id)
        .outerjoin(sales, sales.c.team_id == Team.team_id)
        .outerjoin(photos, photos.c.team_id == Team.team_id)
        .outerjoin(activities, activities.c.team_id == Team.team_id)
        .outerjoin(members, members.c.team_id == Team.team_id)
        .outerjoin(ledger, ledger.c.team_id == Team.team_id)
        .order_by(Team.created_at.asc(), Team.team_id.asc())
    )

    entries: List[LeaderboardEntry] = []
    for row in session.execute(stmt).all():
        entries.append(
            LeaderboardEntry(
                id=row.team_id,
                name=row.name,
                total_score=int(row.total_score or 0),
                member_count=int(row.member_count),
                created_at=row.created_at,
                stats=TeamStats(
                    total_donations=float(row.total_donations),
                    donation_count=int(row.donation_count),
                    shirt_sale_count=int(row.shirt_sale_count),
                    total_shirt_sales=int(row.total_shirt_sales),
                    approved_photos_count=int(row.approved_photos_count),
                    activity_points=int(row.activity_points),
                ),
            )
        )
    return entries


def _sort_key(tie_break: TieBreakPolicy):
    if tie_break == "created_at":
        return lambda entry: (-entry.total_score, entry.created_at or datetime.max, str(entry.id))
    if tie_break == "name":
        return lambda entry: (-entry.total_score, entry.name.casefold(), str(entry.id))
    return lambda entry: -entry.total_score


def rank_entries(entries: Iterable[LeaderboardEntry], *, tie_break: TieBreakPolicy = "stable") -> List[LeaderboardEntry]:
    """Sort entries by score descending and assign 1-based ranks.

    ``stable`` keeps the incoming order among equal scores, ``created_at``
    and ``name`` order ties by that key, and ``shared`` gives tied teams the
    same rank with a gap after them. Every other policy yields ranks 1..n.
    """

    if tie_break not in TIE_BREAK_POLICIES:
        raise ValueError(f"unknown tie-break policy {tie_break!r}")

    ranked: List[LeaderboardEntry] = []
    for position, entry in enumerate(sorted(entries, key=_sort_key(tie_break)), start=1):
        rank = position
        if tie_break == "shared" and ranked and ranked[-1].total_score == entry.total_score:
            rank = ranked[-1].rank
        ranked.append(entry.model_copy(update={"rank": rank}))
    return ranked


def calculate_leaderboard(
    session: Session,
    *,
    tie_break: Optional[TieBreakPolicy] = None,
    score_source: Optional[ScoreSource] = None,
) -> List[LeaderboardEntry]:
    """Aggregate and rank every team using the configured policies unless overridden."""

    settings = get_settings()
    entries = aggregate_teams(session, score_source=score_source or settings.leaderboard_score_source)
    return rank_entries(entries, tie_break=tie_break or settings.leaderboard_tie_break)


def serialize_leaderboard(entries: Sequence[LeaderboardEntry]) -> List[dict[str, Any]]:
    return [entry.model_dump(mode="json", by_alias=True) for entry in entries]


def default_statistics() -> Statistics:
    return Statistics(
        team_count=0,
        total_raised=0,
        donation_goal=get_settings().donation_goal_default,
        progress_percentage=0,
    )


def build_statistics(team_count: int, total_raised: float, donation_goal: float) -> Statistics:
    if donation_goal > 0:
        progress = min(max(total_raised / donation_goal * 100, 0), 100)
    else:
        progress = 0
    return Statistics(
        team_count=team_count,
        total_raised=total_raised,
        donation_goal=donation_goal,
        progress_percentage=round(progress, 2),
    )


def get_statistics(session: Session) -> Statistics:
    """Return fundraising progress; a failed read yields the default statistics instead of an error."""

    try:
        team_count = session.execute(select(func.count(Team.team_id)).where(Team.is_active.is_(True))).scalar_one()
        total_raised = session.execute(select(func.coalesce(func.sum(Donation.amount), 0))).scalar_one()
        donation_goal = config_service.get_donation_goal(session)
    except Exception:
        logger.exception("statistics query failed; serving defaults")
        session.rollback()
        return default_statistics()

    return build_statistics(int(team_count), float(total_raised), float(donation_goal))


def _serialized_leaderboard(session: Session) -> List[dict[str, Any]]:
    return serialize_leaderboard(calculate_leaderboard(session))


async def recompute_and_broadcast(session: Session, broadcaster: Broadcaster) -> Optional[List[dict[str, Any]]]:
    """Recompute the full leaderboard and push it to the leaderboard room.

    Never raises: a failure is logged and ``None`` returned so the write that
    triggered it still succeeds.
    """

    try:
        payload = await run_in_threadpool(_serialized_leaderboard, session)
        await broadcaster.broadcast(LEADERBOARD_UPDATE, payload)
    except Exception:
        logger.exception("leaderboard update failed")
        return None

    logger.info("leaderboard update emitted for %d teams", len(payload))
    return payload


async def notify_team(broadcaster: Broadcaster, team_id: UUID, event: str, payload: dict[str, Any]) -> bool:
    """Send a team-scoped event; failures are logged, not raised."""

    try:
        await broadcaster.broadcast_to_team(team_id, event, payload)
    except Exception:
        logger.exception("failed to send %s to team %s", event, team_id)
        return False
    return True


def store_snapshot(session: Session, *, period: str = "daily") -> LeaderboardSnapshot:
    """Persist the current ranking so it can be served without recomputation."""

    snapshot = LeaderboardSnapshot(period=period, rankings=serialize_leaderboard(calculate_leaderboard(session)))
    session.add(snapshot)
    session.flush()
    session.refresh(snapshot)
    return snapshot


def latest_snapshot(session: Session, *, period: str = "daily") -> Optional[LeaderboardSnapshot]:
    stmt = (
        select(LeaderboardSnapshot)
        .where(LeaderboardSnapshot.period == period)
        .order_by(LeaderboardSnapshot.calculated_at.desc(), LeaderboardSnapshot.snapshot_id.desc())
        .limit(1)
    )
    return session.execute(stmt).scalar_one_or_none()
