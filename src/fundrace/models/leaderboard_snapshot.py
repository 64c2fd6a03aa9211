"""Persisted leaderboard snapshot model."""

from sqlalchemy import Column, DateTime, Index, Integer, JSON, String

from ..core.database import Base
from ..utils.datetime import utcnow


class LeaderboardSnapshot(Base):
    """Ranked leaderboard frozen at a point in time by the scheduled job."""

    __tablename__ = "leaderboard_snapshots"
    __table_args__ = (Index("leaderboard_snapshots_period_calculated", "period", "calculated_at"),)

    snapshot_id = Column(Integer, primary_key=True, autoincrement=True)
    period = Column(String, nullable=False, default="daily")
    rankings = Column(JSON, nullable=False)
    calculated_at = Column(DateTime, default=utcnow, nullable=False)
