"""Leaderboard and statistics response schemas."""

from datetime import datetime
from typing import List
from uuid import UUID

from pydantic import Field

from .common import CamelModel


class TeamStats(CamelModel):
    """Contribution breakdown shown next to a team; never used for ranking."""

    total_donations: float = Field(0, ge=0)
    donation_count: int = Field(0, ge=0)
    shirt_sale_count: int = Field(0, ge=0)
    total_shirt_sales: int = Field(0, ge=0)
    approved_photos_count: int = Field(0, ge=0)
    activity_points: int = Field(0, ge=0)


class LeaderboardEntry(CamelModel):
    """Aggregated, unpersisted per-team ranking record."""

    id: UUID
    name: str
    total_score: int
    rank: int = 0
    member_count: int = Field(0, ge=0)
    stats: TeamStats = Field(default_factory=TeamStats)
    created_at: datetime | None = Field(None, exclude=True)


class Statistics(CamelModel):
    """Platform-wide fundraising progress."""

    team_count: int = 0
    total_raised: float = 0
    donation_goal: float = 50000
    progress_percentage: float = Field(0, ge=0, le=100)


class LeaderboardSnapshotRead(CamelModel):
    """Leaderboard served from the daily snapshot, or computed on demand when none exists."""

    leaderboard: List[LeaderboardEntry]
    last_updated: datetime
    next_update: datetime
    is_cached: bool
    period: str
