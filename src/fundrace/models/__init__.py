"""SQLAlchemy models for Fundrace."""

from .activity import Activity, ActivitySubmission, SubmissionStatus
from .app_config import AppConfig
from .donation import Donation
from .leaderboard_snapshot import LeaderboardSnapshot
from .manual_points_award import ManualPointsAward
from .photo import Photo
from .points_ledger import PointsEventType, PointsLedger
from .product import Product
from .sale import Sale
from .team import Team
from .user import User, UserRole

__all__ = [
    "Activity",
    "ActivitySubmission",
    "AppConfig",
    "Donation",
    "LeaderboardSnapshot",
    "ManualPointsAward",
    "Photo",
    "PointsEventType",
    "PointsLedger",
    "Product",
    "Sale",
    "SubmissionStatus",
    "Team",
    "User",
    "UserRole",
]
