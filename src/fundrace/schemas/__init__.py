"""Public schema exports."""

from .activity import (
	ActivityCreate,
	ActivityRead,
	RequirementField,
	SubmissionCreate,
	SubmissionRead,
	SubmissionReview,
	validate_submission,
)
from .config import ConfigUpdate
from .donation import DonationCreate, DonationRead
from .leaderboard import LeaderboardEntry, LeaderboardSnapshotRead, Statistics, TeamStats
from .photo import PhotoCreate, PhotoRead, PhotoReject
from .sale import SaleCreate, SaleRead
from .staff import ManualPointsCreate, ManualPointsRead, TeamPointsReset
from .team import TeamAssignment, TeamCreate, TeamRead, TeamUpdate, UserCreate, UserRead

__all__ = [
	"ActivityCreate",
	"ActivityRead",
	"ConfigUpdate",
	"DonationCreate",
	"DonationRead",
	"LeaderboardEntry",
	"LeaderboardSnapshotRead",
	"ManualPointsCreate",
	"ManualPointsRead",
	"PhotoCreate",
	"PhotoRead",
	"PhotoReject",
	"RequirementField",
	"SaleCreate",
	"SaleRead",
	"Statistics",
	"SubmissionCreate",
	"SubmissionRead",
	"SubmissionReview",
	"TeamAssignment",
	"TeamCreate",
	"TeamPointsReset",
	"TeamRead",
	"TeamStats",
	"TeamUpdate",
	"UserCreate",
	"UserRead",
	"validate_submission",
]
