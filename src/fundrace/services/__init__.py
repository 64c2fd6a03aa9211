"""Service layer exports."""

from . import (
	activity_service,
	config_service,
	donation_service,
	leaderboard_service,
	photo_service,
	points_service,
	sale_service,
	staff_service,
	team_service,
	user_service,
)

__all__ = [
	"activity_service",
	"config_service",
	"donation_service",
	"leaderboard_service",
	"photo_service",
	"points_service",
	"sale_service",
	"staff_service",
	"team_service",
	"user_service",
]
