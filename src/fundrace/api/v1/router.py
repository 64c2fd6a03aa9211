"""Primary API router definition."""

from fastapi import APIRouter

from . import activities, config, donations, leaderboard, photos, sales, staff, teams, users

api_router = APIRouter()

api_router.include_router(leaderboard.router)
api_router.include_router(teams.router)
api_router.include_router(users.router)
api_router.include_router(donations.router)
api_router.include_router(sales.router)
api_router.include_router(photos.router)
api_router.include_router(activities.router)
api_router.include_router(staff.router)
api_router.include_router(config.router)


@api_router.get("/health", tags=["health"])
async def healthcheck() -> dict[str, str]:
    """Basic health probe endpoint."""
    return {"status": "ok"}
