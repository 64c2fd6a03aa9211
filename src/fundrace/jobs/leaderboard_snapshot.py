"""Background scheduler for the daily leaderboard snapshot."""

from __future__ import annotations

import logging
from typing import Callable, Optional, Tuple

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from fastapi import FastAPI
from fastapi.concurrency import run_in_threadpool
from sqlalchemy.orm import Session

from ..core.config import get_settings
from ..core.database import SessionLocal
from ..realtime import LEADERBOARD_UPDATE, Broadcaster, NullBroadcaster
from ..services import leaderboard_service

logger = logging.getLogger(__name__)

_scheduler = AsyncIOScheduler(timezone="UTC")


def _store_snapshot(session_factory: Callable[[], Session]) -> Optional[Tuple[int, list]]:
    session = session_factory()
    try:
        snapshot = leaderboard_service.store_snapshot(session, period="daily")
        snapshot_id, rankings = snapshot.snapshot_id, snapshot.rankings
        session.commit()
    except Exception:
        session.rollback()
        logger.exception("leaderboard snapshot job failed")
        return None
    finally:
        session.close()

    logger.info("leaderboard snapshot %s stored with %d teams", snapshot_id, len(rankings))
    return snapshot_id, rankings


async def run_snapshot_once(
    broadcaster: Optional[Broadcaster] = None,
    session_factory: Callable[[], Session] = SessionLocal,
) -> Optional[int]:
    """Store a daily snapshot and push it; returns the snapshot id or ``None`` on failure."""

    broadcaster = broadcaster or NullBroadcaster()
    stored = await run_in_threadpool(_store_snapshot, session_factory)
    if stored is None:
        return None
    snapshot_id, rankings = stored

    try:
        await broadcaster.broadcast(LEADERBOARD_UPDATE, rankings)
    except Exception:
        logger.exception("failed to broadcast leaderboard snapshot")
    return snapshot_id


def register_scheduler(app: FastAPI) -> None:
    """Attach APScheduler lifecycle hooks to the FastAPI app."""

    @app.on_event("startup")
    async def start_scheduler() -> None:
        if _scheduler.running:
            return
        _scheduler.add_job(
            run_snapshot_once,
            "cron",
            hour=get_settings().leaderboard_snapshot_hour,
            minute=0,
            id="leaderboard_snapshot",
            kwargs={"broadcaster": getattr(app.state, "broadcaster", None)},
            misfire_grace_time=3600,
            replace_existing=True,
        )
        _scheduler.start()
        logger.info("leaderboard snapshot scheduler started")

    @app.on_event("shutdown")
    async def shutdown_scheduler() -> None:
        if _scheduler.running:
            _scheduler.shutdown(wait=False)
            logger.info("leaderboard snapshot scheduler stopped")
