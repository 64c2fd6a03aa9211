"""
Tests for the scheduled leaderboard snapshot job.
"""

from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import OperationalError

from fundrace.jobs import run_snapshot_once
from fundrace.models import LeaderboardSnapshot
from fundrace.realtime import LEADERBOARD_ROOM, LEADERBOARD_UPDATE
from fundrace.services import donation_service


@pytest.mark.asyncio
class TestRunSnapshotOnce:

    async def test_stores_and_broadcasts(self, db_session, make_team, session_factory, broadcaster):
        team = make_team("Nightly")
        donation_service.create_donation(db_session, team_id=team.team_id, amount=12)
        db_session.commit()

        snapshot_id = await run_snapshot_once(broadcaster, session_factory=session_factory)

        stored = db_session.get(LeaderboardSnapshot, snapshot_id)
        assert stored.period == "daily"
        assert stored.rankings[0]["totalScore"] == 12
        assert broadcaster.events == [(LEADERBOARD_ROOM, LEADERBOARD_UPDATE, stored.rankings)]

    async def test_broadcast_failure_keeps_snapshot(self, make_team, session_factory, failing_broadcaster):
        make_team("Stored anyway")

        assert await run_snapshot_once(failing_broadcaster, session_factory=session_factory) is not None

    async def test_database_failure_returns_none(self, broadcaster):
        session = MagicMock()
        session.execute.side_effect = OperationalError("SELECT", {}, Exception("db down"))

        assert await run_snapshot_once(broadcaster, session_factory=lambda: session) is None
        session.rollback.assert_called_once()
        session.close.assert_called_once()
        assert broadcaster.events == []
