"""
Unit tests for fundraising statistics.
"""

from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import OperationalError

from fundrace.services.leaderboard_service import build_statistics, get_statistics


class TestBuildStatistics:

    def test_progress_percentage(self):
        stats = build_statistics(team_count=3, total_raised=12500, donation_goal=50000)

        assert stats.progress_percentage == 25
        assert stats.team_count == 3

    def test_progress_is_clamped_to_100(self):
        stats = build_statistics(team_count=1, total_raised=80000, donation_goal=50000)

        assert stats.progress_percentage == 100
        assert stats.total_raised == 80000

    def test_zero_goal_reports_no_progress(self):
        stats = build_statistics(team_count=1, total_raised=100, donation_goal=0)

        assert stats.progress_percentage == 0


class TestStatisticsFallback:

    def test_read_failure_returns_defaults(self):
        session = MagicMock()
        session.execute.side_effect = OperationalError("SELECT count(*) FROM teams", {}, Exception("db down"))

        stats = get_statistics(session)

        assert stats.model_dump() == {
            "team_count": 0,
            "total_raised": 0,
            "donation_goal": 50000,
            "progress_percentage": 0,
        }
        session.rollback.assert_called_once()

    @pytest.mark.parametrize("error", [ConnectionResetError("socket closed"), ValueError("bad numeric value")])
    def test_unexpected_read_error_returns_defaults(self, error):
        session = MagicMock()
        session.execute.side_effect = error

        stats = get_statistics(session)

        assert stats.team_count == 0
        assert stats.donation_goal == 50000
        assert stats.progress_percentage == 0
        session.rollback.assert_called_once()
