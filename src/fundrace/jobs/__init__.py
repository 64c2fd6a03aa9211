"""Scheduled background jobs."""

from .leaderboard_snapshot import register_scheduler, run_snapshot_once

__all__ = ["register_scheduler", "run_snapshot_once"]
