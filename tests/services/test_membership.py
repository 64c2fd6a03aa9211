"""
Tests for team registration and user membership changes.
"""

import uuid

import pytest

from fundrace.models import UserRole
from fundrace.services import donation_service, team_service, user_service
from fundrace.services.leaderboard_service import aggregate_teams, get_statistics
from fundrace.services.points_service import PointsRuleViolation


def member_counts(session):
    return {entry.name: entry.member_count for entry in aggregate_teams(session)}


class TestTeams:

    def test_create_team_starts_empty(self, db_session):
        team = team_service.create_team(db_session, name="  Blue Comets ")
        db_session.commit()

        assert team.name == "Blue Comets"
        assert team.total_points == 0
        assert [(e.name, e.total_score) for e in aggregate_teams(db_session)] == [("Blue Comets", 0)]

    def test_duplicate_name_is_a_conflict(self, db_session, make_team):
        make_team("Red Rockets")

        with pytest.raises(PointsRuleViolation) as exc:
            team_service.create_team(db_session, name="red rockets")
        assert exc.value.status_code == 409

    def test_blank_name_is_rejected(self, db_session):
        with pytest.raises(PointsRuleViolation, match="name is required"):
            team_service.create_team(db_session, name="   ")

    def test_deactivated_team_leaves_statistics(self, db_session, make_team):
        team = make_team("Leaving")
        make_team("Staying")

        team_service.update_team(db_session, team_id=team.team_id, is_active=False)
        db_session.commit()

        assert get_statistics(db_session).team_count == 1

    def test_rename_to_taken_name(self, db_session, make_team):
        first = make_team("First")
        make_team("Second")

        with pytest.raises(PointsRuleViolation) as exc:
            team_service.update_team(db_session, team_id=first.team_id, name="Second")
        assert exc.value.status_code == 409

    def test_rename_keeps_own_name(self, db_session, make_team):
        team = make_team("Same")

        renamed = team_service.update_team(db_session, team_id=team.team_id, name="Same")

        assert renamed.name == "Same"


class TestUsers:

    def test_create_user_on_team_counts_as_member(self, db_session, make_team):
        team = make_team("Joiners")

        user = user_service.create_user(db_session, name="Ada", email="Ada@Example.edu", team_id=team.team_id)
        db_session.commit()

        assert user.email == "ada@example.edu"
        assert user.role == UserRole.STUDENT
        assert member_counts(db_session) == {"Joiners": 1}

    def test_duplicate_email_is_a_conflict(self, db_session, make_user):
        make_user(name="Existing")

        with pytest.raises(PointsRuleViolation) as exc:
            user_service.create_user(db_session, name="Copy", email="USER1@example.edu")
        assert exc.value.status_code == 409

    def test_unknown_team(self, db_session):
        with pytest.raises(PointsRuleViolation) as exc:
            user_service.create_user(db_session, name="Lost", email="lost@example.edu", team_id=uuid.uuid4())
        assert exc.value.status_code == 404

    def test_assign_team_moves_member_but_not_points(self, db_session, make_team, make_user):
        old = make_team("Old")
        new = make_team("New")
        student = make_user(old)
        donation_service.create_donation(db_session, team_id=old.team_id, amount=20, user_id=student.user_id)
        db_session.commit()

        user_service.assign_team(db_session, user_id=student.user_id, team_id=new.team_id)
        db_session.commit()

        assert member_counts(db_session) == {"Old": 0, "New": 1}
        scores = {e.name: e.total_score for e in aggregate_teams(db_session)}
        assert scores == {"Old": 20, "New": 0}

    def test_assign_none_leaves_team(self, db_session, make_team, make_user):
        team = make_team("Solo")
        student = make_user(team)

        user = user_service.assign_team(db_session, user_id=student.user_id, team_id=None)

        assert user.team_id is None
        assert member_counts(db_session) == {"Solo": 0}
