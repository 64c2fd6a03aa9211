"""
Tests for score-changing operations and the points ledger.
"""

import uuid

import pytest
from sqlalchemy import func, select

from fundrace.models import (
    Donation,
    ManualPointsAward,
    Photo,
    PointsEventType,
    PointsLedger,
    Sale,
    SubmissionStatus,
    UserRole,
)
from fundrace.schemas.activity import NumberField
from fundrace.services import activity_service, donation_service, photo_service, sale_service, staff_service
from fundrace.services.points_service import PointsRuleViolation, ledger_balance


def assert_total_matches_ledger(session, team):
    session.refresh(team)
    assert team.total_points == ledger_balance(session, team.team_id)


class TestDonations:

    def test_donation_awards_rounded_points(self, db_session, make_team):
        team = make_team("Donors")

        donation = donation_service.create_donation(db_session, team_id=team.team_id, amount=12.6, currency="USD")
        db_session.commit()

        assert donation.currency == "usd"
        assert team.total_points == 13
        assert_total_matches_ledger(db_session, team)

    def test_unknown_team(self, db_session):
        with pytest.raises(PointsRuleViolation) as exc:
            donation_service.create_donation(db_session, team_id=uuid.uuid4(), amount=5)
        assert exc.value.status_code == 404


class TestSales:

    def test_sale_updates_stock_donations_and_points(self, db_session, make_team, make_user, make_product):
        team = make_team("Sellers")
        student = make_user(team)
        coach = make_user(role=UserRole.COACH)
        product = make_product(price=20, points=10, stock=5)

        sale = sale_service.create_sale(
            db_session,
            product_id=product.product_id,
            user_id=student.user_id,
            seller_id=coach.user_id,
            quantity=2,
        )
        db_session.commit()

        assert product.stock == 3
        assert sale.points_awarded == 20
        assert sale.amount_paid == 40
        assert sale.donation.amount == 40
        assert team.total_points == 20
        assert_total_matches_ledger(db_session, team)

    def test_product_without_points_uses_default(self, db_session, make_team, make_user, make_product):
        team = make_team("Shirts")
        student = make_user(team)
        coach = make_user(role=UserRole.COACH)
        product = make_product(points=None)

        sale = sale_service.create_sale(
            db_session, product_id=product.product_id, user_id=student.user_id, seller_id=coach.user_id, quantity=3
        )

        assert sale.points_awarded == 30

    def test_insufficient_inventory(self, db_session, make_team, make_user, make_product):
        team = make_team("Eager")
        student = make_user(team)
        coach = make_user(role=UserRole.COACH)
        product = make_product(stock=1)

        with pytest.raises(PointsRuleViolation, match="Insufficient inventory"):
            sale_service.create_sale(
                db_session, product_id=product.product_id, user_id=student.user_id, seller_id=coach.user_id, quantity=2
            )

    def test_buyer_without_team(self, db_session, make_user, make_product):
        student = make_user()
        coach = make_user(role=UserRole.COACH)
        product = make_product()

        with pytest.raises(PointsRuleViolation):
            sale_service.create_sale(
                db_session, product_id=product.product_id, user_id=student.user_id, seller_id=coach.user_id, quantity=1
            )

    def test_delete_sale_reverses_everything(self, db_session, make_team, make_user, make_product):
        team = make_team("Undo")
        student = make_user(team)
        coach = make_user(role=UserRole.COACH)
        product = make_product(stock=5)
        sale = sale_service.create_sale(
            db_session, product_id=product.product_id, user_id=student.user_id, seller_id=coach.user_id, quantity=2
        )
        db_session.commit()
        sale_id = sale.sale_id

        sale_service.delete_sale(db_session, sale_id=sale_id, seller_id=coach.user_id)
        db_session.commit()

        assert product.stock == 5
        assert team.total_points == 0
        assert db_session.get(Sale, sale_id) is None
        assert db_session.execute(select(func.count(Donation.donation_id))).scalar_one() == 0
        assert_total_matches_ledger(db_session, team)

    def test_only_seller_can_delete(self, db_session, make_team, make_user, make_product):
        team = make_team("Guarded")
        student = make_user(team)
        coach = make_user(role=UserRole.COACH)
        other_coach = make_user(role=UserRole.COACH)
        product = make_product()
        sale = sale_service.create_sale(
            db_session, product_id=product.product_id, user_id=student.user_id, seller_id=coach.user_id, quantity=1
        )
        db_session.commit()

        with pytest.raises(PointsRuleViolation) as exc:
            sale_service.delete_sale(db_session, sale_id=sale.sale_id, seller_id=other_coach.user_id)
        assert exc.value.status_code == 403


class TestPhotos:

    def test_double_approval_is_rejected(self, db_session, make_team):
        team = make_team("Snappers")
        photo = photo_service.submit_photo(db_session, team_id=team.team_id, url="https://img/a.jpg")
        photo_service.approve_photo(db_session, photo.photo_id)

        with pytest.raises(PointsRuleViolation, match="already approved"):
            photo_service.approve_photo(db_session, photo.photo_id)
        assert team.total_points == 50

    def test_concurrent_approvals_score_once(self, db_session, make_team, session_factory):
        team = make_team("Racers")
        photo = photo_service.submit_photo(db_session, team_id=team.team_id, url="https://img/r.jpg")
        db_session.commit()
        photo_id = photo.photo_id

        first, second = session_factory(), session_factory()
        try:
            assert first.get(Photo, photo_id).approved is False
            assert second.get(Photo, photo_id).approved is False

            photo_service.approve_photo(first, photo_id)
            first.commit()

            with pytest.raises(PointsRuleViolation, match="already approved"):
                photo_service.approve_photo(second, photo_id)
            second.rollback()
        finally:
            first.close()
            second.close()

        db_session.expire_all()
        assert team.total_points == 50
        assert_total_matches_ledger(db_session, team)

    def test_rejecting_approved_photo_takes_points_back(self, db_session, make_team):
        team = make_team("Oops")
        photo = photo_service.submit_photo(db_session, team_id=team.team_id, url="https://img/b.jpg")
        photo_service.approve_photo(db_session, photo.photo_id)
        db_session.commit()

        photo_service.reject_photo(db_session, photo.photo_id)
        db_session.commit()

        assert team.total_points == 0
        assert photo_service.list_photos(db_session, team_id=team.team_id) == []
        assert_total_matches_ledger(db_session, team)

    def test_rejecting_pending_photo_leaves_score(self, db_session, make_team):
        team = make_team("Pending")
        photo = photo_service.submit_photo(db_session, team_id=team.team_id, url="https://img/c.jpg")

        photo_service.reject_photo(db_session, photo.photo_id)

        assert team.total_points == 0
        assert db_session.execute(select(func.count(PointsLedger.ledger_entry_id))).scalar_one() == 0


class TestActivities:

    @pytest.fixture
    def activity(self, db_session):
        activity = activity_service.create_activity(
            db_session,
            title="Car wash",
            points=100,
            requirements=[NumberField(name="cars", minimum=1)],
        )
        db_session.commit()
        return activity

    def test_invalid_submission(self, db_session, make_team, make_user, activity):
        student = make_user(make_team("Washers"))

        with pytest.raises(PointsRuleViolation) as exc:
            activity_service.submit_activity(
                db_session, activity_id=activity.activity_id, user_id=student.user_id, submission_data={"cars": 0}
            )
        assert exc.value.status_code == 422

    def test_approval_awards_points_once(self, db_session, make_team, make_user, activity):
        team = make_team("Washers")
        student = make_user(team)
        coach = make_user(role=UserRole.COACH)
        submission = activity_service.submit_activity(
            db_session, activity_id=activity.activity_id, user_id=student.user_id, submission_data={"cars": 4}
        )

        reviewed = activity_service.review_submission(
            db_session, submission_id=submission.submission_id, reviewer_id=coach.user_id, approve=True
        )
        db_session.commit()

        assert reviewed.status == SubmissionStatus.APPROVED
        assert reviewed.points_awarded == 100
        assert team.total_points == 100

        with pytest.raises(PointsRuleViolation, match="already been reviewed"):
            activity_service.review_submission(
                db_session, submission_id=submission.submission_id, reviewer_id=coach.user_id, approve=True
            )
        with pytest.raises(PointsRuleViolation, match="already approved"):
            activity_service.submit_activity(
                db_session, activity_id=activity.activity_id, user_id=student.user_id, submission_data={"cars": 5}
            )

    def test_rejected_submission_can_be_resubmitted(self, db_session, make_team, make_user, activity):
        team = make_team("Retry")
        student = make_user(team)
        coach = make_user(role=UserRole.COACH)
        submission = activity_service.submit_activity(
            db_session, activity_id=activity.activity_id, user_id=student.user_id, submission_data={"cars": 1}
        )
        activity_service.review_submission(
            db_session, submission_id=submission.submission_id, reviewer_id=coach.user_id, approve=False
        )

        again = activity_service.submit_activity(
            db_session, activity_id=activity.activity_id, user_id=student.user_id, submission_data={"cars": 2}
        )

        assert again.submission_id == submission.submission_id
        assert again.status == SubmissionStatus.PENDING
        assert team.total_points == 0


class TestStaff:

    def test_manual_award_requires_team_membership(self, db_session, make_team, make_user):
        team = make_team("Home")
        outsider = make_user(make_team("Away"))
        staff = make_user(role=UserRole.STAFF)

        with pytest.raises(PointsRuleViolation, match="not a member"):
            staff_service.award_manual_points(
                db_session,
                team_id=team.team_id,
                user_id=outsider.user_id,
                awarded_by_id=staff.user_id,
                points=10,
                description="Volunteering",
            )

    def test_reset_zeroes_score_and_drops_manual_awards(self, db_session, make_team, make_user):
        team = make_team("Reset")
        staff = make_user(role=UserRole.STAFF)
        donation_service.create_donation(db_session, team_id=team.team_id, amount=25)
        staff_service.award_manual_points(
            db_session, team_id=team.team_id, awarded_by_id=staff.user_id, points=10, description="Cleanup"
        )
        db_session.commit()

        team, removed = staff_service.reset_team_points(db_session, team_id=team.team_id)
        db_session.commit()

        assert removed == 35
        assert team.total_points == 0
        assert db_session.execute(select(func.count(ManualPointsAward.award_id))).scalar_one() == 0
        reset_entry = db_session.execute(
            select(PointsLedger).where(PointsLedger.event_type == PointsEventType.POINTS_RESET)
        ).scalar_one()
        assert reset_entry.points_delta == -35

    def test_points_after_reset_accumulate_from_zero(self, db_session, make_team):
        team = make_team("Fresh start")
        donation_service.create_donation(db_session, team_id=team.team_id, amount=40)
        staff_service.reset_team_points(db_session, team_id=team.team_id)

        donation_service.create_donation(db_session, team_id=team.team_id, amount=5)

        assert team.total_points == 5
        assert_total_matches_ledger(db_session, team)
