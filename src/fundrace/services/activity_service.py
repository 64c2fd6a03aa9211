"""Domain logic for activities and submission review."""

from __future__ import annotations

from typing import Any, List, Optional, Sequence
from uuid import UUID

from pydantic import TypeAdapter
from sqlalchemy import select
from sqlalchemy.orm import Session, joinedload

from ..models import Activity, ActivitySubmission, PointsEventType, SubmissionStatus
from ..schemas import RequirementField, validate_submission
from ..utils.datetime import utcnow
from . import points_service
from .points_service import PointsRuleViolation, ensure_user

_requirements_adapter = TypeAdapter(List[RequirementField])


def _ensure_activity(session: Session, activity_id: UUID) -> Activity:
    activity = session.execute(select(Activity).where(Activity.activity_id == activity_id)).scalar_one_or_none()
    if activity is None:
        raise PointsRuleViolation(f"Activity {activity_id} not found", status_code=404)
    return activity


def create_activity(
    session: Session,
    *,
    title: str,
    points: int,
    description: Optional[str] = None,
    requirements: Sequence[RequirementField] = (),
) -> Activity:
    activity = Activity(
        title=title,
        description=description,
        points=points,
        requirements=[field.model_dump() for field in requirements],
    )
    session.add(activity)
    session.flush()
    session.refresh(activity)
    return activity


def list_activities(session: Session, *, active_only: bool = True) -> Sequence[Activity]:
    stmt = select(Activity).order_by(Activity.created_at.desc())
    if active_only:
        stmt = stmt.where(Activity.is_active.is_(True))
    return session.execute(stmt).scalars().all()


def submit_activity(
    session: Session,
    *,
    activity_id: UUID,
    user_id: UUID,
    submission_data: dict[str, Any],
    notes: Optional[str] = None,
) -> ActivitySubmission:
    """Create or resubmit a student's answers.

    A pending or rejected submission is replaced and goes back to review; an
    approved one cannot be submitted again.
    """

    activity = _ensure_activity(session, activity_id)
    if not activity.is_active:
        raise PointsRuleViolation("Activity is not active.")

    user = ensure_user(session, user_id)
    if user.team_id is None:
        raise PointsRuleViolation("You must be part of a team to submit an activity.")

    errors = validate_submission(_requirements_adapter.validate_python(activity.requirements), submission_data)
    if errors:
        raise PointsRuleViolation("; ".join(errors), status_code=422)

    stmt = select(ActivitySubmission).where(
        ActivitySubmission.activity_id == activity.activity_id,
        ActivitySubmission.user_id == user.user_id,
    )
    submission = session.execute(stmt).scalar_one_or_none()
    if submission is not None and submission.status == SubmissionStatus.APPROVED:
        raise PointsRuleViolation("Activity already approved for this student.")

    if submission is None:
        submission = ActivitySubmission(activity_id=activity.activity_id, user_id=user.user_id)
        session.add(submission)

    submission.team_id = user.team_id
    submission.submission_data = submission_data
    submission.notes = notes
    submission.status = SubmissionStatus.PENDING
    submission.points_awarded = None
    submission.reviewed_at = None
    submission.reviewed_by_id = None
    session.flush()
    session.refresh(submission)
    return submission


def review_submission(
    session: Session,
    *,
    submission_id: UUID,
    reviewer_id: UUID,
    approve: bool,
    points_awarded: Optional[int] = None,
    notes: Optional[str] = None,
) -> ActivitySubmission:
    """Approve or reject a pending submission; approval credits the team exactly once."""

    stmt = (
        select(ActivitySubmission)
        .options(joinedload(ActivitySubmission.activity))
        .where(ActivitySubmission.submission_id == submission_id)
        .with_for_update(of=ActivitySubmission, nowait=False)
        .execution_options(populate_existing=True)
    )
    submission = session.execute(stmt).scalar_one_or_none()
    if submission is None:
        raise PointsRuleViolation("Submission not found", status_code=404)
    if submission.status != SubmissionStatus.PENDING:
        raise PointsRuleViolation("Submission has already been reviewed.")

    ensure_user(session, reviewer_id)

    submission.reviewed_by_id = reviewer_id
    submission.reviewed_at = utcnow()
    if notes is not None:
        submission.notes = notes

    if not approve:
        submission.status = SubmissionStatus.REJECTED
        session.flush()
        return submission

    points = points_awarded if points_awarded is not None else submission.activity.points
    submission.status = SubmissionStatus.APPROVED
    submission.points_awarded = points
    session.flush()

    points_service.apply_points(
        session,
        team_id=submission.team_id,
        points_delta=points,
        event_type=PointsEventType.ACTIVITY_APPROVED,
        source_id=submission.submission_id,
        reason=f"Activity approved: {submission.activity.title}",
    )
    session.refresh(submission)
    return submission
